"""Textual-facing controller that wires the ModeManager into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from sipp.actions.share import BROWSER_EVENT, CLIPBOARD_EVENT
from sipp.highlight import LineHighlighter
from sipp.modes import KeyInput, ModeResult
from sipp.modes.mode_manager import ModeManager
from sipp.runtime import telemetry

from .render import Frame, help_lines, render_frame

QUIT_EVENT = "session.quit"
BROWSER_FAILED = "Failed to open browser"

NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "space": "SPACE",
}


def _noop(*_args, **_kwargs) -> None:
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the controller invokes to drive Textual widgets."""

    update_frame: Callable[[Frame], None]
    copy_text: Callable[[str], None] = _noop
    open_url: Callable[[str], Optional[bool]] = _noop
    exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


def normalize_textual_key(
    key: str, character: Optional[str] = None
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Map a Textual ``Key`` event to ``(key, text, modifiers)``.

    Returns ``None`` for keys the host keeps for itself (``ctrl+c``/``ctrl+q``).
    """

    if key in {"ctrl+c", "ctrl+q"}:
        return None
    *mods, base = key.split("+")
    modifiers = tuple(mod.upper() for mod in mods if mod != "shift")
    if base in NAMED_KEYS:
        return (NAMED_KEYS[base], " " if base == "space" else None, modifiers)
    if not modifiers and character and len(character) == 1 and character.isprintable():
        return (character, character, ())
    return (base, None, modifiers)


class SippController:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(
        self,
        manager: ModeManager,
        hooks: TextualUIHooks,
        *,
        highlighter: LineHighlighter | None = None,
    ) -> None:
        self.manager = manager
        self.hooks = hooks
        self.highlighter = highlighter or LineHighlighter()
        self._help_rows = help_lines(
            manager.keymap_registry, manager.context.flags
        )
        self._subscribe_events()
        self.refresh()

    @property
    def running(self) -> bool:
        return self.manager.session.running

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a normalized key into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        self.refresh()
        return result

    def tick(self) -> bool:
        """Expire a stale status and redraw when one was cleared."""

        expired = self.manager.tick()
        if expired:
            self.refresh()
        return expired

    def refresh(self) -> None:
        frame = render_frame(
            self.manager.session, self.highlighter, help_rows=self._help_rows
        )
        self.hooks.update_frame(frame)

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        bus.subscribe(CLIPBOARD_EVENT, self._copy)
        bus.subscribe(BROWSER_EVENT, self._open)
        bus.subscribe(QUIT_EVENT, lambda _payload: self._quit())

    def _copy(self, payload: object | None) -> None:
        self._log_state("event ->", event=CLIPBOARD_EVENT)
        self.hooks.copy_text(str(payload))

    def _open(self, payload: object | None) -> None:
        url = str(payload)
        self._log_state("event ->", event=BROWSER_EVENT, url=url)
        if self.hooks.open_url(url) is False:
            self.manager.session.set_status(BROWSER_FAILED)
            telemetry.record_event(
                "browser.open_failed",
                level="warning",
                data={"url": url},
                logger_name="sipp.tui",
            )

    def _quit(self) -> None:
        self._log_state("event ->", event=QUIT_EVENT)
        self.hooks.exit()

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.manager.session
        return {
            "mode": session.mode,
            "selection": session.selection,
            "visible": session.visible_count(),
            "overlay": session.active_overlay(),
        }


__all__ = ["SippController", "TextualUIHooks", "normalize_textual_key", "NAMED_KEYS"]
