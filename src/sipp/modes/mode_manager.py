"""Routes keys to overlays or the active mode and expires stale statuses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Optional, Type

from sipp.actions.snippets import execute_delete
from sipp.keymaps import KeymapRegistry, KeymapResolver
from sipp.keymaps.defaults import load_default_keymaps
from sipp.runtime import telemetry
from sipp.session import OVERLAY_CONFIRM, OVERLAY_HELP, Session

from . import DEFAULT_MODES
from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_helpers import set_flag

if TYPE_CHECKING:
    from sipp.backend import Backend

CONFIRM_KEY = "y"


class ModeManager:
    """Dispatcher for one session.

    ``session.mode`` names the active mode; the manager keeps one instance
    per mode name and runs their enter/exit hooks on every switch. While an
    overlay is showing (help, then status, then delete confirmation) a key
    only resolves that overlay and never reaches the mode.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self.keymap_registry = KeymapRegistry(logger_name="sipp.keymaps")
        load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = KeymapResolver(self.keymap_registry, logger_name="sipp.keymaps")
        context.extras["keymap_resolver"] = self.keymap_resolver
        set_flag(context, "remote", bool(context.backend.is_remote))

    @property
    def session(self) -> Session:
        return self.context.session

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self.session.mode)

    def register_modes(self, mode_classes: Iterable[Type[Mode]]) -> None:
        for mode_cls in mode_classes:
            self.register_mode(mode_cls)

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        mode = mode_cls(self.context)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' is already registered")
        self._modes[mode.name] = mode
        if mode.name == self.session.mode:
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        target = self._modes.get(name)
        if target is None:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.session.mode
        if previous == name:
            return
        current = self.active_mode
        if current is not None:
            current.on_exit(name)
        self.session.mode = name
        target.on_enter(previous)
        telemetry.record_event(
            "mode.switch",
            data={"mode": name, "previous": previous},
            logger_name="sipp.modes",
        )

    def active_overlay(self) -> Optional[str]:
        return self.session.active_overlay()

    def handle_key(self, key: KeyInput) -> ModeResult:
        overlay = self.active_overlay()
        if overlay is not None:
            return self._resolve_overlay(overlay, key)
        mode = self.active_mode
        if mode is None:
            raise RuntimeError(f"No mode registered for '{self.session.mode}'")
        with telemetry.span(
            f"mode::{mode.name}",
            logger_name="sipp.modes",
            component="modes",
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def tick(self) -> bool:
        """Drop a status older than its TTL; ``True`` when one was dropped."""

        if not self.session.expire_status():
            return False
        telemetry.record_event("status.expired", level="debug", logger_name="sipp.modes")
        return True

    def _resolve_overlay(self, overlay: str, key: KeyInput) -> ModeResult:
        telemetry.record_event(
            "overlay.dismissed",
            data={"overlay": overlay, "key": key.key},
            logger_name="sipp.modes",
        )
        session = self.session
        if overlay == OVERLAY_HELP:
            session.show_help = False
            return ModeResult(consumed=True, message="help_closed")
        if overlay == OVERLAY_CONFIRM:
            if key.key == CONFIRM_KEY and not key.modifiers:
                return execute_delete(self.context)
            session.confirm_target = None
            return ModeResult(consumed=True, message="delete_cancelled")
        session.clear_status()
        return ModeResult(consumed=True, message="status_cleared")


def build_mode_manager(
    session: Session,
    backend: "Backend",
    *,
    bus: ModeBus | None = None,
) -> ModeManager:
    """Manager for ``session`` with the default keymaps and all seven modes."""

    context = ModeContext(session=session, backend=backend, bus=bus or ModeBus())
    manager = ModeManager(context)
    manager.register_modes(DEFAULT_MODES)
    return manager


__all__ = ["CONFIRM_KEY", "ModeManager", "build_mode_manager"]
