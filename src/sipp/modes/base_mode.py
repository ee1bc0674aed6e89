"""Key events, dispatch results and the context every mode shares."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, DefaultDict, Dict, List, Optional, Tuple

from sipp.session import Session

if TYPE_CHECKING:
    from sipp.backend import Backend

Listener = Callable[[object], None]

TYPING_BLOCKERS = frozenset({"ctrl", "alt"})


@dataclass(slots=True)
class KeyInput:
    """One keypress as the modes see it.

    ``key`` is either the character itself (``"j"``, ``"Y"``, ``"/"``) or an
    upper-case name: ``ENTER``, ``ESC``, ``TAB``, ``BACKSPACE``, ``UP``,
    ``DOWN``, ``SPACE``. ``text`` is what the key would type, if anything.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def typed_text(self) -> Optional[str]:
        """Text to insert into a field, or ``None`` for command chords."""

        if not self.text or not self.text.isprintable():
            return None
        if TYPING_BLOCKERS & {m.lower() for m in self.modifiers}:
            return None
        return self.text


@dataclass(slots=True)
class ModeResult:
    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Session, backend and bus handed to every mode and action.

    ``flags`` feeds keymap ``when`` clauses (``remote`` is set from the
    backend); ``extras`` carries the keymap resolver.
    """

    session: Session
    backend: "Backend"
    bus: "ModeBus"
    flags: Dict[str, bool] = field(default_factory=dict)
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Fan-out of side effects (clipboard, browser, quit) to the host."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event: str, callback: Listener) -> None:
        self._listeners[event].append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._listeners.get(event, ())):
            callback(payload)


class Mode:
    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def session(self) -> Session:
        return self.context.session

    def on_enter(self, previous: Optional[str]) -> None:
        """Hook run after the manager switches into this mode."""

    def on_exit(self, next_mode: Optional[str]) -> None:
        """Hook run before the manager leaves this mode."""

    def handle_key(self, key: KeyInput) -> ModeResult:
        raise NotImplementedError


__all__ = ["KeyInput", "Listener", "Mode", "ModeBus", "ModeContext", "ModeResult"]
