"""Keystrokes, binding conditions and the action/binding records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping


def _modifier_set(modifiers: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted({m.strip().lower() for m in modifiers if m.strip()}))


def stroke_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """``ctrl+s`` style token; modifiers are lowercased and sorted, the key is not."""

    return "+".join((*_modifier_set(modifiers), key))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _modifier_set(self.modifiers))

    @property
    def token(self) -> str:
        return stroke_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """Read ``"ctrl+s"`` notation; a lone ``+`` is the plus key itself."""

        head, sep, key = text.rpartition("+")
        if not sep or not key:
            return cls(text)
        return cls(key, tuple(head.split("+")))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """``flag`` must be ``expected`` in the session's flags; ``!flag`` negates."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if expr.startswith("!"):
            return cls(expr[1:].strip(), False)
        return cls(expr)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) == self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A named session verb; ``description`` is shown in the help overlay."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """One keystroke in one mode mapped to an action id."""

    id: str
    mode: str
    stroke: KeyStroke
    action_id: str
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for attr in ("id", "mode", "action_id"):
            if not getattr(self, attr):
                raise ValueError(f"binding {attr} cannot be empty")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        object.__setattr__(
            self,
            "when",
            tuple(
                clause if isinstance(clause, WhenClause) else WhenClause.parse(clause)
                for clause in self.when
            ),
        )

    @property
    def token(self) -> str:
        return self.stroke.token

    @property
    def condition(self) -> frozenset[WhenClause]:
        return frozenset(self.when)

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = ["ActionRef", "Binding", "KeyStroke", "WhenClause", "stroke_token"]
