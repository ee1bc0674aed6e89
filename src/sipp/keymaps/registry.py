"""Registry of session actions and the keystrokes bound to them."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from sipp.runtime.telemetry import span

from .models import ActionRef, Binding

_Slot = Tuple[str, str]


class KeymapConflictError(RuntimeError):
    """A binding would share a mode, keystroke and condition with another."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]) -> None:
        self.binding = binding
        self.conflicts = tuple(conflicts)
        others = ", ".join(c.id for c in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({binding.mode}: {binding.token}) clashes with {others}"
        )


class KeymapRegistry:
    """Actions by id and bindings indexed by ``(mode, token)``.

    Two bindings clash when they share mode, token and the exact same set of
    ``when`` clauses; differing conditions are left to the resolver.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[_Slot, List[str]] = {}

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def register_action(self, action: ActionRef) -> ActionRef:
        if action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            if binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")
            clashes = self.detect_conflicts(binding)
            if clashes:
                handle.add_metadata("conflicts", ",".join(c.id for c in clashes))
                raise KeymapConflictError(binding, clashes)
            self._bindings[binding.id] = binding
            self._slots.setdefault((binding.mode, binding.token), []).append(binding.id)
            return binding

    def lookup(self, mode: str, token: str) -> List[Binding]:
        return [self._bindings[i] for i in self._slots.get((mode, token), ())]

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        """Bindings in registration order, optionally restricted to one mode."""

        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def detect_conflicts(self, binding: Binding) -> List[Binding]:
        return [
            existing
            for existing in self.lookup(binding.mode, binding.token)
            if existing.condition == binding.condition
        ]


__all__ = ["KeymapRegistry", "KeymapConflictError"]
