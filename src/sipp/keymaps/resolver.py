"""Turn a mode plus keystroke token into the action to run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional

from sipp.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


MISS = ResolutionResult(status="miss")


class KeymapResolver:
    """Picks among the bindings whose ``when`` clauses hold for ``flags``.

    Higher ``priority`` wins; ties go to the lowest binding id so the choice
    is stable.
    """

    def __init__(self, registry: KeymapRegistry, *, logger_name: str | None = None) -> None:
        self._registry = registry
        self._logger_name = logger_name

    def resolve(
        self,
        mode: str,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "token": token},
        ) as handle:
            allowed = [b for b in self._registry.lookup(mode, token) if b.allows(flags)]
            if not allowed:
                handle.add_metadata("status", "miss")
                return MISS
            binding = min(allowed, key=lambda b: (-b.priority, b.id))
            handle.add_metadata("binding_id", binding.id)
            action = self._registry.get_action(binding.action_id)
            return ResolutionResult(
                status="match", match=ResolutionMatch(binding=binding, action=action)
            )


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
