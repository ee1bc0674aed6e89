"""Keymap-driven mode base and the helpers it relies on."""

from __future__ import annotations

from sipp.keymaps import KeymapResolver, ResolutionMatch, stroke_token
from sipp.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

UNBOUND = "unbound"


def key_to_token(key: KeyInput) -> str:
    return stroke_token(key.key, key.modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras has no 'keymap_resolver'")
    return resolver


def set_flag(context: ModeContext, name: str, value: bool) -> None:
    context.flags[name] = value


class KeymapMode(Mode):
    """Looks every key up in the keymap for ``name`` and runs the action.

    Keys with no binding go to ``handle_unbound``, which ignores them here.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(
            self.name, key_to_token(key), context=self.context.flags
        )
        if result.match is None:
            return self.handle_unbound(key)
        return self._run(result.match)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        return ModeResult(consumed=False, status=UNBOUND)

    def _run(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            logger_name="sipp.keymaps",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)
        return outcome if isinstance(outcome, ModeResult) else ModeResult(consumed=True)


__all__ = ["KeymapMode", "UNBOUND", "key_to_token", "require_keymap_resolver", "set_flag"]
