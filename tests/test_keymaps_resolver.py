from sipp.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    WhenClause,
)
from sipp.keymaps.defaults import load_default_keymaps
from sipp.session import BROWSING, EDITING_CONTENT, VIEWING


def make_registry() -> KeymapRegistry:
    registry = KeymapRegistry()
    registry.register_action(ActionRef(id="a", handler=lambda *_: None))
    registry.register_action(ActionRef(id="b", handler=lambda *_: None))
    return registry


def test_resolve_match_and_miss() -> None:
    registry = make_registry()
    registry.register_binding(
        Binding(id="browsing.a", mode=BROWSING, stroke=KeyStroke("a"), action_id="a")
    )
    resolver = KeymapResolver(registry)

    hit = resolver.resolve(BROWSING, "a")
    miss = resolver.resolve(BROWSING, "z")

    assert hit.status == "match"
    assert hit.match is not None and hit.match.action.id == "a"
    assert miss.status == "miss"
    assert miss.match is None


def test_resolve_respects_when_clause() -> None:
    registry = make_registry()
    registry.register_binding(
        Binding(
            id="browsing.r",
            mode=BROWSING,
            stroke=KeyStroke("r"),
            action_id="a",
            when=(WhenClause("remote"),),
        )
    )
    resolver = KeymapResolver(registry)

    assert resolver.resolve(BROWSING, "r", context={"remote": False}).status == "miss"
    assert resolver.resolve(BROWSING, "r", context={"remote": True}).status == "match"


def test_resolve_prefers_higher_priority() -> None:
    registry = make_registry()
    registry.register_binding(
        Binding(id="low", mode=BROWSING, stroke=KeyStroke("x"), action_id="a")
    )
    registry.register_binding(
        Binding(
            id="high",
            mode=BROWSING,
            stroke=KeyStroke("x"),
            action_id="b",
            when=(WhenClause("remote"),),
            priority=10,
        )
    )
    resolver = KeymapResolver(registry)

    result = resolver.resolve(BROWSING, "x", context={"remote": True})

    assert result.match is not None
    assert result.match.binding.id == "high"


def test_resolver_sees_bindings_registered_later() -> None:
    registry = make_registry()
    resolver = KeymapResolver(registry)
    assert resolver.resolve(BROWSING, "n").status == "miss"

    registry.register_binding(
        Binding(id="browsing.n", mode=BROWSING, stroke=KeyStroke("n"), action_id="b")
    )

    assert resolver.resolve(BROWSING, "n").status == "match"


def test_default_keymaps_resolve_ctrl_save_and_shared_keys() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    save = resolver.resolve(EDITING_CONTENT, "ctrl+s")
    copy_link = resolver.resolve(VIEWING, "Y")
    copy = resolver.resolve(BROWSING, "y")

    assert save.match is not None and save.match.action.id == "draft.save"
    assert copy_link.match is not None and copy_link.match.action.id == "share.copy_link"
    assert copy.match is not None and copy.match.action.id == "share.copy"
