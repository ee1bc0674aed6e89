import pytest

from sipp.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    WhenClause,
)
from sipp.keymaps.defaults import DEFAULT_BINDINGS, SAVE_STROKE, load_default_keymaps
from sipp.session import BROWSING, CREATING_NAME


def binding_ids(registry: KeymapRegistry, mode: str | None = None) -> list[str]:
    return [binding.id for binding in registry.iter_bindings(mode)]


def make_action(action_id: str = "nav.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = BROWSING,
    stroke: KeyStroke | None = None,
    action_id: str = "nav.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=stroke or KeyStroke("x"),
        action_id=action_id,
        when=when,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="browsing.x")

    registry.register_binding(binding)

    assert list(registry.iter_bindings(mode=BROWSING)) == [binding]
    assert registry.lookup(BROWSING, "x") == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="browsing.x"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="browsing.x.duplicate"))


def test_same_key_in_other_mode_does_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="browsing.x"))
    registry.register_binding(make_binding(binding_id="viewing.x", mode="viewing"))

    assert binding_ids(registry, BROWSING) == ["browsing.x"]
    assert binding_ids(registry, "viewing") == ["viewing.x"]


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="default"))
    registry.register_binding(
        make_binding(binding_id="remote", when=(WhenClause("remote"),))
    )
    registry.register_binding(
        make_binding(binding_id="local", when=(WhenClause.parse("!remote"),))
    )

    assert binding_ids(registry) == ["default", "remote", "local"]


def test_register_binding_rejects_duplicate_id() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="binding"))

    with pytest.raises(ValueError):
        registry.register_binding(make_binding(binding_id="binding", stroke=KeyStroke("z")))

    assert binding_ids(registry) == ["binding"]


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_keystroke_tokens_normalize_modifiers() -> None:
    assert KeyStroke("s", ("CTRL",)).token == "ctrl+s"
    assert KeyStroke.parse("ctrl+s") == SAVE_STROKE
    assert KeyStroke("s", ("shift", "ctrl")).token == "ctrl+shift+s"
    assert KeyStroke.parse("+").token == "+"


def test_load_default_keymaps_registers_every_binding() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert len(binding_ids(registry)) == len(DEFAULT_BINDINGS)
    save = [b for b in registry.iter_bindings(CREATING_NAME) if b.action_id == "draft.save"]
    assert [binding.stroke for binding in save] == [SAVE_STROKE]


def test_load_default_keymaps_twice_conflicts() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    with pytest.raises(ValueError):
        load_default_keymaps(registry)
