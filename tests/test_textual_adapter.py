from __future__ import annotations

from typing import List, Optional

from tests.fakes import FakeBackend, FakeClock, make_snippets

from sipp.adapters.textual import SippController, TextualUIHooks, normalize_textual_key
from sipp.adapters.textual.render import Frame, SELECTION_MARKER, render_frame
from sipp.highlight import LineHighlighter
from sipp.modes.mode_manager import ModeManager, build_mode_manager
from sipp.session import Session


def make_manager(backend: FakeBackend, clock: Optional[FakeClock] = None) -> ModeManager:
    session = Session(snippets=backend.list(), clock=clock or FakeClock())
    return build_mode_manager(session, backend)


def make_controller(
    manager: ModeManager,
    frames: List[Frame],
    *,
    copied: Optional[List[str]] = None,
    opened: Optional[List[str]] = None,
    exits: Optional[List[str]] = None,
    open_result: Optional[bool] = True,
) -> SippController:
    def open_url(url: str) -> Optional[bool]:
        if opened is not None:
            opened.append(url)
        return open_result

    hooks = TextualUIHooks(
        update_frame=frames.append,
        copy_text=copied.append if copied is not None else lambda text: None,
        open_url=open_url,
        exit=lambda: exits.append("exit") if exits is not None else None,
    )
    return SippController(manager, hooks)


def test_normalize_textual_key() -> None:
    assert normalize_textual_key("j", "j") == ("j", "j", ())
    assert normalize_textual_key("Y", "Y") == ("Y", "Y", ())
    assert normalize_textual_key("escape") == ("ESC", None, ())
    assert normalize_textual_key("enter", "\r") == ("ENTER", None, ())
    assert normalize_textual_key("space", " ") == ("SPACE", " ", ())
    assert normalize_textual_key("ctrl+s") == ("s", None, ("CTRL",))
    assert normalize_textual_key("question_mark", "?") == ("?", "?", ())
    assert normalize_textual_key("ctrl+c") is None


def test_controller_renders_initial_frame(backend: FakeBackend) -> None:
    frames: List[Frame] = []

    make_controller(make_manager(backend), frames)

    frame = frames[-1]
    assert frame.list_title == " Snippets "
    assert frame.list_body.plain.splitlines()[0] == f"{SELECTION_MARKER}test.py"
    assert frame.detail_title == " test.py "
    assert "body of test.py" in frame.detail_body.plain
    assert "Navigate" in frame.footer.plain
    assert frame.popup_body is None


def test_controller_copy_routes_to_clipboard_hook(backend: FakeBackend) -> None:
    frames: List[Frame] = []
    copied: List[str] = []
    controller = make_controller(make_manager(backend), frames, copied=copied)

    controller.handle_textual_key("y", text="y")

    assert copied == ["body of test.py\n"]
    assert frames[-1].footer.plain == "Copied!"


def test_controller_open_failure_sets_status() -> None:
    backend = FakeBackend(make_snippets("a.py"), base_url="http://localhost:3000")
    frames: List[Frame] = []
    opened: List[str] = []
    controller = make_controller(
        make_manager(backend), frames, opened=opened, open_result=False
    )

    controller.handle_textual_key("o", text="o")

    assert opened == ["http://localhost:3000/s/id00000001"]
    assert controller.manager.session.status.text == "Failed to open browser"


def test_controller_quit_calls_exit_hook(backend: FakeBackend) -> None:
    frames: List[Frame] = []
    exits: List[str] = []
    controller = make_controller(make_manager(backend), frames, exits=exits)

    controller.handle_textual_key("q", text="q")

    assert exits == ["exit"]
    assert controller.running is False


def test_controller_tick_redraws_only_on_expiry(backend: FakeBackend) -> None:
    clock = FakeClock()
    frames: List[Frame] = []
    controller = make_controller(make_manager(backend, clock), frames)
    controller.handle_textual_key("y", text="y")
    drawn = len(frames)

    clock.advance(1.0)
    assert controller.tick() is False
    assert len(frames) == drawn

    clock.advance(1.5)
    assert controller.tick() is True
    assert len(frames) == drawn + 1
    assert "Navigate" in frames[-1].footer.plain


def test_confirm_popup_names_target(backend: FakeBackend) -> None:
    frames: List[Frame] = []
    controller = make_controller(make_manager(backend), frames)

    controller.handle_textual_key("d", text="d")

    assert frames[-1].popup_title == " Confirm "
    assert frames[-1].popup_body.plain == "Delete test.py? (y/n)"


def test_help_popup_lists_bindings(backend: FakeBackend) -> None:
    frames: List[Frame] = []
    controller = make_controller(make_manager(backend), frames)

    controller.handle_textual_key("?", text="?")

    body = frames[-1].popup_body.plain
    assert frames[-1].popup_title == " Keybindings "
    assert "Copy share link" in body
    assert "Refresh snippets" not in body


def test_search_title_shows_query(backend: FakeBackend) -> None:
    frames: List[Frame] = []
    controller = make_controller(make_manager(backend), frames)

    controller.handle_textual_key("/", text="/")
    controller.handle_textual_key("m", text="m")
    controller.handle_textual_key("a", text="a")

    frame = frames[-1]
    assert frame.list_title == " Search: ma "
    assert frame.list_body.plain == f"{SELECTION_MARKER}main.rs"


def test_form_frame_shows_draft(backend: FakeBackend) -> None:
    frames: List[Frame] = []
    controller = make_controller(make_manager(backend), frames)

    controller.handle_textual_key("c", text="c")
    controller.handle_textual_key("x", text="x")

    frame = frames[-1]
    assert frame.detail_title == " New Snippet "
    assert "x" in frame.detail_body.plain
    assert "Save" in frame.footer.plain


def test_render_viewing_respects_scroll_offset() -> None:
    session = Session(snippets=make_snippets("notes.txt"))
    session.snippets[0].content = "first\nsecond\nthird\n"
    session.mode = "viewing"
    session.scroll_offset = 1

    frame = render_frame(session, LineHighlighter())

    assert frame.detail_body.plain == "second\nthird"


def test_render_empty_list() -> None:
    frame = render_frame(Session(), LineHighlighter())

    assert frame.list_body.plain == ""
    assert frame.detail_body.plain == "No snippet selected"
