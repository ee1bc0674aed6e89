"""Executable Textual app hosting a sipp session."""

from __future__ import annotations

import webbrowser
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static

from sipp.backend import Backend
from sipp.highlight import LineHighlighter
from sipp.modes.mode_manager import ModeManager, build_mode_manager
from sipp.runtime import telemetry
from sipp.session import Session
from sipp.session.loader import load_session

from .controller import SippController, TextualUIHooks, normalize_textual_key
from .render import Frame

TICK_SECONDS = 0.1


class SippApp(App[None]):
    """Two-pane snippet browser: list on the left, content or form on the right."""

    CSS = """
	Screen {
		layout: vertical;
		layers: base popup;
	}

	#panes {
		height: 1fr;
	}

	#snippet-list {
		width: 30%;
		border: round $accent;
		padding: 0 1;
	}

	#snippet-detail {
		width: 70%;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#footer-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#popup {
		layer: popup;
		display: none;
		width: 60%;
		height: auto;
		offset: 20% 30%;
		border: round yellow;
		background: $surface;
		padding: 1 2;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        manager: ModeManager,
        *,
        highlighter: LineHighlighter | None = None,
    ) -> None:
        super().__init__()
        self.manager = manager
        self.controller: SippController | None = None
        self._highlighter = highlighter or LineHighlighter()
        self._list_widget: Static | None = None
        self._detail_widget: Static | None = None
        self._footer_widget: Static | None = None
        self._popup_widget: Static | None = None
        self.logger = telemetry.get_logger("sipp.tui")

    def compose(self) -> ComposeResult:
        with Horizontal(id="panes"):
            self._list_widget = Static("", id="snippet-list")
            self._detail_widget = Static("", id="snippet-detail")
            yield self._list_widget
            yield self._detail_widget
        self._footer_widget = Static("", id="footer-line")
        self._popup_widget = Static("", id="popup")
        yield self._footer_widget
        yield self._popup_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            copy_text=self.copy_to_clipboard,
            open_url=webbrowser.open,
            exit=self.exit,
            log=self.logger.debug,
        )
        self.controller = SippController(
            self.manager, hooks, highlighter=self._highlighter
        )
        self.set_interval(TICK_SECONDS, self._tick)

    def _tick(self) -> None:
        if self.controller:
            self.controller.tick()

    async def on_key(self, event: events.Key) -> None:
        if not self.controller:
            return
        normalized = normalize_textual_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.controller.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_frame(self, frame: Frame) -> None:
        if self._list_widget:
            self._list_widget.border_title = frame.list_title
            self._list_widget.update(frame.list_body)
        if self._detail_widget:
            self._detail_widget.border_title = frame.detail_title
            self._detail_widget.update(frame.detail_body)
        if self._footer_widget:
            self._footer_widget.update(frame.footer)
        if self._popup_widget:
            if frame.popup_body is None:
                self._popup_widget.display = False
            else:
                self._popup_widget.border_title = frame.popup_title
                self._popup_widget.update(frame.popup_body)
                self._popup_widget.display = True


def run_tui(backend: Backend, *, session: Optional[Session] = None) -> Session:
    """Run the interactive client until the user quits; return the final session."""

    session = session or load_session(backend)
    manager = build_mode_manager(session, backend)
    telemetry.record_event(
        "tui.start",
        data={"remote": backend.is_remote, "snippets": len(session.snippets)},
        logger_name="sipp.tui",
    )
    SippApp(manager).run()
    telemetry.record_event("tui.stop", logger_name="sipp.tui")
    return session


__all__ = ["SippApp", "run_tui", "TICK_SECONDS"]
