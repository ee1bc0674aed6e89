"""Cursor, view and lifecycle actions for browsing and viewing."""

from __future__ import annotations

from sipp.keymaps import ResolutionMatch
from sipp.modes.base_mode import ModeContext, ModeResult
from sipp.session import BROWSING, VIEWING


def select_next(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.move_down()
    return ModeResult(consumed=True)


def select_previous(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.move_up()
    return ModeResult(consumed=True)


def open_selected(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if context.session.selected_snippet() is None:
        return ModeResult(consumed=True, status="noop")
    return ModeResult(consumed=True, switch_to=VIEWING, message="open")


def back_to_list(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=BROWSING, message="back")


def scroll_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.scroll_down()
    return ModeResult(consumed=True)


def scroll_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.scroll_up()
    return ModeResult(consumed=True)


def show_help(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.show_help = True
    return ModeResult(consumed=True, message="help")


def quit_session(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.running = False
    context.bus.emit("session.quit")
    return ModeResult(consumed=True, message="quit")


__all__ = [
    "select_next",
    "select_previous",
    "open_selected",
    "back_to_list",
    "scroll_down",
    "scroll_up",
    "show_help",
    "quit_session",
]
