"""Incremental name search over the snippet list."""

from __future__ import annotations

from sipp.keymaps import ResolutionMatch
from sipp.modes.base_mode import ModeContext, ModeResult
from sipp.session import BROWSING, SEARCHING


def start_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.start_search()
    return ModeResult(consumed=True, switch_to=SEARCHING)


def delete_query_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.backspace()
    return ModeResult(consumed=True)


def confirm_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Keep the highlighted match selected, now as an index into the full list."""

    del match
    session = context.session
    real = session.real_index()
    session.search = None
    if real is not None:
        session.selection = real
    session.clamp_selection()
    return ModeResult(consumed=True, switch_to=BROWSING, message="search_confirmed")


def cancel_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.drop_search()
    return ModeResult(consumed=True, switch_to=BROWSING, message="search_cancelled")


__all__ = [
    "start_search",
    "delete_query_char",
    "confirm_search",
    "cancel_search",
]
