"""Clipboard and browser actions; the host performs them via the mode bus."""

from __future__ import annotations

from sipp.backend import share_url
from sipp.keymaps import ResolutionMatch
from sipp.modes.base_mode import ModeContext, ModeResult

COPIED = "Copied!"
LINK_COPIED = "Link copied!"
OPENED = "Opened in browser!"
NO_REMOTE_URL = "No remote URL configured"

CLIPBOARD_EVENT = "clipboard.copy"
BROWSER_EVENT = "browser.open"


def copy_content(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    snippet = context.session.selected_snippet()
    if snippet is None:
        return ModeResult(consumed=True, status="noop")
    context.bus.emit(CLIPBOARD_EVENT, snippet.content)
    context.session.set_status(COPIED)
    return ModeResult(consumed=True, message=COPIED)


def _link(context: ModeContext) -> str | None:
    snippet = context.session.selected_snippet()
    if snippet is None:
        return None
    return share_url(context.backend.base_url, snippet.short_id)


def copy_link(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if not context.backend.base_url:
        context.session.set_status(NO_REMOTE_URL)
        return ModeResult(consumed=True, status="error", message=NO_REMOTE_URL)
    link = _link(context)
    if link is None:
        return ModeResult(consumed=True, status="noop")
    context.bus.emit(CLIPBOARD_EVENT, link)
    context.session.set_status(LINK_COPIED)
    return ModeResult(consumed=True, message=LINK_COPIED)


def open_in_browser(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if not context.backend.base_url:
        context.session.set_status(NO_REMOTE_URL)
        return ModeResult(consumed=True, status="error", message=NO_REMOTE_URL)
    link = _link(context)
    if link is None:
        return ModeResult(consumed=True, status="noop")
    context.session.set_status(OPENED)
    context.bus.emit(BROWSER_EVENT, link)
    return ModeResult(consumed=True, message=OPENED)


__all__ = [
    "COPIED",
    "LINK_COPIED",
    "OPENED",
    "NO_REMOTE_URL",
    "CLIPBOARD_EVENT",
    "BROWSER_EVENT",
    "copy_content",
    "copy_link",
    "open_in_browser",
]
