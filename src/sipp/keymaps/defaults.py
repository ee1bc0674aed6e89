"""Built-in keymaps that seed each session mode."""

from __future__ import annotations

from typing import Iterable, Sequence

from sipp.actions import navigation, search, share, snippets
from sipp.session import (
    BROWSING,
    CREATING_CONTENT,
    CREATING_NAME,
    EDITING_CONTENT,
    EDITING_NAME,
    SEARCHING,
    VIEWING,
)

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

SAVE_STROKE = KeyStroke("s", ("ctrl",))

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="nav.next", handler=navigation.select_next, description="Move down"),
    ActionRef(id="nav.previous", handler=navigation.select_previous, description="Move up"),
    ActionRef(id="nav.open", handler=navigation.open_selected, description="View snippet"),
    ActionRef(id="nav.back", handler=navigation.back_to_list, description="Back to list"),
    ActionRef(id="nav.scroll_down", handler=navigation.scroll_down, description="Scroll down"),
    ActionRef(id="nav.scroll_up", handler=navigation.scroll_up, description="Scroll up"),
    ActionRef(id="nav.help", handler=navigation.show_help, description="Toggle this help"),
    ActionRef(id="nav.quit", handler=navigation.quit_session, description="Quit"),
    ActionRef(id="snippet.create", handler=snippets.start_create, description="Create snippet"),
    ActionRef(id="snippet.edit", handler=snippets.start_edit, description="Edit snippet"),
    ActionRef(id="snippet.delete", handler=snippets.request_delete, description="Delete snippet"),
    ActionRef(id="snippet.refresh", handler=snippets.refresh_list, description="Refresh snippets"),
    ActionRef(id="draft.save", handler=snippets.save_draft, description="Save"),
    ActionRef(id="draft.cancel", handler=snippets.cancel_draft, description="Cancel"),
    ActionRef(id="draft.focus_content", handler=snippets.focus_content, description="Next field"),
    ActionRef(id="draft.focus_name", handler=snippets.focus_name, description="Previous field"),
    ActionRef(id="draft.newline", handler=snippets.insert_newline, description="New line"),
    ActionRef(id="draft.backspace", handler=snippets.delete_char, description="Delete character"),
    ActionRef(id="search.start", handler=search.start_search, description="Search snippets"),
    ActionRef(id="search.confirm", handler=search.confirm_search, description="Select match"),
    ActionRef(id="search.cancel", handler=search.cancel_search, description="Cancel search"),
    ActionRef(id="search.backspace", handler=search.delete_query_char, description="Delete character"),
    ActionRef(id="share.copy", handler=share.copy_content, description="Copy content"),
    ActionRef(id="share.copy_link", handler=share.copy_link, description="Copy share link"),
    ActionRef(id="share.open", handler=share.open_in_browser, description="Open in browser"),
)


def _bind(
    mode: str,
    keys: Iterable[str | KeyStroke],
    action_id: str,
    *,
    when: Sequence[str] = (),
) -> list[Binding]:
    bindings: list[Binding] = []
    for key in keys:
        stroke = key if isinstance(key, KeyStroke) else KeyStroke(key)
        bindings.append(
            Binding(
                id=f"{mode}.{action_id}.{stroke.token}",
                mode=mode,
                stroke=stroke,
                action_id=action_id,
                when=tuple(when),
            )
        )
    return bindings


def _shared_list_bindings(mode: str) -> list[Binding]:
    return [
        *_bind(mode, ["e"], "snippet.edit"),
        *_bind(mode, ["y"], "share.copy"),
        *_bind(mode, ["Y"], "share.copy_link"),
        *_bind(mode, ["o"], "share.open"),
        *_bind(mode, ["?"], "nav.help"),
    ]


def _form_bindings(name_mode: str, content_mode: str) -> list[Binding]:
    return [
        *_bind(name_mode, [SAVE_STROKE], "draft.save"),
        *_bind(name_mode, ["ESC"], "draft.cancel"),
        *_bind(name_mode, ["ENTER", "TAB"], "draft.focus_content"),
        *_bind(name_mode, ["BACKSPACE"], "draft.backspace"),
        *_bind(content_mode, [SAVE_STROKE], "draft.save"),
        *_bind(content_mode, ["ESC"], "draft.cancel"),
        *_bind(content_mode, ["TAB"], "draft.focus_name"),
        *_bind(content_mode, ["ENTER"], "draft.newline"),
        *_bind(content_mode, ["BACKSPACE"], "draft.backspace"),
    ]


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *_bind(BROWSING, ["j", "DOWN"], "nav.next"),
    *_bind(BROWSING, ["k", "UP"], "nav.previous"),
    *_bind(BROWSING, ["ENTER", "l"], "nav.open"),
    *_bind(BROWSING, ["c"], "snippet.create"),
    *_bind(BROWSING, ["d"], "snippet.delete"),
    *_bind(BROWSING, ["/"], "search.start"),
    *_bind(BROWSING, ["r"], "snippet.refresh", when=("remote",)),
    *_bind(BROWSING, ["q", "ESC"], "nav.quit"),
    *_shared_list_bindings(BROWSING),
    *_bind(VIEWING, ["ESC", "q", "h", "SPACE"], "nav.back"),
    *_bind(VIEWING, ["j", "DOWN"], "nav.scroll_down"),
    *_bind(VIEWING, ["k", "UP"], "nav.scroll_up"),
    *_shared_list_bindings(VIEWING),
    *_form_bindings(CREATING_NAME, CREATING_CONTENT),
    *_form_bindings(EDITING_NAME, EDITING_CONTENT),
    *_bind(SEARCHING, ["ESC"], "search.cancel"),
    *_bind(SEARCHING, ["ENTER"], "search.confirm"),
    *_bind(SEARCHING, ["BACKSPACE"], "search.backspace"),
)


def load_default_keymaps(registry: KeymapRegistry) -> None:
    """Register built-in actions and bindings for every mode."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "SAVE_STROKE"]
