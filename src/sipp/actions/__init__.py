"""Session verbs bound to keys by ``sipp.keymaps.defaults``."""

from .navigation import (
    back_to_list,
    open_selected,
    quit_session,
    scroll_down,
    scroll_up,
    select_next,
    select_previous,
    show_help,
)
from .search import (
    cancel_search,
    confirm_search,
    delete_query_char,
    start_search,
)
from .share import copy_content, copy_link, open_in_browser
from .snippets import (
    cancel_draft,
    delete_char,
    execute_delete,
    focus_content,
    focus_name,
    insert_newline,
    refresh_list,
    request_delete,
    save_draft,
    start_create,
    start_edit,
)

__all__ = [
    "select_next",
    "select_previous",
    "open_selected",
    "back_to_list",
    "scroll_down",
    "scroll_up",
    "show_help",
    "quit_session",
    "start_search",
    "delete_query_char",
    "confirm_search",
    "cancel_search",
    "copy_content",
    "copy_link",
    "open_in_browser",
    "start_create",
    "start_edit",
    "focus_content",
    "focus_name",
    "insert_newline",
    "delete_char",
    "cancel_draft",
    "save_draft",
    "request_delete",
    "execute_delete",
    "refresh_list",
]
