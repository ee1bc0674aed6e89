"""Interactive session state shared by modes, actions and renderers."""

from .state import (
    BROWSING,
    CREATING_CONTENT,
    CREATING_NAME,
    EDITING_CONTENT,
    EDITING_NAME,
    MODES,
    OVERLAY_CONFIRM,
    OVERLAY_HELP,
    OVERLAY_STATUS,
    SEARCHING,
    STATUS_TTL_SECONDS,
    TEXT_ENTRY_MODES,
    VIEWING,
    Draft,
    SearchState,
    Session,
    StatusMessage,
    filter_indices,
)

__all__ = [
    "BROWSING",
    "VIEWING",
    "CREATING_NAME",
    "CREATING_CONTENT",
    "EDITING_NAME",
    "EDITING_CONTENT",
    "SEARCHING",
    "MODES",
    "TEXT_ENTRY_MODES",
    "OVERLAY_HELP",
    "OVERLAY_STATUS",
    "OVERLAY_CONFIRM",
    "STATUS_TTL_SECONDS",
    "Draft",
    "SearchState",
    "Session",
    "StatusMessage",
    "filter_indices",
]
