"""In-memory state of one interactive client session."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from sipp.store import Snippet

BROWSING = "browsing"
VIEWING = "viewing"
CREATING_NAME = "creating_name"
CREATING_CONTENT = "creating_content"
EDITING_NAME = "editing_name"
EDITING_CONTENT = "editing_content"
SEARCHING = "searching"

MODES = (
    BROWSING,
    VIEWING,
    CREATING_NAME,
    CREATING_CONTENT,
    EDITING_NAME,
    EDITING_CONTENT,
    SEARCHING,
)
TEXT_ENTRY_MODES = (
    CREATING_NAME,
    CREATING_CONTENT,
    EDITING_NAME,
    EDITING_CONTENT,
    SEARCHING,
)

OVERLAY_HELP = "help"
OVERLAY_STATUS = "status"
OVERLAY_CONFIRM = "confirm_delete"

STATUS_TTL_SECONDS = 2.0


@dataclass(slots=True)
class Draft:
    """In-progress ``(name, content)`` pair edited during create/edit."""

    name: str = ""
    content: str = ""
    target: Optional[str] = None

    def clear(self) -> None:
        self.name = ""
        self.content = ""
        self.target = None

    def load(self, snippet: Snippet) -> None:
        self.name = snippet.name
        self.content = snippet.content
        self.target = snippet.short_id

    def append(self, field_name: str, text: str) -> None:
        setattr(self, field_name, getattr(self, field_name) + text)

    def backspace(self, field_name: str) -> None:
        setattr(self, field_name, getattr(self, field_name)[:-1])


@dataclass(slots=True)
class SearchState:
    query: str = ""
    indices: List[int] = field(default_factory=list)


@dataclass(slots=True)
class StatusMessage:
    text: str
    timestamp: float

    def expired(self, now: float, ttl: float = STATUS_TTL_SECONDS) -> bool:
        return now - self.timestamp > ttl


def filter_indices(snippets: List[Snippet], query: str) -> List[int]:
    """Positions of snippets whose name contains ``query`` case-insensitively."""

    needle = query.lower()
    return [i for i, snippet in enumerate(snippets) if needle in snippet.name.lower()]


@dataclass
class Session:
    """Authoritative list plus the cursor, mode and transient overlays.

    ``selection`` indexes the *visible* sequence: the full list, or the
    search's ``indices`` while a filter is active. ``snippets`` is never
    reordered by searching.
    """

    snippets: List[Snippet] = field(default_factory=list)
    selection: Optional[int] = None
    mode: str = BROWSING
    scroll_offset: int = 0
    draft: Draft = field(default_factory=Draft)
    search: Optional[SearchState] = None
    status: Optional[StatusMessage] = None
    confirm_target: Optional[str] = None
    show_help: bool = False
    running: bool = True
    clock: Callable[[], float] = time.monotonic

    def __post_init__(self) -> None:
        if self.selection is None and self.snippets:
            self.selection = 0
        self.clamp_selection()

    @property
    def confirm_pending(self) -> bool:
        return self.confirm_target is not None

    @property
    def draft_field(self) -> Optional[str]:
        """The draft attribute the current mode edits, if any."""

        if self.mode in (CREATING_NAME, EDITING_NAME):
            return "name"
        if self.mode in (CREATING_CONTENT, EDITING_CONTENT):
            return "content"
        return None

    def type_text(self, text: str) -> None:
        if self.mode == SEARCHING and self.search is not None:
            self.search.query += text
            self.apply_search_filter()
            return
        field_name = self.draft_field
        if field_name is not None:
            self.draft.append(field_name, text)

    def backspace(self) -> None:
        if self.mode == SEARCHING and self.search is not None:
            self.search.query = self.search.query[:-1]
            self.apply_search_filter()
            return
        field_name = self.draft_field
        if field_name is not None:
            self.draft.backspace(field_name)

    def visible_indices(self) -> List[int]:
        if self.search is not None:
            return list(self.search.indices)
        return list(range(len(self.snippets)))

    def visible_snippets(self) -> List[Snippet]:
        return [self.snippets[i] for i in self.visible_indices()]

    def visible_count(self) -> int:
        if self.search is not None:
            return len(self.search.indices)
        return len(self.snippets)

    def real_index(self, visible_index: Optional[int] = None) -> Optional[int]:
        index = self.selection if visible_index is None else visible_index
        if index is None:
            return None
        if self.search is not None:
            if 0 <= index < len(self.search.indices):
                return self.search.indices[index]
            return None
        if 0 <= index < len(self.snippets):
            return index
        return None

    def selected_snippet(self) -> Optional[Snippet]:
        real = self.real_index()
        return self.snippets[real] if real is not None else None

    def move_down(self) -> None:
        count = self.visible_count()
        if count == 0:
            return
        if self.selection is None or self.selection >= count - 1:
            self.selection = 0
        else:
            self.selection += 1
        self.scroll_offset = 0

    def move_up(self) -> None:
        count = self.visible_count()
        if count == 0:
            return
        if self.selection is None:
            self.selection = 0
        elif self.selection == 0:
            self.selection = count - 1
        else:
            self.selection -= 1
        self.scroll_offset = 0

    def clamp_selection(self) -> None:
        count = self.visible_count()
        if count == 0:
            self.selection = None
        elif self.selection is None:
            self.selection = 0
        elif self.selection >= count:
            self.selection = count - 1

    def content_line_count(self) -> int:
        snippet = self.selected_snippet()
        return len(snippet.content.splitlines()) if snippet else 0

    def scroll_down(self) -> None:
        if self.scroll_offset < self.content_line_count():
            self.scroll_offset += 1

    def scroll_up(self) -> None:
        self.scroll_offset = max(0, self.scroll_offset - 1)

    def start_search(self) -> None:
        self.search = SearchState(indices=list(range(len(self.snippets))))
        self.selection = 0 if self.snippets else None

    def apply_search_filter(self) -> None:
        if self.search is None:
            return
        self.search.indices = filter_indices(self.snippets, self.search.query)
        self.selection = 0 if self.search.indices else None

    def drop_search(self) -> None:
        self.search = None
        self.clamp_selection()

    def set_status(self, text: str) -> None:
        self.status = StatusMessage(text=text, timestamp=self.clock())

    def clear_status(self) -> None:
        self.status = None

    def expire_status(self) -> bool:
        """Clear a status older than the TTL; return whether one was cleared."""

        if self.status is not None and self.status.expired(self.clock()):
            self.status = None
            return True
        return False

    def active_overlay(self) -> Optional[str]:
        if self.show_help:
            return OVERLAY_HELP
        if self.status is not None:
            return OVERLAY_STATUS
        if self.confirm_pending:
            return OVERLAY_CONFIRM
        return None

    def replace_snippets(self, snippets: List[Snippet]) -> None:
        self.snippets = list(snippets)
        self.search = None
        self.clamp_selection()

    def insert_front(self, snippet: Snippet) -> None:
        self.snippets.insert(0, snippet)
        self.search = None
        self.selection = 0

    def replace_snippet(self, snippet: Snippet) -> bool:
        for position, existing in enumerate(self.snippets):
            if existing.short_id == snippet.short_id:
                self.snippets[position] = snippet
                return True
        return False

    def remove_snippet(self, short_id: str) -> bool:
        for position, existing in enumerate(self.snippets):
            if existing.short_id == short_id:
                del self.snippets[position]
                if self.search is not None:
                    self.search.indices = filter_indices(self.snippets, self.search.query)
                self.clamp_selection()
                return True
        return False


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
