"""Pure projection of a session into the text the Textual widgets display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from rich.style import Style
from rich.text import Text

from sipp.highlight import LineHighlighter
from sipp.keymaps import Binding, KeymapRegistry
from sipp.session import (
    BROWSING,
    CREATING_CONTENT,
    CREATING_NAME,
    EDITING_CONTENT,
    EDITING_NAME,
    OVERLAY_CONFIRM,
    OVERLAY_HELP,
    SEARCHING,
    VIEWING,
    Session,
)

SELECTION_MARKER = "▶ "
CURSOR = "█"
KEY_STYLE = Style(color="yellow", bold=True)
MUTED_STYLE = Style(color="bright_black")

HINTS: Mapping[str, Sequence[Tuple[str, str]]] = {
    BROWSING: (
        ("j/k", "Navigate"),
        ("Enter", "View"),
        ("y", "Copy"),
        ("e", "Edit"),
        ("d", "Delete"),
        ("c", "Create"),
        ("/", "Search"),
        ("?", "Help"),
        ("q", "Quit"),
    ),
    VIEWING: (
        ("j/k", "Scroll"),
        ("y", "Copy"),
        ("e", "Edit"),
        ("Esc", "Back"),
        ("?", "Help"),
    ),
    SEARCHING: (("Type", "Filter"), ("Enter", "Select"), ("Esc", "Cancel")),
}
FORM_HINTS: Sequence[Tuple[str, str]] = (
    ("Tab", "Switch field"),
    ("Ctrl+S", "Save"),
    ("Esc", "Cancel"),
)

KEY_LABELS = {
    "ENTER": "Enter",
    "ESC": "Esc",
    "TAB": "Tab",
    "BACKSPACE": "Backspace",
    "SPACE": "Space",
    "UP": "↑",
    "DOWN": "↓",
}


@dataclass(slots=True)
class Frame:
    """Everything one redraw needs; widgets only copy these fields."""

    list_title: str
    list_body: Text
    detail_title: str
    detail_body: Text
    footer: Text
    popup_title: Optional[str] = None
    popup_body: Optional[Text] = None


def _hint_line(hints: Iterable[Tuple[str, str]]) -> Text:
    text = Text()
    for index, (key, label) in enumerate(hints):
        if index:
            text.append("  ")
        text.append(key, style=KEY_STYLE)
        text.append(f": {label}")
    return text


def _list_body(session: Session) -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    for index, snippet in enumerate(session.visible_snippets()):
        if index:
            text.append("\n")
        if index == session.selection:
            text.append(SELECTION_MARKER + snippet.name, style=Style(bold=True, reverse=True))
        else:
            text.append(" " * len(SELECTION_MARKER) + snippet.name)
    return text


def highlighted_text(highlighter: LineHighlighter, name: str, content: str, offset: int = 0) -> Text:
    """Rich text for ``content`` starting ``offset`` lines down."""

    text = Text()
    for line in highlighter.highlight_lines(name, content)[offset:]:
        for color, fragment in line:
            text.append(fragment, style=Style(color=color) if color else None)
    text.rstrip()
    return text


def _form_body(session: Session) -> Text:
    draft = session.draft
    name_active = session.mode in (CREATING_NAME, EDITING_NAME)
    text = Text()
    text.append("Name\n", style=KEY_STYLE if name_active else MUTED_STYLE)
    text.append(draft.name)
    if name_active:
        text.append(CURSOR)
    text.append("\n\n")
    text.append("Content\n", style=MUTED_STYLE if name_active else KEY_STYLE)
    text.append(draft.content)
    if not name_active:
        text.append(CURSOR)
    return text


def _key_label(binding: Binding) -> str:
    stroke = binding.stroke
    label = KEY_LABELS.get(stroke.key, stroke.key)
    if stroke.modifiers:
        mods = "+".join(m.capitalize() for m in stroke.modifiers)
        return f"{mods}+{label}"
    return label


def help_lines(
    registry: KeymapRegistry, flags: Mapping[str, bool], modes: Sequence[str] = (BROWSING, VIEWING)
) -> List[Tuple[str, str]]:
    """``(keys, description)`` rows for every action bound in ``modes``."""

    rows: dict[str, Tuple[List[str], str]] = {}
    for mode in modes:
        for binding in registry.iter_bindings(mode):
            if not binding.allows(flags):
                continue
            action = registry.get_action(binding.action_id)
            keys, _ = rows.setdefault(action.id, ([], action.description))
            label = _key_label(binding)
            if label not in keys:
                keys.append(label)
    return [("/".join(keys), description) for keys, description in rows.values()]


def _help_body(rows: Sequence[Tuple[str, str]]) -> Text:
    width = max((len(keys) for keys, _ in rows), default=0) + 2
    text = Text()
    for keys, description in rows:
        text.append(f"  {keys:<{width}}", style=KEY_STYLE)
        text.append(f"{description}\n")
    text.append("\n  Press any key to close", style=MUTED_STYLE)
    return text


def render_frame(
    session: Session,
    highlighter: LineHighlighter,
    *,
    help_rows: Sequence[Tuple[str, str]] = (),
) -> Frame:
    mode = session.mode
    list_body = _list_body(session)
    if mode == SEARCHING and session.search is not None:
        list_title = f" Search: {session.search.query} "
    else:
        list_title = " Snippets "

    if mode in (CREATING_NAME, CREATING_CONTENT):
        detail_title, detail_body = " New Snippet ", _form_body(session)
        hints: Sequence[Tuple[str, str]] = FORM_HINTS
    elif mode in (EDITING_NAME, EDITING_CONTENT):
        detail_title, detail_body = " Edit Snippet ", _form_body(session)
        hints = FORM_HINTS
    else:
        snippet = session.selected_snippet()
        if snippet is None:
            detail_title, detail_body = " Content ", Text("No snippet selected", style=MUTED_STYLE)
        else:
            detail_title = f" {snippet.name} "
            detail_body = highlighted_text(
                highlighter,
                snippet.name,
                snippet.content,
                session.scroll_offset if mode == VIEWING else 0,
            )
        hints = HINTS.get(mode, ())

    if session.status is not None:
        footer = Text(session.status.text, style=Style(color="green", bold=True))
    else:
        footer = _hint_line(hints)

    popup_title: Optional[str] = None
    popup_body: Optional[Text] = None
    overlay = session.active_overlay()
    if overlay == OVERLAY_HELP:
        popup_title, popup_body = " Keybindings ", _help_body(help_rows)
    elif overlay == OVERLAY_CONFIRM:
        target = next(
            (s for s in session.snippets if s.short_id == session.confirm_target), None
        )
        prompt = f"Delete {target.name}? (y/n)" if target else "Delete snippet? (y/n)"
        popup_title, popup_body = " Confirm ", Text(prompt, style=Style(color="red", bold=True))

    return Frame(
        list_title=list_title,
        list_body=list_body,
        detail_title=detail_title,
        detail_body=detail_body,
        footer=footer,
        popup_title=popup_title,
        popup_body=popup_body,
    )


__all__ = ["Frame", "help_lines", "highlighted_text", "render_frame", "SELECTION_MARKER"]
