"""Create, edit, delete and refresh actions driven through the backend.

Every outcome lands in ``session.status``. A failed backend call never
touches the list, the draft or the mode, so the user can retry.
"""

from __future__ import annotations

from typing import Optional

from sipp.backend import BackendError
from sipp.keymaps import ResolutionMatch
from sipp.modes.base_mode import ModeContext, ModeResult
from sipp.runtime import telemetry
from sipp.session import (
    BROWSING,
    CREATING_CONTENT,
    CREATING_NAME,
    EDITING_CONTENT,
    EDITING_NAME,
)

CREATED = "Created!"
UPDATED = "Updated!"
DELETED = "Deleted!"
REFRESHED = "Refreshed!"
NOT_FOUND = "Snippet not found"
EMPTY_NAME = "Name cannot be empty"


def _record(event: str, level: str = "info", **data: object) -> None:
    telemetry.record_event(
        f"session.{event}", level=level, data=data, logger_name="sipp.session"
    )


def _failed(context: ModeContext, operation: str, exc: BackendError) -> ModeResult:
    context.session.set_status(str(exc))
    _record(f"{operation}_failed", level="warning", kind=exc.kind, error=str(exc))
    return ModeResult(consumed=True, status="error", message=str(exc))


def start_create(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.draft.clear()
    return ModeResult(consumed=True, switch_to=CREATING_NAME)


def start_edit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    snippet = context.session.selected_snippet()
    if snippet is None:
        return ModeResult(consumed=True, status="noop")
    context.session.draft.load(snippet)
    return ModeResult(consumed=True, switch_to=EDITING_NAME)


def focus_content(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    target = EDITING_CONTENT if context.session.mode == EDITING_NAME else CREATING_CONTENT
    return ModeResult(consumed=True, switch_to=target)


def focus_name(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    target = EDITING_NAME if context.session.mode == EDITING_CONTENT else CREATING_NAME
    return ModeResult(consumed=True, switch_to=target)


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.type_text("\n")
    return ModeResult(consumed=True)


def delete_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.backspace()
    return ModeResult(consumed=True)


def cancel_draft(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.draft.clear()
    return ModeResult(consumed=True, switch_to=BROWSING, message="cancel")


def save_draft(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = context.session
    if not session.draft.name.strip():
        session.set_status(EMPTY_NAME)
        return ModeResult(consumed=True, status="invalid", message=EMPTY_NAME)
    if session.mode in (EDITING_NAME, EDITING_CONTENT):
        return _save_edit(context)
    return _save_create(context)


def _save_create(context: ModeContext) -> ModeResult:
    session = context.session
    try:
        snippet = context.backend.create(session.draft.name, session.draft.content)
    except BackendError as exc:
        return _failed(context, "create", exc)
    session.insert_front(snippet)
    session.draft.clear()
    session.set_status(CREATED)
    _record("created", short_id=snippet.short_id)
    return ModeResult(consumed=True, switch_to=BROWSING, message=CREATED)


def _save_edit(context: ModeContext) -> ModeResult:
    session = context.session
    short_id: Optional[str] = session.draft.target
    if short_id is None:
        return ModeResult(consumed=True, status="noop")
    try:
        updated = context.backend.update(
            short_id, session.draft.name, session.draft.content
        )
    except BackendError as exc:
        return _failed(context, "update", exc)
    if updated is None:
        session.set_status(NOT_FOUND)
        _record("update_missing", level="warning", short_id=short_id)
        return ModeResult(consumed=True, status="missing", message=NOT_FOUND)
    session.replace_snippet(updated)
    session.draft.clear()
    session.set_status(UPDATED)
    _record("updated", short_id=short_id)
    return ModeResult(consumed=True, switch_to=BROWSING, message=UPDATED)


def request_delete(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    snippet = context.session.selected_snippet()
    if snippet is None:
        return ModeResult(consumed=True, status="noop")
    context.session.confirm_target = snippet.short_id
    return ModeResult(consumed=True, message="confirm_delete")


def execute_delete(context: ModeContext) -> ModeResult:
    """Run the delete recorded by ``request_delete`` and clear the prompt."""

    session = context.session
    short_id = session.confirm_target
    session.confirm_target = None
    if short_id is None:
        return ModeResult(consumed=True, status="noop")
    try:
        deleted = context.backend.delete(short_id)
    except BackendError as exc:
        return _failed(context, "delete", exc)
    if not deleted:
        session.set_status(NOT_FOUND)
        _record("delete_missing", level="warning", short_id=short_id)
        return ModeResult(consumed=True, status="missing", message=NOT_FOUND)
    session.remove_snippet(short_id)
    session.set_status(DELETED)
    _record("deleted", short_id=short_id)
    return ModeResult(consumed=True, message=DELETED)


def refresh_list(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = context.session
    try:
        snippets = context.backend.list()
    except BackendError as exc:
        return _failed(context, "refresh", exc)
    session.replace_snippets(snippets)
    session.set_status(REFRESHED)
    _record("refreshed", count=len(snippets))
    return ModeResult(consumed=True, message=REFRESHED)


__all__ = [
    "CREATED",
    "UPDATED",
    "DELETED",
    "REFRESHED",
    "NOT_FOUND",
    "EMPTY_NAME",
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
