"""Text-entry modes: the create/edit form fields and the search prompt."""

from __future__ import annotations

from sipp.session import (
    CREATING_CONTENT,
    CREATING_NAME,
    EDITING_CONTENT,
    EDITING_NAME,
    SEARCHING,
)

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import UNBOUND, KeymapMode


class TextEntryMode(KeymapMode):
    """Bound keys run their action; anything else that types text is typed."""

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = key.typed_text
        if text is None:
            return ModeResult(consumed=False, status=UNBOUND)
        self.session.type_text(text)
        return ModeResult(consumed=True)


class CreatingNameMode(TextEntryMode):
    name = CREATING_NAME


class CreatingContentMode(TextEntryMode):
    name = CREATING_CONTENT


class EditingNameMode(TextEntryMode):
    name = EDITING_NAME


class EditingContentMode(TextEntryMode):
    name = EDITING_CONTENT


class SearchingMode(TextEntryMode):
    name = SEARCHING


__all__ = [
    "TextEntryMode",
    "CreatingNameMode",
    "CreatingContentMode",
    "EditingNameMode",
    "EditingContentMode",
    "SearchingMode",
]
