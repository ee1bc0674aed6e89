"""Session modes and their dispatch primitives."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_helpers import KeymapMode
from .list_modes import BrowsingMode, ViewingMode
from .text_modes import (
    CreatingContentMode,
    CreatingNameMode,
    EditingContentMode,
    EditingNameMode,
    SearchingMode,
    TextEntryMode,
)

DEFAULT_MODES = (
    BrowsingMode,
    ViewingMode,
    CreatingNameMode,
    CreatingContentMode,
    EditingNameMode,
    EditingContentMode,
    SearchingMode,
)

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "TextEntryMode",
    "BrowsingMode",
    "ViewingMode",
    "CreatingNameMode",
    "CreatingContentMode",
    "EditingNameMode",
    "EditingContentMode",
    "SearchingMode",
    "DEFAULT_MODES",
]
