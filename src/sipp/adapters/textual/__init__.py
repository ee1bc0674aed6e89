"""Textual front end for the interactive session."""

from .controller import SippController, TextualUIHooks, normalize_textual_key
from .render import Frame, render_frame

__all__ = [
    "Frame",
    "SippController",
    "TextualUIHooks",
    "normalize_textual_key",
    "render_frame",
]
