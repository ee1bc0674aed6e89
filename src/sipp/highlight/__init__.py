"""Syntax highlighting for snippets (terminal lines and web HTML)."""

from .html import highlight_css, render_html
from .lexers import extension_of, lexer_for_name
from .lines import Fragment, HighlightedLine, LineHighlighter, split_lines

__all__ = [
    "Fragment",
    "HighlightedLine",
    "LineHighlighter",
    "extension_of",
    "highlight_css",
    "lexer_for_name",
    "render_html",
    "split_lines",
]
