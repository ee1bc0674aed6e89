"""Per-line syntax highlighting for the terminal view."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from pygments.lexer import Lexer
from pygments.styles import get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

from sipp.runtime import telemetry

from .lexers import lexer_for_name

Fragment = Tuple[str, str]
HighlightedLine = List[Fragment]

DEFAULT_STYLE = "monokai"


def split_lines(content: str) -> List[str]:
    """Split ``content`` keeping each line's terminator attached."""

    return content.splitlines(keepends=True)


class LineHighlighter:
    """Turns snippet text into ``(color, fragment)`` pairs per line.

    ``color`` is ``#rrggbb`` or ``""`` for the terminal's default colour. The
    whole document is lexed first so multi-line constructs keep their colour;
    if that fails, or the lexer rewrote the text, lines are lexed one at a
    time and a line whose lexer still fails is returned unstyled.
    """

    def __init__(self, style: str = DEFAULT_STYLE) -> None:
        try:
            self._style = get_style_by_name(style)
        except ClassNotFound:
            self._style = get_style_by_name(DEFAULT_STYLE)
        self._colors: Dict[_TokenType, str] = {}

    def highlight_lines(self, name: str, content: str) -> List[HighlightedLine]:
        lines = split_lines(content)
        if not lines:
            return []
        lexer = lexer_for_name(name)
        try:
            highlighted = self._highlight_document(lexer, content)
        except Exception as exc:
            telemetry.record_event(
                "highlight.document_failed",
                level="warning",
                data={"name": name, "error": str(exc)},
                logger_name="sipp.highlight",
            )
            highlighted = None
        if highlighted is not None and len(highlighted) == len(lines):
            return highlighted
        return [self._highlight_line(lexer, name, line) for line in lines]

    def color_for(self, token_type: _TokenType) -> str:
        cached = self._colors.get(token_type)
        if cached is not None:
            return cached
        color = self._style.style_for_token(token_type).get("color") or ""
        value = f"#{color}" if color else ""
        self._colors[token_type] = value
        return value

    def _highlight_document(
        self, lexer: Lexer, content: str
    ) -> List[HighlightedLine] | None:
        tokens = list(lexer.get_tokens(content))
        if "".join(value for _, value in tokens) != content:
            return None
        return self._group_lines(tokens)

    def _group_lines(
        self, tokens: Iterable[Tuple[_TokenType, str]]
    ) -> List[HighlightedLine]:
        lines: List[HighlightedLine] = []
        current: HighlightedLine = []
        for token_type, value in tokens:
            color = self.color_for(token_type)
            for part in value.splitlines(keepends=True):
                current.append((color, part))
                if part.splitlines() != [part]:
                    lines.append(current)
                    current = []
        if current:
            lines.append(current)
        return lines

    def _highlight_line(self, lexer: Lexer, name: str, line: str) -> HighlightedLine:
        body = (line.splitlines() or [""])[0]
        terminator = line[len(body):]
        try:
            tokens = list(lexer.get_tokens(body))
        except Exception as exc:
            telemetry.record_event(
                "highlight.line_failed",
                level="warning",
                data={"name": name, "error": str(exc)},
                logger_name="sipp.highlight",
            )
            return [("", line)]
        if "".join(value for _, value in tokens) != body:
            return [("", line)]
        fragments = [(self.color_for(t), value) for t, value in tokens if value]
        if terminator:
            fragments.append(("", terminator))
        return fragments or [("", line)]


__all__ = ["DEFAULT_STYLE", "Fragment", "HighlightedLine", "LineHighlighter", "split_lines"]
