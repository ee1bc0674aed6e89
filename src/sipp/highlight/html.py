"""HTML rendering of a snippet for the web view."""

from __future__ import annotations

from html import escape

from pygments import highlight
from pygments.formatters import HtmlFormatter

from sipp.runtime import telemetry

from .lexers import lexer_for_name

HTML_STYLE = "monokai"
_FORMATTER = HtmlFormatter(style=HTML_STYLE, cssclass="highlight", linenos=False)


def highlight_css() -> str:
    return _FORMATTER.get_style_defs(".highlight")


def render_html(name: str, content: str) -> str:
    """Highlighted ``<div class="highlight">`` block, or an escaped ``<pre>``."""

    try:
        return highlight(content, lexer_for_name(name), _FORMATTER)
    except Exception as exc:
        telemetry.record_event(
            "highlight.html_failed",
            level="warning",
            data={"name": name, "error": str(exc)},
            logger_name="sipp.highlight",
        )
        return f"<pre>{escape(content)}</pre>"


__all__ = ["HTML_STYLE", "highlight_css", "render_html"]
