"""Lexer selection from a snippet name's trailing extension."""

from __future__ import annotations

from functools import lru_cache

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

EXTENSION_ALIASES = {
    "ts": "js",
    "tsx": "js",
    "jsx": "js",
}


def extension_of(name: str) -> str:
    _, dot, ext = name.rpartition(".")
    return ext.lower() if dot else ""


@lru_cache(maxsize=128)
def lexer_for_extension(ext: str) -> Lexer:
    options = {"stripnl": False, "ensurenl": False}
    ext = EXTENSION_ALIASES.get(ext, ext)
    if not ext:
        return TextLexer(**options)
    try:
        return get_lexer_for_filename(f"snippet.{ext}", **options)
    except ClassNotFound:
        pass
    try:
        return get_lexer_by_name(ext, **options)
    except ClassNotFound:
        return TextLexer(**options)


def lexer_for_name(name: str) -> Lexer:
    return lexer_for_extension(extension_of(name))


__all__ = ["EXTENSION_ALIASES", "extension_of", "lexer_for_extension", "lexer_for_name"]
