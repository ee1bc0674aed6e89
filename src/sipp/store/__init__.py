"""Durable snippet storage on SQLite."""

from .database import DEFAULT_DB_PATH, SnippetStore, StoreError
from .models import Snippet
from .short_id import ALPHABET, SHORT_ID_LENGTH, generate_short_id

__all__ = [
    "ALPHABET",
    "DEFAULT_DB_PATH",
    "SHORT_ID_LENGTH",
    "Snippet",
    "SnippetStore",
    "StoreError",
    "generate_short_id",
]
