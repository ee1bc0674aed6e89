"""SQLite-backed snippet store guarded by a single connection lock."""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from sipp.runtime import telemetry

from .models import Snippet
from .short_id import generate_short_id

DEFAULT_DB_PATH = "sipp.sqlite"
MAX_SHORT_ID_ATTEMPTS = 5

_SCHEMA = """
CREATE TABLE IF NOT EXISTS snippets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    short_id TEXT NOT NULL UNIQUE,
    content TEXT NOT NULL,
    name TEXT NOT NULL
)
"""

_COLUMNS = "id, short_id, content, name"


class StoreError(RuntimeError):
    """Raised when the underlying SQLite database fails."""


def _row_to_snippet(row: sqlite3.Row) -> Snippet:
    return Snippet(
        id=row["id"],
        short_id=row["short_id"],
        name=row["name"],
        content=row["content"],
    )


class SnippetStore:
    """Durable keyed storage of snippets.

    One connection is shared by every caller; ``_lock`` serializes access so
    the web server's worker threads and the terminal client can use the same
    instance.
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_DB_PATH,
        *,
        id_factory: Callable[[], str] = generate_short_id,
    ) -> None:
        self.path = str(path)
        self._id_factory = id_factory
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.execute(_SCHEMA)
        except sqlite3.Error as exc:
            raise StoreError(f"cannot open database '{self.path}': {exc}") from exc
        telemetry.record_event(
            "store.open", data={"path": self.path}, logger_name="sipp.store"
        )

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def create(self, name: str, content: str) -> Snippet:
        with self._guard("create"):
            for _ in range(MAX_SHORT_ID_ATTEMPTS):
                short_id = self._id_factory()
                try:
                    with self._conn:
                        cursor = self._conn.execute(
                            "INSERT INTO snippets (short_id, content, name) VALUES (?, ?, ?)",
                            (short_id, content, name),
                        )
                except sqlite3.IntegrityError:
                    telemetry.record_event(
                        "store.short_id_collision",
                        level="warning",
                        data={"short_id": short_id},
                        logger_name="sipp.store",
                    )
                    continue
                return Snippet(
                    id=int(cursor.lastrowid),
                    short_id=short_id,
                    name=name,
                    content=content,
                )
            raise StoreError("could not allocate a unique short id")

    def get_by_short_id(self, short_id: str) -> Optional[Snippet]:
        with self._guard("get"):
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM snippets WHERE short_id = ?", (short_id,)
            ).fetchone()
        return _row_to_snippet(row) if row is not None else None

    def get_all(self) -> List[Snippet]:
        with self._guard("get_all"):
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM snippets ORDER BY id DESC"
            ).fetchall()
        return [_row_to_snippet(row) for row in rows]

    def delete_by_short_id(self, short_id: str) -> bool:
        with self._guard("delete"):
            with self._conn:
                cursor = self._conn.execute(
                    "DELETE FROM snippets WHERE short_id = ?", (short_id,)
                )
        return cursor.rowcount > 0

    def update_by_short_id(
        self, short_id: str, name: str, content: str
    ) -> Optional[Snippet]:
        with self._guard("update"):
            with self._conn:
                cursor = self._conn.execute(
                    "UPDATE snippets SET name = ?, content = ? WHERE short_id = ?",
                    (name, content, short_id),
                )
            if cursor.rowcount == 0:
                return None
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM snippets WHERE short_id = ?", (short_id,)
            ).fetchone()
        return _row_to_snippet(row) if row is not None else None

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        with self._lock, telemetry.span(
            f"store::{operation}",
            logger_name="sipp.store",
            component="store",
        ):
            try:
                yield
            except sqlite3.Error as exc:
                raise StoreError(f"{operation} failed: {exc}") from exc


__all__ = ["SnippetStore", "StoreError", "DEFAULT_DB_PATH"]
