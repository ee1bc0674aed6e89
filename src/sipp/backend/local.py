"""Backend running directly against a local ``SnippetStore``."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

from sipp.runtime import telemetry
from sipp.store import Snippet, SnippetStore, StoreError

from .errors import StorageError


@contextmanager
def _store_call(operation: str, **metadata: object) -> Iterator[None]:
    with telemetry.span(
        f"backend.local::{operation}",
        logger_name="sipp.backend",
        component="backend",
        metadata=metadata,
    ):
        try:
            yield
        except StoreError as exc:
            raise StorageError(str(exc)) from exc


class LocalBackend:
    """Wraps a store handle; no authentication applies locally."""

    is_remote = False

    def __init__(self, store: SnippetStore, *, base_url: Optional[str] = None) -> None:
        self.store = store
        self.base_url = base_url

    def list(self) -> List[Snippet]:
        with _store_call("list"):
            return self.store.get_all()

    def get(self, short_id: str) -> Optional[Snippet]:
        with _store_call("get", short_id=short_id):
            return self.store.get_by_short_id(short_id)

    def create(self, name: str, content: str) -> Snippet:
        with _store_call("create"):
            return self.store.create(name, content)

    def delete(self, short_id: str) -> bool:
        with _store_call("delete", short_id=short_id):
            return self.store.delete_by_short_id(short_id)

    def update(self, short_id: str, name: str, content: str) -> Optional[Snippet]:
        with _store_call("update", short_id=short_id):
            return self.store.update_by_short_id(short_id, name, content)

    def close(self) -> None:
        self.store.close()


__all__ = ["LocalBackend"]
