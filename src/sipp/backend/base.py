"""Operation contract every backend implements."""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from sipp.store import Snippet


@runtime_checkable
class Backend(Protocol):
    """Snippet operations with one contract for local and remote storage.

    Absence is reported through return values (``False`` / ``None``); every
    other failure raises a ``BackendError`` subclass.
    """

    @property
    def is_remote(self) -> bool: ...

    @property
    def base_url(self) -> Optional[str]: ...

    def list(self) -> List[Snippet]: ...

    def get(self, short_id: str) -> Optional[Snippet]: ...

    def create(self, name: str, content: str) -> Snippet: ...

    def delete(self, short_id: str) -> bool: ...

    def update(self, short_id: str, name: str, content: str) -> Optional[Snippet]: ...

    def close(self) -> None: ...


def share_url(base_url: Optional[str], short_id: str) -> Optional[str]:
    if not base_url:
        return None
    return f"{base_url.rstrip('/')}/s/{short_id}"


__all__ = ["Backend", "share_url"]
