"""Pick the local or remote backend for a client launch."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from sipp.config import DEFAULT_REMOTE_URL, ClientConfig, load_config
from sipp.runtime import telemetry
from sipp.store import SnippetStore, StoreError

from .base import Backend
from .errors import StorageError
from .local import LocalBackend
from .remote import RemoteBackend


def resolve_backend(
    *,
    remote_url: Optional[str] = None,
    api_key: Optional[str] = None,
    db_path: str | Path,
    config: Optional[ClientConfig] = None,
) -> Backend:
    """Return the backend for this launch.

    An explicit ``remote_url`` wins. Without one, a missing local database
    means "thin client": the saved config (or localhost) is used instead.
    Raises ``StorageError`` when the local database cannot be opened.
    """

    if remote_url:
        backend: Backend = RemoteBackend(remote_url, api_key)
    elif not Path(db_path).exists():
        cfg = config if config is not None else load_config()
        backend = RemoteBackend(
            cfg.remote_url or DEFAULT_REMOTE_URL, api_key or cfg.api_key
        )
    else:
        try:
            store = SnippetStore(db_path)
        except StoreError as exc:
            raise StorageError(str(exc)) from exc
        backend = LocalBackend(store, base_url=DEFAULT_REMOTE_URL)

    telemetry.record_event(
        "backend.resolved",
        data={"remote": backend.is_remote, "base_url": backend.base_url or ""},
        logger_name="sipp.backend",
    )
    return backend


__all__ = ["resolve_backend"]
