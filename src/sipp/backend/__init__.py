"""Backend abstraction over the local store and a remote sipp server."""

from .base import Backend, share_url
from .errors import (
    BackendError,
    NetworkError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
)
from .local import LocalBackend
from .remote import API_KEY_HEADER, RemoteBackend
from .resolve import resolve_backend

__all__ = [
    "API_KEY_HEADER",
    "Backend",
    "BackendError",
    "LocalBackend",
    "NetworkError",
    "NotFoundError",
    "RemoteBackend",
    "StorageError",
    "UnauthorizedError",
    "resolve_backend",
    "share_url",
]
