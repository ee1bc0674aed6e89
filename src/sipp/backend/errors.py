"""Error taxonomy shared by the local and remote backends."""

from __future__ import annotations

INVALID_KEY_REASON = "Invalid API key"
NO_SERVER_KEY_REASON = "No API key configured on server"


class BackendError(Exception):
    """Base class; ``str(error)`` is the text shown to the user."""

    kind = "backend"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


class NotFoundError(BackendError):
    kind = "not_found"

    def __str__(self) -> str:
        return "Not found"


class UnauthorizedError(BackendError):
    """The remote rejected the shared secret, or has none configured."""

    kind = "unauthorized"

    @property
    def reason(self) -> str:
        return self.detail

    def __str__(self) -> str:
        return f"Unauthorized: {self.detail}"


class NetworkError(BackendError):
    kind = "network"

    def __str__(self) -> str:
        return f"Network error: {self.detail}"


class StorageError(BackendError):
    kind = "storage"

    def __str__(self) -> str:
        return f"Database error: {self.detail}"


__all__ = [
    "BackendError",
    "NotFoundError",
    "UnauthorizedError",
    "NetworkError",
    "StorageError",
    "INVALID_KEY_REASON",
    "NO_SERVER_KEY_REASON",
]
