"""Thin HTTP client speaking the sipp JSON API."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

import requests

from sipp.runtime import telemetry
from sipp.store import Snippet

from .errors import (
    INVALID_KEY_REASON,
    BackendError,
    NO_SERVER_KEY_REASON,
    NetworkError,
    UnauthorizedError,
)

API_KEY_HEADER = "x-api-key"
DEFAULT_TIMEOUT = 10.0


class RemoteBackend:
    """Backend that forwards every operation to a remote sipp server.

    Status codes are folded into the shared taxonomy: 401/403 become
    ``UnauthorizedError`` with distinct reasons, 404 on a keyed operation
    becomes ``False``/``None``, anything unexpected becomes ``NetworkError``.
    """

    is_remote = True

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()

    def list(self) -> List[Snippet]:
        response = self._request("GET", "/api/snippets")
        if response.status_code == 200:
            payload = self._json(response)
            if not isinstance(payload, list):
                raise NetworkError("expected a JSON array of snippets")
            return [self._snippet(item) for item in payload]
        raise self._unexpected(response)

    def get(self, short_id: str) -> Optional[Snippet]:
        response = self._request("GET", f"/api/snippets/{short_id}")
        if response.status_code == 200:
            return self._snippet(self._json(response))
        if response.status_code == 404:
            return None
        raise self._unexpected(response)

    def create(self, name: str, content: str) -> Snippet:
        response = self._request(
            "POST", "/api/snippets", json={"name": name, "content": content}
        )
        if response.status_code in (200, 201):
            return self._snippet(self._json(response))
        raise self._unexpected(response)

    def delete(self, short_id: str) -> bool:
        response = self._request("DELETE", f"/api/snippets/{short_id}")
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise self._unexpected(response)

    def update(self, short_id: str, name: str, content: str) -> Optional[Snippet]:
        response = self._request(
            "PUT",
            f"/api/snippets/{short_id}",
            json={"name": name, "content": content},
        )
        if response.status_code == 200:
            return self._snippet(self._json(response))
        if response.status_code == 404:
            return None
        raise self._unexpected(response)

    def close(self) -> None:
        """Close the HTTP session if this backend created it."""

        if self._owns_session:
            self._session.close()

    def _headers(self) -> dict[str, str]:
        if self.api_key:
            return {API_KEY_HEADER: self.api_key}
        return {}

    def _request(
        self, method: str, path: str, *, json: Optional[Mapping[str, Any]] = None
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        with telemetry.span(
            f"backend.remote::{method}",
            logger_name="sipp.backend",
            component="backend",
            metadata={"url": url},
        ) as handle:
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    json=json,
                    headers=self._headers(),
                    timeout=self.timeout,
                )
            except requests.RequestException as exc:
                raise NetworkError(str(exc)) from exc
            handle.add_metadata("status", response.status_code)
            return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(f"malformed response: {exc}") from exc

    @staticmethod
    def _snippet(payload: Any) -> Snippet:
        if not isinstance(payload, Mapping):
            raise NetworkError("expected a JSON snippet object")
        try:
            return Snippet.from_dict(payload)
        except ValueError as exc:
            raise NetworkError(str(exc)) from exc

    @staticmethod
    def _unexpected(response: requests.Response) -> BackendError:
        if response.status_code == 401:
            return UnauthorizedError(INVALID_KEY_REASON)
        if response.status_code == 403:
            return UnauthorizedError(NO_SERVER_KEY_REASON)
        reason = getattr(response, "reason", "") or ""
        return NetworkError(f"HTTP {response.status_code} {reason}".strip())


__all__ = ["RemoteBackend", "API_KEY_HEADER"]
