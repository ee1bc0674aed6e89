from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import requests

from sipp.backend import (
    API_KEY_HEADER,
    LocalBackend,
    NetworkError,
    NotFoundError,
    RemoteBackend,
    StorageError,
    UnauthorizedError,
    resolve_backend,
    share_url,
)
from sipp.config import DEFAULT_REMOTE_URL, ClientConfig
from sipp.store import SnippetStore

SNIPPET = {"id": 1, "short_id": "abcdefghij", "name": "a.py", "content": "x = 1\n"}


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, reason: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, *responses: FakeResponse) -> None:
        self.responses = list(responses)
        self.requests: List[Dict[str, Any]] = []
        self.error: Optional[Exception] = None

    def request(self, **kwargs: Any) -> FakeResponse:
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


def make_remote(*responses: FakeResponse, api_key: Optional[str] = "secret") -> RemoteBackend:
    return RemoteBackend(
        "http://sipp.test/", api_key, session=FakeSession(*responses)  # type: ignore[arg-type]
    )


def test_error_messages() -> None:
    assert str(NotFoundError()) == "Not found"
    assert str(UnauthorizedError("Invalid API key")) == "Unauthorized: Invalid API key"
    assert str(NetworkError("timed out")) == "Network error: timed out"
    assert str(StorageError("disk full")) == "Database error: disk full"
    assert UnauthorizedError("x").kind == "unauthorized"


def test_share_url() -> None:
    assert share_url("http://host:3000/", "abc") == "http://host:3000/s/abc"
    assert share_url(None, "abc") is None


def test_local_backend_crud(tmp_path: Path) -> None:
    backend = LocalBackend(SnippetStore(tmp_path / "db.sqlite"))

    created = backend.create("a.py", "one")

    assert backend.is_remote is False
    assert backend.list() == [created]
    assert backend.get(created.short_id) == created
    assert backend.update(created.short_id, "b.py", "two").name == "b.py"
    assert backend.delete(created.short_id) is True
    assert backend.delete(created.short_id) is False
    assert backend.get(created.short_id) is None


def test_local_backend_wraps_store_failures(tmp_path: Path) -> None:
    store = SnippetStore(tmp_path / "db.sqlite")
    backend = LocalBackend(store)
    store.close()

    with pytest.raises(StorageError) as excinfo:
        backend.list()

    assert str(excinfo.value).startswith("Database error:")


def test_local_backend_close_releases_store(tmp_path: Path) -> None:
    backend = LocalBackend(SnippetStore(tmp_path / "db.sqlite"))

    backend.close()

    with pytest.raises(StorageError):
        backend.create("a.py", "one")


def test_remote_close_leaves_injected_session_open() -> None:
    session = FakeSession()
    backend = RemoteBackend("http://sipp.test", session=session)  # type: ignore[arg-type]
    session.close = lambda: pytest.fail("injected session was closed")  # type: ignore[attr-defined]

    backend.close()


def test_remote_close_closes_own_session(monkeypatch: pytest.MonkeyPatch) -> None:
    closed: List[bool] = []
    monkeypatch.setattr(requests.Session, "close", lambda self: closed.append(True))
    backend = RemoteBackend("http://sipp.test")

    backend.close()

    assert closed == [True]


def test_remote_list_sends_api_key() -> None:
    backend = make_remote(FakeResponse(200, [SNIPPET]))

    snippets = backend.list()

    request = backend._session.requests[0]  # type: ignore[attr-defined]
    assert request["method"] == "GET"
    assert request["url"] == "http://sipp.test/api/snippets"
    assert request["headers"] == {API_KEY_HEADER: "secret"}
    assert [s.short_id for s in snippets] == ["abcdefghij"]


def test_remote_omits_header_without_key() -> None:
    backend = make_remote(FakeResponse(201, SNIPPET), api_key=None)

    created = backend.create("a.py", "x = 1\n")

    request = backend._session.requests[0]  # type: ignore[attr-defined]
    assert request["headers"] == {}
    assert request["json"] == {"name": "a.py", "content": "x = 1\n"}
    assert created.name == "a.py"


@pytest.mark.parametrize(
    ("status", "reason"),
    [(401, "Invalid API key"), (403, "No API key configured on server")],
)
def test_remote_auth_failures(status: int, reason: str) -> None:
    backend = make_remote(FakeResponse(status, {"error": "nope"}))

    with pytest.raises(UnauthorizedError) as excinfo:
        backend.delete("abcdefghij")

    assert excinfo.value.reason == reason


def test_remote_absence_is_not_an_error() -> None:
    backend = make_remote(FakeResponse(404), FakeResponse(404), FakeResponse(404))

    assert backend.get("abcdefghij") is None
    assert backend.delete("abcdefghij") is False
    assert backend.update("abcdefghij", "a", "b") is None


def test_remote_unexpected_status_is_network_error() -> None:
    backend = make_remote(FakeResponse(500, reason="Internal Server Error"))

    with pytest.raises(NetworkError) as excinfo:
        backend.list()

    assert str(excinfo.value) == "Network error: HTTP 500 Internal Server Error"


def test_remote_transport_failure_is_network_error() -> None:
    backend = make_remote()
    backend._session.error = requests.ConnectionError("refused")  # type: ignore[attr-defined]

    with pytest.raises(NetworkError):
        backend.get("abcdefghij")


def test_remote_malformed_body_is_network_error() -> None:
    backend = make_remote(
        FakeResponse(200, ValueError("bad json")), FakeResponse(200, {"id": 1})
    )

    with pytest.raises(NetworkError):
        backend.list()
    with pytest.raises(NetworkError):
        backend.get("abcdefghij")


def test_resolve_prefers_explicit_remote(tmp_path: Path) -> None:
    backend = resolve_backend(
        remote_url="http://remote:3000", api_key="k", db_path=tmp_path / "db.sqlite"
    )

    assert isinstance(backend, RemoteBackend)
    assert backend.base_url == "http://remote:3000"
    assert backend.api_key == "k"


def test_resolve_uses_existing_local_database(tmp_path: Path) -> None:
    db_path = tmp_path / "db.sqlite"
    SnippetStore(db_path).close()

    backend = resolve_backend(db_path=db_path)

    assert isinstance(backend, LocalBackend)
    assert backend.base_url == DEFAULT_REMOTE_URL


def test_resolve_falls_back_to_saved_config(tmp_path: Path) -> None:
    config = ClientConfig(remote_url="https://saved.example", api_key="saved")

    backend = resolve_backend(db_path=tmp_path / "absent.sqlite", config=config)

    assert isinstance(backend, RemoteBackend)
    assert backend.base_url == "https://saved.example"
    assert backend.api_key == "saved"


def test_resolve_defaults_to_localhost(tmp_path: Path) -> None:
    backend = resolve_backend(db_path=tmp_path / "absent.sqlite", config=ClientConfig())

    assert backend.base_url == DEFAULT_REMOTE_URL
