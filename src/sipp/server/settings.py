"""Runtime configuration for the web/API server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from sipp.config import env, env_int
from sipp.store import DEFAULT_DB_PATH

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


@dataclass(slots=True)
class ServerSettings:
    db_path: str = DEFAULT_DB_PATH
    api_key: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "ServerSettings":
        return cls(
            db_path=env("DB_PATH", DEFAULT_DB_PATH) or DEFAULT_DB_PATH,
            api_key=env("API_KEY"),
            host=env("HOST", DEFAULT_HOST) or DEFAULT_HOST,
            port=env_int("PORT", DEFAULT_PORT),
        )


def get_settings(request: Request) -> ServerSettings:
    settings = getattr(request.app.state, "settings", None)
    if not isinstance(settings, ServerSettings):
        raise RuntimeError("Server settings have not been initialised")
    return settings


__all__ = ["ServerSettings", "get_settings", "DEFAULT_HOST", "DEFAULT_PORT"]
