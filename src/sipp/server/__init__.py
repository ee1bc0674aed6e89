"""Web view and JSON API backed by the local snippet store."""

from .app import create_app, serve
from .settings import ServerSettings

__all__ = ["ServerSettings", "create_app", "serve"]
