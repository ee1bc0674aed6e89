"""FastAPI application factory for the sipp web/API server."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sipp import __version__
from sipp.runtime import telemetry
from sipp.store import SnippetStore, StoreError

from .routes import api_router, web_router
from .settings import ServerSettings


def create_app(
    settings: Optional[ServerSettings] = None,
    store: Optional[SnippetStore] = None,
) -> FastAPI:
    """Create the application; opens ``settings.db_path`` unless a store is given.

    Raises ``StoreError`` when the database cannot be opened.
    """

    settings = settings or ServerSettings.from_env()
    owns_store = store is None
    store = store or SnippetStore(settings.db_path)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        telemetry.record_event(
            "server.start",
            data={"db_path": settings.db_path, "api_key": bool(settings.api_key)},
            logger_name="sipp.server",
        )
        yield
        if owns_store:
            store.close()
        telemetry.record_event("server.stop", logger_name="sipp.server")

    app = FastAPI(title="sipp", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.include_router(api_router)
    app.include_router(web_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            {"error": "Malformed request body"}, status_code=status.HTTP_400_BAD_REQUEST
        )

    @app.exception_handler(StoreError)
    async def store_error(_request: Request, exc: StoreError) -> JSONResponse:
        telemetry.record_event(
            "server.store_error",
            level="error",
            data={"error": str(exc)},
            logger_name="sipp.server",
        )
        return JSONResponse(
            {"error": str(exc)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return app


def serve(settings: Optional[ServerSettings] = None) -> None:
    settings = settings or ServerSettings.from_env()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


__all__ = ["create_app", "serve"]
