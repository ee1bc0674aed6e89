"""JSON API and HTML routes over the snippet store."""

from __future__ import annotations

import secrets
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Header, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from sipp.backend.errors import NO_SERVER_KEY_REASON
from sipp.highlight import highlight_css, render_html
from sipp.runtime import telemetry
from sipp.store import SnippetStore

from .model import DeletedResponse, SnippetPayload, SnippetResponse
from .settings import ServerSettings, get_settings
from .templates import render

INVALID_KEY_MESSAGE = "Invalid or missing API key"
NOT_FOUND_MESSAGE = "Snippet not found"

api_router = APIRouter(prefix="/api")
web_router = APIRouter()


# Dependencies -----------------------------------------------------------------


def get_store(request: Request) -> SnippetStore:
    store = getattr(request.app.state, "store", None)
    if not isinstance(store, SnippetStore):
        raise RuntimeError("Snippet store has not been initialised")
    return store


def require_api_key(
    x_api_key: Optional[str] = Header(default=None),
    settings: ServerSettings = Depends(get_settings),
) -> None:
    if not settings.api_key:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=NO_SERVER_KEY_REASON)
    if x_api_key is None or not secrets.compare_digest(
        x_api_key.encode("utf-8"), settings.api_key.encode("utf-8")
    ):
        telemetry.record_event(
            "server.auth_rejected", level="warning", logger_name="sipp.server"
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_KEY_MESSAGE)


def _validated(payload: SnippetPayload) -> tuple[str, str]:
    if payload.name is None or payload.content is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both 'name' and 'content' are required",
        )
    if not payload.name.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Name cannot be empty"
        )
    return payload.name, payload.content


# API routes -------------------------------------------------------------------


@api_router.get(
    "/snippets",
    response_model=List[SnippetResponse],
    dependencies=[Depends(require_api_key)],
)
def list_snippets(store: SnippetStore = Depends(get_store)) -> List[SnippetResponse]:
    return [SnippetResponse.from_snippet(snippet) for snippet in store.get_all()]


@api_router.post(
    "/snippets", response_model=SnippetResponse, status_code=status.HTTP_201_CREATED
)
def create_snippet(
    payload: SnippetPayload, store: SnippetStore = Depends(get_store)
) -> SnippetResponse:
    name, content = _validated(payload)
    snippet = store.create(name, content)
    telemetry.record_event(
        "server.created", data={"short_id": snippet.short_id}, logger_name="sipp.server"
    )
    return SnippetResponse.from_snippet(snippet)


@api_router.get("/snippets/{short_id}", response_model=SnippetResponse)
def get_snippet(short_id: str, store: SnippetStore = Depends(get_store)) -> SnippetResponse:
    snippet = store.get_by_short_id(short_id)
    if snippet is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return SnippetResponse.from_snippet(snippet)


@api_router.put(
    "/snippets/{short_id}",
    response_model=SnippetResponse,
    dependencies=[Depends(require_api_key)],
)
def update_snippet(
    short_id: str, payload: SnippetPayload, store: SnippetStore = Depends(get_store)
) -> SnippetResponse:
    name, content = _validated(payload)
    snippet = store.update_by_short_id(short_id, name, content)
    if snippet is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    telemetry.record_event(
        "server.updated", data={"short_id": short_id}, logger_name="sipp.server"
    )
    return SnippetResponse.from_snippet(snippet)


@api_router.delete(
    "/snippets/{short_id}",
    response_model=DeletedResponse,
    dependencies=[Depends(require_api_key)],
)
def delete_snippet(short_id: str, store: SnippetStore = Depends(get_store)) -> DeletedResponse:
    if not store.delete_by_short_id(short_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    telemetry.record_event(
        "server.deleted", data={"short_id": short_id}, logger_name="sipp.server"
    )
    return DeletedResponse()


# Web routes -------------------------------------------------------------------


@web_router.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
    return HTMLResponse(render("index.html", error=None, name="", content=""))


@web_router.get("/about", response_class=HTMLResponse)
def about() -> HTMLResponse:
    return HTMLResponse(render("about.html"))


@web_router.get("/static/highlight.css", response_class=PlainTextResponse)
def stylesheet() -> PlainTextResponse:
    return PlainTextResponse(highlight_css(), media_type="text/css")


@web_router.post("/snippets")
def create_from_form(
    name: str = Form(""),
    content: str = Form(""),
    store: SnippetStore = Depends(get_store),
):
    if not name.strip():
        return HTMLResponse(
            render("index.html", error="Name cannot be empty", name=name, content=content),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    snippet = store.create(name, content)
    telemetry.record_event(
        "server.created",
        data={"short_id": snippet.short_id, "source": "form"},
        logger_name="sipp.server",
    )
    return RedirectResponse(f"/s/{snippet.short_id}", status_code=status.HTTP_303_SEE_OTHER)


@web_router.get("/s/{short_id}", response_class=HTMLResponse)
def view_snippet(short_id: str, store: SnippetStore = Depends(get_store)) -> HTMLResponse:
    snippet = store.get_by_short_id(short_id)
    if snippet is None:
        return HTMLResponse(render("not_found.html"), status_code=status.HTTP_404_NOT_FOUND)
    return HTMLResponse(
        render(
            "snippet.html",
            name=snippet.name,
            content=snippet.content,
            highlighted=render_html(snippet.name, snippet.content),
        )
    )


__all__ = ["api_router", "web_router", "require_api_key", "get_store"]
