"""Request and response bodies of the JSON API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from sipp.store import Snippet


class SnippetPayload(BaseModel):
    """Body of create and update calls; presence is checked by the route."""

    name: Optional[str] = Field(None, description="Display name, extension selects the lexer")
    content: Optional[str] = Field(None, description="Snippet text")


class SnippetResponse(BaseModel):
    id: int
    short_id: str
    name: str
    content: str

    @classmethod
    def from_snippet(cls, snippet: Snippet) -> "SnippetResponse":
        return cls(
            id=snippet.id,
            short_id=snippet.short_id,
            name=snippet.name,
            content=snippet.content,
        )


class DeletedResponse(BaseModel):
    deleted: bool = True


__all__ = ["SnippetPayload", "SnippetResponse", "DeletedResponse"]
