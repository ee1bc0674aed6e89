"""Snippet record shared by the store, the backends and the session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(slots=True)
class Snippet:
    """A stored snippet; ``short_id`` is the only external handle."""

    id: int
    short_id: str
    name: str
    content: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Snippet":
        try:
            return cls(
                id=int(data["id"]),
                short_id=str(data["short_id"]),
                name=str(data["name"]),
                content=str(data["content"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed snippet payload: {exc}") from exc


__all__ = ["Snippet"]
