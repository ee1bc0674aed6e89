"""Build the initial session from a backend."""

from __future__ import annotations

import time
from typing import Callable

from sipp.backend import Backend, BackendError
from sipp.runtime import telemetry

from .state import Session


def load_session(
    backend: Backend, *, clock: Callable[[], float] = time.monotonic
) -> Session:
    """List snippets into a fresh session.

    A failing ``list()`` still yields a usable session: empty, with the
    error as its status.
    """

    try:
        snippets = backend.list()
    except BackendError as exc:
        telemetry.record_event(
            "session.initial_list_failed",
            level="warning",
            data={"kind": exc.kind, "error": str(exc)},
            logger_name="sipp.session",
        )
        session = Session(clock=clock)
        session.set_status(str(exc))
        return session
    telemetry.record_event(
        "session.loaded", data={"count": len(snippets)}, logger_name="sipp.session"
    )
    return Session(snippets=list(snippets), clock=clock)


__all__ = ["load_session"]
