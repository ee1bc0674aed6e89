from __future__ import annotations

import pytest

from tests.fakes import FakeBackend, FakeClock, make_snippets


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend(make_snippets("test.py", "main.rs", "testing.md"))
