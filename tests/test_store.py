from __future__ import annotations

from itertools import repeat
from pathlib import Path

import pytest

from sipp.store import (
    ALPHABET,
    SHORT_ID_LENGTH,
    SnippetStore,
    StoreError,
    generate_short_id,
)


def make_store(tmp_path: Path, **kwargs) -> SnippetStore:
    return SnippetStore(tmp_path / "sipp.sqlite", **kwargs)


def test_short_ids_are_ten_alphanumerics() -> None:
    short_id = generate_short_id()

    assert len(short_id) == SHORT_ID_LENGTH
    assert set(short_id) <= set(ALPHABET)


def test_create_and_get_round_trip(tmp_path: Path) -> None:
    store = make_store(tmp_path)

    created = store.create("hello.py", "print('hi')\n")
    fetched = store.get_by_short_id(created.short_id)

    assert fetched == created
    assert created.id >= 1


def test_short_ids_are_unique_across_creates(tmp_path: Path) -> None:
    store = make_store(tmp_path)

    created = [store.create(f"s{n}.txt", str(n)) for n in range(200)]

    assert len({snippet.short_id for snippet in created}) == len(created)
    assert all(len(snippet.short_id) == SHORT_ID_LENGTH for snippet in created)
    assert [s.id for s in store.get_all()] == sorted((s.id for s in created), reverse=True)


def test_get_all_is_newest_first(tmp_path: Path) -> None:
    store = make_store(tmp_path)
    for name in ("a", "b", "c"):
        store.create(name, "")

    assert [s.name for s in store.get_all()] == ["c", "b", "a"]


def test_missing_short_id_reports_absence(tmp_path: Path) -> None:
    store = make_store(tmp_path)

    assert store.get_by_short_id("nothinghere") is None
    assert store.delete_by_short_id("nothinghere") is False
    assert store.update_by_short_id("nothinghere", "x", "y") is None


def test_update_preserves_identity(tmp_path: Path) -> None:
    store = make_store(tmp_path)
    created = store.create("a.txt", "one")

    updated = store.update_by_short_id(created.short_id, "b.md", "two")

    assert updated is not None
    assert (updated.id, updated.short_id) == (created.id, created.short_id)
    assert (updated.name, updated.content) == ("b.md", "two")
    assert store.get_by_short_id(created.short_id) == updated


def test_delete_removes_only_target(tmp_path: Path) -> None:
    store = make_store(tmp_path)
    keep = store.create("keep", "")
    drop = store.create("drop", "")

    assert store.delete_by_short_id(drop.short_id) is True
    assert store.get_all() == [keep]


def test_data_survives_reopen(tmp_path: Path) -> None:
    store = make_store(tmp_path)
    created = store.create("persist.rs", "fn main() {}")
    store.close()

    reopened = make_store(tmp_path)

    assert reopened.get_by_short_id(created.short_id) == created


def test_short_id_collision_retries(tmp_path: Path) -> None:
    ids = iter(["AAAAAAAAAA", "AAAAAAAAAA", "BBBBBBBBBB"])
    store = make_store(tmp_path, id_factory=lambda: next(ids))

    first = store.create("one", "")
    second = store.create("two", "")

    assert first.short_id == "AAAAAAAAAA"
    assert second.short_id == "BBBBBBBBBB"


def test_short_id_collision_gives_up(tmp_path: Path) -> None:
    ids = repeat("AAAAAAAAAA")
    store = make_store(tmp_path, id_factory=lambda: next(ids))
    store.create("one", "")

    with pytest.raises(StoreError):
        store.create("two", "")


def test_unopenable_database_raises_store_error(tmp_path: Path) -> None:
    with pytest.raises(StoreError):
        SnippetStore(tmp_path / "missing-dir" / "sipp.sqlite")
