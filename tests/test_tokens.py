"""Tests for session token storage.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from driptyard_admin import FileTokenStore, MemoryTokenStore, TokenStore

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(params=["memory", "file"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> TokenStore:
    if request.param == "memory":
        return MemoryTokenStore()
    return FileTokenStore(tmp_path / "session.json")


class TestTokenStores:
    def test_protocol(self, store: TokenStore) -> None:
        assert isinstance(store, TokenStore)

    def test_set_get_clear(self, store: TokenStore) -> None:
        store.set("access_token", "a")
        store.set("refresh_token", "r")
        store.set("permissions", {"can_see_users": True})

        assert store.get("access_token") == "a"
        assert store.get("permissions") == {"can_see_users": True}

        store.clear()

        assert store.get("access_token") is None
        assert store.get("refresh_token") is None
        assert store.get("permissions") is None

    def test_missing_key(self, store: TokenStore) -> None:
        assert store.get("access_token") is None


class TestFileTokenStore:
    def test_survives_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "session.json"
        FileTokenStore(path).set("access_token", "persisted")

        assert FileTokenStore(path).get("access_token") == "persisted"
        assert not path.with_suffix(".json.tmp").exists()

    def test_clear_removes_file(self, tmp_path: Path) -> None:
        store = FileTokenStore(tmp_path / "session.json")
        store.set("access_token", "a")

        store.clear()

        assert not store.path.exists()

    def test_clear_keeps_unrelated_keys(self, tmp_path: Path) -> None:
        store = FileTokenStore(tmp_path / "session.json")
        store.set("access_token", "a")
        store.set("theme", "dark")

        store.clear()

        assert json.loads(store.path.read_text()) == {"theme": "dark"}

    def test_corrupt_file_reads_as_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text("{not json")

        store = FileTokenStore(path)

        assert store.get("access_token") is None
        store.set("access_token", "fresh")
        assert store.get("access_token") == "fresh"


def test_memory_store_initial_values() -> None:
    store = MemoryTokenStore({"access_token": "seed"})

    assert store.get("access_token") == "seed"
