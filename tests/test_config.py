"""Tests for backend.config and store selection."""

from __future__ import annotations

import pytest

from backend.config import Settings
from backend.dependencies import build_stores
from store.database import DocumentRecordStore
from store.memory import MemoryRecordStore


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("PORT", "STORE_BACKEND", "DELETE_POLICY"):
            monkeypatch.delenv(name, raising=False)
        config = Settings(_env_file=None)
        assert config.port == 3001
        assert config.store_backend == "memory"
        assert config.delete_policy == "idempotent"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DELETE_POLICY", "strict")
        monkeypatch.setenv("RANDOM_NOTE_IMPORTANCE", "false")
        config = Settings(_env_file=None)
        assert config.port == 8080
        assert config.delete_policy == "strict"
        assert config.random_note_importance is False

    def test_rejects_unknown_backend(self) -> None:
        with pytest.raises(Exception):
            Settings(_env_file=None, store_backend="redis")


class TestBuildStores:
    @pytest.mark.asyncio
    async def test_memory_seeded(self) -> None:
        stores = build_stores(Settings(_env_file=None, seed_sample_data=True))
        assert isinstance(stores.persons, MemoryRecordStore)
        assert await stores.persons.count() == 4
        assert await stores.notes.count() == 3
        assert stores.database is None

    @pytest.mark.asyncio
    async def test_memory_empty(self) -> None:
        stores = build_stores(Settings(_env_file=None, seed_sample_data=False))
        assert await stores.persons.count() == 0

    def test_database_requires_url(self) -> None:
        with pytest.raises(ValueError, match="DATABASE_URL"):
            build_stores(Settings(_env_file=None, store_backend="database", database_url=""))

    def test_database_stores_share_engine(self) -> None:
        stores = build_stores(
            Settings(
                _env_file=None,
                store_backend="database",
                database_url="postgresql+asyncpg://u:p@localhost/phonebook",
            )
        )
        assert isinstance(stores.persons, DocumentRecordStore)
        assert stores.persons._db is stores.notes._db is stores.database
        assert stores.notes.kind.collection == "notes"
