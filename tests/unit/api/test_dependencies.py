"""Tests for record store selection."""

import asyncio

import pytest

from recordkeeper.api import dependencies
from recordkeeper.api.dependencies import get_record_store, reset_dependencies
from recordkeeper.db.errors import ConnectionError
from recordkeeper.records.stores.inmemory import InMemoryRecordStore
from recordkeeper.records.stores.postgres import PostgresRecordStore


class FakePool:
    """PostgresPool stand-in whose connect outcome is fixed."""

    fail = False
    created = 0

    def __init__(self) -> None:
        self.closed = False
        FakePool.created += 1

    @classmethod
    def from_config(cls, config) -> "FakePool":
        return cls()

    async def connect(self) -> None:
        await asyncio.sleep(0)
        if self.fail:
            raise ConnectionError("refused")

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def isolated(
    monkeypatch: pytest.MonkeyPatch, test_config_dir, mock_toml_files
) -> None:
    mock_toml_files({"default.toml": ""})
    monkeypatch.setenv("RECORDKEEPER_CONFIG_DIR", str(test_config_dir))
    monkeypatch.setenv("RECORDKEEPER_ENV", "test")
    monkeypatch.setattr(dependencies, "PostgresPool", FakePool)
    monkeypatch.setattr(dependencies, "_record_store", None)
    monkeypatch.setattr(dependencies, "_postgres_pool", None)
    monkeypatch.setattr(dependencies, "_store_lock", asyncio.Lock())
    FakePool.fail = False
    FakePool.created = 0


def _use(toml: str, mock_toml_files) -> None:
    mock_toml_files({"default.toml": toml})


class TestGetRecordStore:
    """Tests for backend selection."""

    @pytest.mark.asyncio
    async def test_inmemory_default(self) -> None:
        store = await get_record_store()
        assert isinstance(store, InMemoryRecordStore)
        assert await get_record_store() is store

    @pytest.mark.asyncio
    async def test_postgres_backend(self, mock_toml_files) -> None:
        _use("[storage.records]\nbackend = 'postgres'\ntable = 'audit'", mock_toml_files)

        store = await get_record_store()

        assert isinstance(store, PostgresRecordStore)
        assert store._table == "audit"

    @pytest.mark.asyncio
    async def test_postgres_unreachable_raises(self, mock_toml_files) -> None:
        _use("[storage.records]\nbackend = 'postgres'", mock_toml_files)
        FakePool.fail = True

        with pytest.raises(ConnectionError):
            await get_record_store()

    @pytest.mark.asyncio
    async def test_postgres_unreachable_falls_back(self, mock_toml_files) -> None:
        _use(
            "[storage.records]\nbackend = 'postgres'\nfallback_to_inmemory = true",
            mock_toml_files,
        )
        FakePool.fail = True

        assert isinstance(await get_record_store(), InMemoryRecordStore)

    @pytest.mark.asyncio
    async def test_reset_closes_pool(self, mock_toml_files) -> None:
        _use("[storage.records]\nbackend = 'postgres'", mock_toml_files)
        await get_record_store()
        pool = dependencies._postgres_pool

        await reset_dependencies()

        assert pool.closed
        assert dependencies._record_store is None

    @pytest.mark.asyncio
    async def test_concurrent_first_requests_share_one_pool(self, mock_toml_files) -> None:
        _use("[storage.records]\nbackend = 'postgres'", mock_toml_files)

        stores = await asyncio.gather(*(get_record_store() for _ in range(5)))

        assert FakePool.created == 1
        assert all(store is stores[0] for store in stores)
