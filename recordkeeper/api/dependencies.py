"""Dependency injection for API routes.

Provides FastAPI dependencies for the record store and the
record engines. Instances are created once per process and can be
overridden through ``app.dependency_overrides`` in tests.
"""

import asyncio
from typing import Annotated

from fastapi import Depends

from recordkeeper.config import get_settings
from recordkeeper.db.errors import ConnectionError
from recordkeeper.db.pool import PostgresPool
from recordkeeper.observability.logging import get_logger
from recordkeeper.records.mutation import RecordMutationEngine
from recordkeeper.records.query import RecordQueryEngine
from recordkeeper.records.store import RecordStore
from recordkeeper.records.stores.inmemory import InMemoryRecordStore
from recordkeeper.records.stores.postgres import PostgresRecordStore

logger = get_logger(__name__)

_postgres_pool: PostgresPool | None = None
_record_store: RecordStore | None = None
_store_lock = asyncio.Lock()


async def get_record_store() -> RecordStore:
    """Get the RecordStore instance.

    The backend comes from ``storage.records.backend``. With
    ``fallback_to_inmemory`` set, an unreachable postgres degrades to the
    in-memory store instead of failing the request.
    """
    if _record_store is not None:
        return _record_store
    # Concurrent first requests must not each open a pool
    async with _store_lock:
        if _record_store is not None:
            return _record_store
        return await _init_record_store()


async def _init_record_store() -> RecordStore:
    global _postgres_pool, _record_store
    config = get_settings().storage.records
    if config.backend == "inmemory":
        _record_store = InMemoryRecordStore()
        logger.info("record_store_initialized", store_type="inmemory")
        return _record_store

    pool = PostgresPool.from_config(config.postgres)
    try:
        await pool.connect()
    except ConnectionError as e:
        if not config.fallback_to_inmemory:
            raise
        logger.warning("record_store_postgres_failed_using_inmemory", error=str(e))
        _record_store = InMemoryRecordStore()
        logger.info("record_store_initialized", store_type="inmemory")
        return _record_store

    _postgres_pool = pool
    _record_store = PostgresRecordStore(pool, table=config.table)
    logger.info("record_store_initialized", store_type="postgres", table=config.table)
    return _record_store


RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]


def get_query_engine(store: RecordStoreDep) -> RecordQueryEngine:
    """Build a query engine over the configured store."""
    return RecordQueryEngine(store)


def get_mutation_engine(store: RecordStoreDep) -> RecordMutationEngine:
    """Build a mutation engine over the configured store."""
    return RecordMutationEngine(store)


QueryEngineDep = Annotated[RecordQueryEngine, Depends(get_query_engine)]
MutationEngineDep = Annotated[RecordMutationEngine, Depends(get_mutation_engine)]


async def reset_dependencies() -> None:
    """Close connections and drop cached instances."""
    global _postgres_pool, _record_store, _store_lock

    if _postgres_pool is not None:
        await _postgres_pool.close()
        _postgres_pool = None

    _record_store = None
    get_settings.cache_clear()
    _store_lock = asyncio.Lock()
