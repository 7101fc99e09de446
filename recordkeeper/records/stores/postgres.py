"""PostgreSQL implementation of RecordStore.

Uses asyncpg for async database access. The serial ``id`` column is the
natural order; every sorted query breaks ties on it.
"""

from collections.abc import Mapping
from typing import Any

import asyncpg

from recordkeeper.db.errors import ConflictError, ConnectionError, ValidationError
from recordkeeper.db.pool import PostgresPool
from recordkeeper.observability.logging import get_logger
from recordkeeper.records.filtering import RecordFilter
from recordkeeper.records.models import RECORD_FIELDS, Record, RecordKey
from recordkeeper.records.sorting import SortSpec
from recordkeeper.records.store import RecordStore

logger = get_logger(__name__)

# Record attributes double as column names; always quoted since "user" is reserved.
COLUMNS: tuple[str, ...] = RECORD_FIELDS
_SELECT_COLUMNS = ", ".join(f'"{column}"' for column in COLUMNS)


def _quote(column: str) -> str:
    if column not in COLUMNS:
        raise ValidationError(f"Unknown record column {column!r}")
    return f'"{column}"'


def _affected(status: str) -> int:
    """Row count from an asyncpg command tag such as ``UPDATE 1``."""
    return int(status.rsplit(" ", 1)[-1])


class PostgresRecordStore(RecordStore):
    """PostgreSQL implementation of RecordStore."""

    def __init__(self, pool: PostgresPool, table: str = "records") -> None:
        """Initialize with connection pool.

        Args:
            pool: PostgreSQL connection pool
            table: Table name, validated by the storage config
        """
        self._pool = pool
        self._table = table

    def _where(
        self, record_filter: RecordFilter, params: list[Any]
    ) -> str:
        clauses = []
        for attr, value in record_filter.conditions:
            params.append(value)
            clauses.append(f"{_quote(attr)} = ${len(params)}")
        if not clauses:
            return ""
        return " WHERE " + " AND ".join(clauses)

    @staticmethod
    def _order_by(sort: SortSpec | None) -> str:
        if sort is None or sort.is_natural:
            return " ORDER BY id ASC"
        direction = "DESC" if sort.descending else "ASC"
        return f" ORDER BY {_quote(sort.field)} {direction}, id ASC"

    @staticmethod
    def _row_to_record(row: Mapping[str, Any]) -> Record:
        return Record(**{column: row[column] for column in COLUMNS})

    async def count_matching(self, record_filter: RecordFilter) -> int:
        params: list[Any] = []
        query = f"SELECT COUNT(*) FROM {self._table}" + self._where(record_filter, params)
        try:
            async with self._pool.acquire() as conn:
                return int(await conn.fetchval(query, *params))
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error("postgres_count_records_error", filter=repr(record_filter), error=str(e))
            raise ConnectionError(f"Failed to count records: {e}", cause=e) from e

    async def fetch_page(
        self,
        record_filter: RecordFilter,
        *,
        offset: int,
        limit: int,
        sort: SortSpec | None = None,
    ) -> list[Record]:
        params: list[Any] = []
        query = (
            f"SELECT {_SELECT_COLUMNS} FROM {self._table}"
            + self._where(record_filter, params)
            + self._order_by(sort)
        )
        params.extend([limit, offset])
        query += f" LIMIT ${len(params) - 1} OFFSET ${len(params)}"
        return await self._fetch(query, params, "postgres_fetch_page_error")

    async def find_matching(self, record_filter: RecordFilter) -> list[Record]:
        params: list[Any] = []
        query = (
            f"SELECT {_SELECT_COLUMNS} FROM {self._table}"
            + self._where(record_filter, params)
            + self._order_by(None)
        )
        return await self._fetch(query, params, "postgres_find_records_error")

    async def get_all(self) -> list[Record]:
        query = f"SELECT {_SELECT_COLUMNS} FROM {self._table}" + self._order_by(None)
        return await self._fetch(query, [], "postgres_get_all_records_error")

    async def _fetch(self, query: str, params: list[Any], event: str) -> list[Record]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(event, error=str(e))
            raise ConnectionError(f"Failed to fetch records: {e}", cause=e) from e
        return [self._row_to_record(row) for row in rows]

    async def get_by_key(self, key: RecordKey) -> Record | None:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {_SELECT_COLUMNS} FROM {self._table} "
                    "WHERE owner = $1 AND name = $2",
                    key.owner,
                    key.name,
                )
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error("postgres_get_record_error", record_id=str(key), error=str(e))
            raise ConnectionError(f"Failed to get record: {e}", cause=e) from e
        if row is None:
            return None
        return self._row_to_record(row)

    async def insert(self, record: Record) -> int:
        placeholders = ", ".join(f"${i}" for i in range(1, len(COLUMNS) + 1))
        try:
            async with self._pool.acquire() as conn:
                status = await conn.execute(
                    f"INSERT INTO {self._table} ({_SELECT_COLUMNS}) VALUES ({placeholders})",
                    *(getattr(record, column) for column in COLUMNS),
                )
        except asyncpg.UniqueViolationError as e:
            raise ConflictError(f"Record {record.id} already exists", cause=e) from e
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error("postgres_insert_record_error", record_id=record.id, error=str(e))
            raise ConnectionError(f"Failed to insert record: {e}", cause=e) from e
        logger.debug("record_inserted", record_id=record.id)
        return _affected(status)

    async def update(self, record: Record) -> int:
        values = [column for column in COLUMNS if column not in ("owner", "name")]
        assignments = ", ".join(
            f"{_quote(column)} = ${i}" for i, column in enumerate(values, start=3)
        )
        try:
            async with self._pool.acquire() as conn:
                status = await conn.execute(
                    f"UPDATE {self._table} SET {assignments} WHERE owner = $1 AND name = $2",
                    record.owner,
                    record.name,
                    *(getattr(record, column) for column in values),
                )
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error("postgres_update_record_error", record_id=record.id, error=str(e))
            raise ConnectionError(f"Failed to update record: {e}", cause=e) from e
        return _affected(status)

    async def delete(self, key: RecordKey) -> int:
        try:
            async with self._pool.acquire() as conn:
                status = await conn.execute(
                    f"DELETE FROM {self._table} WHERE owner = $1 AND name = $2",
                    key.owner,
                    key.name,
                )
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error("postgres_delete_record_error", record_id=str(key), error=str(e))
            raise ConnectionError(f"Failed to delete record: {e}", cause=e) from e
        return _affected(status)

    async def health_check(self) -> bool:
        return await self._pool.health_check()
