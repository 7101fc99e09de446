"""asyncpg connection pool shared by the PostgreSQL record store."""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from recordkeeper.config.models.storage import PostgresConfig
from recordkeeper.db.errors import ConnectionError
from recordkeeper.observability.logging import get_logger

logger = get_logger(__name__)


def resolve_dsn(config: PostgresConfig) -> str:
    """Pick the DSN for ``config``.

    Order: ``connection_url``, RECORDKEEPER_DATABASE_URL, DATABASE_URL,
    then a URL assembled from the POSTGRES_* variables.
    """
    explicit = (
        config.connection_url
        or os.environ.get("RECORDKEEPER_DATABASE_URL")
        or os.environ.get("DATABASE_URL")
    )
    if explicit:
        return explicit

    env = os.environ
    return (
        f"postgresql://{env.get('POSTGRES_USER', 'recordkeeper')}"
        f":{env.get('POSTGRES_PASSWORD', 'recordkeeper')}"
        f"@{env.get('POSTGRES_HOST', 'localhost')}:{env.get('POSTGRES_PORT', '5432')}"
        f"/{env.get('POSTGRES_DB', 'recordkeeper')}"
    )


class PostgresPool:
    """Lazily created asyncpg pool.

    Usage:
        pool = PostgresPool.from_config(settings.storage.records.postgres)
        await pool.connect()
        async with pool.acquire() as conn:
            await conn.fetch("SELECT ...")
        await pool.close()
    """

    def __init__(self, config: PostgresConfig | None = None) -> None:
        self.config = config or PostgresConfig()
        self.dsn = resolve_dsn(self.config)
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_config(cls, config: PostgresConfig) -> "PostgresPool":
        return cls(config)

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """Create the pool; a no-op when already connected.

        Raises:
            ConnectionError: If PostgreSQL cannot be reached
        """
        if self._pool is not None:
            return

        config = self.config
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self.dsn,
                min_size=config.min_pool_size,
                max_size=config.max_pool_size,
                max_inactive_connection_lifetime=config.max_inactive_connection_lifetime,
                command_timeout=config.command_timeout,
            )
        except (OSError, asyncpg.PostgresError) as e:
            logger.error("postgres_pool_connection_failed", error=str(e))
            raise ConnectionError(f"Failed to connect to PostgreSQL: {e}", cause=e) from e

        logger.info(
            "postgres_pool_connected",
            min_size=config.min_pool_size,
            max_size=config.max_pool_size,
        )

    async def close(self) -> None:
        if self._pool is None:
            return
        await self._pool.close()
        self._pool = None
        logger.info("postgres_pool_closed")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Borrow a connection, connecting on first use."""
        await self.connect()
        async with self._pool.acquire() as connection:
            yield connection

    async def health_check(self) -> bool:
        """True when the pool is up and answers ``SELECT 1``; never connects."""
        if self._pool is None:
            return False
        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (OSError, asyncpg.PostgresError) as e:
            logger.warning("postgres_health_check_failed", error=str(e))
            return False
        return True
