"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

RecordBackendType = Literal["inmemory", "postgres"]


class PostgresConfig(BaseModel):
    """PostgreSQL connection pool configuration.

    The DSN normally comes from RECORDKEEPER_DATABASE_URL, not from TOML.
    """

    connection_url: str | None = Field(
        default=None,
        description="Connection URL, falls back to environment variables",
    )
    min_pool_size: int = Field(
        default=5,
        gt=0,
        description="Minimum connections to keep open",
    )
    max_pool_size: int = Field(
        default=20,
        gt=0,
        description="Maximum connections in pool",
    )
    max_inactive_connection_lifetime: float = Field(
        default=300.0,
        gt=0,
        description="Close connections idle longer than this (seconds)",
    )
    command_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )


class RecordStoreConfig(BaseModel):
    """Configuration for the record store."""

    backend: RecordBackendType = Field(
        default="inmemory",
        description="Backend type",
    )
    table: str = Field(
        default="records",
        pattern=r"^[a-z_][a-z0-9_]*$",
        description="Table holding audit records (postgres backend)",
    )
    fallback_to_inmemory: bool = Field(
        default=False,
        description="Use the in-memory store when postgres is unreachable",
    )
    postgres: PostgresConfig = Field(
        default_factory=PostgresConfig,
        description="Pool settings for the postgres backend",
    )


class StorageConfig(BaseModel):
    """Configuration for all storage backends."""

    records: RecordStoreConfig = Field(
        default_factory=RecordStoreConfig,
        description="RecordStore backend",
    )
