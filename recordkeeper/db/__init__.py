"""Database utilities: connection pool, store errors, migrations."""

from recordkeeper.db.errors import (
    ConflictError,
    ConnectionError,
    StoreError,
    ValidationError,
)

__all__ = [
    "StoreError",
    "ConnectionError",
    "ConflictError",
    "ValidationError",
]
