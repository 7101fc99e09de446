"""Store error hierarchy.

Record store backends wrap driver exceptions in one of these so the engine
and the API layer never see asyncpg (or any other driver) types.
"""


class StoreError(Exception):
    """Base exception for all store failures."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConnectionError(StoreError):
    """Raised when the store is unreachable or a query fails in transit."""


class ConflictError(StoreError):
    """Raised on unique constraint violation, e.g. a duplicate record key."""


class ValidationError(StoreError):
    """Raised when a row cannot be converted to or from a record."""
