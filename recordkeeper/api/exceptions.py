"""API exception hierarchy and mapping of engine errors to HTTP responses.

API-level failures inherit from RecordKeeperAPIError, which carries the
status_code and error_code used by the global exception handler. Engine
errors (RecordError) and store errors (StoreError) are mapped through
``describe_error``.
"""

from recordkeeper.api.models.errors import ErrorCode
from recordkeeper.db.errors import StoreError
from recordkeeper.records.errors import (
    InvalidParameterError,
    RecordConflictError,
    RecordNotFoundError,
    ScopeViolationError,
)


class RecordKeeperAPIError(Exception):
    """Base exception for API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthorizedError(RecordKeeperAPIError):
    """Raised when the caller cannot be authenticated."""

    status_code = 401
    error_code = ErrorCode.UNAUTHORIZED


class ForbiddenError(RecordKeeperAPIError):
    """Raised when the caller is not an administrator."""

    status_code = 403
    error_code = ErrorCode.FORBIDDEN


# Scope violations are reported as not-found so existence does not leak.
_ERROR_MAP: list[tuple[type[Exception], int, ErrorCode]] = [
    (InvalidParameterError, 400, ErrorCode.INVALID_PARAMETER),
    (RecordNotFoundError, 404, ErrorCode.RECORD_NOT_FOUND),
    (ScopeViolationError, 404, ErrorCode.RECORD_NOT_FOUND),
    (RecordConflictError, 409, ErrorCode.RECORD_CONFLICT),
    (StoreError, 503, ErrorCode.STORE_UNAVAILABLE),
]


def describe_error(exc: Exception) -> tuple[int, ErrorCode]:
    """Return the HTTP status and error code for an engine or store error."""
    if isinstance(exc, RecordKeeperAPIError):
        return exc.status_code, exc.error_code
    for error_type, status_code, error_code in _ERROR_MAP:
        if isinstance(exc, error_type):
            return status_code, error_code
    return 500, ErrorCode.INTERNAL_ERROR
