"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, wrong parameter types)."""

    INVALID_PARAMETER = "INVALID_PARAMETER"
    """Pagination, sort, filter or key input was rejected."""

    UNAUTHORIZED = "UNAUTHORIZED"
    """Missing or invalid credentials."""

    FORBIDDEN = "FORBIDDEN"
    """The caller lacks the privilege the endpoint requires."""

    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    """The record does not exist or is outside the caller's organization."""

    RECORD_CONFLICT = "RECORD_CONFLICT"
    """A record with the same key already exists."""

    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    """The record store failed or could not be reached."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level detail for validation errors."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": {
                "code": "RECORD_NOT_FOUND",
                "message": "The record: alice/login-2024 does not exist"
            }
        }
    """

    error: ErrorBody
