"""Record engine error taxonomy.

Store failures are not listed here; they surface as
``recordkeeper.db.errors.StoreError`` subclasses.
"""


class RecordError(Exception):
    """Base exception for record query and mutation failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidParameterError(RecordError):
    """Raised for malformed pagination, sort, filter or key input."""


class RecordNotFoundError(RecordError):
    """Raised when a record key does not resolve to a stored record."""


class RecordConflictError(RecordError):
    """Raised when adding a record whose key already exists."""


class ScopeViolationError(RecordError):
    """Raised when a caller reaches outside its organization without privilege."""
