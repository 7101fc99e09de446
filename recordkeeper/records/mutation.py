"""Record mutation engine.

Each record moves ``absent -> present`` on add, ``present -> present`` on
update and ``present -> absent`` on delete. Every operation touches a
single row and relies on the store for atomicity.
"""

from collections.abc import Awaitable
from typing import Literal

from pydantic import BaseModel

from recordkeeper.db.errors import ConflictError, StoreError
from recordkeeper.observability.logging import get_logger
from recordkeeper.observability.metrics import ERRORS, RECORD_MUTATIONS
from recordkeeper.records.errors import (
    InvalidParameterError,
    RecordConflictError,
    RecordError,
    RecordNotFoundError,
    ScopeViolationError,
)
from recordkeeper.records.models import KEY_SEPARATOR, Record, RecordKey, utc_now
from recordkeeper.records.scope import CallerScope
from recordkeeper.records.store import RecordStore

logger = get_logger(__name__)


class MutationResult(BaseModel):
    """Uniform outcome of a mutation.

    Example:
        {"status": "ok", "data": 1, "msg": ""}
        {"status": "error", "data": null, "msg": "The record: a/b does not exist"}
    """

    status: Literal["ok", "error"]
    data: int | None = None
    msg: str = ""

    @classmethod
    def ok(cls, affected: int) -> "MutationResult":
        return cls(status="ok", data=affected)

    @classmethod
    def error(cls, message: str) -> "MutationResult":
        return cls(status="error", msg=message)


def _validate_key(record: Record) -> RecordKey:
    if not record.owner or not record.name:
        raise InvalidParameterError("Record owner and name must not be empty")
    if KEY_SEPARATOR in record.owner:
        raise InvalidParameterError(
            f"Record owner must not contain {KEY_SEPARATOR!r}: {record.owner!r}"
        )
    return record.key


class RecordMutationEngine:
    """Write paths over a RecordStore."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    async def add(self, scope: CallerScope, record: Record) -> int:
        """Persist a new record.

        An empty organization is filled from the caller's scope and an
        empty created time is stamped with the current UTC time.

        Raises:
            InvalidParameterError: If owner or name is empty
            ScopeViolationError: If a non-privileged caller targets another organization
            RecordConflictError: If the key already exists
        """
        key = _validate_key(record)
        organization = record.organization or scope.organization
        if not scope.permits_organization(organization):
            raise ScopeViolationError(
                f"Cannot add record {key} to organization {organization!r}"
            )

        record = record.model_copy(
            update={
                "organization": organization,
                "created_time": record.created_time or utc_now(),
            }
        )
        try:
            affected = await self._store.insert(record)
        except ConflictError as e:
            raise RecordConflictError(f"The record: {key} already exists") from e

        logger.info("record_added", record_id=str(key), organization=organization)
        return affected

    async def update(self, scope: CallerScope, record_id: str, record: Record) -> int:
        """Replace the record identified by ``record_id``.

        The key and organization of the stored record are kept; an empty
        created time keeps the stored one.

        Raises:
            InvalidParameterError: If the id is not ``owner/name``
            RecordNotFoundError: If absent or outside the caller's scope
        """
        key = RecordKey.parse(record_id)
        existing = await self._store.get_by_key(key)
        if existing is None or not scope.permits(existing):
            raise RecordNotFoundError(f"The record: {key} does not exist")

        replacement = record.model_copy(
            update={
                "owner": key.owner,
                "name": key.name,
                "organization": existing.organization,
                "created_time": record.created_time or existing.created_time,
            }
        )
        affected = await self._store.update(replacement)
        logger.info("record_updated", record_id=str(key), affected=affected)
        return affected

    async def delete(self, scope: CallerScope, record: Record) -> int:
        """Delete the record whose key is embedded in ``record``.

        Deleting an absent record succeeds with 0 rows affected.

        Raises:
            InvalidParameterError: If owner or name is empty
            RecordNotFoundError: If the record belongs to another organization
        """
        key = _validate_key(record)
        existing = await self._store.get_by_key(key)
        if existing is None:
            logger.debug("record_delete_noop", record_id=str(key))
            return 0
        if not scope.permits(existing):
            raise RecordNotFoundError(f"The record: {key} does not exist")

        affected = await self._store.delete(key)
        logger.info("record_deleted", record_id=str(key), affected=affected)
        return affected

    async def run(self, operation: str, mutation: Awaitable[int]) -> MutationResult:
        """Await a mutation and wrap its outcome in a MutationResult.

        Record and store errors become error envelopes; anything else
        propagates.
        """
        try:
            affected = await mutation
        except (RecordError, StoreError) as e:
            RECORD_MUTATIONS.labels(operation=operation, status="error").inc()
            ERRORS.labels(error_type=type(e).__name__).inc()
            logger.warning(
                "record_mutation_failed",
                operation=operation,
                error_type=type(e).__name__,
                error=e.message,
            )
            return MutationResult.error(e.message)

        RECORD_MUTATIONS.labels(operation=operation, status="ok").inc()
        return MutationResult.ok(affected)
