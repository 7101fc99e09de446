"""Audit record query and mutation engine.

The record layer decides how filter, sort and pagination parameters map
to a bounded, deterministic result set, and how add/update/delete
requests are validated and applied against a keyed record store.
"""

from recordkeeper.records.errors import (
    InvalidParameterError,
    RecordConflictError,
    RecordError,
    RecordNotFoundError,
    ScopeViolationError,
)
from recordkeeper.records.filtering import RecordFilter
from recordkeeper.records.models import Record, RecordKey, RecordTemplate
from recordkeeper.records.mutation import MutationResult, RecordMutationEngine
from recordkeeper.records.pagination import PageWindow, paginate
from recordkeeper.records.query import PageQuery, RecordPage, RecordQueryEngine
from recordkeeper.records.scope import CallerScope
from recordkeeper.records.sorting import SortSpec

__all__ = [
    "CallerScope",
    "InvalidParameterError",
    "MutationResult",
    "PageQuery",
    "PageWindow",
    "Record",
    "RecordConflictError",
    "RecordError",
    "RecordFilter",
    "RecordKey",
    "RecordMutationEngine",
    "RecordNotFoundError",
    "RecordPage",
    "RecordQueryEngine",
    "RecordTemplate",
    "ScopeViolationError",
    "SortSpec",
    "paginate",
]
