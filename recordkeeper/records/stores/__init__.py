"""Record store backends."""

from recordkeeper.records.store import RecordStore
from recordkeeper.records.stores.inmemory import InMemoryRecordStore
from recordkeeper.records.stores.postgres import PostgresRecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "PostgresRecordStore",
]
