"""RecordStore abstract interface."""

from abc import ABC, abstractmethod

from recordkeeper.records.filtering import RecordFilter
from recordkeeper.records.models import Record, RecordKey
from recordkeeper.records.sorting import SortSpec


class RecordStore(ABC):
    """Abstract interface for audit record storage.

    An opaque keyed collection with a stable natural order. Listings
    without a sort field come back in that order, and sorted listings
    break ties by it.
    """

    @abstractmethod
    async def count_matching(self, record_filter: RecordFilter) -> int:
        """Count records matching a filter."""
        pass

    @abstractmethod
    async def fetch_page(
        self,
        record_filter: RecordFilter,
        *,
        offset: int,
        limit: int,
        sort: SortSpec | None = None,
    ) -> list[Record]:
        """Fetch one window of matching records."""
        pass

    @abstractmethod
    async def find_matching(self, record_filter: RecordFilter) -> list[Record]:
        """Fetch every matching record in natural order."""
        pass

    @abstractmethod
    async def get_by_key(self, key: RecordKey) -> Record | None:
        """Get a record by its composite key."""
        pass

    @abstractmethod
    async def get_all(self) -> list[Record]:
        """Get every stored record in natural order."""
        pass

    @abstractmethod
    async def insert(self, record: Record) -> int:
        """Store a new record.

        Raises:
            ConflictError: If a record with the same key exists
        """
        pass

    @abstractmethod
    async def update(self, record: Record) -> int:
        """Replace the stored record with the same key; return rows affected."""
        pass

    @abstractmethod
    async def delete(self, key: RecordKey) -> int:
        """Delete a record by key; return rows affected."""
        pass

    async def health_check(self) -> bool:
        """Return True if the backend is reachable."""
        return True
