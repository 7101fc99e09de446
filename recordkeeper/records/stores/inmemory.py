"""In-memory implementation of RecordStore."""

from operator import attrgetter

from recordkeeper.db.errors import ConflictError
from recordkeeper.records.filtering import RecordFilter
from recordkeeper.records.models import Record, RecordKey
from recordkeeper.records.sorting import SortSpec
from recordkeeper.records.store import RecordStore


class InMemoryRecordStore(RecordStore):
    """In-memory implementation of RecordStore for testing and development.

    Dict storage with linear scan. Natural order is insertion order;
    replacing a record keeps its position.
    """

    def __init__(self) -> None:
        self._records: dict[RecordKey, Record] = {}

    async def count_matching(self, record_filter: RecordFilter) -> int:
        return sum(1 for _ in record_filter.apply(self._records.values()))

    async def fetch_page(
        self,
        record_filter: RecordFilter,
        *,
        offset: int,
        limit: int,
        sort: SortSpec | None = None,
    ) -> list[Record]:
        results = list(record_filter.apply(self._records.values()))
        if sort is not None and not sort.is_natural:
            # list.sort is stable in both directions
            results.sort(key=attrgetter(sort.field), reverse=sort.descending)
        return results[offset:offset + limit]

    async def find_matching(self, record_filter: RecordFilter) -> list[Record]:
        return list(record_filter.apply(self._records.values()))

    async def get_by_key(self, key: RecordKey) -> Record | None:
        return self._records.get(key)

    async def get_all(self) -> list[Record]:
        return list(self._records.values())

    async def insert(self, record: Record) -> int:
        if record.key in self._records:
            raise ConflictError(f"Record {record.id} already exists")
        self._records[record.key] = record
        return 1

    async def update(self, record: Record) -> int:
        if record.key not in self._records:
            return 0
        self._records[record.key] = record
        return 1

    async def delete(self, key: RecordKey) -> int:
        if self._records.pop(key, None) is None:
            return 0
        return 1
