"""Record query engine.

Reads run in one of two modes. Without pagination parameters the caller
gets a full dump of their scope. With them, the engine counts the
filtered set, derives the page window and fetches exactly that page.

Count and fetch are separate store round-trips, so a concurrent write can
leave ``total_pages`` one page stale relative to the returned records.
"""

from pydantic import BaseModel, ConfigDict

from recordkeeper.observability.logging import get_logger
from recordkeeper.observability.metrics import RECORD_QUERIES
from recordkeeper.records.errors import RecordNotFoundError
from recordkeeper.records.filtering import RecordFilter
from recordkeeper.records.models import Record, RecordKey, RecordTemplate
from recordkeeper.records.pagination import paginate
from recordkeeper.records.scope import CallerScope
from recordkeeper.records.sorting import SortSpec
from recordkeeper.records.store import RecordStore

logger = get_logger(__name__)


class PageQuery(BaseModel):
    """Parameters of a paged listing, as received from the caller.

    Left unvalidated here; the paginator and sort parser reject bad
    values with InvalidParameterError.
    """

    model_config = ConfigDict(frozen=True)

    page_size: int
    page: int
    field: str | None = None
    value: str | None = None
    sort_field: str | None = None
    sort_order: str | None = None
    organization_name: str | None = None


class RecordPage(BaseModel):
    """One page of records plus the page count of the whole result set."""

    records: list[Record]
    total_pages: int
    total_count: int
    page: int
    page_size: int


class RecordQueryEngine:
    """Read paths over a RecordStore."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    async def list_records(self, scope: CallerScope) -> list[Record]:
        """Return every record the caller may see, unfiltered and unsorted.

        Global admins get the whole store; everyone else their organization.
        """
        RECORD_QUERIES.labels(mode="unbounded").inc()
        if scope.is_global_admin:
            return await self._store.get_all()
        return await self._store.find_matching(RecordFilter(scope.template()))

    async def list_page(self, scope: CallerScope, query: PageQuery) -> RecordPage:
        """Return one page of the caller's records.

        Raises:
            InvalidParameterError: On bad page size, page number, field or sort
        """
        RECORD_QUERIES.labels(mode="paged").inc()
        organization = scope.resolve(query.organization_name)
        record_filter = RecordFilter(
            RecordTemplate(organization=organization), query.field, query.value
        )
        sort = SortSpec.parse(query.sort_field, query.sort_order)
        # validate before touching the store
        paginate(query.page_size, query.page, 0)

        total_count = await self._store.count_matching(record_filter)
        window = paginate(query.page_size, query.page, total_count)

        records: list[Record] = []
        if not window.is_past_end:
            records = await self._store.fetch_page(
                record_filter, offset=window.offset, limit=window.limit, sort=sort
            )

        logger.debug(
            "records_page_fetched",
            organization=organization,
            page=window.page_number,
            page_size=window.page_size,
            total_count=total_count,
            returned=len(records),
        )

        return RecordPage(
            records=records,
            total_pages=window.total_pages,
            total_count=total_count,
            page=window.page_number,
            page_size=window.page_size,
        )

    async def get_record(self, record_id: str | RecordKey) -> Record:
        """Fetch a single record by key, without scope filtering.

        Raises:
            InvalidParameterError: If the id is not ``owner/name``
            RecordNotFoundError: If no record has that key
        """
        RECORD_QUERIES.labels(mode="single").inc()
        key = record_id if isinstance(record_id, RecordKey) else RecordKey.parse(record_id)
        record = await self._store.get_by_key(key)
        if record is None:
            raise RecordNotFoundError(f"The record: {key} does not exist")
        return record

    async def list_by_example(self, template: RecordTemplate) -> list[Record]:
        """Return every record matching all non-empty fields of ``template``."""
        RECORD_QUERIES.labels(mode="example").inc()
        return await self._store.find_matching(RecordFilter(template))
