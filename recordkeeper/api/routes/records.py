"""Audit record endpoints.

Read endpoints raise on failure and are rendered by the global exception
handlers; mutation endpoints always answer with a MutationResult envelope.
"""

from fastapi import APIRouter, Query

from recordkeeper.api.dependencies import MutationEngineDep, QueryEngineDep
from recordkeeper.api.middleware.auth import AdminScopeDep, CallerScopeDep
from recordkeeper.api.models.records import RecordListResponse, RecordResponse
from recordkeeper.observability.logging import get_logger
from recordkeeper.records.models import Record, RecordTemplate
from recordkeeper.records.mutation import MutationResult
from recordkeeper.records.query import PageQuery

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/get-records",
    response_model=RecordListResponse,
    response_model_exclude_none=True,
)
async def get_records(
    scope: AdminScopeDep,
    engine: QueryEngineDep,
    page_size: int | None = Query(default=None, alias="pageSize", description="The size of each page"),
    page: int | None = Query(default=None, alias="p", description="The number of the page"),
    field: str | None = Query(default=None, description="Exact-match filter field"),
    value: str | None = Query(default=None, description="Exact-match filter value"),
    sort_field: str | None = Query(default=None, alias="sortField"),
    sort_order: str | None = Query(default=None, alias="sortOrder", description="ascend or descend"),
    organization_name: str | None = Query(
        default=None,
        alias="organizationName",
        description="Scope override, honored for global admins only",
    ),
) -> RecordListResponse:
    """List records.

    Without ``pageSize`` and ``p`` every record in the caller's scope is
    returned. With both, one page is returned and ``total`` holds the
    page count.
    """
    if page_size is None or page is None:
        logger.debug("get_records_unbounded", organization=scope.organization)
        return RecordListResponse(data=await engine.list_records(scope))

    query = PageQuery(
        page_size=page_size,
        page=page,
        field=field,
        value=value,
        sort_field=sort_field,
        sort_order=sort_order,
        organization_name=organization_name,
    )
    logger.debug(
        "get_records_paged",
        organization=scope.organization,
        page=page,
        page_size=page_size,
        sort_field=sort_field,
        sort_order=sort_order,
    )
    result = await engine.list_page(scope, query)
    return RecordListResponse(data=result.records, total=result.total_pages)


@router.get("/get-record", response_model=RecordResponse)
async def get_record(
    scope: CallerScopeDep,
    engine: QueryEngineDep,
    id: str = Query(..., description="The id ( owner/name ) of the record"),
) -> RecordResponse:
    """Get a single record by id.

    Records of other organizations are reported as not found.
    """
    record = await engine.get_record(id)
    return RecordResponse(data=scope.ensure_visible(record))


@router.post("/get-records-filter", response_model=RecordListResponse, response_model_exclude_none=True)
async def get_records_by_filter(
    template: RecordTemplate,
    scope: CallerScopeDep,
    engine: QueryEngineDep,
) -> RecordListResponse:
    """List every record matching the non-empty fields of the posted record."""
    records = await engine.list_by_example(scope.confine(template))
    return RecordListResponse(data=records)


@router.post("/add-record", response_model=MutationResult)
async def add_record(
    record: Record,
    scope: AdminScopeDep,
    engine: MutationEngineDep,
) -> MutationResult:
    """Add a record; fails if its owner/name key already exists."""
    return await engine.run("add", engine.add(scope, record))


@router.post("/update-record", response_model=MutationResult)
async def update_record(
    record: Record,
    scope: AdminScopeDep,
    engine: MutationEngineDep,
    id: str = Query(..., description="The id ( owner/name ) of the record"),
) -> MutationResult:
    """Replace the record identified by ``id``."""
    return await engine.run("update", engine.update(scope, id, record))


@router.post("/delete-record", response_model=MutationResult)
async def delete_record(
    record: Record,
    scope: AdminScopeDep,
    engine: MutationEngineDep,
) -> MutationResult:
    """Delete the record keyed by the posted owner and name."""
    return await engine.run("delete", engine.delete(scope, record))
