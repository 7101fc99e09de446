"""Health check and metrics endpoints."""

import time

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from recordkeeper.api.dependencies import RecordStoreDep
from recordkeeper.api.models.health import ComponentHealth, HealthResponse
from recordkeeper.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(store: RecordStoreDep) -> HealthResponse:
    """Report service health and record store reachability."""
    start = time.perf_counter()
    healthy = await store.health_check()
    component = ComponentHealth(
        name="record_store",
        status="healthy" if healthy else "unhealthy",
        latency_ms=(time.perf_counter() - start) * 1000,
        message=None if healthy else "Record store unreachable",
    )
    logger.debug("health_check_completed", status=component.status)
    return HealthResponse(status=component.status, version=VERSION, components=[component])


async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
