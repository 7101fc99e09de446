"""API route registration."""

from fastapi import FastAPI

from recordkeeper.config import Settings
from recordkeeper.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register record, health and metrics routes.

    Args:
        app: FastAPI application instance
        settings: Settings providing the route prefix and metrics path
    """
    from recordkeeper.api.routes.health import get_metrics
    from recordkeeper.api.routes.health import router as health_router
    from recordkeeper.api.routes.records import router as records_router

    app.include_router(records_router, prefix=settings.api.route_prefix, tags=["Records"])
    app.include_router(health_router, tags=["Health"])

    metrics = settings.observability.metrics
    if metrics.enabled:
        app.add_api_route(metrics.path, get_metrics, methods=["GET"], tags=["Health"])

    logger.info(
        "routes_registered",
        prefix=settings.api.route_prefix,
        metrics=metrics.path if metrics.enabled else None,
    )
