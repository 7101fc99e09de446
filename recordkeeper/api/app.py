"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from recordkeeper.api.dependencies import reset_dependencies
from recordkeeper.api.exceptions import RecordKeeperAPIError, describe_error
from recordkeeper.api.middleware.context import RequestContextMiddleware
from recordkeeper.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from recordkeeper.api.routes import register_routes
from recordkeeper.config import Settings, get_settings
from recordkeeper.db.errors import StoreError
from recordkeeper.observability.logging import get_logger, setup_logging
from recordkeeper.observability.metrics import ERRORS
from recordkeeper.records.errors import RecordError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Close the record store connection pool on shutdown."""
    yield
    await reset_dependencies()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from config/ and the environment if omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    app = FastAPI(
        title="recordkeeper",
        description="Audit record trail: query, filter, paginate and mutate records",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    register_routes(app, settings)

    if settings.observability.tracing.enabled:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("opentelemetry_instrumentation_enabled")

    logger.info(
        "app_created",
        debug=settings.debug,
        record_backend=settings.storage.records.backend,
    )

    return app


def _error_response(status_code: int, body: ErrorBody) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=body).model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application
    """

    async def record_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Render API, record and store errors with their mapped status."""
        status_code, error_code = describe_error(exc)
        message = getattr(exc, "message", str(exc))
        ERRORS.labels(error_type=type(exc).__name__).inc()
        logger.warning(
            "api_error",
            error_code=error_code.value,
            error_type=type(exc).__name__,
            message=message,
            path=request.url.path,
        )
        return _error_response(status_code, ErrorBody(code=error_code, message=message))

    app.add_exception_handler(RecordKeeperAPIError, record_error_handler)
    app.add_exception_handler(RecordError, record_error_handler)
    app.add_exception_handler(StoreError, record_error_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle FastAPI request validation errors."""
        logger.warning("validation_error", errors=exc.errors(), path=request.url.path)

        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return _error_response(
            400,
            ErrorBody(
                code=ErrorCode.INVALID_REQUEST,
                message="Request validation failed",
                details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(
            500,
            ErrorBody(code=ErrorCode.INTERNAL_ERROR, message="An unexpected error occurred"),
        )

    logger.debug("exception_handlers_registered")


def main() -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "recordkeeper.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
    )
