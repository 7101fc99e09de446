"""Per-request correlation ids for logs and responses."""

import time
import uuid
from collections.abc import Awaitable, Callable
from contextvars import ContextVar

import structlog
from fastapi import Request, Response
from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware

from recordkeeper.api.models.context import RequestContext
from recordkeeper.observability.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
TRACE_ID_HEADER = "X-Trace-ID"

_request_context: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def get_request_context() -> RequestContext | None:
    """Return the RequestContext of the current request, if any."""
    return _request_context.get()


def _span_ids() -> tuple[str, str]:
    """Trace and span id of the active OpenTelemetry span, or empty strings."""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return "", ""
    return format(span_context.trace_id, "032x"), format(span_context.span_id, "016x")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Builds a RequestContext per request and binds it to every log line.

    An inbound X-Request-ID is reused so callers can correlate their own
    logs; otherwise a fresh UUID is issued. Without an active span the
    request id doubles as the trace id.
    """

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        trace_id, span_id = _span_ids()
        context = RequestContext(
            trace_id=trace_id or request_id,
            span_id=span_id,
            request_id=request_id,
        )
        _request_context.set(context)
        request.state.context = context

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            trace_id=context.trace_id,
            request_id=context.request_id,
        )

        started = time.perf_counter()
        response = await call_next(request)
        logger.debug(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )

        response.headers[REQUEST_ID_HEADER] = context.request_id
        response.headers[TRACE_ID_HEADER] = context.trace_id
        return response


def update_request_context(
    *,
    organization: str | None = None,
    user: str | None = None,
) -> None:
    """Add caller identity to the current request context once auth has run."""
    current = get_request_context()
    if current is None:
        return

    if organization:
        current.organization = organization
    if user:
        current.user = user

    structlog.contextvars.bind_contextvars(
        organization=current.organization,
        user=current.user,
    )
