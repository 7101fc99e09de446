"""Request context models for middleware and observability."""

from pydantic import BaseModel


class RequestContext(BaseModel):
    """Request context bound at the start of each request.

    Correlates log lines for one request.
    """

    trace_id: str
    """OpenTelemetry trace ID, or the request ID when tracing is off."""

    span_id: str
    """OpenTelemetry span ID."""

    request_id: str
    """Unique identifier for this request."""

    organization: str | None = None
    """Caller organization, once authenticated."""

    user: str | None = None
    """Caller user, once authenticated."""
