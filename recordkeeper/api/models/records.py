"""Response envelopes for record endpoints."""

from typing import Literal

from pydantic import BaseModel, Field

from recordkeeper.records.models import Record


class RecordResponse(BaseModel):
    """Envelope for a single record."""

    status: Literal["ok"] = "ok"
    data: Record


class RecordListResponse(BaseModel):
    """Envelope for a record listing.

    ``total`` is the page count and is only set for paged listings.
    """

    status: Literal["ok"] = "ok"
    data: list[Record] = Field(default_factory=list)
    total: int | None = None
