"""Page window arithmetic."""

import math
from dataclasses import dataclass

from recordkeeper.records.errors import InvalidParameterError

MAX_PAGE_SIZE = 1000
# Offsets are bound as BIGINT by the SQL backend
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageWindow:
    """Offset/limit window for one page of a counted result set."""

    page_number: int
    page_size: int
    total_count: int

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def is_past_end(self) -> bool:
        """True when the requested page starts beyond the last record."""
        return self.offset >= self.total_count


def paginate(page_size: int, page_number: int, total_count: int) -> PageWindow:
    """Compute the window for ``page_number`` (1-based) of ``page_size`` items.

    Raises:
        InvalidParameterError: If page_size is outside 1..MAX_PAGE_SIZE, the page
            starts beyond MAX_OFFSET, or total_count < 0
    """
    if page_size <= 0:
        raise InvalidParameterError(f"pageSize must be positive, got {page_size}")
    if page_size > MAX_PAGE_SIZE:
        raise InvalidParameterError(
            f"pageSize must be at most {MAX_PAGE_SIZE}, got {page_size}"
        )
    if page_number < 1:
        raise InvalidParameterError(f"page number must be at least 1, got {page_number}")
    if (page_number - 1) * page_size > MAX_OFFSET:
        raise InvalidParameterError(f"page number {page_number} is out of range")
    if total_count < 0:
        raise InvalidParameterError(f"total count must not be negative, got {total_count}")
    return PageWindow(page_number=page_number, page_size=page_size, total_count=total_count)
