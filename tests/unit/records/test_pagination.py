"""Tests for page window arithmetic."""

import pytest

from recordkeeper.records.errors import InvalidParameterError
from recordkeeper.records.pagination import MAX_OFFSET, MAX_PAGE_SIZE, paginate


class TestPaginate:
    """Tests for paginate."""

    @pytest.mark.parametrize(
        ("page_size", "page", "total", "offset", "pages"),
        [
            (10, 1, 25, 0, 3),
            (10, 2, 25, 10, 3),
            (10, 3, 25, 20, 3),
            (10, 1, 30, 0, 3),
            (10, 1, 31, 0, 4),
            (1, 7, 7, 6, 7),
            (10, 1, 0, 0, 0),
        ],
    )
    def test_window(self, page_size, page, total, offset, pages) -> None:
        window = paginate(page_size, page, total)
        assert window.offset == offset
        assert window.limit == page_size
        assert window.total_pages == pages

    def test_page_past_end_is_not_an_error(self) -> None:
        window = paginate(10, 4, 25)
        assert window.offset == 30
        assert window.is_past_end

    def test_last_partial_page_is_within_range(self) -> None:
        assert not paginate(10, 3, 25).is_past_end

    def test_empty_set_is_past_end(self) -> None:
        assert paginate(10, 1, 0).is_past_end

    @pytest.mark.parametrize("page_size", [0, -1])
    def test_rejects_non_positive_page_size(self, page_size: int) -> None:
        with pytest.raises(InvalidParameterError, match="pageSize"):
            paginate(page_size, 1, 10)

    @pytest.mark.parametrize("page", [0, -3])
    def test_rejects_page_below_one(self, page: int) -> None:
        with pytest.raises(InvalidParameterError):
            paginate(10, page, 10)

    def test_rejects_negative_total(self) -> None:
        with pytest.raises(InvalidParameterError):
            paginate(10, 1, -1)

    def test_page_size_upper_bound(self) -> None:
        assert paginate(MAX_PAGE_SIZE, 1, 10).limit == MAX_PAGE_SIZE
        with pytest.raises(InvalidParameterError, match="at most"):
            paginate(MAX_PAGE_SIZE + 1, 1, 10)

    def test_rejects_offset_beyond_bigint(self) -> None:
        with pytest.raises(InvalidParameterError, match="out of range"):
            paginate(10, MAX_OFFSET // 10 + 2, 10)
