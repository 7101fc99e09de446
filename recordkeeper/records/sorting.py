"""Sort directives for record listings."""

from dataclasses import dataclass

from recordkeeper.records.errors import InvalidParameterError
from recordkeeper.records.models import resolve_field

SORT_ORDERS: frozenset[str] = frozenset({"ascend", "descend"})


@dataclass(frozen=True)
class SortSpec:
    """Resolved sort directive.

    ``field`` is a Record attribute, or None for the store's natural order.
    """

    field: str | None = None
    descending: bool = False

    @classmethod
    def parse(cls, sort_field: str | None, sort_order: str | None) -> "SortSpec":
        """Build a SortSpec from the ``sortField``/``sortOrder`` parameters.

        Raises:
            InvalidParameterError: On an unknown field or order
        """
        if sort_order and sort_order not in SORT_ORDERS:
            raise InvalidParameterError(
                f"Invalid sortOrder {sort_order!r}, expected 'ascend' or 'descend'"
            )
        if not sort_field:
            return cls()
        return cls(field=resolve_field(sort_field), descending=sort_order == "descend")

    @property
    def is_natural(self) -> bool:
        return self.field is None
