"""Filter evaluation over records.

A ``RecordFilter`` ANDs the non-empty fields of a template together with an
optional ``(field, value)`` override. All comparisons are exact string
equality.
"""

from collections.abc import Iterable, Iterator

from recordkeeper.records.models import Record, RecordTemplate, resolve_field


class RecordFilter:
    """Equality predicate over records.

    The override only applies when both ``field`` and ``value`` are
    non-empty. It is added as an extra condition, so it can narrow the
    template but never widen it: an override on ``organization`` cannot
    escape an injected scope.
    """

    def __init__(
        self,
        template: RecordTemplate | None = None,
        field: str | None = None,
        value: str | None = None,
    ) -> None:
        self.template = template or RecordTemplate()
        self.conditions: list[tuple[str, str]] = list(self.template.constraints().items())
        if field and value:
            self.conditions.append((resolve_field(field), value))

    @property
    def organization(self) -> str | None:
        return self.template.organization or None

    def matches(self, record: Record) -> bool:
        return all(getattr(record, attr) == value for attr, value in self.conditions)

    __call__ = matches

    def apply(self, records: Iterable[Record]) -> Iterator[Record]:
        """Lazily yield the records that match, in input order."""
        return (record for record in records if self.matches(record))

    def __repr__(self) -> str:
        return f"RecordFilter(conditions={self.conditions!r})"
