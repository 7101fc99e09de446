"""Record entity model.

A record is keyed by ``(owner, name)``; its ``id`` is derived as
``owner/name`` and never stored. Field names travel in camelCase on the
wire (``createdTime``) and are snake_case attributes in Python.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from recordkeeper.records.errors import InvalidParameterError

KEY_SEPARATOR = "/"

# Column widths of the records table
KEY_MAX_LENGTH = 100
FIELD_MAX_LENGTH = 1000


def utc_now() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


class RecordKey(BaseModel):
    """Composite identity of a record."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @classmethod
    def parse(cls, record_id: str) -> "RecordKey":
        """Split an ``owner/name`` id on its first separator."""
        owner, sep, name = record_id.partition(KEY_SEPARATOR)
        if not sep or not owner or not name:
            raise InvalidParameterError(
                f"Invalid record id {record_id!r}, expected 'owner/name'"
            )
        if len(owner) > KEY_MAX_LENGTH or len(name) > KEY_MAX_LENGTH:
            raise InvalidParameterError(
                f"Owner and name of a record id are limited to {KEY_MAX_LENGTH} characters"
            )
        return cls(owner=owner, name=name)

    def __str__(self) -> str:
        return f"{self.owner}{KEY_SEPARATOR}{self.name}"


class Record(BaseModel):
    """A single audit entry: who did what, when, from where."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    owner: str = Field(default="", max_length=KEY_MAX_LENGTH)
    name: str = Field(default="", max_length=KEY_MAX_LENGTH)
    organization: str = Field(default="", max_length=FIELD_MAX_LENGTH)
    created_time: str = Field(default="", max_length=FIELD_MAX_LENGTH)

    client_ip: str = Field(default="", max_length=FIELD_MAX_LENGTH)
    user: str = Field(default="", max_length=FIELD_MAX_LENGTH)
    method: str = Field(default="", max_length=FIELD_MAX_LENGTH)
    request_uri: str = Field(default="", max_length=FIELD_MAX_LENGTH)
    action: str = Field(default="", max_length=FIELD_MAX_LENGTH)
    language: str = Field(default="", max_length=FIELD_MAX_LENGTH)
    object: str = ""
    response: str = ""
    status: str = Field(default="", max_length=FIELD_MAX_LENGTH)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def id(self) -> str:
        return f"{self.owner}{KEY_SEPARATOR}{self.name}"

    @property
    def key(self) -> RecordKey:
        return RecordKey(owner=self.owner, name=self.name)


class RecordTemplate(BaseModel):
    """Sparse record used as a filter.

    Every field is optional; ``None`` and ``""`` both mean "no constraint".
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    owner: str | None = Field(default=None, max_length=KEY_MAX_LENGTH)
    name: str | None = Field(default=None, max_length=KEY_MAX_LENGTH)
    organization: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)
    created_time: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)

    client_ip: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)
    user: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)
    method: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)
    request_uri: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)
    action: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)
    language: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)
    object: str | None = None
    response: str | None = None
    status: str | None = Field(default=None, max_length=FIELD_MAX_LENGTH)

    def constraints(self) -> dict[str, str]:
        """Return the non-empty fields keyed by attribute name."""
        return {
            field: value
            for field in type(self).model_fields
            if (value := getattr(self, field))
        }

    def scoped_to(self, organization: str) -> "RecordTemplate":
        """Return a copy constrained to ``organization``."""
        return self.model_copy(update={"organization": organization})


RECORD_FIELDS: tuple[str, ...] = tuple(Record.model_fields)

# Wire names and attribute names both resolve to the attribute.
_FIELD_NAMES: dict[str, str] = {
    **{field: field for field in RECORD_FIELDS},
    **{to_camel(field): field for field in RECORD_FIELDS},
}


def resolve_field(name: str) -> str:
    """Map a caller-supplied field name to a Record attribute.

    Matching is case-sensitive.

    Raises:
        InvalidParameterError: If no record field has that name
    """
    try:
        return _FIELD_NAMES[name]
    except KeyError:
        raise InvalidParameterError(f"Unknown record field {name!r}") from None
