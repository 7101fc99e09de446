"""Organization scope of a caller."""

from pydantic import BaseModel, ConfigDict

from recordkeeper.records.errors import ScopeViolationError
from recordkeeper.records.models import Record, RecordTemplate


class CallerScope(BaseModel):
    """Who is calling, and which organization they are confined to.

    Built by the auth layer and passed explicitly into every engine call.
    """

    model_config = ConfigDict(frozen=True)

    organization: str
    user: str | None = None
    is_admin: bool = False
    is_global_admin: bool = False

    def resolve(self, organization_name: str | None = None) -> str:
        """Return the organization a query runs against.

        The override is honored only for global admins.
        """
        if self.is_global_admin and organization_name:
            return organization_name
        return self.organization

    def permits_organization(self, organization: str) -> bool:
        return self.is_global_admin or organization == self.organization

    def permits(self, record: Record) -> bool:
        return self.permits_organization(record.organization)

    def ensure_visible(self, record: Record) -> Record:
        """Return ``record`` if the caller may see it.

        Raises:
            ScopeViolationError: If the record belongs to another organization
        """
        if not self.permits(record):
            raise ScopeViolationError(f"The record: {record.id} does not exist")
        return record

    def template(self, organization_name: str | None = None) -> RecordTemplate:
        """Filter template confining a query to the resolved organization."""
        return RecordTemplate(organization=self.resolve(organization_name))

    def confine(self, template: RecordTemplate) -> RecordTemplate:
        """Inject the caller's organization into a caller-built template.

        Global admins keep their template as given.
        """
        if self.is_global_admin:
            return template
        return template.scoped_to(self.organization)
