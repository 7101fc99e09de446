"""Tests for CallerScope."""

import pytest

from recordkeeper.records.errors import ScopeViolationError
from recordkeeper.records.models import RecordTemplate
from recordkeeper.records.scope import CallerScope
from tests.factories.records import RecordFactory


class TestResolve:
    """Tests for organization resolution."""

    def test_non_privileged_override_is_ignored(self, scope_b: CallerScope) -> None:
        assert scope_b.resolve("A") == "B"

    def test_global_admin_override_is_honored(self, global_admin: CallerScope) -> None:
        assert global_admin.resolve("A") == "A"

    def test_global_admin_without_override_uses_own(self, global_admin: CallerScope) -> None:
        assert global_admin.resolve(None) == "built-in"
        assert global_admin.resolve("") == "built-in"

    def test_template_is_confined(self, scope_b: CallerScope) -> None:
        assert scope_b.template("A") == RecordTemplate(organization="B")


class TestVisibility:
    """Tests for record visibility checks."""

    def test_own_organization_is_visible(self, scope_a: CallerScope) -> None:
        record = RecordFactory.create(organization="A")
        assert scope_a.ensure_visible(record) is record

    def test_other_organization_is_a_violation(self, scope_b: CallerScope) -> None:
        record = RecordFactory.create(organization="A")
        assert not scope_b.permits(record)
        with pytest.raises(ScopeViolationError, match="does not exist"):
            scope_b.ensure_visible(record)

    def test_global_admin_sees_everything(self, global_admin: CallerScope) -> None:
        assert global_admin.permits(RecordFactory.create(organization="A"))

    def test_confine_injects_organization(self, scope_b: CallerScope) -> None:
        confined = scope_b.confine(RecordTemplate(organization="A", user="alice"))
        assert confined == RecordTemplate(organization="B", user="alice")

    def test_confine_leaves_global_admin_template(self, global_admin: CallerScope) -> None:
        template = RecordTemplate(user="alice")
        assert global_admin.confine(template) == template
