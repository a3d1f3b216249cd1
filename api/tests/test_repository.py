"""Tests for the flat organization repository."""
import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from orgunits.core.exceptions import OrganizationNotFound, RepositoryError
from orgunits.core.repository import OrganizationRepository
from orgunits.models.organization import Organization


class TestReads:

    def test_get_all_is_ordered_by_id(self, repository, org_hierarchy):
        assert [o.id for o in repository.get_all()] == ["DEHQ", "EUHQ", "GHQ", "USHQ"]

    def test_get_by_id(self, repository, org_hierarchy):
        assert repository.get_by_id("EUHQ").description == "Europe HQ"

    def test_get_by_id_missing(self, repository, org_hierarchy):
        with pytest.raises(OrganizationNotFound):
            repository.get_by_id("ZZZ")

    def test_query_first_child_of(self, repository, org_hierarchy):
        assert repository.query_first_child_of("EUHQ").id == "DEHQ"
        assert repository.query_first_child_of("DEHQ") is None


class TestWrites:

    def test_put_is_idempotent_on_id(self, repository, db_session):
        repository.put(Organization(id="GHQ", description="Global HQ", parent_id="$ROOT$"))
        repository.put(Organization(id="GHQ", description="Global HQ", parent_id="$ROOT$"))
        assert db_session.query(Organization).count() == 1

    def test_put_replaces_existing(self, repository, org_hierarchy, db_session):
        repository.put(Organization(id="USHQ", description="United States HQ", parent_id="GHQ"))
        db_session.expire_all()
        assert repository.get_by_id("USHQ").description == "United States HQ"

    def test_update_merges_fields(self, repository, org_hierarchy):
        updated = repository.update("DEHQ", {"tz": "Europe/Berlin"})
        assert updated.tz == "Europe/Berlin"
        assert updated.locale == "de-DE"
        assert updated.description == "Germany HQ"

    def test_update_ignores_unknown_fields(self, repository, org_hierarchy):
        updated = repository.update("DEHQ", {"nickname": "DE", "id": "XX"})
        assert updated.id == "DEHQ"
        assert not hasattr(updated, "nickname")

    def test_update_missing(self, repository, org_hierarchy):
        with pytest.raises(OrganizationNotFound):
            repository.update("ZZZ", {"tz": "UTC"})

    def test_delete(self, repository, org_hierarchy):
        assert repository.delete("DEHQ") == {"id": "DEHQ"}
        with pytest.raises(OrganizationNotFound):
            repository.get_by_id("DEHQ")

    def test_delete_missing(self, repository, org_hierarchy):
        with pytest.raises(OrganizationNotFound):
            repository.delete("ZZZ")


class TestStoreFailures:
    """Store errors are wrapped, never swallowed or turned into validation errors."""

    def test_read_failure_is_wrapped(self):
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
        repository = OrganizationRepository(db)

        with pytest.raises(RepositoryError) as exc_info:
            repository.get_all()

        assert isinstance(exc_info.value.__cause__, OperationalError)
        db.rollback.assert_called_once()

    def test_write_failure_is_wrapped(self):
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))
        repository = OrganizationRepository(db)

        with pytest.raises(RepositoryError):
            repository.put(Organization(id="GHQ", description="Global HQ", parent_id="$ROOT$"))
        db.rollback.assert_called_once()
