"""Flat CRUD access to organization records.

The repository has no hierarchy semantics: it reads and writes single rows
and leaves every structural rule to ``orgunits.core.hierarchy``.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from orgunits.core.exceptions import OrganizationNotFound, RepositoryError
from orgunits.models.organization import Organization

logger = logging.getLogger(__name__)

# Columns a caller may write; anything else in an input mapping is ignored
RECORD_FIELDS = ("id", "description", "parent_id", "active", "tz", "currency", "locale")


class OrganizationRepository:
    """Keyed store of organization records backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_call(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Store operation %s failed: %s", operation, exc)
            raise RepositoryError(f"{operation} failed") from exc

    def get_all(self) -> List[Organization]:
        """Return a full snapshot of all records."""
        with self._store_call("get_all"):
            return self.db.query(Organization).order_by(Organization.id).all()

    def get_by_id(self, org_id: str) -> Organization:
        """Return the record for ``org_id`` or raise OrganizationNotFound."""
        with self._store_call("get_by_id"):
            found = self.db.get(Organization, org_id)
        if found is None:
            raise OrganizationNotFound(org_id)
        return found

    def put(self, record: Organization) -> None:
        """Insert or replace a record, keyed on its id."""
        with self._store_call("put"):
            self.db.merge(record)
            self.db.commit()

    def update(self, org_id: str, fields: Dict[str, Any]) -> Organization:
        """Merge the supplied fields into the stored record and return it."""
        org = self.get_by_id(org_id)
        with self._store_call("update"):
            for field, value in fields.items():
                if field in RECORD_FIELDS and field != "id":
                    setattr(org, field, value)
            self.db.commit()
            self.db.refresh(org)
        return org

    def delete(self, org_id: str) -> Dict[str, str]:
        """Physically remove a record."""
        org = self.get_by_id(org_id)
        with self._store_call("delete"):
            self.db.delete(org)
            self.db.commit()
        return {"id": org_id}

    def query_first_child_of(self, parent_id: str) -> Optional[Organization]:
        """Return any one record whose parent is ``parent_id``, if one exists."""
        with self._store_call("query_first_child_of"):
            return self.db.query(Organization).filter(
                Organization.parent_id == parent_id
            ).first()
