"""Organization unit model for the organizational hierarchy."""
from typing import Optional
from sqlalchemy import String, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column
from orgunits.models.base import Base


class Organization(Base):
    """Organization unit stored as a flat record with a parent reference.

    Root units carry the root sentinel (or no value) in ``parent_id``, so the
    column is a plain indexed string rather than a self-referential foreign key.
    """
    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    parent_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    active: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    # Opaque attributes, never interpreted by hierarchy logic
    tz: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    currency: Mapped[Optional[str]] = mapped_column(String(3), nullable=True)
    locale: Mapped[Optional[str]] = mapped_column(String(35), nullable=True)

    __table_args__ = (
        # Secondary index used by the first-child lookup on delete
        Index("ix_organizations_parent_id", "parent_id"),
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, parent_id={self.parent_id}, active={self.active})>"
