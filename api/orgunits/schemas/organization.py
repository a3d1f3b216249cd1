"""Organization schemas.

Length and presence rules are enforced by the hierarchy engine, not here, so
that clients receive the named error codes instead of generic 422 responses.
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class OrganizationBase(BaseModel):
    """Base schema for an organization record."""
    description: Optional[str] = Field(None, description="Display label, at least 3 characters")
    parent_id: Optional[str] = Field(
        None,
        alias="parentId",
        description="Parent organization id, or '$ROOT$' for a top-level unit"
    )
    active: Optional[bool] = Field(None, description="Active units cannot be deleted")
    tz: Optional[str] = Field(None, description="Time zone (e.g., 'Europe/Vienna')")
    currency: Optional[str] = Field(None, description="Currency code (e.g., 'EUR')")
    locale: Optional[str] = Field(None, description="Locale (e.g., 'de-AT')")

    model_config = ConfigDict(populate_by_name=True)


class OrganizationCreate(OrganizationBase):
    """Schema for creating an organization."""
    id: Optional[str] = Field(None, description="Unique identifier, at least 2 characters")


class OrganizationUpdate(OrganizationBase):
    """Schema for updating an organization. Only supplied fields are merged."""
    id: Optional[str] = Field(None, description="Ignored; the path id is used")


class OrganizationResponse(OrganizationBase):
    """Schema for an organization record."""
    id: str

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class OrganizationTreeNode(BaseModel):
    """Schema for an organization tree node. An empty tree has neither field."""
    organization: Optional[OrganizationResponse] = None
    children: Optional[List[OrganizationTreeNode]] = None

    model_config = ConfigDict(from_attributes=True)


# Enable self-referential model
OrganizationTreeNode.model_rebuild()


class OrganizationDeleteResult(BaseModel):
    """Schema for a delete result."""
    id: str
