"""Organization hierarchy API routes."""
from typing import List, NoReturn, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from orgunits.core.database import get_db
from orgunits.core.exceptions import HierarchyError, OrganizationNotFound
from orgunits.core.hierarchy import HierarchyEngine, TreeNode
from orgunits.core.repository import OrganizationRepository
from orgunits.schemas.organization import (
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationResponse,
    OrganizationTreeNode,
    OrganizationDeleteResult,
)

router = APIRouter()


def get_engine(db: Session = Depends(get_db)) -> HierarchyEngine:
    """Build a hierarchy engine bound to the request's session."""
    return HierarchyEngine(OrganizationRepository(db))


def raise_http_error(exc: HierarchyError) -> NoReturn:
    """Map a hierarchy error to 404 (missing record) or 400 (rule violation)."""
    if isinstance(exc, OrganizationNotFound):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=status_code, detail=str(exc)) from exc


def tree_to_response(node: Optional[TreeNode]) -> OrganizationTreeNode:
    """Convert an engine tree to its response schema; an empty tree stays empty."""
    if not node:
        return OrganizationTreeNode()
    return OrganizationTreeNode(
        organization=OrganizationResponse.model_validate(node["organization"]),
        children=[tree_to_response(child) for child in node["children"]]
    )


@router.get("/", response_model=List[OrganizationResponse], response_model_exclude_none=True)
def list_organizations(engine: HierarchyEngine = Depends(get_engine)):
    """List all organizations (flat, ordered by id)."""
    return engine.list_all()


@router.get("/tree", response_model=OrganizationTreeNode, response_model_exclude_none=True)
def get_root_tree(engine: HierarchyEngine = Depends(get_engine)):
    """Get the full hierarchy starting at the single root organization."""
    try:
        return tree_to_response(engine.get_tree())
    except HierarchyError as exc:
        raise_http_error(exc)


@router.get("/{org_id}/tree", response_model=OrganizationTreeNode, response_model_exclude_none=True)
def get_subtree(org_id: str, engine: HierarchyEngine = Depends(get_engine)):
    """
    Get the subtree rooted at an organization.

    Passing the root sentinel ('$ROOT$') as id returns the full hierarchy.
    An unknown id yields an empty object.
    """
    try:
        return tree_to_response(engine.get_tree(org_id))
    except HierarchyError as exc:
        raise_http_error(exc)


@router.get("/{org_id}", response_model=OrganizationResponse, response_model_exclude_none=True)
def get_organization(org_id: str, engine: HierarchyEngine = Depends(get_engine)):
    """Get a single organization."""
    try:
        return engine.get_by_id(org_id)
    except HierarchyError as exc:
        raise_http_error(exc)


@router.post(
    "/",
    response_model=OrganizationResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
def create_organization(org_data: OrganizationCreate, engine: HierarchyEngine = Depends(get_engine)):
    """Create an organization under an existing parent or as the root ('$ROOT$')."""
    try:
        return engine.create(org_data.model_dump(exclude_unset=True))
    except HierarchyError as exc:
        raise_http_error(exc)


@router.put("/{org_id}", response_model=OrganizationResponse, response_model_exclude_none=True)
def update_organization(
    org_id: str,
    org_data: OrganizationUpdate,
    engine: HierarchyEngine = Depends(get_engine)
):
    """Update an organization. Fields absent from the body keep their values."""
    update_data = org_data.model_dump(exclude_unset=True)
    update_data.pop("id", None)
    try:
        return engine.update(org_id, update_data)
    except HierarchyError as exc:
        raise_http_error(exc)


@router.delete("/{org_id}", response_model=OrganizationDeleteResult)
def delete_organization(org_id: str, engine: HierarchyEngine = Depends(get_engine)):
    """
    Delete an organization.

    Deletion is blocked if:
    - The organization is active
    - Any organization references it as parent
    """
    try:
        return engine.delete(org_id)
    except HierarchyError as exc:
        raise_http_error(exc)
