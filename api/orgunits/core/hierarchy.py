"""Organization hierarchy: tree construction and mutation validation.

Records are stored flat with a ``parent_id`` reference. Trees are rebuilt from
a full snapshot on every call; nothing is cached between requests.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from orgunits.core.exceptions import (
    AmbiguousRoot,
    CircularReference,
    DescriptionTooShort,
    HierarchyError,
    InvalidDescription,
    InvalidId,
    InvalidParentId,
    OrganizationAlreadyExists,
    OrganizationHasChild,
    OrganizationIsActive,
    OrganizationNotFound,
    ParentIdTooShort,
    ParentNotFound,
    SelfReference,
)
from orgunits.core.repository import OrganizationRepository, RECORD_FIELDS
from orgunits.models.organization import Organization

logger = logging.getLogger(__name__)

ROOT_SENTINEL = "$ROOT$"

MIN_ID_LENGTH = 2
MIN_DESCRIPTION_LENGTH = 3
MIN_PARENT_ID_LENGTH = 2

# Ids that would be shadowed by fixed route segments under /organizations
RESERVED_IDS = {"tree"}

TreeNode = Dict[str, Any]


def is_root_reference(parent_id: Optional[str]) -> bool:
    """True when ``parent_id`` means "no parent" (absent, empty or the sentinel)."""
    return not parent_id or parent_id.upper() == ROOT_SENTINEL


def build_tree(records: Iterable[Any], root_id: Optional[str] = None) -> TreeNode:
    """
    Build a ``{"organization", "children"}`` tree from a flat record collection.

    With no ``root_id`` (or the root sentinel) the root is the single record
    without a parent; otherwise it is the record with that id.

    Args:
        records: Objects exposing ``id`` and ``parent_id``, in any order
        root_id: Id of the subtree root, or None for the whole hierarchy

    Returns:
        The tree, or an empty dict when no record matches the root scope

    Raises:
        AmbiguousRoot: More than one record matches the root scope
    """
    records = list(records)
    if is_root_reference(root_id):
        current = [r for r in records if is_root_reference(r.parent_id)]
    else:
        current = [r for r in records if r.id == root_id]

    if not current:
        return {}
    if len(current) > 1:
        raise AmbiguousRoot(root_id or ROOT_SENTINEL)

    root = current[0]
    remaining = [r for r in records if r.id != root.id]
    tree = {"organization": root, "children": _find_children(root, remaining)}
    logger.debug("Built tree for %s over %d records", root.id, len(records))
    return tree


def _find_children(current: Any, remaining: List[Any]) -> List[TreeNode]:
    # Each level recurses over a strictly smaller candidate list, so this
    # terminates even if the stored parent pointers contain a cycle.
    children = [r for r in remaining if r.parent_id == current.id]
    rest = [r for r in remaining if r.parent_id != current.id]
    return [
        {"organization": child, "children": _find_children(child, rest)}
        for child in children
    ]


def flatten_tree(tree: Optional[TreeNode], flat: Optional[List[str]] = None) -> List[str]:
    """Return the ids of a tree in depth-first pre-order."""
    if flat is None:
        flat = []
    if not tree:
        return flat
    if tree.get("organization") is not None:
        flat.append(tree["organization"].id)
    for child in tree.get("children") or []:
        flatten_tree(child, flat)
    return flat


class HierarchyEngine:
    """Validates and applies hierarchy mutations through a repository.

    There is no lock or transaction spanning the validation reads and the
    write that follows them; concurrent mutations of overlapping subtrees
    can interleave.
    """

    def __init__(self, repository: OrganizationRepository):
        self.repository = repository

    def list_all(self) -> List[Organization]:
        return self.repository.get_all()

    def get_by_id(self, org_id: str) -> Organization:
        return self.repository.get_by_id(org_id)

    def get_tree(self, root_id: Optional[str] = None) -> TreeNode:
        return build_tree(self.repository.get_all(), root_id)

    def validate_parent(self, candidate_id: str, parent_id: Optional[str]) -> None:
        """
        Check that ``parent_id`` may become the parent of ``candidate_id``.

        Raises:
            SelfReference: parent_id equals candidate_id
            ParentNotFound: parent_id does not resolve to a record
            CircularReference: parent_id is inside candidate's current subtree
        """
        if is_root_reference(parent_id):
            return
        if candidate_id == parent_id:
            raise SelfReference(parent_id)

        try:
            self.repository.get_by_id(parent_id)
        except OrganizationNotFound:
            raise ParentNotFound(parent_id)

        descendants = flatten_tree(self.get_tree(candidate_id))
        if parent_id in descendants:
            raise CircularReference(parent_id)

    def create(self, data: Mapping[str, Any]) -> Organization:
        """Validate and store a new organization; returns the input record."""
        org_id = data.get("id")
        description = data.get("description")
        parent_id = data.get("parent_id")
        try:
            if not org_id or len(org_id) < MIN_ID_LENGTH:
                raise InvalidId(org_id)
            if is_root_reference(org_id) or org_id in RESERVED_IDS:
                raise InvalidId(org_id)
            if not description or len(description) < MIN_DESCRIPTION_LENGTH:
                raise InvalidDescription(description)
            if not parent_id or len(parent_id) < MIN_PARENT_ID_LENGTH:
                raise InvalidParentId(parent_id)

            try:
                self.repository.get_by_id(org_id)
            except OrganizationNotFound:
                pass
            else:
                raise OrganizationAlreadyExists(org_id)

            self.validate_parent(org_id, parent_id)
        except HierarchyError as exc:
            logger.warning("Rejected create of %s: %s", org_id, exc)
            raise

        record = Organization(**{k: v for k, v in data.items() if k in RECORD_FIELDS})
        self.repository.put(record)
        logger.info("Created organization %s under %s", org_id, parent_id)
        return record

    def update(self, org_id: str, changes: Mapping[str, Any]) -> Organization:
        """
        Validate and merge a partial update.

        Only keys present in ``changes`` are written; an ``id`` key is ignored
        since ids are immutable.
        """
        fields = {k: v for k, v in changes.items() if k in RECORD_FIELDS and k != "id"}
        try:
            self.repository.get_by_id(org_id)

            if "description" in fields:
                description = fields["description"]
                if description is None or len(description) < MIN_DESCRIPTION_LENGTH:
                    raise DescriptionTooShort(description)

            if "parent_id" in fields:
                parent_id = fields["parent_id"]
                if parent_id is None or len(parent_id) < MIN_PARENT_ID_LENGTH:
                    raise ParentIdTooShort(parent_id)
                self.validate_parent(org_id, parent_id)
        except HierarchyError as exc:
            logger.warning("Rejected update of %s: %s", org_id, exc)
            raise

        updated = self.repository.update(org_id, fields)
        logger.info("Updated organization %s: %s", org_id, sorted(fields))
        return updated

    def delete(self, org_id: str) -> Dict[str, str]:
        """Delete an inactive organization that has no children."""
        try:
            found = self.repository.get_by_id(org_id)
            if found.active:
                raise OrganizationIsActive(org_id)
            child = self.repository.query_first_child_of(org_id)
            if child is not None:
                raise OrganizationHasChild(org_id, child_id=child.id)
        except HierarchyError as exc:
            logger.warning("Rejected delete of %s: %s", org_id, exc)
            raise

        result = self.repository.delete(org_id)
        logger.info("Deleted organization %s", org_id)
        return result
