"""Errors raised by the organization hierarchy and its repository.

Every hierarchy error carries a snake_case ``code`` and the offending
``identifier``; ``str(err)`` renders ``"<code>: <identifier>"`` which is the
message returned to API clients.
"""
from typing import Optional


class HierarchyError(Exception):
    """Base class for hierarchy rule violations."""
    code = "hierarchy_error"

    def __init__(self, identifier: Optional[str] = None):
        self.identifier = identifier
        super().__init__(f"{self.code}: {identifier}")


class OrganizationNotFound(HierarchyError):
    code = "org_not_found"


class HierarchyValidationError(HierarchyError):
    """A mutation or tree request that fails a shape or structure rule."""
    code = "validation_failed"


# Create input shape
class InvalidId(HierarchyValidationError):
    code = "id_is_invalid"


class InvalidDescription(HierarchyValidationError):
    code = "description_is_invalid"


class InvalidParentId(HierarchyValidationError):
    code = "parent_id_is_invalid"


class OrganizationAlreadyExists(HierarchyValidationError):
    code = "org_already_exists"


# Parent resolution
class SelfReference(HierarchyValidationError):
    code = "parent_self_ref"


class ParentNotFound(HierarchyValidationError):
    code = "parent_org_not_found"


class CircularReference(HierarchyValidationError):
    code = "parent_org_circular_ref"


class AmbiguousRoot(HierarchyValidationError):
    code = "more_than_one_root_found"


# Update input shape
class DescriptionTooShort(HierarchyValidationError):
    code = "description_is_too_short"


class ParentIdTooShort(HierarchyValidationError):
    code = "parent_id_is_too_short"


# Delete preconditions
class OrganizationIsActive(HierarchyValidationError):
    code = "org_is_active"


class OrganizationHasChild(HierarchyValidationError):
    code = "org_has_child"

    def __init__(self, identifier: Optional[str] = None, child_id: Optional[str] = None):
        self.child_id = child_id
        super().__init__(identifier)


class RepositoryError(RuntimeError):
    """Raised when a store operation fails.

    Wraps lower-level database exceptions so they are never mistaken for
    validation failures.
    """
    pass
