"""Models package."""
from orgunits.models.base import Base
from orgunits.models.organization import Organization

__all__ = [
    "Base",
    "Organization",
]
