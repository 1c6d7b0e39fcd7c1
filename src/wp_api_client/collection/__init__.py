"""Collection state, filters and queries."""

from .filters import FieldFilter
from .state import CollectionState

__all__ = [
    "FieldFilter",
    "CollectionState",
]
