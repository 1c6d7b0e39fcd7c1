"""Public package exports for the WordPress REST collection client."""

from .client import WpClient
from .collection.filters import FieldFilter
from .collection.ref import WpCollectionRef
from .collection.state import CollectionState
from .config import WpClientConfig
from .core.pagination import Pagination

__all__ = [
    "WpClient",
    "WpClientConfig",
    "WpCollectionRef",
    "CollectionState",
    "Pagination",
    "FieldFilter",
]
