"""Service layer for ITEMSTORE.

Implements the repository operations: the item document mapper, the prefetch
cache in front of item definition lookups, and the provider facade the host
repository framework talks to.

Dependency rule: may import `itemstore.domain` and `itemstore.interfaces`, but
not `itemstore.adapters` or `itemstore.entrypoints`.
"""

from .item_mapper import ItemDocumentMapper
from .prefetch import PrefetchCache
from .provider import ItemDataProvider

__all__ = ["ItemDataProvider", "ItemDocumentMapper", "PrefetchCache"]
