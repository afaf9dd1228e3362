"""In-memory ItemDocumentStore implementation.

Keeps documents in a dict keyed by item id. Documents are deep-copied on the
way in and out so callers can never mutate stored state without `save()`,
which is what a real document database guarantees too. All access happens
under a reentrant lock, so the store is safe to share between threads; it is
intended for tests and local development.
"""

from __future__ import annotations

import copy
import threading

from itemstore.domain.ids import ItemId
from itemstore.domain.model import ItemDocument, ItemInfo
from itemstore.interfaces.document_store import (
    DocumentAlreadyExists,
    IndexedField,
    ItemDocumentStore,
)


class InMemoryItemDocumentStore(ItemDocumentStore):
    """In-memory ItemDocumentStore for tests and local development."""

    def __init__(self) -> None:
        self.documents: dict[ItemId, ItemDocument] = {}
        self.indexes: set[IndexedField] = set()
        self._lock = threading.RLock()

    # --- lookups ---

    def get(self, item_id: ItemId) -> ItemDocument | None:
        with self._lock:
            document = self.documents.get(item_id)
            return copy.deepcopy(document) if document is not None else None

    def get_info(self, item_id: ItemId) -> ItemInfo | None:
        with self._lock:
            document = self.documents.get(item_id)
            return document.info() if document is not None else None

    def find_ids(self, indexed_field: IndexedField, value: ItemId) -> list[ItemId]:
        attribute = IndexedField(indexed_field).value
        with self._lock:
            return [
                item_id
                for item_id, document in self.documents.items()
                if getattr(document, attribute) == value
            ]

    def count(self) -> int:
        with self._lock:
            return len(self.documents)

    # --- writes ---

    def insert(self, document: ItemDocument) -> None:
        with self._lock:
            if document.id in self.documents:
                raise DocumentAlreadyExists(document.id)
            self.documents[document.id] = copy.deepcopy(document)

    def save(self, document: ItemDocument) -> None:
        with self._lock:
            self.documents[document.id] = copy.deepcopy(document)

    def delete(self, item_id: ItemId) -> bool:
        with self._lock:
            return self.documents.pop(item_id, None) is not None

    # --- maintenance ---

    def ensure_indexes(self) -> None:
        # nothing to build; recorded so callers can be checked in tests
        with self._lock:
            self.indexes.update(IndexedField)
