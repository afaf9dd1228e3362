"""Item document store port.

The document store keeps one document per item, primary-keyed by item id. The
port is deliberately small; it mirrors what a document database offers
natively and nothing more:

- point lookup by primary key (full document, or the `ItemInfo` projection),
- equality scans over one of the indexed fields,
- single-document insert, upsert and delete,
- a document count.

Contract
--------
- Every call is atomic for the single document it touches. There are no
  multi-document transactions.
- `insert()` must fail with `DocumentAlreadyExists` on a primary-key clash;
  it never overwrites.
- `save()` is an upsert and replaces the whole document.
- Absence is not an error: lookups return ``None``, `delete()` returns False.
- Driver and connectivity errors propagate unmodified; adapters do not retry.
- Documents handed out are copies. Mutating them does not touch the store
  until they are saved.
"""

from __future__ import annotations

import abc
from enum import Enum

from itemstore.domain.ids import ItemId
from itemstore.domain.model import ItemDocument, ItemInfo


class DocumentStoreError(Exception):
    """Base class for document store errors."""


class DocumentAlreadyExists(DocumentStoreError):
    """Conflict: a document with the same item id is already stored.

    Attributes:
        item_id (ItemId): The conflicting item id.
    """

    def __init__(self, item_id: ItemId):
        super().__init__(f"Item document '{item_id}' already exists.")
        self.item_id = item_id


class IndexedField(str, Enum):
    """Document fields that can be used in equality scans.

    Each of them is backed by an ascending index.
    """

    PARENT_ID = "parent_id"
    TEMPLATE_ID = "template_id"


class ItemDocumentStore(abc.ABC):
    """Persistence port for item documents."""

    # --- lookups ---

    @abc.abstractmethod
    def get(self, item_id: ItemId) -> ItemDocument | None:
        """Fetch the full document of an item.

        Args:
            item_id: Primary key of the document.

        Returns:
            ItemDocument | None: A copy of the document, or ``None`` if absent.
        """

    @abc.abstractmethod
    def get_info(self, item_id: ItemId) -> ItemInfo | None:
        """Fetch identity and hierarchy attributes of an item, without fields.

        Args:
            item_id: Primary key of the document.

        Returns:
            ItemInfo | None: The projected document, or ``None`` if absent.
        """

    @abc.abstractmethod
    def find_ids(self, indexed_field: IndexedField, value: ItemId) -> list[ItemId]:
        """Return the ids of all documents whose `indexed_field` equals `value`.

        Args:
            indexed_field: The field to compare.
            value: The value to compare against (the stored form, so
                `EMPTY_ID` finds documents with no parent/template).

        Returns:
            list[ItemId]: Matching ids, possibly empty. Order is unspecified.
        """

    @abc.abstractmethod
    def count(self) -> int:
        """Return the number of stored documents."""

    # --- writes ---

    @abc.abstractmethod
    def insert(self, document: ItemDocument) -> None:
        """Insert a new document.

        Raises:
            DocumentAlreadyExists: If a document with the same id is stored.
        """

    @abc.abstractmethod
    def save(self, document: ItemDocument) -> None:
        """Insert or fully replace the document with the same id."""

    @abc.abstractmethod
    def delete(self, item_id: ItemId) -> bool:
        """Delete at most one document.

        Returns:
            bool: True if a document was removed, False if none existed.
        """

    # --- maintenance ---

    @abc.abstractmethod
    def ensure_indexes(self) -> None:
        """Create the ascending indexes on every `IndexedField` if missing.

        Idempotent.
        """
