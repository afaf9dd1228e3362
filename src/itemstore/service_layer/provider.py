"""Item data provider.

`ItemDataProvider` is the surface the host repository framework calls. Item
definition lookups go through the prefetch cache; every other item operation
goes straight to the mapper and bypasses the cache. Blob streams are kept in a
separate blob store, addressed by the short form of the blob id.

Constructing a provider prepares the backing store: the indexes used by the
children-of and template scans are created if missing, and an empty store is
seeded with the root item.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import BinaryIO

from itemstore.domain.changes import ItemChanges
from itemstore.domain.ids import ItemId, short_id
from itemstore.domain.model import ItemDefinition, VersionUri
from itemstore.interfaces.blob_store import BlobStore
from itemstore.interfaces.cache import SizedCache
from itemstore.interfaces.document_store import ItemDocumentStore

from .item_mapper import ItemDocumentMapper
from .prefetch import PrefetchCache

logger = logging.getLogger(__name__)


class ItemDataProvider:  # pylint: disable=too-many-public-methods
    """Repository-facing adapter over an item document store and a blob store.

    Args:
        store: Backing item document store.
        blobs: Backing blob store.
        join_parent_id: Repository item top-level documents are reported under.
        cache_factory: Builds the prefetch cache container.
        cache_enabled: Switch the prefetch cache off when False.
        root_language: Language of the root item's initial version.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        store: ItemDocumentStore,
        blobs: BlobStore,
        *,
        join_parent_id: ItemId,
        cache_factory: Callable[[], SizedCache],
        cache_enabled: bool = True,
        root_language: str = "en",
    ) -> None:
        self.mapper = ItemDocumentMapper(store, join_parent_id)
        self.prefetch = PrefetchCache(
            self.mapper.load_definition, cache_factory, enabled=cache_enabled
        )
        self.blobs = blobs
        self.join_parent_id = join_parent_id

        store.ensure_indexes()
        self.root_created = self.mapper.ensure_root(root_language)

    # --- items ---

    def get_item_definition(self, item_id: ItemId) -> ItemDefinition | None:
        """Return the definition of an item, or ``None`` if it does not exist."""
        return self.prefetch.get(item_id)

    def get_item_versions(self, item_id: ItemId) -> list[VersionUri] | None:
        """See `ItemDocumentMapper.get_item_versions`."""
        return self.mapper.get_item_versions(item_id)

    def get_item_fields(
        self, item_id: ItemId, version_uri: VersionUri
    ) -> dict[ItemId, str] | None:
        """See `ItemDocumentMapper.get_item_fields`."""
        return self.mapper.get_item_fields(item_id, version_uri)

    def get_child_ids(self, item_id: ItemId) -> list[ItemId]:
        """See `ItemDocumentMapper.get_child_ids`."""
        return self.mapper.get_child_ids(item_id)

    def get_parent_id(self, item_id: ItemId) -> ItemId | None:
        """See `ItemDocumentMapper.get_parent_id`."""
        return self.mapper.get_parent_id(item_id)

    def create_item(
        self,
        item_id: ItemId,
        name: str,
        template_id: ItemId | None,
        parent_id: ItemId | None = None,
    ) -> bool:
        """See `ItemDocumentMapper.create_item`."""
        return self.mapper.create_item(item_id, name, template_id, parent_id)

    def add_version(self, item_id: ItemId, base_version: VersionUri) -> int:
        """See `ItemDocumentMapper.add_version`."""
        return self.mapper.add_version(item_id, base_version)

    def delete_item(self, item_id: ItemId) -> bool:
        """See `ItemDocumentMapper.delete_item`."""
        return self.mapper.delete_item(item_id)

    def save_item(self, item_id: ItemId, changes: ItemChanges) -> bool:
        """See `ItemDocumentMapper.save_item`."""
        return self.mapper.save_item(item_id, changes)

    def get_template_item_ids(self) -> list[ItemId]:
        """See `ItemDocumentMapper.get_template_item_ids`."""
        return self.mapper.get_template_item_ids()

    # --- blobs ---

    def blob_stream_exists(self, blob_id: ItemId) -> bool:
        """Return True if a blob is stored for `blob_id`."""
        return self.blobs.exists(short_id(blob_id))

    def get_blob_stream(self, blob_id: ItemId) -> BinaryIO | None:
        """Open the blob stored for `blob_id`; the caller must close it.

        Returns:
            BinaryIO | None: A readable stream, or ``None`` if there is no blob.
        """
        return self.blobs.open_read(short_id(blob_id))

    def set_blob_stream(self, stream: BinaryIO, blob_id: ItemId) -> bool:
        """Store the bytes of `stream` (from its current position) for `blob_id`.

        Returns:
            bool: True once the blob is stored.
        """
        stats = self.blobs.store(short_id(blob_id), stream)
        logger.debug("Stored blob %s (%d bytes)", stats.key, stats.size_bytes)
        return True
