"""Build item data providers from settings."""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from itemstore.adapters.blobs import LocalBlobStore, MemoryBlobStore
from itemstore.adapters.cache import LruSizedCache
from itemstore.adapters.db.engine import make_engine
from itemstore.adapters.documents import (
    InMemoryItemDocumentStore,
    SqlAlchemyItemDocumentStore,
)
from itemstore.config import DEFAULT_CACHE_SIZE, DEFAULT_ROOT_LANGUAGE
from itemstore.service_layer import ItemDataProvider
from itemstore.service_layer.prefetch import CACHE_NAME

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from itemstore.config import Settings
    from itemstore.domain.ids import ItemId

logger = logging.getLogger(__name__)


def build_provider(settings: Settings, engine: Engine | None = None) -> ItemDataProvider:
    """Build a provider over the configured database and blob directory.

    The database schema must already exist (``itemstore db upgrade``).

    Args:
        settings: Runtime settings.
        engine: Engine to use instead of one built from ``settings.db_url``.
    """
    engine = engine if engine is not None else make_engine(settings.db_url)
    store = SqlAlchemyItemDocumentStore(engine)
    blobs = LocalBlobStore(settings.blob_root, fsync=settings.safe_mode)
    logger.debug(
        "Building provider (dialect=%s, blobs=%s, cache=%d bytes, enabled=%s)",
        store.dialect.value,
        settings.blob_root,
        settings.prefetch_cache_size,
        settings.prefetch_cache_enabled,
    )
    return ItemDataProvider(
        store,
        blobs,
        join_parent_id=settings.join_parent_id,
        cache_factory=partial(
            LruSizedCache, settings.prefetch_cache_size, name=CACHE_NAME
        ),
        cache_enabled=settings.prefetch_cache_enabled,
        root_language=settings.root_language,
    )


def build_in_memory_provider(
    join_parent_id: ItemId,
    *,
    cache_size: int = DEFAULT_CACHE_SIZE,
    cache_enabled: bool = True,
    root_language: str = DEFAULT_ROOT_LANGUAGE,
) -> ItemDataProvider:
    """Build a provider over in-memory document and blob stores."""
    return ItemDataProvider(
        InMemoryItemDocumentStore(),
        MemoryBlobStore(),
        join_parent_id=join_parent_id,
        cache_factory=partial(LruSizedCache, cache_size, name=CACHE_NAME),
        cache_enabled=cache_enabled,
        root_language=root_language,
    )
