"""Prefetch cache for item definitions.

Item definitions (name, template, branch, parent) are read far more often than
field content, so they are served from a size-bounded cache in front of the
mapper's primary-key lookup.

- Entries are created lazily on the first lookup of an id.
- Absence is not cached: an unknown id is looked up again next time.
- A cached definition with an empty identity counts as "not found". It is
  neither returned nor refreshed by the lookup that finds it.
- Writes never invalidate entries. A cached definition may therefore lag
  behind a concurrent rename/move/delete until the container evicts it.

The container is built on first use. Construction is guarded by a lock that
covers only the check-and-create step; gets and puts rely on the container's
own thread-safety.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from itemstore.domain.ids import ItemId
from itemstore.domain.model import ItemDefinition
from itemstore.interfaces.cache import SizedCache

logger = logging.getLogger(__name__)

CACHE_NAME = "itemstore - Prefetch data"


class PrefetchCache:
    """Identifier-keyed cache of item definitions.

    Args:
        loader: Primary-key lookup used on a miss; returns ``None`` for
            unknown ids.
        cache_factory: Builds the container; called at most once.
        enabled: When False the container is switched off right after it is
            built, so every lookup goes to `loader`.
    """

    def __init__(
        self,
        loader: Callable[[ItemId], ItemDefinition | None],
        cache_factory: Callable[[], SizedCache],
        *,
        enabled: bool = True,
    ) -> None:
        self._loader = loader
        self._cache_factory = cache_factory
        self._enabled = enabled
        self._cache: SizedCache | None = None
        self._cache_lock = threading.Lock()

    @property
    def cache(self) -> SizedCache:
        """The container, built on first access (exactly once)."""
        cache = self._cache
        if cache is not None:
            return cache

        with self._cache_lock:
            cache = self._cache
            if cache is not None:
                return cache

            cache = self._cache_factory()
            if not self._enabled:
                cache.enabled = False
            logger.debug("Created %s cache (enabled=%s)", CACHE_NAME, cache.enabled)
            self._cache = cache
            return cache

    def get(self, item_id: ItemId) -> ItemDefinition | None:
        """Return the definition of `item_id`, or ``None`` if there is none."""
        cache = self.cache
        cached = cache.get(item_id)
        if cached is not None:
            if not cached.is_empty:
                return cached
            return None

        definition = self._loader(item_id)
        if definition is None:
            logger.debug("Prefetch miss for %s: no such item", item_id)
            return None

        logger.debug("Prefetch miss for %s: loaded %r", item_id, definition.name)
        cache.put(item_id, definition, definition.weight)
        return definition
