"""Size-bounded LRU cache container.

`LruSizedCache` implements the `SizedCache` port: every entry is stored with a
size, the sum of sizes is kept at or below `max_size`, and the least recently
used entries are evicted first when room is needed. Entries larger than the
whole budget are not stored at all.

Thread-safety: every operation takes an internal `RLock`, so one instance can
be shared by all request threads without extra locking by callers.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Hashable
from typing import Any

from itemstore.interfaces.cache import SizedCache

logger = logging.getLogger(__name__)


class LruSizedCache(SizedCache):
    """Least-recently-used cache bounded by total entry size.

    Args:
        max_size: Size budget; must be positive.
        name: Label used in log messages.
        enabled: Start enabled (True) or disabled (False).
    """

    def __init__(self, max_size: int, name: str = "cache", *, enabled: bool = True):
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.name = name
        self.max_size = max_size
        self.enabled = enabled
        self._entries: OrderedDict[Hashable, tuple[Any, int]] = OrderedDict()
        self._size = 0
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: Hashable) -> Any | None:
        if not self.enabled:
            return None
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return entry[0]

    def put(self, key: Hashable, value: Any, size: int) -> None:
        if not self.enabled:
            return
        if size > self.max_size:
            logger.debug(
                "%s: entry %r (size %d) exceeds budget %d; not cached",
                self.name,
                key,
                size,
                self.max_size,
            )
            return
        with self._lock:
            self._discard(key)
            while self._entries and self._size + size > self.max_size:
                evicted, (_, evicted_size) = self._entries.popitem(last=False)
                self._size -= evicted_size
                self.evictions += 1
                logger.debug("%s: evicted %r", self.name, evicted)
            self._entries[key] = (value, size)
            self._size += size

    def remove(self, key: Hashable) -> None:
        with self._lock:
            self._discard(key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._size = 0

    @property
    def size(self) -> int:
        with self._lock:
            return self._size

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def _discard(self, key: Hashable) -> None:
        entry = self._entries.pop(key, None)
        if entry is not None:
            self._size -= entry[1]
