"""Sized cache container interface.

The prefetch cache stores its entries in a bounded container that accounts
for the size of each entry and evicts on its own. The container must be safe
to call from many threads at once; callers add no locking of their own.
"""

from __future__ import annotations

import abc
from collections.abc import Hashable
from typing import Any


class SizedCache(abc.ABC):
    """Size-accounted key/value cache with its own eviction policy."""

    #: A disabled cache misses on every `get` and ignores every `put`.
    enabled: bool

    @abc.abstractmethod
    def get(self, key: Hashable) -> Any | None:
        """Return the cached value, or ``None`` on a miss."""

    @abc.abstractmethod
    def put(self, key: Hashable, value: Any, size: int) -> None:
        """Insert or replace `key`, accounting `size` units against the budget.

        The container may evict other entries to make room, and may decline to
        store an entry that does not fit at all.
        """

    @abc.abstractmethod
    def remove(self, key: Hashable) -> None:
        """Drop `key` if present."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    @property
    @abc.abstractmethod
    def size(self) -> int:
        """Total size of the entries currently held."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Number of entries currently held."""
