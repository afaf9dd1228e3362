"""In-memory blob store backend.

Blobs live entirely in RAM, keyed by their normalized (upper-case) key; there
is no persistence across process restarts. Intended for tests, examples and
local development.

- `store()` reads the whole stream and replaces any previous blob atomically.
- `open_read()` returns a fresh `BytesIO` positioned at 0; the **caller** must
  close it (or use it as a context manager).
- All installs and lookups happen under an `RLock`.
"""

from __future__ import annotations

import io
import threading
from typing import BinaryIO

from itemstore.interfaces.blob_store import BlobStats, BlobStore, validate_key

__all__ = ["MemoryBlobStore"]


class MemoryBlobStore(BlobStore):
    """Keyed blob store backed by an in-memory dict."""

    def __init__(self) -> None:
        self._objects: dict[str, bytes] = {}
        self._lock = threading.RLock()

    def store(self, key: str, fileobj: BinaryIO) -> BlobStats:
        key = validate_key(key)
        data = fileobj.read()
        with self._lock:
            self._objects[key] = data
        return BlobStats(key=key, size_bytes=len(data))

    def open_read(self, key: str) -> io.BytesIO | None:
        key = validate_key(key)
        with self._lock:
            data = self._objects.get(key)
        return io.BytesIO(data) if data is not None else None

    def exists(self, key: str) -> bool:
        key = validate_key(key)
        with self._lock:
            return key in self._objects
