"""Local filesystem blob store adapter."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO

from itemstore.interfaces.blob_store import BlobStats, BlobStore, validate_key

CHUNK_SIZE = 1024 * 1024

PathLike = str | os.PathLike[str]


class LocalBlobStore(BlobStore):
    """BlobStore implementation that uses the local filesystem.

    Blobs are sharded as ``root/AB/CD/ABCD...``. Writes go to a temporary file
    in the root directory and are moved into place with `os.replace`, so a
    reader sees either the previous blob or the complete new one.

    Args:
        root: Directory to keep blobs under; created if missing.
        fsync: Flush file contents to disk before installing them.
    """

    def __init__(self, root: PathLike, *, fsync: bool = False) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        self._fsync = fsync

    # --- Core Operations ---

    def store(self, key: str, fileobj: BinaryIO) -> BlobStats:
        dest = self._determine_path(key)
        size = 0

        with tempfile.NamedTemporaryFile(dir=self._root, delete=False) as tmp:
            tmp_path = Path(tmp.name)
            try:
                for chunk in iter(lambda: fileobj.read(CHUNK_SIZE), b""):
                    tmp.write(chunk)
                    size += len(chunk)
                if self._fsync:
                    tmp.flush()
                    os.fsync(tmp.fileno())
            except BaseException:
                tmp.close()
                tmp_path.unlink(missing_ok=True)
                raise

        dest.parent.mkdir(parents=True, exist_ok=True)
        os.replace(tmp_path, dest)

        return BlobStats(key=dest.name, size_bytes=size)

    def open_read(self, key: str) -> BinaryIO | None:
        path = self._determine_path(key)
        try:
            return path.open("rb")
        except FileNotFoundError:
            return None

    # --- Convenience Methods ---

    def exists(self, key: str) -> bool:
        return self._determine_path(key).is_file()

    # --- Internal Helpers ---

    def _determine_path(self, key: str) -> Path:
        """Determine the filesystem path for a key: root/AB/CD/ABCD..."""
        key = validate_key(key)
        return self._root / key[0:2] / key[2:4] / key
