"""Blob store interface definitions.

Binary large objects are addressed by a caller-chosen key, the short form of
the blob identifier (see `itemstore.domain.ids.short_id`). Stores validate
keys; anything other than 32 hexadecimal digits is rejected.
"""

import abc
import re
from dataclasses import dataclass
from typing import BinaryIO

_KEY_PATTERN = re.compile(r"[0-9A-Fa-f]{32}")


@dataclass(frozen=True)
class BlobStats:
    """Metadata of a stored blob."""

    key: str
    size_bytes: int


def validate_key(key: str) -> str:
    """Return the normalized (upper-case) key.

    Raises:
        ValueError: If `key` is not exactly 32 hexadecimal digits.
    """
    if not _KEY_PATTERN.fullmatch(key):
        raise ValueError(f"Invalid blob key {key!r} (expected 32 hex digits)")
    return key.upper()


class BlobStore(abc.ABC):
    """Abstract base class for keyed blob storage."""

    # --- Core Operations ---

    @abc.abstractmethod
    def store(self, key: str, fileobj: BinaryIO) -> BlobStats:
        """Store bytes read from `fileobj` under `key`.

        The store reads from the stream's *current position* until EOF and
        replaces any blob previously stored under the same key.

        Args:
            key: Blob key (32 hex digits).
            fileobj: A binary file-like object to read data from.

        Returns:
            BlobStats: Metadata about the stored blob.

        Raises:
            ValueError: If the key is invalid.
        """

    @abc.abstractmethod
    def open_read(self, key: str) -> BinaryIO | None:
        """Open a blob for reading in binary mode.

        The caller must close the returned stream.

        Args:
            key: Blob key (32 hex digits).

        Returns:
            BinaryIO | None: A readable stream, or ``None`` if no blob exists.

        Raises:
            ValueError: If the key is invalid.
        """

    # --- Convenience Methods ---

    @abc.abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if a blob is stored under `key`.

        Raises:
            ValueError: If the key is invalid.
        """
