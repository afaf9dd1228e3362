"""Adapter fixtures for contract tests.

Provided fixtures
-----------------
- **document_store**: a fresh, empty `ItemDocumentStore` for every backend:
  ``"memory"``, ``"sqlite-memory"`` (tables from metadata),
  ``"sqlite-file"`` (schema from the Alembic migrations) and ``"postgres"``
  (migrated Postgres container; skipped without Docker).
- **blob_store**: a fresh `BlobStore` for ``"memory"`` and ``"local"``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from itemstore.adapters.blobs import LocalBlobStore, MemoryBlobStore
from itemstore.adapters.documents import (
    InMemoryItemDocumentStore,
    SqlAlchemyItemDocumentStore,
)

if TYPE_CHECKING:
    from itemstore.interfaces.blob_store import BlobStore
    from itemstore.interfaces.document_store import ItemDocumentStore


@pytest.fixture(params=["memory", "sqlite-memory", "sqlite-file", "postgres"])
def document_store(request: pytest.FixtureRequest) -> ItemDocumentStore:
    """Return a fresh document store for the requested backend."""
    match request.param:
        case "memory":
            return InMemoryItemDocumentStore()
        case "sqlite-memory":
            return SqlAlchemyItemDocumentStore(
                request.getfixturevalue("sqlite_engine_memory")
            )
        case "sqlite-file":
            return SqlAlchemyItemDocumentStore(
                request.getfixturevalue("sqlite_engine_file")
            )
        case "postgres":
            return SqlAlchemyItemDocumentStore(
                request.getfixturevalue("postgres_engine")
            )
        case _:
            raise ValueError(f"unknown store type: {request.param}")


@pytest.fixture(params=["memory", "local"])
def blob_store(request: pytest.FixtureRequest, tmp_path) -> BlobStore:
    """Return a fresh blob store for the requested backend."""
    match request.param:
        case "memory":
            return MemoryBlobStore()
        case "local":
            return LocalBlobStore(tmp_path / "blobs")
        case _:
            raise ValueError(f"unknown blob store type: {request.param}")
