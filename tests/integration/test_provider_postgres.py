"""The provider and document store against a migrated PostgreSQL database.

Skipped when Docker is not available (see ``tests/fixtures/postgres.py``).
"""

from __future__ import annotations

import uuid
from pathlib import Path

import pytest
from sqlalchemy import inspect
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import IntegrityError

from itemstore.adapters.documents import SqlAlchemyItemDocumentStore
from itemstore.bootstrap import build_provider
from itemstore.config import Settings
from itemstore.domain.changes import FieldChange, FieldDefinition, ItemChanges
from itemstore.domain.ids import ROOT_ID
from itemstore.domain.model import FieldValueKey, ItemDocument, VersionUri
from tests.fixtures.items import (
    JOIN_PARENT_ID,
    SAMPLE_TEMPLATE_ID,
    SORTORDER_FIELD_ID,
    TITLE_FIELD_ID,
)

# pylint: disable=redefined-outer-name

ITEM = uuid.UUID("f1ad1c4e-5dc4-4c7e-9a61-2a1b3c4d5e6f")


@pytest.fixture
def provider(pg_url: str, postgres_engine, tmp_path: Path):
    """A provider over the Postgres container."""
    settings = Settings(
        db_url=pg_url,
        join_parent_id=JOIN_PARENT_ID,
        blob_root=tmp_path / "blobs",
        root_language="en",
    )
    return build_provider(settings, engine=postgres_engine)


def test_field_values_column_is_jsonb(postgres_engine):
    """The migration stores field values as JSONB on Postgres."""
    columns = {c["name"]: c for c in inspect(postgres_engine).get_columns("items")}
    assert isinstance(columns["field_values"]["type"], JSONB)


def test_save_upserts_existing_document(provider):
    """Repeated saves replace the row in place (ON CONFLICT DO UPDATE)."""
    assert provider.create_item(ITEM, "page", SAMPLE_TEMPLATE_ID, ROOT_ID)
    assert provider.add_version(ITEM, VersionUri("en", 0)) == 1

    changes = (
        ItemChanges(properties={"name": "Page " * 200})
        .add_field_change(
            FieldChange(TITLE_FIELD_ID, "Welcome", "en", 1, definition=FieldDefinition())
        )
        .add_field_change(
            FieldChange(
                SORTORDER_FIELD_ID,
                "100",
                definition=FieldDefinition(is_shared=True, is_unversioned=True),
            )
        )
    )
    assert provider.save_item(ITEM, changes)
    assert provider.add_version(ITEM, VersionUri("en", 1)) == 2

    assert provider.mapper.load_definition(ITEM).name == "Page " * 200
    assert provider.get_item_fields(ITEM, VersionUri("en", 2)) == {
        TITLE_FIELD_ID: "Welcome",
        SORTORDER_FIELD_ID: "100",
    }
    assert provider.get_child_ids(ROOT_ID) == [ITEM]


def test_duplicate_create_is_declined(provider):
    """A second create of the same id is reported as such, not as an error."""
    assert provider.create_item(ITEM, "page", SAMPLE_TEMPLATE_ID)
    assert not provider.create_item(ITEM, "other", SAMPLE_TEMPLATE_ID)


def test_not_null_violation_propagates(postgres_engine):
    """Only primary-key conflicts are turned into DocumentAlreadyExists."""
    store = SqlAlchemyItemDocumentStore(postgres_engine)
    document = ItemDocument(
        id=ITEM,
        name=None,  # type: ignore[arg-type]
        field_values={FieldValueKey(TITLE_FIELD_ID, "en", 1): "x"},
    )
    with pytest.raises(IntegrityError):
        store.insert(document)
