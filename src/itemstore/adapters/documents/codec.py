"""Conversion between `ItemDocument` and its stored row representation."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from itemstore.domain.model import FieldValueKey, ItemDocument, ItemInfo


def encode_field_values(field_values: Mapping[FieldValueKey, str]) -> list[dict[str, Any]]:
    """Flatten a field-value mapping into a JSON-ready array of documents."""
    return [
        {
            "field_id": str(key.field_id),
            "language": key.language,
            "version": key.version,
            "value": value,
        }
        for key, value in field_values.items()
    ]


def decode_field_values(entries: list[Mapping[str, Any]] | None) -> dict[FieldValueKey, str]:
    """Rebuild a field-value mapping from its array-of-documents form.

    Entries are applied in order; a later entry for an already seen key wins.
    """
    field_values: dict[FieldValueKey, str] = {}
    for entry in entries or ():
        version = entry.get("version")
        key = FieldValueKey(
            field_id=uuid.UUID(entry["field_id"]),
            language=entry.get("language"),
            version=int(version) if version is not None else None,
        )
        field_values[key] = entry.get("value") or ""
    return field_values


def document_to_row(document: ItemDocument) -> dict[str, Any]:
    """Return the column values for `document`."""
    return {
        "id": document.id,
        "parent_id": document.parent_id,
        "name": document.name,
        "template_id": document.template_id,
        "branch_id": document.branch_id,
        "field_values": encode_field_values(document.field_values),
    }


def row_to_info(row: Any) -> ItemInfo:
    """Build an `ItemInfo` from a result row (attribute access)."""
    return ItemInfo(
        id=row.id,
        name=row.name,
        template_id=row.template_id,
        branch_id=row.branch_id,
        parent_id=row.parent_id,
    )


def row_to_document(row: Any) -> ItemDocument:
    """Build an `ItemDocument` from a result row (attribute access)."""
    return ItemDocument(
        id=row.id,
        name=row.name,
        template_id=row.template_id,
        branch_id=row.branch_id,
        parent_id=row.parent_id,
        field_values=decode_field_values(row.field_values),
    )
