"""Item document table.

One row per item document. Identity and hierarchy attributes live in their own
columns so the two equality scans the repository needs (children of a parent,
items of a template) are index lookups; the field values stay together in a
single JSON column, as an array of documents:

    [{"field_id": "...", "language": "en" | null, "version": 1 | null, "value": "..."}, ...]

Constraints (enforced here):

| Constraint             | Purpose                                    |
|------------------------|--------------------------------------------|
| PRIMARY KEY(id)        | one document per item id                   |
| INDEX(parent_id)       | children-of scans                          |
| INDEX(template_id)     | template scans                             |

"No parent"/"no template"/"no branch" are stored as the all-zero GUID rather
than NULL so the children-of scan for top-level items stays an equality
predicate.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Table, Text

from itemstore.adapters.db.metadata import metadata
from itemstore.adapters.db.sa_types import GUID, PORTABLE_JSON

__all__ = ["items"]

items = Table(
    "items",
    metadata,
    Column(
        "id",
        GUID(),
        primary_key=True,
        nullable=False,
        comment="Item identifier (immutable).",
    ),
    Column(
        "parent_id",
        GUID(),
        nullable=False,
        comment="Containing item; all-zero GUID for top-level items.",
    ),
    Column(
        "name",
        Text(),
        nullable=False,
        comment="Display name.",
    ),
    Column(
        "template_id",
        GUID(),
        nullable=False,
        comment="Template the item conforms to; all-zero GUID if none.",
    ),
    Column(
        "branch_id",
        GUID(),
        nullable=False,
        comment="Branch template the item was created from; all-zero GUID if none.",
    ),
    Column(
        "field_values",
        PORTABLE_JSON,
        nullable=False,
        comment="Versioned/localized field values (array of documents).",
    ),
    Index(None, "parent_id"),
    Index(None, "template_id"),
    comment="Item documents. One row per content item.",
)
