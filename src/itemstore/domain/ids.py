"""Item identifiers and the well-known values the repository relies on.

Identifiers are plain `uuid.UUID` values. Two of them are reserved:

- `ROOT_ID` names the repository root item.
- `EMPTY_ID` (the all-zero UUID) is the *storage* sentinel for "no parent" and
  "no value". It is only ever written to or read from a backing store; the
  service layer translates it to ``None`` (or to the configured join parent)
  before anything reaches the caller.
"""

from __future__ import annotations

import uuid
from typing import TypeAlias

ItemId: TypeAlias = uuid.UUID

EMPTY_ID: ItemId = uuid.UUID(int=0)
ROOT_ID: ItemId = uuid.UUID("11111111-1111-1111-1111-111111111111")

#: Template of the root item.
ROOT_TEMPLATE_ID: ItemId = uuid.UUID("c6576836-910c-4a3d-ba03-c277dbd3b827")

#: Template every schema definition (template item) is built from.
TEMPLATE_TEMPLATE_ID: ItemId = uuid.UUID("ab86861a-6030-46c5-b394-e8f99e8b87db")

#: The "created" field, used as the placeholder that makes a blank version visible.
CREATED_FIELD_ID: ItemId = uuid.UUID("25bed78c-4957-4165-998a-ca1b52f67497")

ROOT_NAME = "root"

SHORT_ID_LENGTH = 32


def parse_id(value: str | ItemId) -> ItemId:
    """Parse an identifier from its string form.

    Accepts the canonical dashed form, the braced form (``{...}``) and the
    32-digit short form, in any letter case.

    Args:
        value: The identifier, or an already parsed `uuid.UUID`.

    Returns:
        ItemId: The parsed identifier.

    Raises:
        ValueError: If `value` is not a valid identifier.
    """
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(value.strip())


def short_id(item_id: ItemId) -> str:
    """Render an identifier as 32 upper-case hex digits (no dashes or braces).

    This is the key blobs are addressed by.

    Example:
        >>> short_id(uuid.UUID("11111111-1111-1111-1111-111111111111"))
        '11111111111111111111111111111111'
    """
    return item_id.hex.upper()


def is_empty(item_id: ItemId | None) -> bool:
    """Return True if `item_id` is missing or the empty sentinel."""
    return item_id is None or item_id == EMPTY_ID


def to_storage(item_id: ItemId | None) -> ItemId:
    """Map an optional identifier onto its stored form (``None`` → `EMPTY_ID`)."""
    return EMPTY_ID if item_id is None else item_id


def from_storage(item_id: ItemId) -> ItemId | None:
    """Map a stored identifier back to an optional one (`EMPTY_ID` → ``None``)."""
    return None if item_id == EMPTY_ID else item_id
