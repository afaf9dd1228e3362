"""Item data model.

An item is stored as a single document: its identity and hierarchy pointer
plus a flat mapping from `FieldValueKey` to string value. The key carries the
field id and an optional language and version; a missing language means the
value is shared across languages, a missing version means it applies to every
version. Resolving a value for a concrete language/version therefore goes
through `matches()` rather than exact key equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .ids import EMPTY_ID, ItemId

# Rough per-entry bookkeeping cost used for cache weights: five identifiers plus
# object overhead.
_ID_WEIGHT = 16
_ENTRY_OVERHEAD = 64


@dataclass(frozen=True, slots=True)
class VersionUri:
    """A version/language scope.

    Attributes:
        language: Language tag (e.g. ``"en"``), or ``None`` for "no language".
        version: Version number (1-based), or ``None`` for "no version".
    """

    language: str | None = None
    version: int | None = None


@dataclass(frozen=True, slots=True)
class FieldValueKey:
    """Composite key of one stored field value within an item."""

    field_id: ItemId
    language: str | None = None  # None: shared across all languages
    version: int | None = None  # None: unversioned, applies to every version

    @property
    def is_versioned(self) -> bool:
        """True if the key is scoped to both a language and a version."""
        return self.language is not None and self.version is not None

    def matches(self, scope: VersionUri) -> bool:
        """Shortcut for `matches(self, scope)`."""
        return matches(self, scope)

    def as_version_uri(self) -> VersionUri:
        """Return the language/version pair of this key."""
        return VersionUri(self.language, self.version)


def matches(key: FieldValueKey, scope: VersionUri) -> bool:
    """Return True if a stored value under `key` is visible in `scope`.

    A key matches when its language is unset or equal to the requested
    language, and its version is unset or equal to the requested version. A
    shared, unversioned value is therefore visible everywhere, while a fully
    scoped value is visible only in its exact language and version.

    Args:
        key: The stored field-value key.
        scope: The requested language/version.

    Returns:
        bool: Whether the key satisfies the request.
    """
    return (key.language is None or key.language == scope.language) and (
        key.version is None or key.version == scope.version
    )


@dataclass(slots=True)
class ItemInfo:
    """Identity and hierarchy attributes of an item, as stored.

    Identifiers hold `EMPTY_ID` where nothing is set; see `itemstore.domain.ids`.
    """

    id: ItemId
    name: str = ""
    template_id: ItemId = EMPTY_ID
    branch_id: ItemId = EMPTY_ID
    parent_id: ItemId = EMPTY_ID


@dataclass(slots=True)
class ItemDocument(ItemInfo):
    """A full item document: `ItemInfo` plus the item's field values."""

    field_values: dict[FieldValueKey, str] = field(default_factory=dict)

    def info(self) -> ItemInfo:
        """Return the document without its field values."""
        return ItemInfo(
            id=self.id,
            name=self.name,
            template_id=self.template_id,
            branch_id=self.branch_id,
            parent_id=self.parent_id,
        )

    def matching_keys(
        self, scope: VersionUri, field_id: ItemId | None = None
    ) -> list[FieldValueKey]:
        """Return the keys visible in `scope`, optionally for one field only.

        Keys are returned in insertion order.
        """
        return [
            key
            for key in self.field_values
            if key.matches(scope) and (field_id is None or key.field_id == field_id)
        ]


@dataclass(frozen=True, slots=True)
class ItemDefinition:
    """Lightweight item metadata as seen by callers.

    Sentinels are already translated: `template_id` and `branch_id` are
    ``None`` when unset, and `parent_id` of a top-level item is the configured
    join parent.
    """

    id: ItemId
    name: str
    template_id: ItemId | None
    branch_id: ItemId | None
    parent_id: ItemId

    @property
    def is_empty(self) -> bool:
        """True for a definition whose identity is the empty identifier."""
        return self.id == EMPTY_ID

    @property
    def weight(self) -> int:
        """Approximate in-memory size, used as the cache entry weight."""
        return _ENTRY_OVERHEAD + 5 * _ID_WEIGHT + 2 * len(self.name)
