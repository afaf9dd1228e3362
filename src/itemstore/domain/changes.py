"""Change sets handed to `save_item` by the host repository.

A change set carries property changes (name, template, branch) keyed by
property name, and an ordered list of field changes. Each field change knows
the language and version it was made in, and the field definition says
whether the field ignores either of them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .ids import ItemId
from .model import VersionUri

NAME_PROPERTY = "name"
TEMPLATE_PROPERTY = "templateid"
BRANCH_PROPERTY = "branchid"


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    """The parts of a field's schema definition that affect storage scope."""

    is_shared: bool = False
    is_unversioned: bool = False


@dataclass(frozen=True, slots=True)
class FieldChange:
    """A single field mutation.

    Attributes:
        field_id: The field being changed.
        value: New value (ignored when `remove` is set).
        language: Language the change was made in.
        version: Version the change was made in.
        remove: Delete the stored value instead of writing one.
        definition: Field definition; ``None`` is treated as shared and
            unversioned.
    """

    field_id: ItemId
    value: str = ""
    language: str | None = None
    version: int | None = None
    remove: bool = False
    definition: FieldDefinition | None = None

    @property
    def scope(self) -> VersionUri:
        """The language/version the value is stored under.

        Shared fields drop the language, unversioned fields drop the version.
        """
        definition = self.definition
        language = None if definition is None or definition.is_shared else self.language
        version = (
            None if definition is None or definition.is_unversioned else self.version
        )
        return VersionUri(language, version)


@dataclass(slots=True)
class ItemChanges:
    """Property and field changes for one item."""

    properties: dict[str, Any] = field(default_factory=dict)
    field_changes: list[FieldChange] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.properties = _lower_keys(self.properties)

    @property
    def has_properties_changed(self) -> bool:
        """True if at least one property change is present."""
        return bool(self.properties)

    @property
    def has_fields_changed(self) -> bool:
        """True if at least one field change is present."""
        return bool(self.field_changes)

    def has_property(self, name: str) -> bool:
        """True if the change set carries a value for property `name`."""
        return name.lower() in self.properties

    def get_property_value(self, name: str) -> Any:
        """Return the changed value of property `name`, or ``None`` if absent."""
        return self.properties.get(name.lower())

    def set_property(self, name: str, value: Any) -> ItemChanges:
        """Record a property change; returns self for chaining."""
        self.properties[name.lower()] = value
        return self

    def add_field_change(self, change: FieldChange) -> ItemChanges:
        """Append a field change; returns self for chaining."""
        self.field_changes.append(change)
        return self


def _lower_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    return {name.lower(): value for name, value in values.items()}
