"""Item document mapper.

Translates repository operations into document store lookups and writes. The
mapper is the single source of truth for item data; it holds no state of its
own besides the store and the join-parent id.

Absence is never an exception here. Depending on the operation a missing
document is reported as ``None``, ``False``, ``-1`` or an empty list, and a
failed precondition (duplicate id, unknown parent) is declined the same way
without writing anything. Errors raised by the store itself propagate
unchanged.

Sentinels
---------
Stores represent "no parent" and "no value" with `EMPTY_ID`. That value never
leaves this module: a stored empty parent is reported as the configured join
parent (the repository item the store's top-level items hang under), and
empty template/branch ids are reported as ``None``. In the other direction,
the join parent passed as a parent id means "top level".
"""

from __future__ import annotations

import logging

from itemstore.domain.changes import (
    BRANCH_PROPERTY,
    NAME_PROPERTY,
    TEMPLATE_PROPERTY,
    ItemChanges,
)
from itemstore.domain.ids import (
    CREATED_FIELD_ID,
    EMPTY_ID,
    ROOT_ID,
    ROOT_NAME,
    ROOT_TEMPLATE_ID,
    TEMPLATE_TEMPLATE_ID,
    ItemId,
    from_storage,
    to_storage,
)
from itemstore.domain.model import (
    FieldValueKey,
    ItemDefinition,
    ItemDocument,
    ItemInfo,
    VersionUri,
)
from itemstore.interfaces.document_store import (
    DocumentAlreadyExists,
    IndexedField,
    ItemDocumentStore,
)

logger = logging.getLogger(__name__)

NO_VERSION = -1


class ItemDocumentMapper:
    """Reads and writes item documents on behalf of the repository.

    Args:
        store: The backing document store.
        join_parent_id: Repository item that top-level documents (stored with
            an empty parent) are reported under.
    """

    def __init__(self, store: ItemDocumentStore, join_parent_id: ItemId) -> None:
        self.store = store
        self.join_parent_id = join_parent_id

    # --- identity & hierarchy ---

    def load_definition(self, item_id: ItemId) -> ItemDefinition | None:
        """Look up the definition of an item by primary key (no field values).

        Returns:
            ItemDefinition | None: The definition, or ``None`` if the item
            does not exist.
        """
        info = self.store.get_info(item_id)
        if info is None:
            return None
        return self._definition_from(info)

    def get_child_ids(self, parent_id: ItemId) -> list[ItemId]:
        """Return the ids of the items directly under `parent_id`.

        The join parent and the empty id are equivalent inputs: both list the
        store's top-level items.
        """
        return self.store.find_ids(
            IndexedField.PARENT_ID, self._parent_to_storage(parent_id)
        )

    def get_parent_id(self, item_id: ItemId) -> ItemId | None:
        """Return the parent of an item, or ``None`` if the item does not exist.

        Top-level items report the join parent.
        """
        info = self.store.get_info(item_id)
        if info is None:
            return None
        return self._parent_from_storage(info.parent_id)

    def get_template_item_ids(self) -> list[ItemId]:
        """Return the ids of all template items (schema definitions)."""
        return self.store.find_ids(IndexedField.TEMPLATE_ID, TEMPLATE_TEMPLATE_ID)

    # --- versions & fields ---

    def get_item_versions(self, item_id: ItemId) -> list[VersionUri] | None:
        """Return the distinct language/version pairs an item has.

        Only keys scoped to both a language and a version contribute. Pairs
        are returned in the order they are first seen.

        Returns:
            list[VersionUri] | None: The versions (possibly empty), or
            ``None`` if the item does not exist.
        """
        document = self.store.get(item_id)
        if document is None:
            return None

        versions: list[VersionUri] = []
        for key in document.field_values:
            if not key.is_versioned:
                continue
            if any(key.matches(version) for version in versions):
                continue
            versions.append(key.as_version_uri())
        return versions

    def get_item_fields(
        self, item_id: ItemId, version_uri: VersionUri
    ) -> dict[ItemId, str] | None:
        """Return field id → value for every stored value visible in `version_uri`.

        Returns:
            dict[ItemId, str] | None: The visible values, or ``None`` if the
            item does not exist.
        """
        document = self.store.get(item_id)
        if document is None:
            return None
        return {
            key.field_id: document.field_values[key]
            for key in document.matching_keys(version_uri)
        }

    # --- mutations ---

    def create_item(
        self,
        item_id: ItemId,
        name: str,
        template_id: ItemId | None,
        parent_id: ItemId | None = None,
    ) -> bool:
        """Create a new item with no field values.

        Args:
            item_id: Id of the new item.
            name: Display name.
            template_id: Template of the new item.
            parent_id: Parent item; ``None`` (or the join parent) creates a
                top-level item.

        Returns:
            bool: False without writing if the id is taken or the parent does
            not exist; True once the item was created.
        """
        if self.store.get_info(item_id) is not None:
            logger.debug("create_item(%s): item already exists", item_id)
            return False

        stored_parent = self._parent_to_storage(parent_id)
        if stored_parent != EMPTY_ID and self.store.get_info(stored_parent) is None:
            logger.debug("create_item(%s): parent %s does not exist", item_id, parent_id)
            return False

        document = ItemDocument(
            id=item_id,
            name=name,
            template_id=to_storage(template_id),
            parent_id=stored_parent,
        )
        try:
            self.store.insert(document)
        except DocumentAlreadyExists:
            # lost a race with a concurrent create of the same id
            logger.debug("create_item(%s): item already exists", item_id)
            return False
        logger.debug("Created item %s (%r) under %s", item_id, name, parent_id)
        return True

    def add_version(self, item_id: ItemId, base_version: VersionUri) -> int:
        """Add a version of an item in the language of `base_version`.

        With a positive `base_version.version`, every value visible in
        `base_version` is copied into a new version numbered one past the
        highest version among the copied values. Otherwise, or if nothing was
        visible to copy, a blank version 1 is added, made discoverable by an
        empty "created" field value.

        Stored values are never overwritten. If any key of the new version is
        already present, nothing is written and -1 is returned.

        Returns:
            int: The new version number, or -1 if the item does not exist or
            the new version would collide with stored values.
        """
        document = self.store.get(item_id)
        if document is None:
            return NO_VERSION

        number, new_values = NO_VERSION, {}
        if base_version.version is not None and base_version.version > 0:
            number, new_values = _copied_version(document, base_version)

        if number == NO_VERSION:
            number = 1
            new_values = {FieldValueKey(CREATED_FIELD_ID, base_version.language, 1): ""}

        taken = [key for key in new_values if key in document.field_values]
        if taken:
            logger.warning(
                "Item %s already has version %s/%d (%d colliding values); "
                "version not added",
                item_id,
                base_version.language,
                number,
                len(taken),
            )
            return NO_VERSION

        document.field_values.update(new_values)
        self.store.save(document)
        logger.debug(
            "Added version %s/%d to item %s", base_version.language, number, item_id
        )
        return number

    def delete_item(self, item_id: ItemId) -> bool:
        """Delete an item's document; True if a document was removed."""
        return self.store.delete(item_id)

    def save_item(self, item_id: ItemId, changes: ItemChanges) -> bool:
        """Apply a change set to an item and persist it once.

        Property changes update name, template and branch. A property that is
        not part of the change set (or a blank name) keeps its value; an
        explicit ``None`` or empty id clears the template/branch.

        Each field change is stored under its scope (shared fields drop the
        language, unversioned fields drop the version). The first stored key
        of that field visible in the scope is overwritten or, for removals,
        deleted; when none is visible a new value is added under the exact
        scope.

        Returns:
            bool: False if the item does not exist, True otherwise (even when
            nothing changed).
        """
        document = self.store.get(item_id)
        if document is None:
            return False

        if not (changes.has_properties_changed or changes.has_fields_changed):
            return True

        if changes.has_properties_changed:
            _apply_property_changes(document, changes)

        for change in changes.field_changes:
            if change is None:
                continue
            scope = change.scope
            matching = document.matching_keys(scope, change.field_id)
            if change.remove:
                if matching:
                    del document.field_values[matching[0]]
            elif matching:
                document.field_values[matching[0]] = change.value
            else:
                key = FieldValueKey(change.field_id, scope.language, scope.version)
                document.field_values[key] = change.value

        self.store.save(document)
        logger.debug("Saved item %s", item_id)
        return True

    # --- bootstrap ---

    def ensure_root(self, language: str) -> bool:
        """Seed an empty store with the root item and its first version.

        The root and its blank version 1 are written as one document. Does
        nothing if the store holds any document.

        Returns:
            bool: True if the root item was created.
        """
        if self.store.count() > 0:
            return False

        root = ItemDocument(
            id=ROOT_ID,
            name=ROOT_NAME,
            template_id=ROOT_TEMPLATE_ID,
            parent_id=EMPTY_ID,
            field_values={FieldValueKey(CREATED_FIELD_ID, language, 1): ""},
        )
        try:
            self.store.insert(root)
        except DocumentAlreadyExists:
            return False
        logger.info("Initialized empty item store with root item %s", ROOT_ID)
        return True

    # --- helpers ---

    def _definition_from(self, info: ItemInfo) -> ItemDefinition:
        return ItemDefinition(
            id=info.id,
            name=info.name,
            template_id=from_storage(info.template_id),
            branch_id=from_storage(info.branch_id),
            parent_id=self._parent_from_storage(info.parent_id),
        )

    def _parent_to_storage(self, parent_id: ItemId | None) -> ItemId:
        if parent_id is None or parent_id == self.join_parent_id:
            return EMPTY_ID
        return parent_id

    def _parent_from_storage(self, parent_id: ItemId) -> ItemId:
        return self.join_parent_id if parent_id == EMPTY_ID else parent_id


def _apply_property_changes(document: ItemDocument, changes: ItemChanges) -> None:
    name = changes.get_property_value(NAME_PROPERTY)
    if name:
        document.name = str(name)
    if changes.has_property(TEMPLATE_PROPERTY):
        document.template_id = to_storage(changes.get_property_value(TEMPLATE_PROPERTY))
    if changes.has_property(BRANCH_PROPERTY):
        document.branch_id = to_storage(changes.get_property_value(BRANCH_PROPERTY))



def _copied_version(
    document: ItemDocument, base_version: VersionUri
) -> tuple[int, dict[FieldValueKey, str]]:
    """Values visible in `base_version`, re-keyed under the next version number.

    Returns:
        tuple: The new version number and its values, or ``(-1, {})`` if
        nothing could be copied.
    """
    source = document.matching_keys(base_version)
    highest = max(
        (key.version for key in source if key.version is not None), default=None
    )
    if highest is None or highest <= 0:
        return NO_VERSION, {}

    number = highest + 1
    return number, {
        FieldValueKey(key.field_id, key.language, number): document.field_values[key]
        for key in source
    }
