"""Implementation of ItemDocumentStore using SQLAlchemy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from itemstore.adapters.db.dialects import DialectName, UnsupportedDialect
from itemstore.interfaces.document_store import (
    DocumentAlreadyExists,
    IndexedField,
    ItemDocumentStore,
)

from .codec import document_to_row, row_to_document, row_to_info
from .schema import items

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.sql.dml import Insert

    from itemstore.domain.ids import ItemId
    from itemstore.domain.model import ItemDocument, ItemInfo

logger = logging.getLogger(__name__)

#: Primary-key violation as reported by SQLite
#: ("UNIQUE constraint failed: items.id") and PostgreSQL ('duplicate key value violates unique constraint "pk_items"').
PRIMARY_KEY_CONFLICT_MARKERS = ("items.id", "pk_items")  # pragma: no mutate

_INFO_COLUMNS = (
    items.c.id,
    items.c.name,
    items.c.template_id,
    items.c.branch_id,
    items.c.parent_id,
)


class SqlAlchemyItemDocumentStore(ItemDocumentStore):
    """ItemDocumentStore backed by the ``items`` table (Postgres or SQLite).

    Each call runs in its own short transaction on a pooled connection, so the
    store can be shared by concurrent request threads.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.dialect = DialectName.from_sqlalchemy(engine)

    # --- lookups ---

    def get(self, item_id: ItemId) -> ItemDocument | None:
        stmt = select(*_INFO_COLUMNS, items.c.field_values).where(items.c.id == item_id)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).fetchone()
        return row_to_document(row) if row is not None else None

    def get_info(self, item_id: ItemId) -> ItemInfo | None:
        stmt = select(*_INFO_COLUMNS).where(items.c.id == item_id)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).fetchone()
        return row_to_info(row) if row is not None else None

    def find_ids(self, indexed_field: IndexedField, value: ItemId) -> list[ItemId]:
        column = items.c[IndexedField(indexed_field).value]
        stmt = select(items.c.id).where(column == value)
        with self.engine.connect() as conn:
            return list(conn.execute(stmt).scalars())

    def count(self) -> int:
        with self.engine.connect() as conn:
            return int(conn.execute(select(func.count()).select_from(items)).scalar_one())

    # --- writes ---

    def insert(self, document: ItemDocument) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(items.insert().values(**document_to_row(document)))
        except IntegrityError as e:
            if _is_primary_key_conflict(e):
                raise DocumentAlreadyExists(document.id) from e
            raise
        logger.debug("Inserted item document %s", document.id)

    def save(self, document: ItemDocument) -> None:
        with self.engine.begin() as conn:
            conn.execute(build_upsert(self.dialect, document))
        logger.debug("Saved item document %s", document.id)

    def delete(self, item_id: ItemId) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(delete(items).where(items.c.id == item_id))
        return result.rowcount == 1

    # --- maintenance ---

    def ensure_indexes(self) -> None:
        with self.engine.begin() as conn:
            for index in items.indexes:
                index.create(conn, checkfirst=True)


def build_upsert(dialect: DialectName, document: ItemDocument) -> Insert:
    """Build the single-document upsert for `dialect`.

    Every column but ``id`` is replaced when the id is already stored.

    Raises:
        UnsupportedDialect: For a backend with no upsert builder.
    """
    values = document_to_row(document)
    if dialect is DialectName.POSTGRES:
        stmt = pg_insert(items).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[items.c.id], set_=_replaced_columns(stmt)
        )
    if dialect is DialectName.SQLITE:
        stmt = sqlite_insert(items).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[items.c.id], set_=_replaced_columns(stmt)
        )
    raise UnsupportedDialect(f"Unsupported dialect: {dialect}")


def _replaced_columns(stmt) -> dict:
    """Every non-key column, taken from the proposed (``excluded``) row."""
    return {
        column.name: stmt.excluded[column.name]
        for column in items.columns
        if column.name != "id"
    }


def _is_primary_key_conflict(integrity_error: IntegrityError) -> bool:
    """True if `integrity_error` reports a duplicate item id.

    NOT NULL and other violations are not conflicts and must propagate.
    """
    msg = str(integrity_error.orig or integrity_error).lower()
    return "unique" in msg and any(
        marker in msg for marker in PRIMARY_KEY_CONFLICT_MARKERS
    )
