"""Alembic round trip against a temporary SQLite file.

Checks that ``upgrade head`` creates the ``items`` table with its primary key
and both scan indexes, that the migrated schema matches the table metadata,
and that ``downgrade base`` removes it again.
"""

from __future__ import annotations

from alembic import command
from alembic.autogenerate import compare_metadata
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine, inspect

from itemstore import config
from itemstore.adapters.db.metadata import metadata

# mypy: disable-error-code=no-untyped-def


def test_upgrade_creates_items_table_and_indexes(sqlite_url: str):
    """The migrated schema has the table, key and indexes the store relies on."""
    command.upgrade(config.build_alembic_config(sqlite_url), "head")
    engine = create_engine(sqlite_url)
    try:
        inspector = inspect(engine)
        assert "items" in inspector.get_table_names()
        assert inspector.get_pk_constraint("items")["constrained_columns"] == ["id"]
        indexes = {ix["name"]: ix["column_names"] for ix in inspector.get_indexes("items")}
        assert indexes == {
            "ix_items_parent_id": ["parent_id"],
            "ix_items_template_id": ["template_id"],
        }
    finally:
        engine.dispose()


def test_migrated_schema_matches_metadata(sqlite_url: str):
    """Autogenerate finds nothing to change after upgrading to head."""
    command.upgrade(config.build_alembic_config(sqlite_url), "head")
    engine = create_engine(sqlite_url)
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn, opts={"compare_type": False})
            assert compare_metadata(context, metadata) == []
    finally:
        engine.dispose()


def test_downgrade_removes_items_table(sqlite_url: str):
    """Downgrading to base drops the table again."""
    cfg = config.build_alembic_config(sqlite_url)
    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    engine = create_engine(sqlite_url)
    try:
        assert "items" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()
