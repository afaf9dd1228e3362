"""Alembic environment for the ITEMSTORE schema.

The database URL is taken from ``-x url=...`` first, then from the
``sqlalchemy.url`` main option (as set by `build_alembic_config`), and last
from ``ITEMSTORE_DB_URL``. Column types and server defaults are compared on
autogenerate; SQLite runs in batch mode for ALTER TABLE.
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

import itemstore.adapters.documents.schema  # noqa: F401 # pylint: disable=unused-import
from itemstore.adapters.db.metadata import metadata
from itemstore.config import ALEMBIC_URL_KEY, DB_URL_VAR

# pylint: disable=no-member

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def get_url() -> str:
    """The database URL to migrate."""
    candidates = (
        context.get_x_argument(as_dictionary=True).get("url"),
        config.get_main_option(ALEMBIC_URL_KEY),
        os.environ.get(DB_URL_VAR),
    )
    for url in candidates:
        # an unexpanded ini placeholder counts as unset
        if url and "%(" not in url:
            return url
    raise RuntimeError(f"Set {DB_URL_VAR} to the item store database URL.")


def run_migrations_offline() -> None:
    """Write the migration SQL instead of executing it."""
    context.configure(
        url=get_url(),
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Migrate a live database."""
    engine = engine_from_config(
        {ALEMBIC_URL_KEY: get_url()}, prefix="sqlalchemy.", poolclass=pool.NullPool
    )
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=metadata,
            render_as_batch=connection.dialect.name == "sqlite",
            **COMPARE_OPTIONS,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
