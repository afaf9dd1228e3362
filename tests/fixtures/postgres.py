"""PostgreSQL fixtures for ITEMSTORE.

Engines are backed by a throwaway Postgres 17 server started with
Testcontainers and migrated to Alembic head. Tests that use them are skipped
when no Docker daemon answers.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

import docker
import pytest
from alembic import command
from sqlalchemy import text
from testcontainers.postgres import PostgresContainer

from itemstore import config
from itemstore.adapters.db.engine import make_engine

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=redefined-outer-name

POSTGRES_IMAGE = "postgres:17"

#: Fixtures that need the container; tests using any of them are skipped
#: without Docker.
POSTGRES_FIXTURES = {"pg_url", "postgres_engine"}

#: Parametrised fixtures whose ``"postgres"`` param requests the container.
BACKEND_FIXTURES = ("document_store",)


def _docker_available() -> bool:
    try:
        docker.from_env().ping()
    except Exception:  # pylint: disable=broad-except
        return False
    return True


DOCKER_UP = _docker_available()


def pytest_collection_modifyitems(items):
    """Skip Postgres-backed tests if Docker is unavailable."""
    if DOCKER_UP:
        return
    skip = pytest.mark.skip(reason="Docker/Testcontainers backend not available")
    for item in items:
        fixtures = set(getattr(item, "fixturenames", ()))
        callspec = getattr(item, "callspec", None)
        params = callspec.params if callspec is not None else {}
        wants_postgres = any(
            params.get(name) == "postgres" for name in BACKEND_FIXTURES
        )
        if fixtures & POSTGRES_FIXTURES or wants_postgres:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def pg_url() -> Iterator[str]:
    """URL of a session-wide Postgres container, migrated to head once."""
    with PostgresContainer(
        image=POSTGRES_IMAGE,
        username="itemstore",
        password="itemstore",
        dbname="itemstore",
    ) as pg:
        # testcontainers hands out psycopg2 URLs; the project uses psycopg 3
        url = re.sub(r"\+psycopg2\b", "+psycopg", pg.get_connection_url())
        command.upgrade(config.build_alembic_config(url), "head")
        yield url


@pytest.fixture
def postgres_engine(pg_url: str) -> Iterator[Engine]:
    """Per-test engine on the session container; ``items`` is emptied after."""
    engine = make_engine(pg_url)
    try:
        yield engine
    finally:
        with engine.begin() as conn:
            conn.execute(text("TRUNCATE TABLE items"))
        engine.dispose()
