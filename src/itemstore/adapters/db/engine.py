"""Engine construction for the item store.

Every engine comes from `make_engine()`. SQLite connections are switched to
WAL journaling and wait up to `SQLITE_BUSY_TIMEOUT_MS` for the write lock,
which lets concurrent request threads share one database file. Other
backends get ``pool_pre_ping`` so dropped pooled connections are replaced
instead of failing a request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}
SQLITE_BUSY_TIMEOUT_MS = 5000

SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA temp_store=MEMORY",
    f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}",
)


def is_sqlite(url: str | URL) -> bool:
    """True if `url` points at a SQLite database."""
    return make_url(str(url)).get_backend_name() in SQLITE_NAMES


def is_sqlite_memory(url: str | URL) -> bool:
    """True for in-memory SQLite (``sqlite://`` or ``:memory:``)."""
    parsed = make_url(str(url))
    return is_sqlite(parsed) and parsed.database in (None, "", ":memory:")


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create the engine for `url`.

    An in-memory SQLite database exists only inside the connection that
    opened it, so such engines hold a single shared connection
    (``StaticPool``) usable from any thread.

    Args:
        url: Database URL.
        echo: Log every SQL statement.

    Returns:
        Engine: The configured engine.
    """
    if not is_sqlite(url):
        return create_engine(url, echo=echo, pool_pre_ping=True)

    options = {}
    if is_sqlite_memory(url):
        options = {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    engine = create_engine(url, echo=echo, **options)
    event.listen(engine, "connect", _apply_sqlite_pragmas)
    return engine


def _apply_sqlite_pragmas(dbapi_conn, _conn_record) -> None:
    cursor = dbapi_conn.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()
