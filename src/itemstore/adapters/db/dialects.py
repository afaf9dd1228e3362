"""Database backends the document store can run on.

Upserts are written per backend, so the store resolves its engine's dialect
once, up front, and refuses anything it has no statement builder for.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """Raised for a backend ITEMSTORE cannot store items in."""


class DialectName(str, Enum):
    """Backends with an upsert builder (values are SQLAlchemy dialect names)."""

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Resolve a dialect name, an alias (``pg``, ``postgres``) or a
        driver-qualified name such as ``postgresql+psycopg``.

        Raises:
            UnsupportedDialect: For any other backend.
        """
        backend, _, _driver = (dialect_str or "").strip().lower().partition("+")
        member = _ALIASES.get(backend)
        if member is None:
            raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")
        return member

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Resolve the dialect an Engine or Connection talks to.

        Raises:
            UnsupportedDialect: If `obj` has no dialect or an unsupported one.
        """
        dialect = getattr(obj, "dialect", None)
        if dialect is None:
            raise UnsupportedDialect(f"{type(obj).__name__} has no SQLAlchemy dialect")
        return cls.from_string(dialect.name)


_ALIASES = {
    "postgresql": DialectName.POSTGRES,
    "postgres": DialectName.POSTGRES,
    "pg": DialectName.POSTGRES,
    "sqlite": DialectName.SQLITE,
}
