"""Custom SQLAlchemy types for ITEMSTORE."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import TypeDecorator

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

__all__ = ["GUID", "PORTABLE_JSON"]


PORTABLE_JSON = JSON(none_as_null=True).with_variant(
    JSONB(none_as_null=True), "postgresql"
)


class GUID(TypeDecorator[uuid.UUID]):  # pylint: disable=too-many-ancestors
    """Item identifier stored as its 36-character canonical string.

    The canonical lower-case form keeps equality predicates and index lookups
    byte-exact on every backend.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value: uuid.UUID | str | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        return str(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> uuid.UUID | None:
        if value is None:
            return None
        return value if isinstance(value, uuid.UUID) else uuid.UUID(value)

    # make pylint happy

    def process_literal_param(self, value: uuid.UUID | None, dialect: Dialect) -> Any:
        if value is None:
            return "NULL"
        return f"'{self.process_bind_param(value, dialect)}'"

    @property
    def python_type(self) -> type[uuid.UUID]:
        return uuid.UUID
