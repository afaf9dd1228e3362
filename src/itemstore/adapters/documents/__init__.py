"""Item document store adapters."""

from .memory import InMemoryItemDocumentStore
from .sqlalchemy_store import SqlAlchemyItemDocumentStore

__all__ = ["InMemoryItemDocumentStore", "SqlAlchemyItemDocumentStore"]
