"""Composition root for ITEMSTORE.

Wires concrete adapters (SQLAlchemy document store, blob store, LRU cache) into
the provider. Entry points import this package; inner layers never do.
"""

from .bootstrap import build_provider, build_in_memory_provider

__all__ = ["build_provider", "build_in_memory_provider"]
