"""Adapters (infrastructure) for ITEMSTORE.

Concrete implementations of the ports in `itemstore.interfaces`: document
stores (SQLAlchemy, in-memory), blob stores (local filesystem, in-memory), the
size-bounded cache container, plus database plumbing (engines, metadata,
migrations).

Dependency rule: may import `itemstore.domain` and `itemstore.interfaces`; the
inner layers must not import this package.
"""
