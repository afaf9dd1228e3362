"""Alembic migration environment for the ITEMSTORE schema."""
