"""Database plumbing shared by the SQLAlchemy adapters.

Engine factory, dialect names, the shared `MetaData`, custom column types and
the packaged Alembic migrations.
"""
