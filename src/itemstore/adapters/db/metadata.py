"""`MetaData` shared by ITEMSTORE tables.

Index and constraint names follow the convention below. The ``items``
migration spells the same names out literally, and ``ensure_indexes()``
checks for them by name, so the two must stay in step.

    ix_<table>_<columns>   pk_<table>   uq_<table>_<columns>
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
