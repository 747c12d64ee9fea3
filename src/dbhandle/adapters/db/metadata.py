"""Shared SQLAlchemy `MetaData` object with a naming convention.

Application schema modules attach their tables to this object; the query
facade resolves logical table names against it. The naming convention gives
constraints and indexes deterministic names on MySQL, which otherwise
generates its own.

Naming convention:
    - Indexes:       ix_<table>_<col...>
    - Unique:        uq_<table>_<col...>
    - Check:         ck_<table>_<constraint_name>
    - Foreign keys:  fk_<table>_<col...>_<reftable>
    - Primary key:   pk_<table>
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

#: Process-wide default schema.
metadata = MetaData(naming_convention=NAMING_CONVENTION)


def new_metadata() -> MetaData:
    """Return an empty `MetaData` using the same naming convention."""
    return MetaData(naming_convention=NAMING_CONVENTION)
