"""Utility enums and helpers for database dialect handling.

Centralizes the dialect names dbhandle knows how to configure: MySQL (and
MariaDB, which speaks the same protocol) for real deployments and SQLite for
local development and tests.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Enumeration of supported SQLAlchemy dialect names.

    Attributes:
        MYSQL:  MySQL dialect (``"mysql"``); MariaDB maps here as well.
        SQLITE: SQLite dialect (``"sqlite"``).
    """

    MYSQL = "mysql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize and convert an arbitrary dialect string to DialectName.

        Accepts aliases and driver-qualified names (e.g. 'mariadb',
        'mysql+pymysql', 'sqlite+pysqlite').

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """
        raw = (dialect_str or "").strip().lower()
        base = raw.split("+", 1)[0]

        if base in {"mysql", "mariadb"}:
            return cls.MYSQL
        if base == "sqlite":
            return cls.SQLITE

        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the object has no dialect or it is unsupported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)


#: DBAPI driver used when a URL names only the backend (``mysql://...``).
DEFAULT_DRIVERS: dict[DialectName, str] = {
    DialectName.MYSQL: "pymysql",
    DialectName.SQLITE: "pysqlite",
}
