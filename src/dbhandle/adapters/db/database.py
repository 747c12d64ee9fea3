"""Schema-aware query facade over a pooled SQLAlchemy engine.

The facade is the handle the rest of an application receives. It resolves
logical table names against a schema (`MetaData`), builds SQLAlchemy Core
statements and executes them on pooled connections. Query building,
parameter binding and transaction isolation stay with SQLAlchemy and the
DBAPI driver.

Usage:
    ```py
    db = Database(make_engine(url), schema=metadata)
    rows = db.select("users", db.table("users").c.active.is_(True), limit=10)
    with db.transaction() as tx:
        tx.insert("users", {"name": "ada"})
        tx.update("accounts", {"balance": 0}, db.table("accounts").c.id == 1)
    ```

Classes:
    Database    -- facade bound to the engine; one pooled connection per call.
    Transaction -- same query surface bound to a single open connection.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from itertools import groupby
from typing import TYPE_CHECKING, Any, TypeAlias

from sqlalchemy import Table, delete, insert, select, text, update

from .metadata import metadata as default_metadata

if TYPE_CHECKING:
    from sqlalchemy import MetaData, RowMapping
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.sql import ColumnElement, Executable

logger = logging.getLogger(__name__)

TableRef: TypeAlias = "str | Table"
Values: TypeAlias = "Mapping[str, Any]"


class UnknownTableError(KeyError):
    """Raised when a logical table name is not part of the schema."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown table: {self.name!r}"


@dataclass(frozen=True)
class WriteResult:
    """Outcome of an INSERT.

    Attributes:
        rowcount: Number of rows inserted.
        inserted_primary_key: Primary key of the inserted row for single-row
            inserts, ``None`` for multi-row inserts.
    """

    rowcount: int
    inserted_primary_key: tuple[Any, ...] | None = None


class QuerySurface(abc.ABC):
    """Query operations shared by :class:`Database` and :class:`Transaction`."""

    schema: MetaData

    @abc.abstractmethod
    def _connect(self) -> AbstractContextManager[Connection]:
        """Yield the connection a single operation runs on."""

    # --------------------------------------------------------------------- #
    # Schema
    # --------------------------------------------------------------------- #

    @property
    def tables(self) -> Mapping[str, Table]:
        """Raw schema objects keyed by logical (table) name."""
        return self.schema.tables

    def table(self, ref: TableRef) -> Table:
        """Resolve a logical name (or pass through a `Table`).

        Raises:
            UnknownTableError: If ``ref`` is a name the schema does not define.
        """
        if isinstance(ref, Table):
            return ref
        try:
            return self.schema.tables[ref]
        except KeyError as e:
            raise UnknownTableError(ref) from e

    # --------------------------------------------------------------------- #
    # Operations
    # --------------------------------------------------------------------- #

    def select(
        self,
        ref: TableRef,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[RowMapping]:
        """Return rows of ``ref`` matching all ``criteria`` as mappings."""
        table = self.table(ref)
        stmt = select(table).where(*criteria).order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        with self._connect() as conn:
            return list(conn.execute(stmt).mappings().all())

    def first(
        self,
        ref: TableRef,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> RowMapping | None:
        """Return the first matching row, or ``None``."""
        rows = self.select(ref, *criteria, order_by=order_by, limit=1)
        return rows[0] if rows else None

    def insert(self, ref: TableRef, values: Values | Sequence[Values]) -> WriteResult:
        """Insert one row (a mapping) or many rows (a sequence of mappings).

        Rows of a sequence may name different columns; omitted columns take
        their defaults. All rows are inserted in one transaction, in order.
        """
        table = self.table(ref)
        if isinstance(values, Mapping):
            with self._connect() as conn:
                result = conn.execute(insert(table).values(dict(values)))
                return WriteResult(
                    rowcount=result.rowcount,
                    inserted_primary_key=tuple(result.inserted_primary_key or ()),
                )
        rows = [dict(row) for row in values]
        if not rows:
            return WriteResult(rowcount=0)
        rowcount = 0
        with self._connect() as conn:
            # executemany binds the columns of the first row only, so rows
            # are sent in consecutive runs sharing the same keys
            for _, run in groupby(rows, key=frozenset):
                rowcount += conn.execute(insert(table), list(run)).rowcount
        return WriteResult(rowcount=rowcount)

    def update(
        self, ref: TableRef, values: Values, *criteria: ColumnElement[bool]
    ) -> int:
        """Update rows matching ``criteria``; no criteria updates every row.

        Returns:
            int: Number of rows matched.
        """
        table = self.table(ref)
        stmt = update(table).where(*criteria).values(dict(values))
        with self._connect() as conn:
            return conn.execute(stmt).rowcount

    def delete(self, ref: TableRef, *criteria: ColumnElement[bool]) -> int:
        """Delete rows matching ``criteria``; no criteria deletes every row."""
        table = self.table(ref)
        with self._connect() as conn:
            return conn.execute(delete(table).where(*criteria)).rowcount

    def execute(
        self,
        statement: Executable | str,
        parameters: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None = None,
    ) -> list[RowMapping]:
        """Run an arbitrary statement; plain strings are wrapped in ``text()``.

        Returns:
            list[RowMapping]: Result rows, or an empty list when the statement
            returns none.
        """
        stmt = text(statement) if isinstance(statement, str) else statement
        with self._connect() as conn:
            result = conn.execute(stmt, parameters)
            if not result.returns_rows:
                return []
            return list(result.mappings().all())


class Transaction(QuerySurface):
    """Query surface bound to one connection inside an open transaction."""

    def __init__(self, connection: Connection, schema: MetaData):
        self.connection = connection
        self.schema = schema

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        yield self.connection

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """Open a nested transaction (SAVEPOINT).

        If the block raises, only the work done inside it is rolled back and
        the exception propagates to the enclosing block.
        """
        with self.connection.begin_nested():
            yield self


class Database(QuerySurface):
    """Typed client facade over the process's connection pool.

    Every operation borrows a pooled connection, runs in its own
    transaction, commits on success and returns the connection to the pool.
    Use :meth:`transaction` to group several operations atomically.
    """

    def __init__(self, engine: Engine, schema: MetaData | None = None):
        self.engine = engine
        self.schema = default_metadata if schema is None else schema

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r})"

    @property
    def url(self) -> str:
        """Connection URL with the password masked."""
        return self.engine.url.render_as_string(hide_password=True)

    def _connect(self) -> AbstractContextManager[Connection]:
        return self.engine.begin()

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """Run a block of operations in one transaction.

        Commits when the block exits normally; rolls back and re-raises when
        it raises.
        """
        with self.engine.begin() as conn:
            yield Transaction(conn, self.schema)

    def ping(self) -> None:
        """Round-trip ``SELECT 1`` through the pool.

        Raises:
            sqlalchemy.exc.OperationalError: If the database is unreachable.
        """
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))  # pragma: no mutate

    def pool_status(self) -> str:
        """Human-readable pool occupancy reported by SQLAlchemy."""
        return self.engine.pool.status()

    def create_all(self) -> None:
        """Create any schema tables missing from the database."""
        self.schema.create_all(self.engine)

    def drop_all(self) -> None:
        """Drop the schema tables from the database."""
        self.schema.drop_all(self.engine)

    def dispose(self) -> None:
        """Close every pooled connection.

        Checked-out connections are closed when they are returned. The engine
        stays usable and would open fresh connections on the next call.
        """
        logger.info("Disposing connection pool for %s", self.url)
        self.engine.dispose()
