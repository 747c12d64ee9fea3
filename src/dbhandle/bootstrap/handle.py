"""Construct-once database handle.

`LazyDatabase` defers building the pool until first use and guarantees that
concurrent first accesses build it exactly once. `get_database()` exposes a
process-wide instance built from the environment, for code that cannot take
the handle as a parameter.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from dbhandle.adapters.db.database import Database

from .wiring import bootstrap

logger = logging.getLogger(__name__)


class LazyDatabase:
    """Thread-safe, construct-once holder for a :class:`Database`.

    States: uninitialized until the first :meth:`get`, ready afterwards.
    There is no way back to uninitialized. If the factory raises, the handle
    stays uninitialized and the exception reaches the caller; the next access
    tries again.

    Attribute access is forwarded to the underlying `Database`, so the holder
    can be used wherever a `Database` is expected:

        ```py
        db = LazyDatabase(lambda: bootstrap().database)
        db.select("users")  # first access builds the pool
        ```
    """

    def __init__(self, factory: Callable[[], Database]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._database: Database | None = None

    @property
    def initialized(self) -> bool:
        """True once the database has been built."""
        return self._database is not None

    def get(self) -> Database:
        """Return the database, building it on first call."""
        if (database := self._database) is not None:
            return database
        with self._lock:
            if self._database is None:
                logger.debug("Building shared database handle")
                self._database = self._factory()
            return self._database

    def close(self) -> None:
        """Drain the pool if it was built. The handle stays ready."""
        with self._lock:
            if self._database is not None:
                self._database.dispose()

    def __getattr__(self, name: str) -> Any:
        # only reached for names not defined on LazyDatabase itself
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self.get(), name)


def _from_environment() -> Database:
    return bootstrap().database


_default = LazyDatabase(_from_environment)


def get_database() -> Database:
    """Return the process-wide database handle, building it on first use.

    Raises:
        dbhandle.config.DatabaseUrlNotSetError: If ``DATABASE_URL`` is not set.
    """
    return _default.get()


def shutdown() -> None:
    """Drain the process-wide handle's pool, if it was ever built."""
    _default.close()
