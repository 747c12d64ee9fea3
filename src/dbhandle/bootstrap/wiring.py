"""Build the shared database handle from the environment."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dbhandle import config
from dbhandle.adapters.db.database import Database
from dbhandle.adapters.db.engine import make_engine
from dbhandle.adapters.db.metadata import metadata

if TYPE_CHECKING:
    from sqlalchemy import MetaData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """Objects built once at process entry and shared afterwards."""

    database: Database


def build_database(
    url: str,
    settings: config.PoolSettings | None = None,
    schema: MetaData = metadata,
) -> Database:
    """Build the connection pool for ``url`` and wrap it in the facade."""
    engine = make_engine(url, settings)
    return Database(engine, schema)


def bootstrap(
    environ: Mapping[str, str] | None = None, schema: MetaData = metadata
) -> AppContainer:
    """Read configuration and build the process's database handle.

    The URL is validated before anything else is constructed, so a missing
    ``DATABASE_URL`` never leaves a half-built pool behind.

    Raises:
        config.DatabaseUrlNotSetError: If ``DATABASE_URL`` is missing or empty.
        config.InvalidSettingError: If a pool setting variable is unusable.
        sqlalchemy.exc.ArgumentError: If the URL is malformed.
    """
    url = config.get_db_url(environ)
    settings = config.get_pool_settings(environ)
    database = build_database(url, settings, schema)
    logger.info(
        "Database handle ready: %s (pool_size=%d, max_overflow=%d)",
        database.url,
        settings.size,
        settings.max_overflow,
    )
    return AppContainer(database=database)


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler names as parameters.

    Example:
        ```py
        def list_users(request, db): ...
        handler = inject_dependencies(list_users, {"db": container.database})
        handler(request)
        ```
    """
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return lambda *args, **kwargs: handler(*args, **deps, **kwargs)
