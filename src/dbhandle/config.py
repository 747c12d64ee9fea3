"""Configuration utilities for dbhandle.

All configuration comes from the process environment. The database URL is
mandatory and has no default; pool tuning variables are optional and fall
back to the defaults on :class:`PoolSettings`.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

DATABASE_URL_ENV = "DATABASE_URL"  # pragma: no mutate

POOL_SIZE_ENV = "DATABASE_POOL_SIZE"
MAX_OVERFLOW_ENV = "DATABASE_MAX_OVERFLOW"
POOL_TIMEOUT_ENV = "DATABASE_POOL_TIMEOUT"
POOL_RECYCLE_ENV = "DATABASE_POOL_RECYCLE"
POOL_PRE_PING_ENV = "DATABASE_POOL_PRE_PING"
ECHO_ENV = "DATABASE_ECHO"

TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
FALSE_WORDS = frozenset({"0", "false", "no", "off"})
BOOL_RULE = "expected one of true/false, yes/no, on/off, 1/0"


class ConfigurationError(Exception):
    """Base class for configuration problems that must stop startup."""


class DatabaseUrlNotSetError(ConfigurationError):
    """Raised when the DATABASE_URL environment variable is not set."""

    def __init__(self, name: str = DATABASE_URL_ENV) -> None:
        super().__init__(f"{name} environment variable is not set")
        self.name = name


class InvalidSettingError(ConfigurationError):
    """Raised when an optional setting is present but unusable."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid value for {name}: {value!r} ({reason})")
        self.name = name
        self.value = value


def get_db_url(environ: Mapping[str, str] | None = None) -> str:
    """Get the database URL from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        The value of the `DATABASE_URL` environment variable, stripped of
        surrounding whitespace.

    Raises:
        DatabaseUrlNotSetError: If `DATABASE_URL` is unset, empty or blank.
    """
    env = os.environ if environ is None else environ
    if not (url := env.get(DATABASE_URL_ENV, "").strip()):
        raise DatabaseUrlNotSetError
    return url


def parse_bool(name: str, raw: str) -> bool:
    """Interpret a boolean word such as ``yes`` or ``0``."""
    word = raw.strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise InvalidSettingError(name, raw, BOOL_RULE)


def _read(
    env: Mapping[str, str],
    name: str,
    convert: Callable[[str], T],
    default: T,
    valid: Callable[[T], bool],
    rule: str,
) -> T:
    raw = env.get(name, "")
    if not raw.strip():
        return default
    try:
        value = convert(raw.strip())
    except ValueError as e:
        raise InvalidSettingError(name, raw, rule) from e
    if not valid(value):
        raise InvalidSettingError(name, raw, rule)
    return value


@dataclass(frozen=True)
class PoolSettings:
    """Connection pool sizing and behaviour.

    The pool itself is SQLAlchemy's ``QueuePool``; these values are passed
    straight through to :func:`sqlalchemy.create_engine`.

    Attributes:
        size: Number of connections kept open in the pool.
        max_overflow: Extra connections allowed beyond ``size`` under load.
            ``0`` makes ``size`` a hard cap; callers then wait for a free
            connection.
        timeout: Seconds to wait for a free connection before giving up.
        recycle: Seconds after which a connection is replaced (``-1`` never).
            Keeps connections younger than MySQL's ``wait_timeout``.
        pre_ping: Test each connection on checkout and replace stale ones.
        echo: Log every SQL statement through the ``sqlalchemy.engine`` logger.
    """

    size: int = 10
    max_overflow: int = 0
    timeout: float = 30.0
    recycle: int = 3600
    pre_ping: bool = True
    echo: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PoolSettings:
        """Build settings from ``DATABASE_POOL_*`` variables.

        Unset or empty variables keep their defaults.

        Raises:
            InvalidSettingError: If a variable is set to an unusable value.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            size=_read(
                env, POOL_SIZE_ENV, int, defaults.size, lambda v: v >= 1, "integer >= 1"
            ),
            max_overflow=_read(
                env,
                MAX_OVERFLOW_ENV,
                int,
                defaults.max_overflow,
                lambda v: v >= 0,
                "integer >= 0",
            ),
            timeout=_read(
                env,
                POOL_TIMEOUT_ENV,
                float,
                defaults.timeout,
                lambda v: v > 0,
                "number of seconds > 0",
            ),
            recycle=_read(
                env,
                POOL_RECYCLE_ENV,
                int,
                defaults.recycle,
                lambda v: v >= -1,
                "integer >= -1",
            ),
            pre_ping=_read(
                env,
                POOL_PRE_PING_ENV,
                lambda raw: parse_bool(POOL_PRE_PING_ENV, raw),
                defaults.pre_ping,
                lambda v: True,
                BOOL_RULE,
            ),
            echo=_read(
                env,
                ECHO_ENV,
                lambda raw: parse_bool(ECHO_ENV, raw),
                defaults.echo,
                lambda v: True,
                BOOL_RULE,
            ),
        )


def get_pool_settings(environ: Mapping[str, str] | None = None) -> PoolSettings:
    """Return pool settings read from the environment."""
    return PoolSettings.from_env(environ)
