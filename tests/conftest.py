"""Global pytest fixtures for dbhandle."""

from __future__ import annotations

import pytest

from dbhandle import config

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.mysql",
]

DATABASE_ENV_VARS = (
    config.DATABASE_URL_ENV,
    config.POOL_SIZE_ENV,
    config.MAX_OVERFLOW_ENV,
    config.POOL_TIMEOUT_ENV,
    config.POOL_RECYCLE_ENV,
    config.POOL_PRE_PING_ENV,
    config.ECHO_ENV,
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every DATABASE_* variable the bootstrapper reads.

    Returns the monkeypatch so tests can set the ones they need.
    """
    for name in DATABASE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
