"""Fixtures and test helpers for end-to-end CLI logging tests.

Provides a test-only `log-demo` command that emits log messages at every
level, plus fixtures to register it on the top-level group, obtain a
CliRunner and run inside an isolated filesystem.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from dbhandle.entrypoints.cli.main import dbhandle

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit one message per level on 'dbhandle.demo' and some third-party chatter."""
    logger = logging.getLogger("dbhandle.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Drop a command from a group and from click-extra's help sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register 'log-demo' on the `dbhandle` group for one test."""
    dbhandle.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(dbhandle, "log-demo")


@pytest.fixture
def runner(monkeypatch):
    """CliRunner with the DBHANDLE_* logging variables cleared."""
    for name in (
        "DBHANDLE_LOG_PATH",
        "DBHANDLE_FLIGHT_RECORDER",
        "DBHANDLE_FORCE_FLUSH",
        "DBHANDLE_LOGGER_LEVELS",
    ):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Confine filesystem side effects (log files) to a temporary directory."""
    with runner.isolated_filesystem():
        yield
