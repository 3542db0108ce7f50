"""Fixtures for end-to-end CLI logging tests.

Registers a test-only ``log-demo`` command on the top-level ``metriq`` group
that logs on a project logger and on a third-party one, so verbosity flags,
logger-level overrides and the flight recorder can be observed from outside.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from metriq.entrypoints.cli.main import metriq

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit one message per level on 'metriq.demo' and a few on 'some.thirdparty'."""
    logger = logging.getLogger("metriq.demo")
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
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Attach the demo commands to `metriq` for the duration of a test."""
    metriq.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(metriq, "log-demo")


@pytest.fixture
def runner():
    """CliRunner with no METRIQ_* settings leaking in from the shell."""
    return CliRunner(
        env={
            "METRIQ_LOGGER_LEVELS": None,
            "METRIQ_FLIGHT_RECORDER": None,
            "METRIQ_FORCE_FLUSH_FLIGHT_RECORDER": None,
            "METRIQ_LOG_PATH": None,
        }
    )


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield
