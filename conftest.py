"""Global pytest configuration for logging setup.

This file ensures consistent logging behavior across all tests
and prevents caplog issues caused by logger configuration conflicts.
"""

import logging

import pytest

LOGGERS = [
    "openclaw.startup",
    "openclaw.services",
    "openclaw.core",
]


@pytest.fixture(autouse=True)
def setup_logging() -> None:
    """Global fixture to ensure consistent logging configuration across all tests.

    This fixture:
    - Sets up proper logging levels for our modules
    - Ensures caplog can capture logs consistently
    """
    for logger_name in LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        # Ensure propagation is enabled so caplog can capture messages
        logger.propagate = True

    logging.getLogger().setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def configure_caplog(caplog: pytest.LogCaptureFixture) -> None:
    """Global fixture to configure caplog for all tests."""
    caplog.set_level(logging.DEBUG)

    for logger_name in LOGGERS:
        caplog.set_level(logging.DEBUG, logger=logger_name)
