"""OpenClaw Launcher - Logging Configuration.

Console logging for the startup sequence with a configurable level and a
detailed format for debug runs.
"""

import logging
import logging.config
import sys
from typing import Any

logger = logging.getLogger(__name__)


def build_logging_config(level: str = "INFO", *, debug: bool = False) -> dict[str, Any]:
    """Build the ``dictConfig`` mapping for the given level."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": (
                    "%(asctime)s | %(name)s | %(levelname)s | "
                    "%(filename)s:%(lineno)d | %(funcName)s | %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if debug else "simple",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "openclaw": {
                "level": level,
                "propagate": True,
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def setup_logging(level: str = "INFO", *, debug: bool = False) -> None:
    """Configure logging for the launcher process."""
    logging.config.dictConfig(build_logging_config(level, debug=debug))

    logging.getLogger(__name__).info(
        "Logging configured with level %s%s", level.upper(), " (debug)" if debug else ""
    )
