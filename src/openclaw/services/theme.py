"""Process-wide night mode of the application."""

from __future__ import annotations

from enum import StrEnum
import logging

logger = logging.getLogger(__name__)


class NightMode(StrEnum):
    """Night mode values accepted in the properties file."""

    TRUE = "true"
    FALSE = "false"
    SYSTEM = "system"


_app_night_mode = NightMode.SYSTEM


def set_app_night_mode(mode: NightMode | str) -> NightMode:
    """Set the app night mode. Unknown values fall back to ``system``."""
    global _app_night_mode  # noqa: PLW0603 - process-wide setting

    try:
        _app_night_mode = NightMode(str(mode).lower())
    except ValueError:
        logger.warning("Invalid night mode %r, using %s", mode, NightMode.SYSTEM.value)
        _app_night_mode = NightMode.SYSTEM

    logger.debug("App night mode set to %s", _app_night_mode.value)
    return _app_night_mode


def get_app_night_mode() -> NightMode:
    return _app_night_mode
