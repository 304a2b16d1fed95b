"""App properties loaded from ``termux.properties``.

The file uses Java properties syntax: ``key=value`` or ``key: value`` per
line, ``#`` and ``!`` start comments. Only the keys the launcher needs are
exposed as typed getters; everything else stays available in ``raw``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import re

from openclaw.core.paths import AppPaths
from openclaw.services.theme import NightMode

logger = logging.getLogger(__name__)

KEY_NIGHT_MODE = "night-mode"
KEY_RUN_AM_SOCKET_SERVER = "run-termux-am-socket-server"

_SEPARATOR_RE = re.compile(r"\s*[=:]\s*|\s+")
_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text into a dict. Later keys win."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        parts = _SEPARATOR_RE.split(line, maxsplit=1)
        key = parts[0]
        value = parts[1].strip() if len(parts) > 1 else ""
        values[key] = value
    return values


@dataclass(frozen=True)
class AppProperties:
    """Typed view over the properties file."""

    raw: dict[str, str] = field(default_factory=dict)
    source: Path | None = None

    @classmethod
    def load(cls, paths: AppPaths) -> AppProperties:
        """Load the first existing properties file, or defaults if there is none."""
        for candidate in paths.properties_paths:
            if candidate.is_file():
                properties = cls(
                    raw=parse_properties(candidate.read_text(encoding="utf-8")),
                    source=candidate,
                )
                logger.debug("Loaded %d properties from %s", len(properties.raw), candidate)
                return properties

        logger.debug("No properties file found, using defaults")
        return cls()

    def get_bool(self, key: str, default: bool) -> bool:
        value = self.raw.get(key)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning("Invalid boolean for %s: %r, using %s", key, value, default)
        return default

    @property
    def night_mode(self) -> NightMode:
        value = self.raw.get(KEY_NIGHT_MODE, NightMode.SYSTEM.value).lower()
        try:
            return NightMode(value)
        except ValueError:
            return NightMode.SYSTEM

    @property
    def run_am_socket_server(self) -> bool:
        return self.get_bool(KEY_RUN_AM_SOCKET_SERVER, default=True)


_properties: AppProperties | None = None


def init_properties(paths: AppPaths) -> AppProperties:
    """Load the properties and keep them as the process-wide instance."""
    global _properties  # noqa: PLW0603 - process-wide instance

    _properties = AppProperties.load(paths)
    return _properties


def get_properties() -> AppProperties | None:
    """Return the loaded properties, or None before loading."""
    return _properties
