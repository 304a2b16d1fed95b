"""Exception hierarchy for the OpenClaw launcher.

Only failures that are meant to propagate live here. Recoverable startup
problems (an inaccessible directory, a failed copy, an unavailable socket)
are reported as values and log records instead.
"""

from __future__ import annotations

from typing import Any


class LauncherError(Exception):
    """Base exception for this project."""


class ConfigurationError(LauncherError):
    """Raised when launcher configuration is invalid or incomplete."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class UnsupportedVariantError(LauncherError):
    """Raised when the configured package variant is not supported."""

    def __init__(self, variant: str) -> None:
        super().__init__(f"Unsupported package variant: {variant!r}")
        self.variant = variant


class StartupError(LauncherError):
    """Startup-specific error with detailed context."""

    def __init__(
        self, message: str, phase: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.phase = phase
        self.details = details or {}
