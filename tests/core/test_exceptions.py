"""Tests for the launcher exception hierarchy."""

from __future__ import annotations

from openclaw.core.exceptions import (
    ConfigurationError,
    LauncherError,
    StartupError,
    UnsupportedVariantError,
)


class TestExceptions:
    """Test exception attributes."""

    def test_hierarchy(self) -> None:
        for exc_type in (ConfigurationError, StartupError, UnsupportedVariantError):
            assert issubclass(exc_type, LauncherError)

    def test_configuration_error_keeps_errors(self) -> None:
        error = ConfigurationError("invalid", ["files_dir: bad"])

        assert str(error) == "invalid"
        assert error.errors == ["files_dir: bad"]
        assert ConfigurationError("invalid").errors == []

    def test_unsupported_variant(self) -> None:
        error = UnsupportedVariantError("pacman-android-7")

        assert error.variant == "pacman-android-7"
        assert "pacman-android-7" in str(error)

    def test_startup_error_context(self) -> None:
        error = StartupError("already ran", phase="done", details={"runs": 2})

        assert error.phase == "done"
        assert error.details == {"runs": 2}
