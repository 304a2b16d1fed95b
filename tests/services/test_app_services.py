"""Tests for package variant, night mode and shell manager services."""

from __future__ import annotations

import pytest

from openclaw.core.exceptions import UnsupportedVariantError
from openclaw.services.package_variant import (
    PackageManager,
    PackageVariant,
    get_package_setup,
    resolve_package_variant,
)
from openclaw.services.shell_manager import ShellManager
from openclaw.services.theme import NightMode, get_app_night_mode, set_app_night_mode
from openclaw.startup.context import StartupContext


class TestPackageVariant:
    """Test package variant resolution."""

    @pytest.mark.parametrize("name", ["apt-android-7", "apt-android-5"])
    def test_supported_variants(self, name: str) -> None:
        """Test supported variants resolve to apt."""
        setup = resolve_package_variant(name)

        assert setup.manager == PackageManager.APT
        assert setup.variant == PackageVariant(name)
        assert setup.package_format == "debian"
        assert get_package_setup() is setup

    def test_unsupported_variant(self) -> None:
        """Test unknown variants raise and leave nothing resolved."""
        with pytest.raises(UnsupportedVariantError) as exc_info:
            resolve_package_variant("pacman-android-7")

        assert exc_info.value.variant == "pacman-android-7"
        assert get_package_setup() is None


class TestNightMode:
    """Test the process-wide night mode."""

    def test_set_mode(self) -> None:
        assert set_app_night_mode("TRUE") == NightMode.TRUE
        assert get_app_night_mode() == NightMode.TRUE

    def test_invalid_mode_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test unknown values fall back to following the system."""
        set_app_night_mode(NightMode.FALSE)

        assert set_app_night_mode("dusk") == NightMode.SYSTEM
        assert "Invalid night mode" in caplog.text


class TestShellManager:
    """Test the shell session registry."""

    def test_init_is_idempotent(self, context: StartupContext) -> None:
        """Test init returns the same instance on repeated calls."""
        first = ShellManager.init(context)

        assert ShellManager.init(context) is first
        assert ShellManager.get_instance() is first

    def test_sessions(self, context: StartupContext) -> None:
        manager = ShellManager.init(context)

        manager.add_session("main", 1234)
        manager.add_session("gateway", 5678)

        assert manager.remove_session("main") == 1234
        assert manager.remove_session("main") is None
        assert manager.sessions == {"gateway": 5678}
