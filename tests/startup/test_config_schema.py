"""Tests for OpenClaw configuration schema validation."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from openclaw.core.exceptions import ConfigurationError
from openclaw.startup.config_schema import LauncherConfig, LogLevel, load_config


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep .env lookups inside the test directory."""
    monkeypatch.chdir(tmp_path)


class TestLauncherConfig:
    """Test configuration schema validation."""

    def test_default_configuration(self) -> None:
        """Test default configuration loads successfully."""
        with patch.dict(os.environ, {}, clear=True):
            config, errors = LauncherConfig.validate_from_env()

            assert config is not None
            assert errors == []
            assert config.package_name == "com.termux"
            assert config.package_variant == "apt-android-7"
            assert config.log_level == LogLevel.INFO
            assert config.run_am_socket_server is True
            assert config.files_dir.is_absolute()

    def test_environment_variable_parsing(self) -> None:
        """Test environment variable parsing."""
        env_vars = {
            "OPENCLAW_FILES_DIR": "/data/openclaw/files",
            "OPENCLAW_PACKAGE_NAME": "com.example.claw",
            "OPENCLAW_LOG_LEVEL": "DEBUG",
            "OPENCLAW_DEBUG": "true",
            "OPENCLAW_RUN_AM_SOCKET_SERVER": "false",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            config, errors = LauncherConfig.validate_from_env()

            assert config is not None
            assert errors == []
            assert config.files_dir == Path("/data/openclaw/files")
            assert config.package_name == "com.example.claw"
            assert config.log_level == LogLevel.DEBUG
            assert config.debug is True
            assert config.run_am_socket_server is False

    def test_dotenv_file(self, tmp_path: Path) -> None:
        """Test values are read from a .env file in the working directory."""
        (tmp_path / ".env").write_text("OPENCLAW_PACKAGE_VARIANT=apt-android-5\n")

        with patch.dict(os.environ, {}, clear=True):
            config, _ = LauncherConfig.validate_from_env()

        assert config is not None
        assert config.package_variant == "apt-android-5"

    def test_overrides_take_precedence(self) -> None:
        """Test keyword overrides beat the environment."""
        with patch.dict(os.environ, {"OPENCLAW_FILES_DIR": "/from/env"}, clear=True):
            config, _ = LauncherConfig.validate_from_env(files_dir="/from/cli")

        assert config is not None
        assert config.files_dir == Path("/from/cli")

    def test_home_is_expanded(self) -> None:
        with patch.dict(os.environ, {"HOME": "/home/claw"}, clear=True):
            config, _ = LauncherConfig.validate_from_env(files_dir="~/files")

        assert config is not None
        assert config.files_dir == Path("/home/claw/files")

    def test_relative_files_dir_rejected(self) -> None:
        """Test relative files directories are rejected."""
        with patch.dict(os.environ, {}, clear=True):
            config, errors = LauncherConfig.validate_from_env(files_dir="relative/files")

        assert config is None
        assert any("absolute path" in e for e in errors)

    @pytest.mark.parametrize("name", ["termux", "com..termux", "1com.termux", "com.ter mux"])
    def test_invalid_package_name(self, name: str) -> None:
        """Test malformed package names are rejected."""
        with patch.dict(os.environ, {"OPENCLAW_PACKAGE_NAME": name}, clear=True):
            config, errors = LauncherConfig.validate_from_env()

        assert config is None
        assert any(e.startswith("package_name") for e in errors)

    def test_invalid_log_level(self) -> None:
        with patch.dict(os.environ, {"OPENCLAW_LOG_LEVEL": "LOUD"}, clear=True):
            config, errors = LauncherConfig.validate_from_env()

        assert config is None
        assert any(e.startswith("log_level") for e in errors)

    def test_startup_summary(self) -> None:
        """Test the summary lists the effective settings."""
        with patch.dict(os.environ, {}, clear=True):
            config, _ = LauncherConfig.validate_from_env(files_dir="/srv/files")

        assert config is not None
        summary = config.get_startup_summary()
        assert summary["files_dir"] == "/srv/files"
        assert summary["bundled_resources"] == "package"


class TestLoadConfig:
    """Test configuration loading with error reporting."""

    def test_load_config_success(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(files_dir="/srv/files")

        assert config.files_dir == Path("/srv/files")

    def test_load_config_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test invalid configuration raises with the collected errors."""
        with patch.dict(os.environ, {"OPENCLAW_PACKAGE_NAME": "bad"}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                load_config()

        assert exc_info.value.errors
        assert "[CONFIG_001] Configuration validation failed" in caplog.text
