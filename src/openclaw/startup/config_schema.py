"""OpenClaw Launcher Configuration Schema.

Pydantic-based configuration validation with clear error messages.
Validates all ``OPENCLAW_*`` environment variables before startup.
"""

from __future__ import annotations

from enum import StrEnum
import logging
from pathlib import Path
import re
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from openclaw.core.exceptions import ConfigurationError
from openclaw.core.paths import DEFAULT_FILES_DIR, DEFAULT_PACKAGE_NAME

logger = logging.getLogger(__name__)

# Java-style application id, e.g. com.termux
_PACKAGE_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*(\.[A-Za-z][A-Za-z0-9_]*)+$")

DEFAULT_PACKAGE_VARIANT = "apt-android-7"


class LogLevel(StrEnum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LauncherConfig(BaseSettings):
    """Launcher configuration loaded from ``OPENCLAW_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OPENCLAW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    files_dir: Path = Field(
        default=DEFAULT_FILES_DIR,
        validate_default=True,
        description="Primary data root holding usr/, home/ and apps/",
    )
    package_name: str = Field(
        default=DEFAULT_PACKAGE_NAME,
        description="Application package name, used for the apps/<package> directory",
    )
    package_variant: str = Field(
        default=DEFAULT_PACKAGE_VARIANT,
        description="Package variant the bootstrap was built for",
        min_length=1,
    )
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    debug: bool = Field(default=False, description="Enable detailed log format")
    run_am_socket_server: bool = Field(
        default=True,
        description="Start the local am socket server when storage is accessible",
    )
    resources_dir: Path | None = Field(
        default=None,
        description="Directory overriding the bundled payload resources",
    )

    @field_validator("files_dir")
    @classmethod
    def validate_files_dir(cls, v: Path) -> Path:
        """Expand ``~`` and require an absolute path."""
        if not str(v).strip():
            msg = "Files directory cannot be empty"
            raise ValueError(msg)
        expanded = v.expanduser()
        if not expanded.is_absolute():
            msg = f"Files directory must be an absolute path: {v}"
            raise ValueError(msg)
        return expanded

    @field_validator("package_name")
    @classmethod
    def validate_package_name(cls, v: str) -> str:
        """Validate the package name format."""
        if not _PACKAGE_NAME_RE.match(v):
            msg = f"Invalid package name: {v}"
            raise ValueError(msg)
        return v

    @field_validator("resources_dir")
    @classmethod
    def validate_resources_dir(cls, v: Path | None) -> Path | None:
        if v is None:
            return None
        return v.expanduser()

    def get_startup_summary(self) -> dict[str, Any]:
        """Get startup configuration summary."""
        return {
            "files_dir": str(self.files_dir),
            "package_name": self.package_name,
            "package_variant": self.package_variant,
            "log_level": self.log_level.value,
            "debug": self.debug,
            "am_socket_server": self.run_am_socket_server,
            "bundled_resources": str(self.resources_dir) if self.resources_dir else "package",
        }

    @classmethod
    def validate_from_env(
        cls, **overrides: Any
    ) -> tuple[LauncherConfig | None, list[str]]:
        """Validate configuration from environment variables.

        Keyword overrides (e.g. from command line flags) take precedence over
        the environment.

        Returns:
            Tuple of (config, errors). Config is None if validation fails.
        """
        try:
            return cls(**overrides), []
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field_path = ".".join(str(loc) for loc in error["loc"])
                errors.append(f"{field_path}: {error['msg']}")
            return None, errors


def load_config(**overrides: Any) -> LauncherConfig:
    """Load and validate configuration with clear error reporting."""
    config, errors = LauncherConfig.validate_from_env(**overrides)

    if errors or config is None:
        logger.error("[CONFIG_001] Configuration validation failed:")
        for error in errors:
            logger.error("  • %s", error)
        msg = "Configuration validation failed - see logs for details"
        raise ConfigurationError(msg, errors)

    logger.debug("Configuration loaded: %s", config.get_startup_summary())
    return config
