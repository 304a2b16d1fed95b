"""Shared test fixtures for the OpenClaw launcher test suite."""

from __future__ import annotations

from collections.abc import Callable, Generator
import os
from pathlib import Path
import shutil
import sys
import tempfile

import pytest

from openclaw.services import am_socket_server, package_variant, properties, theme
from openclaw.services.shell_environment import ShellEnvironment
from openclaw.services.shell_manager import ShellManager
from openclaw.startup import orchestrator
from openclaw.startup.config_schema import LauncherConfig
from openclaw.startup.context import StartupContext
from openclaw.startup.staging import (
    CHANNEL_ARCHIVE_RESOURCE,
    STARTUP_SCRIPT_RESOURCE,
)

SCRIPT_BYTES = b"#!/bin/bash\necho openclaw\n"
# Larger than one copy buffer so the chunked copy loops
ARCHIVE_BYTES = bytes(range(256)) * 100


@pytest.fixture(autouse=True)
def reset_process_state() -> Generator[None, None, None]:
    """Reset every process-wide singleton around each test."""
    saved_hook = sys.excepthook
    yield
    sys.excepthook = saved_hook
    am_socket_server.shutdown_am_socket_server()
    ShellEnvironment.reset()
    ShellManager.reset()
    properties._properties = None  # noqa: SLF001
    package_variant._current = None  # noqa: SLF001
    theme._app_night_mode = theme.NightMode.SYSTEM  # noqa: SLF001
    orchestrator._startup_result = None  # noqa: SLF001


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove OPENCLAW_* variables and keep .env lookups out of the repo."""
    for key in list(os.environ):
        if key.startswith("OPENCLAW_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def resources_dir(tmp_path: Path) -> Path:
    """Directory holding small stand-ins for the two bundled payloads."""
    root = tmp_path / "resources"
    root.mkdir()
    (root / STARTUP_SCRIPT_RESOURCE).write_bytes(SCRIPT_BYTES)
    (root / CHANNEL_ARCHIVE_RESOURCE).write_bytes(ARCHIVE_BYTES)
    return root


@pytest.fixture
def short_tmp() -> Generator[Path, None, None]:
    """Short temporary directory for UNIX socket paths."""
    path = Path(tempfile.mkdtemp(prefix="oc-", dir="/tmp"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


def build_context(
    files_dir: Path,
    resources: Path | None = None,
    **overrides: object,
) -> StartupContext:
    """Build a context without reading the environment or a .env file."""
    config = LauncherConfig.model_construct(
        files_dir=files_dir, resources_dir=resources, **overrides
    )
    return StartupContext.from_config(config)


@pytest.fixture
def make_context() -> Callable[..., StartupContext]:
    return build_context


@pytest.fixture
def context(tmp_path: Path, resources_dir: Path) -> StartupContext:
    """Context rooted in a fresh files directory with stand-in payloads."""
    return build_context(tmp_path / "files", resources_dir)


@pytest.fixture
def payloads() -> dict[str, bytes]:
    return {
        STARTUP_SCRIPT_RESOURCE: SCRIPT_BYTES,
        CHANNEL_ARCHIVE_RESOURCE: ARCHIVE_BYTES,
    }

