"""OpenClaw Startup System.

Once-per-launch initialization: directory checks, bundled file staging,
service bootstrap and shell environment setup, with clear feedback when
storage is not usable.
"""

from __future__ import annotations

from openclaw.startup.accessibility import AccessibilityVerdict, check_accessible
from openclaw.startup.config_schema import LauncherConfig
from openclaw.startup.context import StartupContext
from openclaw.startup.orchestrator import (
    StartupOrchestrator,
    StartupResult,
    StartupState,
    run_startup,
)
from openclaw.startup.progress_reporter import StartupProgressReporter
from openclaw.startup.staging import BundledFileStager

__all__ = [
    "AccessibilityVerdict",
    "BundledFileStager",
    "LauncherConfig",
    "StartupContext",
    "StartupOrchestrator",
    "StartupProgressReporter",
    "StartupResult",
    "StartupState",
    "check_accessible",
    "run_startup",
]
