"""OpenClaw Launcher Test Suite.

- core/: paths and logging configuration
- services/: process-wide services started during launch
- startup/: directory checks, staging and the startup sequence
"""

from __future__ import annotations
