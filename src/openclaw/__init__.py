"""OpenClaw Launcher - application startup for the bundled OpenClaw runtime.

Runs the once-per-launch initialization sequence of the host application:
storage checks, bundled payload staging, the local am socket service and the
shell environment cache.
"""

__version__ = "0.1.0"
__author__ = "OpenClaw Team"

__all__ = [
    "__author__",
    "__version__",
]
