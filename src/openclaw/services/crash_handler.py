"""Default crash handler for the launcher process.

Uncaught exceptions are appended to the crash log in ``$HOME`` as a Markdown
report before the previously installed hook runs.
"""

from __future__ import annotations

from datetime import UTC, datetime
import logging
from pathlib import Path
import sys
import traceback
from types import TracebackType
from typing import TYPE_CHECKING

from openclaw.version import get_version

if TYPE_CHECKING:
    from openclaw.startup.context import StartupContext

logger = logging.getLogger(__name__)


def format_crash_report(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
) -> str:
    """Render an uncaught exception as a Markdown crash report."""
    timestamp = datetime.now(UTC).isoformat(timespec="seconds")
    stack = "".join(traceback.format_exception(exc_type, exc, tb))
    return (
        f"## Crash {timestamp}\n\n"
        f"**Version:** {get_version()}\n"
        f"**Exception:** `{exc_type.__name__}: {exc}`\n\n"
        f"```\n{stack}```\n\n"
    )


class CrashHandler:
    """Excepthook writing crash reports, chained to the previous hook."""

    def __init__(self, crash_log_path: Path) -> None:
        self.crash_log_path = crash_log_path
        self.previous_hook = sys.excepthook

    def __call__(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
            self.write_report(format_crash_report(exc_type, exc, tb))
        self.previous_hook(exc_type, exc, tb)

    def write_report(self, report: str) -> bool:
        try:
            self.crash_log_path.parent.mkdir(parents=True, exist_ok=True)
            with self.crash_log_path.open("a", encoding="utf-8") as f:
                f.write(report)
        except OSError:
            logger.exception("Failed to write crash log to %s", self.crash_log_path)
            return False
        return True


def install_crash_handler(context: StartupContext) -> CrashHandler:
    """Install the crash handler for the process. Idempotent."""
    if isinstance(sys.excepthook, CrashHandler):
        return sys.excepthook

    handler = CrashHandler(context.paths.crash_log_path)
    sys.excepthook = handler
    return handler
