"""Console progress for the startup sequence.

Every startup state shows up as one step line under its phase heading. A
launch finishes either ready or degraded; the summary counts steps by status.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
import logging
import sys
import time
from typing import Any, TextIO

logger = logging.getLogger(__name__)

RULE = "=" * 60


class ProgressPhase(StrEnum):
    """Startup progress phases."""

    INITIALIZING = "initializing"
    CONFIGURING_APP = "configuring_app"
    CHECKING_STORAGE = "checking_storage"
    STAGING_FILES = "staging_files"
    STARTING_SERVICES = "starting_services"
    INITIALIZING_ENVIRONMENT = "initializing_environment"
    READY = "ready"
    DEGRADED = "degraded"

    @property
    def title(self) -> str:
        return self.value.replace("_", " ").title()


class StepStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


_MARKS = {
    StepStatus.PENDING: "·",
    StepStatus.RUNNING: "…",
    StepStatus.COMPLETED: "✓",
    StepStatus.FAILED: "✗",
    StepStatus.SKIPPED: "-",
}

# ANSI SGR codes
_GREEN, _RED, _YELLOW = "32", "31", "33"

_STATUS_COLORS = {
    StepStatus.COMPLETED: _GREEN,
    StepStatus.FAILED: _RED,
    StepStatus.SKIPPED: _YELLOW,
}


@dataclass
class ProgressStep:
    """One reported startup step."""

    name: str
    phase: ProgressPhase
    status: StepStatus = StepStatus.PENDING
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    started_at: float | None = None
    finished_at: float | None = None
    error: BaseException | None = None

    @property
    def duration_ms(self) -> float:
        if self.started_at is None or self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at) * 1000

    def start(self) -> None:
        self.status = StepStatus.RUNNING
        self.started_at = time.monotonic()

    def finish(
        self,
        status: StepStatus,
        message: str = "",
        error: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Move the step to a final status. An empty message keeps the old one."""
        self.status = status
        self.finished_at = time.monotonic()
        if message:
            self.message = message
        if error is not None:
            self.error = error
        if details:
            self.details.update(details)


class StartupProgressReporter:
    """Writes startup progress to a text stream."""

    def __init__(
        self, output: TextIO | None = None, *, enable_colors: bool = True
    ) -> None:
        """Initialize progress reporter.

        Args:
            output: Output stream (defaults to stdout)
            enable_colors: Color step names when the stream is a terminal
        """
        self.output = output or sys.stdout
        isatty = getattr(self.output, "isatty", None)
        self.enable_colors = enable_colors and bool(isatty and isatty())
        self.steps: list[ProgressStep] = []
        self.current_phase = ProgressPhase.INITIALIZING
        self.started_at = time.monotonic()
        self.finished_at: float | None = None

    def _paint(self, text: str, color: str | None) -> str:
        if not self.enable_colors or color is None:
            return text
        return f"\033[{color}m{text}\033[0m"

    def _write(self, line: str = "") -> None:
        print(line, file=self.output, flush=True)

    def _show(self, step: ProgressStep) -> None:
        line = f"  {_MARKS[step.status]} {self._paint(step.name, _STATUS_COLORS.get(step.status))}"
        if step.message:
            line += f": {step.message}"
        if step.status is StepStatus.COMPLETED and step.duration_ms > 0:
            line += f" ({step.duration_ms:.0f}ms)"
        self._write(line)
        if step.status is StepStatus.FAILED and step.error is not None:
            self._write(f"    Error: {step.error}")

    def start_startup(self, app_name: str = "OpenClaw") -> None:
        self.started_at = time.monotonic()
        self._write()
        self._write(f"Starting {app_name}")
        self._write(RULE)

    def start_phase(self, phase: ProgressPhase, message: str = "") -> None:
        self.current_phase = phase
        self._write()
        self._write(f"{phase.title}: {message}" if message else phase.title)
        logger.debug("Startup phase: %s", phase.title)

    def add_step(self, name: str, phase: ProgressPhase | None = None) -> ProgressStep:
        """Register a step without starting it, e.g. one that will be skipped."""
        step = ProgressStep(name=name, phase=phase or self.current_phase)
        self.steps.append(step)
        return step

    def start_step(self, name: str, message: str = "") -> ProgressStep:
        step = self.add_step(name)
        step.start()
        step.message = message
        self._show(step)
        return step

    def complete_step(
        self,
        step: ProgressStep,
        message: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        step.finish(StepStatus.COMPLETED, message, details=details)
        self._show(step)
        logger.debug("Completed: %s in %.0fms", step.name, step.duration_ms)

    def fail_step(
        self,
        step: ProgressStep,
        message: str,
        error: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Mark step as failed.

        Only the console line is written here; the caller logs the failure
        with its own context.
        """
        step.finish(StepStatus.FAILED, message, error, details)
        self._show(step)

    def skip_step(self, step: ProgressStep, reason: str) -> None:
        step.finish(StepStatus.SKIPPED, reason)
        self._show(step)
        logger.debug("Skipped: %s - %s", step.name, reason)

    def report_startup_complete(
        self, *, degraded: bool = False, message: str = ""
    ) -> None:
        self.finished_at = time.monotonic()
        elapsed_ms = (self.finished_at - self.started_at) * 1000

        if degraded:
            self.current_phase = ProgressPhase.DEGRADED
            title = self._paint("Startup Complete (degraded)", _YELLOW)
        else:
            self.current_phase = ProgressPhase.READY
            title = self._paint("Startup Complete", _GREEN)

        self._write()
        self._write(f"{title}: {message} ({elapsed_ms:.0f}ms)" if message else f"{title} ({elapsed_ms:.0f}ms)")
        self._write(RULE)

        if degraded:
            logger.warning("Startup completed in degraded mode after %.0fms: %s", elapsed_ms, message)
        else:
            logger.info("Startup completed in %.0fms", elapsed_ms)

    def get_startup_summary(self) -> dict[str, Any]:
        counts = Counter(step.status for step in self.steps)
        elapsed_ms = 0.0
        if self.finished_at is not None:
            elapsed_ms = (self.finished_at - self.started_at) * 1000

        return {
            "total_duration_ms": elapsed_ms,
            "total_steps": len(self.steps),
            "completed_steps": counts[StepStatus.COMPLETED],
            "failed_steps": counts[StepStatus.FAILED],
            "skipped_steps": counts[StepStatus.SKIPPED],
            "final_phase": self.current_phase.value,
            "degraded": self.current_phase is ProgressPhase.DEGRADED,
        }

    def print_startup_summary(self) -> None:
        summary = self.get_startup_summary()

        self._write("Startup Summary:")
        self._write(f"  Total time: {summary['total_duration_ms']:.0f}ms")
        self._write(
            f"  Steps: {summary['total_steps']} "
            f"({summary['completed_steps']} completed, "
            f"{summary['failed_steps']} failed, "
            f"{summary['skipped_steps']} skipped)"
        )

        failed = [step for step in self.steps if step.status is StepStatus.FAILED]
        if failed:
            self._write()
            self._write(self._paint("Failed Steps:", _RED))
            for step in failed:
                self._write(f"  • {step.name}: {step.message}")
