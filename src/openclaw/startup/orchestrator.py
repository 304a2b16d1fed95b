"""OpenClaw Startup Orchestrator.

Runs the once-per-launch initialization sequence in a fixed order:

    crash handler → logging → package variant → properties → shell manager →
    theme → files dir check → apps/<package> check → stage bundled files →
    am socket server → shell environment → persist environment

Storage problems never abort the launch. If either directory check fails the
files are not staged, the socket server is not started and the environment
is not written to disk, but the environment cache is still initialized so
the application keeps working in degraded mode. Failures of the steps before
the storage checks propagate to the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
import logging
import sys
import threading
from typing import Any

from openclaw.core.exceptions import ConfigurationError, StartupError, UnsupportedVariantError
from openclaw.core.logging_config import setup_logging
from openclaw.services.am_socket_server import (
    is_am_socket_server_running,
    setup_am_socket_server,
    shutdown_am_socket_server,
)
from openclaw.services.crash_handler import install_crash_handler
from openclaw.services.package_variant import resolve_package_variant
from openclaw.services.properties import AppProperties, init_properties
from openclaw.services.shell_environment import ShellEnvironment
from openclaw.services.shell_manager import ShellManager
from openclaw.services.theme import set_app_night_mode
from openclaw.startup.accessibility import (
    AccessibilityVerdict,
    check_app_apps_dir,
    check_files_dir,
)
from openclaw.startup.config_schema import load_config
from openclaw.startup.context import StartupContext
from openclaw.startup.error_catalog import error_catalog
from openclaw.startup.progress_reporter import ProgressPhase, StartupProgressReporter
from openclaw.startup.staging import BundledFileStager, StageResult, bundled_files

logger = logging.getLogger(__name__)


class StartupState(StrEnum):
    """Startup states, in the only order they can be entered."""

    INIT_CRASH_HANDLER = "init_crash_handler"
    CONFIGURE_LOGGING = "configure_logging"
    RESOLVE_VARIANT = "resolve_variant"
    LOAD_PROPERTIES = "load_properties"
    INIT_SHELL_MANAGER = "init_shell_manager"
    APPLY_THEME = "apply_theme"
    CHECK_PRIMARY_DIR = "check_primary_dir"
    CHECK_APP_SUBDIR = "check_app_subdir"
    STAGE_FILES = "stage_files"
    START_SERVICE = "start_service"
    ENV_INIT = "env_init"
    PERSIST_ENV = "persist_env"
    DONE = "done"


_STATE_ORDER = list(StartupState)


def _configure_logging(context: StartupContext) -> None:
    setup_logging(context.config.log_level.value, debug=context.config.debug)


def _resolve_variant(context: StartupContext) -> Any:
    return resolve_package_variant(context.config.package_variant)


def _load_properties(context: StartupContext) -> AppProperties:
    return init_properties(context.paths)


def _apply_theme(properties: AppProperties) -> Any:
    return set_app_night_mode(properties.night_mode)


@dataclass
class StartupCollaborators:
    """Step implementations called by the orchestrator."""

    install_crash_handler: Callable[[StartupContext], Any]
    configure_logging: Callable[[StartupContext], Any]
    resolve_variant: Callable[[StartupContext], Any]
    load_properties: Callable[[StartupContext], AppProperties]
    init_shell_manager: Callable[[StartupContext], Any]
    apply_theme: Callable[[AppProperties], Any]
    start_service: Callable[[StartupContext], Any]
    init_environment: Callable[[StartupContext], Any]
    persist_environment: Callable[[StartupContext], bool]

    @classmethod
    def default(cls) -> StartupCollaborators:
        return cls(
            install_crash_handler=install_crash_handler,
            configure_logging=_configure_logging,
            resolve_variant=_resolve_variant,
            load_properties=_load_properties,
            init_shell_manager=ShellManager.init,
            apply_theme=_apply_theme,
            start_service=setup_am_socket_server,
            init_environment=ShellEnvironment.init,
            persist_environment=ShellEnvironment.write_environment_to_file,
        )


@dataclass
class StartupResult:
    """What one launch did."""

    verdict: AccessibilityVerdict
    states: list[StartupState] = field(default_factory=list)
    staged: list[StageResult] = field(default_factory=list)
    service_attempted: bool = False
    environment_persisted: bool = False
    properties: AppProperties | None = None

    @property
    def degraded(self) -> bool:
        """Storage was inaccessible or a bundled file could not be staged."""
        return not self.verdict.accessible or any(not r.success for r in self.staged)


class StartupOrchestrator:
    """Sequences the startup steps for one launch.

    An instance runs at most once. Use ``run_startup()`` for the process-wide
    guard.
    """

    def __init__(
        self,
        context: StartupContext,
        collaborators: StartupCollaborators | None = None,
        reporter: StartupProgressReporter | None = None,
    ) -> None:
        """Initialize startup orchestrator.

        Args:
            context: Configuration and paths for this launch
            collaborators: Step implementations (defaults to the real services)
            reporter: Progress reporter (creates default if not provided)
        """
        self.context = context
        self.collaborators = collaborators or StartupCollaborators.default()
        self.reporter = reporter or StartupProgressReporter()
        self.states: list[StartupState] = []
        self._ran = False

    def run(self) -> StartupResult:
        """Run the whole sequence.

        Raises:
            StartupError: If this instance already ran.
            Exception: Whatever a pre-storage collaborator raises.
        """
        if self._ran:
            msg = "Startup sequence already ran"
            raise StartupError(msg, phase=self.states[-1].value if self.states else "")
        self._ran = True

        self.reporter.start_startup()
        logger.debug("Starting application")

        properties = self._configure_app()
        verdict = self._check_storage()
        staged, service_attempted = self._run_gated_steps(verdict)
        persisted = self._init_environment(verdict)
        self._enter(StartupState.DONE)

        result = StartupResult(
            verdict=verdict,
            states=list(self.states),
            staged=staged,
            service_attempted=service_attempted,
            environment_persisted=persisted,
            properties=properties,
        )
        if not verdict.accessible:
            message = "Storage not accessible; running without bundled files and services"
        elif result.degraded:
            message = "Some bundled files could not be staged"
        else:
            message = "All steps completed"
        self.reporter.report_startup_complete(degraded=result.degraded, message=message)
        return result

    def _enter(self, state: StartupState) -> None:
        if self.states and _STATE_ORDER.index(state) <= _STATE_ORDER.index(self.states[-1]):
            msg = f"Cannot enter {state.value} after {self.states[-1].value}"
            raise StartupError(msg, phase=self.states[-1].value)
        self.states.append(state)
        logger.debug("Startup state: %s", state.value)

    def _step(self, state: StartupState, name: str, action: Callable[[], Any]) -> Any:
        """Run an unrecoverable step: report it, let failures propagate."""
        self._enter(state)
        step = self.reporter.start_step(name)
        try:
            result = action()
        except Exception as e:
            self.reporter.fail_step(step, f"{name} failed", e)
            raise
        self.reporter.complete_step(step)
        return result

    def _configure_app(self) -> AppProperties:
        c = self.collaborators
        ctx = self.context
        self.reporter.start_phase(ProgressPhase.CONFIGURING_APP)

        self._step(StartupState.INIT_CRASH_HANDLER, "Installing crash handler", lambda: c.install_crash_handler(ctx))
        self._step(StartupState.CONFIGURE_LOGGING, "Configuring logging", lambda: c.configure_logging(ctx))
        self._step(StartupState.RESOLVE_VARIANT, "Resolving package variant", lambda: c.resolve_variant(ctx))
        properties = self._step(StartupState.LOAD_PROPERTIES, "Loading properties", lambda: c.load_properties(ctx))
        self._step(StartupState.INIT_SHELL_MANAGER, "Initializing shell manager", lambda: c.init_shell_manager(ctx))
        self._step(StartupState.APPLY_THEME, "Applying night mode", lambda: c.apply_theme(properties))
        return properties

    def _check_storage(self) -> AccessibilityVerdict:
        """Check the files directory, then the app directory under it.

        The returned verdict is the only branching input for the rest of the
        sequence.
        """
        paths = self.context.paths
        self.reporter.start_phase(ProgressPhase.CHECKING_STORAGE)

        self._enter(StartupState.CHECK_PRIMARY_DIR)
        step = self.reporter.start_step("Files directory", str(paths.files_dir))
        verdict = check_files_dir(paths)
        if not verdict.accessible:
            self.reporter.fail_step(step, "Not accessible")
            self._log_inaccessible("Files directory is not accessible", verdict)
            self.reporter.skip_step(
                self.reporter.add_step("App directory"), "Files directory not accessible"
            )
            return verdict
        self.reporter.complete_step(step, "Accessible")
        logger.info("Files directory is accessible")

        self._enter(StartupState.CHECK_APP_SUBDIR)
        step = self.reporter.start_step("App directory", str(paths.app_apps_dir))
        verdict = check_app_apps_dir(paths)
        if not verdict.accessible:
            self.reporter.fail_step(step, "Not accessible")
            self._log_inaccessible(f"Create apps/{paths.package_name} directory failed", verdict)
            return verdict
        self.reporter.complete_step(step, "Accessible")
        return verdict

    def _log_inaccessible(self, message: str, verdict: AccessibilityVerdict) -> None:
        diagnostic = verdict.diagnostic
        logger.error("%s\n%s", message, diagnostic)
        if diagnostic is not None:
            logger.debug(
                "%s",
                error_catalog.format_error_help(diagnostic.code, {"path": str(verdict.path)}),
            )

    def _run_gated_steps(
        self, verdict: AccessibilityVerdict
    ) -> tuple[list[StageResult], bool]:
        """Stage bundled files and start the service when storage is accessible."""
        if not verdict.accessible:
            for name in ("Staging bundled files", "Starting am socket server"):
                self.reporter.skip_step(self.reporter.add_step(name), "Storage not accessible")
            return [], False

        self.reporter.start_phase(ProgressPhase.STAGING_FILES)
        self._enter(StartupState.STAGE_FILES)
        staged = self._stage_files()

        self.reporter.start_phase(ProgressPhase.STARTING_SERVICES)
        self._enter(StartupState.START_SERVICE)
        step = self.reporter.start_step("Starting am socket server")
        self.collaborators.start_service(self.context)
        self.reporter.complete_step(step, "Requested")
        return staged, True

    def _stage_files(self) -> list[StageResult]:
        paths = self.context.paths
        step = self.reporter.start_step("Staging bundled files")

        descriptors = bundled_files(paths)
        for directory in (paths.data_home_dir, paths.home_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning("Failed to create directory for bundled files: %s (%s)", directory, e)
                self.reporter.fail_step(step, f"Cannot create {directory}", e)
                return [StageResult(descriptor=d, success=False, error=e) for d in descriptors]

        results = BundledFileStager(self.context.resources).stage_all(descriptors)
        failed = [r for r in results if not r.success]
        if failed:
            self.reporter.fail_step(
                step,
                f"{len(failed)} of {len(results)} file(s) failed",
                details={"failed": [str(r.descriptor.destination) for r in failed]},
            )
        else:
            self.reporter.complete_step(step, f"{len(results)} file(s) staged")
        return results

    def _init_environment(self, verdict: AccessibilityVerdict) -> bool:
        """Initialize the environment cache, and persist it if storage allows."""
        self.reporter.start_phase(ProgressPhase.INITIALIZING_ENVIRONMENT)

        self._enter(StartupState.ENV_INIT)
        step = self.reporter.start_step("Initializing shell environment")
        self.collaborators.init_environment(self.context)
        self.reporter.complete_step(step)

        if not verdict.accessible:
            self.reporter.skip_step(
                self.reporter.add_step("Writing environment file"), "Storage not accessible"
            )
            return False

        self._enter(StartupState.PERSIST_ENV)
        step = self.reporter.start_step("Writing environment file")
        persisted = bool(self.collaborators.persist_environment(self.context))
        if persisted:
            self.reporter.complete_step(step, str(self.context.paths.env_file_path))
        else:
            self.reporter.fail_step(step, "Environment file not written")
        return persisted


_startup_result: StartupResult | None = None


def run_startup(
    context: StartupContext,
    collaborators: StartupCollaborators | None = None,
    reporter: StartupProgressReporter | None = None,
) -> StartupResult:
    """Run the startup sequence once per process.

    Later calls log a warning and return the first result.
    """
    global _startup_result  # noqa: PLW0603 - process-wide call-once guard

    if _startup_result is not None:
        logger.warning("Startup already ran in this process; ignoring repeated call")
        return _startup_result

    _startup_result = StartupOrchestrator(context, collaborators, reporter).run()
    return _startup_result


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    import argparse  # noqa: PLC0415 - Main function import

    parser = argparse.ArgumentParser(description="OpenClaw application startup")
    parser.add_argument("--files-dir", help="Primary data root (default: OPENCLAW_FILES_DIR)")
    parser.add_argument("--resources-dir", help="Directory overriding the bundled payloads")
    parser.add_argument("--log-level", help="Logging level (default: OPENCLAW_LOG_LEVEL)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--wait",
        action="store_true",
        help="Keep running so the am socket server stays available",
    )
    args = parser.parse_args(argv)

    overrides = {
        "files_dir": args.files_dir,
        "resources_dir": args.resources_dir,
        "log_level": args.log_level.upper() if args.log_level else None,
    }
    try:
        config = load_config(**{k: v for k, v in overrides.items() if v is not None})
    except ConfigurationError as e:
        print("❌ [CONFIG_001] Invalid configuration:", file=sys.stderr)  # noqa: T201
        for error in e.errors:
            print(f"  • {error}", file=sys.stderr)  # noqa: T201
        return 2

    reporter = StartupProgressReporter(enable_colors=not args.no_color)

    try:
        run_startup(StartupContext.from_config(config), reporter=reporter)
    except UnsupportedVariantError as e:
        print(f"❌ [CONFIG_002] {e}", file=sys.stderr)  # noqa: T201
        logger.debug("%s", error_catalog.format_error_help("CONFIG_002", {"variant": e.variant}))
        return 2
    except KeyboardInterrupt:
        print("\n❌ Startup cancelled")  # noqa: T201
        return 130
    except Exception as e:
        print(f"❌ Startup failed: {e}")  # noqa: T201
        logger.exception("Unexpected error during startup")
        return 1

    reporter.print_startup_summary()

    if args.wait:
        if not is_am_socket_server_running():
            print("Am socket server is not running; nothing to wait for")  # noqa: T201
            return 0
        print("Serving am socket requests, press Ctrl+C to stop")  # noqa: T201
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            pass
        finally:
            shutdown_am_socket_server()

    return 0


if __name__ == "__main__":
    sys.exit(main())
