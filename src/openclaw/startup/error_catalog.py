"""OpenClaw Startup Error Catalog.

Catalog of startup failures with clear messages and solutions. Diagnostic
codes produced by the accessibility checker and the stager point here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ErrorCategory(StrEnum):
    """Error categories for organization."""

    CONFIGURATION = "configuration"
    FILESYSTEM = "filesystem"
    PERMISSIONS = "permissions"
    RESOURCES = "resources"
    SERVICES = "services"
    ENVIRONMENT = "environment"


class ErrorSeverity(StrEnum):
    """Error severity levels."""

    CRITICAL = "critical"  # Aborts the launch
    HIGH = "high"  # Storage-dependent features disabled
    MEDIUM = "medium"  # One feature affected
    LOW = "low"  # Minor issues or warnings


@dataclass
class ErrorSolution:
    """Suggested solution for an error."""

    description: str
    steps: list[str]


@dataclass
class StartupErrorInfo:
    """Error information for a catalog code."""

    code: str
    title: str
    description: str
    category: ErrorCategory
    severity: ErrorSeverity
    solutions: list[ErrorSolution]
    common_causes: list[str]
    related_errors: list[str] = field(default_factory=list)


_FIX_STORAGE = ErrorSolution(
    description="Make the files directory usable",
    steps=[
        "Check that OPENCLAW_FILES_DIR points to the intended location",
        "Verify the launching user owns the directory (ls -ld)",
        "Grant rwx to the owner (chmod u+rwx)",
        "Free disk space if the volume is full",
        "Restart the application",
    ],
)


class StartupErrorCatalog:
    """Catalog of startup errors with solutions."""

    def __init__(self) -> None:
        self.errors: dict[str, StartupErrorInfo] = self._build_error_catalog()

    def _build_error_catalog(self) -> dict[str, StartupErrorInfo]:
        errors = {}

        # Configuration Errors
        errors["CONFIG_001"] = StartupErrorInfo(
            code="CONFIG_001",
            title="Invalid Launcher Configuration",
            description="An OPENCLAW_* environment variable has an invalid value.",
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Relative path given for OPENCLAW_FILES_DIR",
                "Malformed OPENCLAW_PACKAGE_NAME",
                "Invalid OPENCLAW_LOG_LEVEL value",
            ],
            solutions=[
                ErrorSolution(
                    description="Fix the invalid configuration value",
                    steps=[
                        "Read the field name in the error message",
                        "Update the environment variable or .env file",
                        "Restart the application",
                    ],
                ),
            ],
        )

        errors["CONFIG_002"] = StartupErrorInfo(
            code="CONFIG_002",
            title="Unsupported Package Variant",
            description="The bootstrap package variant is not known to this launcher.",
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Typo in OPENCLAW_PACKAGE_VARIANT",
                "Bootstrap built for a newer package manager",
            ],
            solutions=[
                ErrorSolution(
                    description="Use a supported variant",
                    steps=[
                        "Set OPENCLAW_PACKAGE_VARIANT to apt-android-7 or apt-android-5",
                    ],
                ),
            ],
        )

        # Filesystem Errors
        errors["FS_001"] = StartupErrorInfo(
            code="FS_001",
            title="Empty Directory Path",
            description="A directory check was requested for an empty path.",
            category=ErrorCategory.FILESYSTEM,
            severity=ErrorSeverity.HIGH,
            common_causes=["Files directory resolved to an empty value"],
            solutions=[_FIX_STORAGE],
        )

        errors["FS_002"] = StartupErrorInfo(
            code="FS_002",
            title="Path Is Not a Directory",
            description="A non-directory file exists where a directory is expected.",
            category=ErrorCategory.FILESYSTEM,
            severity=ErrorSeverity.HIGH,
            common_causes=[
                "A regular file or dangling symlink occupies the path",
                "Restored backup with a different layout",
            ],
            solutions=[
                ErrorSolution(
                    description="Remove or move the conflicting file",
                    steps=[
                        "Inspect the path named in the error",
                        "Move the file out of the way",
                        "Restart the application",
                    ],
                ),
            ],
        )

        errors["FS_003"] = StartupErrorInfo(
            code="FS_003",
            title="Directory Creation Failed",
            description="A missing directory could not be created.",
            category=ErrorCategory.FILESYSTEM,
            severity=ErrorSeverity.HIGH,
            common_causes=[
                "Parent directory is read-only",
                "Secondary user or removable storage install",
                "Disk full",
            ],
            solutions=[_FIX_STORAGE],
            related_errors=["FS_006"],
        )

        errors["FS_004"] = StartupErrorInfo(
            code="FS_004",
            title="Directory Missing",
            description="A required directory does not exist and creation was not requested.",
            category=ErrorCategory.FILESYSTEM,
            severity=ErrorSeverity.HIGH,
            common_causes=["Files directory was deleted while the app was installed"],
            solutions=[_FIX_STORAGE],
        )

        errors["FS_005"] = StartupErrorInfo(
            code="FS_005",
            title="Directory Not Readable",
            description="A required directory cannot be listed or traversed.",
            category=ErrorCategory.PERMISSIONS,
            severity=ErrorSeverity.HIGH,
            common_causes=["Missing r or x permission for the owner"],
            solutions=[_FIX_STORAGE],
        )

        errors["FS_006"] = StartupErrorInfo(
            code="FS_006",
            title="Directory Not Writable",
            description="A required directory rejected a write probe.",
            category=ErrorCategory.PERMISSIONS,
            severity=ErrorSeverity.HIGH,
            common_causes=[
                "Missing w permission for the owner",
                "Read-only mount",
                "Disk full",
            ],
            solutions=[_FIX_STORAGE],
            related_errors=["FS_003"],
        )

        errors["FS_010"] = StartupErrorInfo(
            code="FS_010",
            title="Application Directory Inaccessible",
            description="The apps/<package> directory under the files root is not usable.",
            category=ErrorCategory.FILESYSTEM,
            severity=ErrorSeverity.HIGH,
            common_causes=[
                "apps/ created by another user",
                "Package name changed between installs",
            ],
            solutions=[_FIX_STORAGE],
            related_errors=["FS_003", "FS_006"],
        )

        # Resource Errors
        errors["STAGE_001"] = StartupErrorInfo(
            code="STAGE_001",
            title="Bundled Resource Missing",
            description="An embedded payload could not be opened.",
            category=ErrorCategory.RESOURCES,
            severity=ErrorSeverity.MEDIUM,
            common_causes=[
                "Package installed without its resource files",
                "OPENCLAW_RESOURCES_DIR points to an incomplete directory",
            ],
            solutions=[
                ErrorSolution(
                    description="Reinstall or repoint the resources",
                    steps=[
                        "Reinstall the openclaw-launcher package",
                        "Or unset OPENCLAW_RESOURCES_DIR to use the bundled files",
                    ],
                ),
            ],
        )

        errors["STAGE_002"] = StartupErrorInfo(
            code="STAGE_002",
            title="Bundled File Copy Failed",
            description="Copying an embedded payload to its destination failed.",
            category=ErrorCategory.FILESYSTEM,
            severity=ErrorSeverity.MEDIUM,
            common_causes=[
                "Destination is a directory or read-only file",
                "Disk full during the copy",
            ],
            solutions=[_FIX_STORAGE],
        )

        # Service Errors
        errors["SVC_001"] = StartupErrorInfo(
            code="SVC_001",
            title="Am Socket Server Unavailable",
            description="The local am socket server could not be started.",
            category=ErrorCategory.SERVICES,
            severity=ErrorSeverity.LOW,
            common_causes=[
                "Socket path longer than the platform limit",
                "Another process holds the socket",
            ],
            solutions=[
                ErrorSolution(
                    description="Shorten the files path or stop the other instance",
                    steps=[
                        "Use a shorter OPENCLAW_FILES_DIR",
                        "Stop other launcher processes for the same files directory",
                    ],
                ),
            ],
        )

        errors["ENV_001"] = StartupErrorInfo(
            code="ENV_001",
            title="Environment File Not Written",
            description="The shell environment could not be persisted to termux.env.",
            category=ErrorCategory.ENVIRONMENT,
            severity=ErrorSeverity.LOW,
            common_causes=["usr/etc/termux is not writable"],
            solutions=[_FIX_STORAGE],
        )

        return errors

    def get_error_info(self, error_code: str) -> StartupErrorInfo | None:
        """Get error information by code."""
        return self.errors.get(error_code)

    def find_errors_by_category(
        self, category: ErrorCategory
    ) -> list[StartupErrorInfo]:
        """Find all errors in a specific category."""
        return [error for error in self.errors.values() if error.category == category]

    def format_error_help(
        self, error_code: str, context: dict[str, str] | None = None
    ) -> str:
        """Format error help message."""
        error_info = self.get_error_info(error_code)
        if not error_info:
            return f"Unknown error code: {error_code}"

        lines: list[str] = []
        lines.extend(
            (
                f"{error_info.title} ({error_info.code})",
                "=" * 60,
                "",
                f"Description: {error_info.description}",
                f"Severity: {error_info.severity.value.upper()}",
                f"Category: {error_info.category.value.title()}",
                "",
            )
        )

        if error_info.common_causes:
            lines.append("Common Causes:")
            lines.extend(f"  • {cause}" for cause in error_info.common_causes)
            lines.append("")

        if error_info.solutions:
            lines.append("Solutions:")
            for i, solution in enumerate(error_info.solutions, 1):
                lines.append(f"\n  {i}. {solution.description}")
                lines.extend(f"     • {step}" for step in solution.steps)

        if context:
            lines.extend(("", "Context:"))
            for key, value in context.items():
                lines.append(f"  • {key}: {value}")

        if error_info.related_errors:
            lines.extend(("", "Related Errors:"))
            for related_code in error_info.related_errors:
                related_error = self.get_error_info(related_code)
                if related_error:
                    lines.append(f"  • {related_code}: {related_error.title}")

        return "\n".join(lines)


# Global error catalog instance
error_catalog = StartupErrorCatalog()
