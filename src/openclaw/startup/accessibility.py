"""Directory accessibility checks gating storage-dependent startup steps.

A check never raises for filesystem problems. It returns an
``AccessibilityVerdict`` whose diagnostic explains the failure cause by
cause, so the caller can log the root cause and carry on in degraded mode.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import tempfile

from openclaw.core.paths import AppPaths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDiagnostic:
    """Why a directory is not accessible, with the underlying cause."""

    code: str
    message: str
    path: str = ""
    cause: AccessDiagnostic | BaseException | None = None

    def chain(self) -> Iterator[str]:
        """Yield one line per link of the cause chain, outermost first."""
        current: AccessDiagnostic | BaseException | None = self
        while current is not None:
            if isinstance(current, AccessDiagnostic):
                where = f" ({current.path})" if current.path else ""
                yield f"[{current.code}] {current.message}{where}"
                current = current.cause
            else:
                yield f"{type(current).__name__}: {current}"
                current = current.__cause__

    def __str__(self) -> str:
        return "\n".join(
            line if i == 0 else f"  caused by {line}"
            for i, line in enumerate(self.chain())
        )


@dataclass(frozen=True)
class AccessibilityVerdict:
    """Result of a directory accessibility check. Never mutated."""

    path: Path
    accessible: bool
    diagnostic: AccessDiagnostic | None = None

    @classmethod
    def ok(cls, path: Path) -> AccessibilityVerdict:
        return cls(path=path, accessible=True)

    @classmethod
    def failed(cls, path: Path, diagnostic: AccessDiagnostic) -> AccessibilityVerdict:
        return cls(path=path, accessible=False, diagnostic=diagnostic)

    def __bool__(self) -> bool:
        return self.accessible


def check_accessible(
    path: str | Path, create_if_missing: bool, must_be_writable: bool
) -> AccessibilityVerdict:
    """Check that ``path`` is a usable directory.

    Args:
        path: Directory to check.
        create_if_missing: Create the directory (and parents) if it is missing.
        must_be_writable: Also require write access, verified with a temporary
            file that is removed again. Existing content is never touched.

    Returns:
        The verdict; ``diagnostic`` is set when the directory is not accessible.
    """
    if not str(path).strip():
        return AccessibilityVerdict.failed(
            Path(), AccessDiagnostic("FS_001", "Directory path is empty")
        )

    directory = Path(path)
    label = str(directory)

    if directory.exists() or directory.is_symlink():
        if not directory.is_dir():
            return AccessibilityVerdict.failed(
                directory,
                AccessDiagnostic(
                    "FS_002", "Non-directory file exists at directory path", label
                ),
            )
    elif create_if_missing:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return AccessibilityVerdict.failed(
                directory,
                AccessDiagnostic("FS_003", "Failed to create directory", label, e),
            )
        logger.debug("Created directory %s", label)
    else:
        return AccessibilityVerdict.failed(
            directory, AccessDiagnostic("FS_004", "Directory does not exist", label)
        )

    if not os.access(directory, os.R_OK | os.X_OK):
        return AccessibilityVerdict.failed(
            directory,
            AccessDiagnostic("FS_005", "Directory is not readable", label),
        )

    if must_be_writable:
        if not os.access(directory, os.W_OK):
            return AccessibilityVerdict.failed(
                directory,
                AccessDiagnostic("FS_006", "Directory is not writable", label),
            )
        try:
            with tempfile.TemporaryFile(dir=directory, prefix=".access-probe-"):
                pass
        except OSError as e:
            return AccessibilityVerdict.failed(
                directory,
                AccessDiagnostic("FS_006", "Write probe failed", label, e),
            )

    return AccessibilityVerdict.ok(directory)


def check_files_dir(paths: AppPaths) -> AccessibilityVerdict:
    """Check (and create) the primary files directory."""
    return check_accessible(paths.files_dir, create_if_missing=True, must_be_writable=True)


def check_app_apps_dir(paths: AppPaths) -> AccessibilityVerdict:
    """Check (and create) the application-scoped directory under the apps root."""
    verdict = check_accessible(
        paths.app_apps_dir, create_if_missing=True, must_be_writable=True
    )
    if verdict.accessible or verdict.diagnostic is None:
        return verdict

    return AccessibilityVerdict.failed(
        verdict.path,
        AccessDiagnostic(
            "FS_010",
            f"Create apps/{paths.package_name} directory failed",
            str(paths.app_apps_dir),
            verdict.diagnostic,
        ),
    )
