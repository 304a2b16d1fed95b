"""Staging of the bundled OpenClaw payloads onto the filesystem.

Each payload is copied best-effort: a failure is logged with the destination
path and the remaining payloads are still attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
import logging
import os
from pathlib import Path
import shutil
import stat
from typing import BinaryIO, Protocol

from openclaw.core.paths import AppPaths

logger = logging.getLogger(__name__)

BUFFER_SIZE = 8192

STARTUP_SCRIPT_RESOURCE = "startup_openclaw.sh"
CHANNEL_ARCHIVE_RESOURCE = "openclaw-wechatui-channel.tar"


class ResourceSource(Protocol):
    """Where embedded payloads are read from."""

    def open(self, name: str) -> BinaryIO: ...


class PackageResources:
    """Payloads shipped inside a Python package."""

    def __init__(self, package: str = "openclaw.resources") -> None:
        self.package = package

    def open(self, name: str) -> BinaryIO:
        return resources.files(self.package).joinpath(name).open("rb")

    def __repr__(self) -> str:
        return f"PackageResources({self.package!r})"


class DirectoryResources:
    """Payloads read from a plain directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def open(self, name: str) -> BinaryIO:
        return (self.root / name).open("rb")

    def __repr__(self) -> str:
        return f"DirectoryResources({str(self.root)!r})"


@dataclass(frozen=True)
class BundledFile:
    """An embedded payload and where it is staged."""

    resource: str
    destination: Path
    executable: bool = False


@dataclass(frozen=True)
class StageResult:
    """Outcome of staging one bundled file."""

    descriptor: BundledFile
    success: bool
    error: Exception | None = None


def bundled_files(paths: AppPaths) -> tuple[BundledFile, ...]:
    """The fixed list of payloads staged at every launch."""
    return (
        BundledFile(
            resource=STARTUP_SCRIPT_RESOURCE,
            destination=paths.data_home_dir / STARTUP_SCRIPT_RESOURCE,
            executable=True,
        ),
        BundledFile(
            resource=CHANNEL_ARCHIVE_RESOURCE,
            destination=paths.home_dir / CHANNEL_ARCHIVE_RESOURCE,
            executable=False,
        ),
    )


class BundledFileStager:
    """Copies embedded payloads to their destinations, overwriting old copies."""

    def __init__(self, source: ResourceSource | None = None) -> None:
        self.source = source or PackageResources()

    def stage(self, descriptor: BundledFile) -> bool:
        """Stage a single payload. Returns False if any part of the copy failed."""
        return self._stage(descriptor).success

    def stage_all(self, descriptors: tuple[BundledFile, ...] | list[BundledFile]) -> list[StageResult]:
        """Stage every payload, continuing past failures."""
        return [self._stage(descriptor) for descriptor in descriptors]

    def _stage(self, descriptor: BundledFile) -> StageResult:
        target = descriptor.destination
        try:
            src = self.source.open(descriptor.resource)
        except Exception as e:  # noqa: BLE001 - one payload must not stop the others
            logger.exception(
                "[STAGE_001] Failed to open bundled resource %s for %s", descriptor.resource, target
            )
            return StageResult(descriptor=descriptor, success=False, error=e)

        try:
            with src, target.open("wb") as dst:
                shutil.copyfileobj(src, dst, BUFFER_SIZE)
            if descriptor.executable:
                mode = os.stat(target).st_mode
                os.chmod(target, stat.S_IMODE(mode) | stat.S_IXUSR)
        except Exception as e:  # noqa: BLE001 - one payload must not stop the others
            logger.exception("[STAGE_002] Failed to copy bundled file to %s", target)
            return StageResult(descriptor=descriptor, success=False, error=e)

        logger.info("Copied bundled file to %s", target)
        return StageResult(descriptor=descriptor, success=True)
