"""Package manager and variant the bundled bootstrap was built for."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging

from openclaw.core.exceptions import UnsupportedVariantError

logger = logging.getLogger(__name__)


class PackageManager(StrEnum):
    """Supported package managers."""

    APT = "apt"


class PackageVariant(StrEnum):
    """Supported bootstrap variants."""

    APT_ANDROID_7 = "apt-android-7"
    APT_ANDROID_5 = "apt-android-5"


# Format of the packages each manager installs
PACKAGE_FORMATS = {
    PackageManager.APT: "debian",
}


@dataclass(frozen=True)
class PackageSetup:
    manager: PackageManager
    variant: PackageVariant

    @property
    def package_format(self) -> str:
        return PACKAGE_FORMATS[self.manager]


_current: PackageSetup | None = None


def resolve_package_variant(name: str) -> PackageSetup:
    """Resolve and store the process-wide package manager and variant.

    Raises:
        UnsupportedVariantError: If ``name`` is not a known variant.
    """
    global _current  # noqa: PLW0603 - process-wide setting

    try:
        variant = PackageVariant(name)
        manager = PackageManager(name.split("-", 1)[0])
    except ValueError as e:
        raise UnsupportedVariantError(name) from e

    _current = PackageSetup(manager=manager, variant=variant)
    logger.debug("Package manager %s, variant %s", manager.value, variant.value)
    return _current


def get_package_setup() -> PackageSetup | None:
    """Return the resolved setup, or None before resolution."""
    return _current
