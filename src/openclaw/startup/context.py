"""Process-wide handle threaded through every startup step."""

from __future__ import annotations

from dataclasses import dataclass, field

from openclaw.core.paths import AppPaths
from openclaw.startup.config_schema import LauncherConfig
from openclaw.startup.staging import DirectoryResources, PackageResources, ResourceSource


@dataclass(frozen=True)
class StartupContext:
    """Configuration, resolved paths and payload source for one launch."""

    config: LauncherConfig
    paths: AppPaths
    resources: ResourceSource = field(default_factory=PackageResources)

    @classmethod
    def from_config(cls, config: LauncherConfig) -> StartupContext:
        paths = AppPaths.from_files_dir(config.files_dir, config.package_name)
        source: ResourceSource = (
            DirectoryResources(config.resources_dir)
            if config.resources_dir is not None
            else PackageResources()
        )
        return cls(config=config, paths=paths, resources=source)
