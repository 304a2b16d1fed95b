"""Well-known filesystem locations of the OpenClaw runtime.

Every path is derived from the files root and the application package name,
following the Termux layout the bundled payloads expect:

    files/
      usr/                      prefix
        etc/termux/termux.env   materialized shell environment
      home/                     $HOME
        .termux/                data home (startup_openclaw.sh)
      apps/<package>/           application-scoped directory
        termux-am/am.sock       am socket server
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_PACKAGE_NAME = "com.termux"
DEFAULT_FILES_DIR = Path("~/.local/share/openclaw/files")

ENV_FILE_NAME = "termux.env"
PROPERTIES_FILE_NAME = "termux.properties"
CRASH_LOG_FILE_NAME = "crash_log.md"
AM_SOCKET_FILE_NAME = "am.sock"


@dataclass(frozen=True)
class AppPaths:
    """Resolved directory and file paths for one application install."""

    files_dir: Path
    package_name: str = DEFAULT_PACKAGE_NAME

    @classmethod
    def from_files_dir(
        cls, files_dir: str | Path, package_name: str = DEFAULT_PACKAGE_NAME
    ) -> AppPaths:
        return cls(files_dir=Path(files_dir).expanduser(), package_name=package_name)

    @property
    def prefix_dir(self) -> Path:
        return self.files_dir / "usr"

    @property
    def home_dir(self) -> Path:
        return self.files_dir / "home"

    @property
    def data_home_dir(self) -> Path:
        return self.home_dir / ".termux"

    @property
    def config_home_dir(self) -> Path:
        return self.home_dir / ".config" / "termux"

    @property
    def tmp_dir(self) -> Path:
        return self.prefix_dir / "tmp"

    @property
    def bin_dir(self) -> Path:
        return self.prefix_dir / "bin"

    @property
    def apps_dir(self) -> Path:
        return self.files_dir / "apps"

    @property
    def app_apps_dir(self) -> Path:
        """Directory private to this application under the apps root."""
        return self.apps_dir / self.package_name

    @property
    def am_socket_path(self) -> Path:
        return self.app_apps_dir / "termux-am" / AM_SOCKET_FILE_NAME

    @property
    def env_file_path(self) -> Path:
        return self.prefix_dir / "etc" / "termux" / ENV_FILE_NAME

    @property
    def properties_paths(self) -> tuple[Path, ...]:
        """Candidate properties files, in lookup order."""
        return (
            self.data_home_dir / PROPERTIES_FILE_NAME,
            self.config_home_dir / PROPERTIES_FILE_NAME,
        )

    @property
    def crash_log_path(self) -> Path:
        return self.home_dir / CRASH_LOG_FILE_NAME
