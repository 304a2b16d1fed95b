"""Shell environment constants exported to processes started by the app.

``ShellEnvironment.init()`` builds the constants once per launch and caches
them. ``write_environment_to_file()`` materializes them as ``termux.env`` so
shells started outside the app can source the same values.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile
from typing import TYPE_CHECKING

from openclaw.services.am_socket_server import is_am_socket_server_running
from openclaw.services.package_variant import get_package_setup
from openclaw.version import get_version

if TYPE_CHECKING:
    from openclaw.startup.context import StartupContext

logger = logging.getLogger(__name__)

ENV_PREFIX = "TERMUX_APP__"


def escape_env_value(value: str) -> str:
    """Escape a value for use inside double quotes in a POSIX shell."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("`", "\\`")
    )


def format_environment(environment: dict[str, str]) -> str:
    """Render ``export NAME="VALUE"`` lines, sorted by name."""
    return "".join(
        f'export {name}="{escape_env_value(value)}"\n'
        for name, value in sorted(environment.items())
    )


class ShellEnvironment:
    """Process-wide cache of the shell environment constants."""

    _environment: dict[str, str] | None = None

    @classmethod
    def init(cls, context: StartupContext) -> dict[str, str]:
        """Build and cache the environment for this launch."""
        cls._environment = cls.build(context)
        logger.debug("Shell environment initialized with %d variables", len(cls._environment))
        return dict(cls._environment)

    @classmethod
    def build(cls, context: StartupContext) -> dict[str, str]:
        paths = context.paths
        setup = get_package_setup()

        environment = {
            "HOME": str(paths.home_dir),
            "PREFIX": str(paths.prefix_dir),
            "TMPDIR": str(paths.tmp_dir),
            "PATH": f"{paths.bin_dir}:{os.environ.get('PATH', '/usr/bin:/bin')}",
            "LANG": "en_US.UTF-8",
            "TERMUX_VERSION": get_version(),
            f"{ENV_PREFIX}PACKAGE_NAME": paths.package_name,
            f"{ENV_PREFIX}FILES_DIR": str(paths.files_dir),
            f"{ENV_PREFIX}APPS_DIR": str(paths.app_apps_dir),
            f"{ENV_PREFIX}AM_SOCKET_SERVER_ENABLED": str(is_am_socket_server_running()).lower(),
        }
        if setup is not None:
            environment[f"{ENV_PREFIX}PACKAGE_MANAGER"] = setup.manager.value
            environment[f"{ENV_PREFIX}PACKAGE_VARIANT"] = setup.variant.value
            environment["TERMUX_MAIN_PACKAGE_FORMAT"] = setup.package_format
        return environment

    @classmethod
    def get_environment(cls) -> dict[str, str] | None:
        return dict(cls._environment) if cls._environment is not None else None

    @classmethod
    def reset(cls) -> None:
        cls._environment = None

    @classmethod
    def write_environment_to_file(cls, context: StartupContext) -> bool:
        """Write the cached environment to ``termux.env``.

        Returns False if nothing was written; the failure is logged.
        """
        environment = cls._environment if cls._environment is not None else cls.init(context)
        target: Path = context.paths.env_file_path

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(format_environment(environment))
                os.replace(tmp_name, target)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError:
            logger.exception("[ENV_001] Failed to write environment to %s", target)
            return False

        logger.debug("Wrote shell environment to %s", target)
        return True
