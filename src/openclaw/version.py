"""Version information for the OpenClaw launcher."""

from importlib import metadata


def get_version() -> str:
    """Get the current version of the launcher.

    Returns:
        str: Version string from package metadata, or fallback value
    """
    try:
        return metadata.version("openclaw-launcher")
    except metadata.PackageNotFoundError:
        # Running from a source checkout
        return "0.1.0-dev"
