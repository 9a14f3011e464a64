"""Installed version of dumbjshell."""

from importlib.metadata import PackageNotFoundError, version

UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """Version from the installed distribution metadata."""
    try:
        return version("dumbjshell")
    except PackageNotFoundError:
        return UNKNOWN_VERSION
