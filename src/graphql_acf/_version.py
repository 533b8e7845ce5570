"""Installed version of graphql-acf."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "graphql-acf"
UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """Version of the installed distribution, or 0.0.0 when running from a bare checkout."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return UNKNOWN_VERSION


__version__ = get_version()
