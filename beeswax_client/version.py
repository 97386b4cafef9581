"""Version of the installed Beeswax client."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Get the client version from package metadata, or "0.0.0" if not installed."""
    try:
        return version("beeswax-client")
    except PackageNotFoundError:
        return "0.0.0"
