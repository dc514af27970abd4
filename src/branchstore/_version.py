"""Version information for branchstore."""

from importlib.metadata import PackageNotFoundError, version


def _get_version_from_metadata() -> str:
    """Get version from package metadata."""
    try:
        return version("branchstore")
    except PackageNotFoundError:
        return "0.0.0-unknown"


__version__ = _get_version_from_metadata()
