"""Formatting of stored file paths."""

import os
from enum import Enum
from pathlib import Path


class PathType(str, Enum):
    """How a stored file's path is reported back to the caller."""

    ABSOLUTE = "absolute"
    """Absolute filesystem path."""

    RELATIVE = "relative"
    """Relative to the current working directory."""

    ROOT = "root"
    """Relative to the tree root (tree segments plus filename)."""

    TREE = "tree"
    """Root basename, tree segments and filename."""


def format_path(path: str | Path, root: str | Path, pathtype: PathType | str = PathType.ABSOLUTE) -> str:
    """Format a path inside ``root`` according to ``pathtype``.

    Args:
        path: Path of a stored file
        root: Root directory of the tree
        pathtype: Requested format

    Returns:
        Formatted path string

    Raises:
        ValueError: If ``pathtype`` is unknown or ``path`` is not inside ``root``
    """
    pathtype = PathType(pathtype)
    path = Path(os.path.abspath(path))
    root = Path(os.path.abspath(root))

    if pathtype is PathType.ABSOLUTE:
        return str(path)
    if pathtype is PathType.RELATIVE:
        return os.path.relpath(path)
    if pathtype is PathType.ROOT:
        return str(path.relative_to(root))
    return str(Path(root.name) / path.relative_to(root))
