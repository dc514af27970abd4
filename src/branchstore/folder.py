"""A single directory in a storage tree."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


class Folder:
    """A directory in the filesystem with an optional item limit.

    Occupancy is read from disk on every call and never cached, since
    other processes may add or remove entries between calls.
    """

    def __init__(self, path: str | Path, limit: int | None = None):
        """Initialize folder.

        Args:
            path: Path to the directory (need not exist yet)
            limit: Maximum number of visible items, None for unbounded
        """
        self.path = Path(os.path.abspath(path))
        self.limit = limit

    @property
    def basename(self) -> str:
        return self.path.name

    @classmethod
    def chain(cls, root: str | Path, segments: list[str], limit: int | None = None) -> list["Folder"]:
        """Build the folders for ``root`` and every nested segment below it.

        Args:
            root: Base directory
            segments: Ordered directory names below the root
            limit: Item limit applied to every folder

        Returns:
            List of folders, root first
        """
        folders = [cls(root, limit)]
        for name in segments:
            folders.append(cls(folders[-1].path / name, limit))
        return folders

    def exists(self) -> bool:
        return self.path.exists()

    def is_dir(self) -> bool:
        return self.path.is_dir()

    def create(self) -> None:
        """Create the directory in its immediate parent.

        Raises:
            FileNotFoundError: If the parent directory is missing
        """
        if not self.exists():
            self.path.mkdir()
            logger.debug(f"Created directory {self.path}")

    def create_recursive(self) -> None:
        """Create the directory with all missing parents."""
        if not self.exists():
            self.path.mkdir(parents=True)
            logger.debug(f"Created directory tree {self.path}")

    def entries(self, include_hidden: bool = False) -> list[str]:
        """List entry names (files or directories) in the folder.

        Args:
            include_hidden: Also list names starting with a dot

        Returns:
            Entry names
        """
        children = os.listdir(self.path)
        if include_hidden:
            return children
        return [name for name in children if not name.startswith(HIDDEN_PREFIX)]

    def count(self) -> int:
        """Return the number of visible entries."""
        return len(self.entries())

    def available(self) -> bool:
        """Return True if the folder has room for one more item."""
        if self.limit is None:
            return True
        return self.count() < self.limit

    def at_or_over_limit(self) -> bool:
        if self.limit is None:
            return False
        return self.count() >= self.limit

    def __eq__(self, other):
        if not isinstance(other, Folder):
            return NotImplemented
        return self.path == other.path

    def __hash__(self):
        return hash(self.path)

    def __repr__(self):
        return f"Folder({str(self.path)!r}, limit={self.limit})"
