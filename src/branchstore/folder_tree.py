"""Nested directory chains with bounded fan-out.

A FolderTree is the ancestor chain of folders from a root directory down
to the terminal directory that new files are written into. When the
terminal is full, a fresh branch is minted below the nearest ancestor
that still has room for another subdirectory.

Example layout for two nesting levels::

    root/
        .current_store_path -> root/3f9c.../a01b...
        3f9c.../
            77d2.../        (full)
            a01b.../        (terminal)
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .errors import BranchError, NameCollisionError, TreeLimitExceededError
from .folder import HIDDEN_PREFIX, Folder
from .storage_utils import random_name

logger = logging.getLogger(__name__)

# Attempts at finding an unused name for the first folder of a new branch
MAX_NAME_ATTEMPTS = 100


class FolderTree:
    """A nested directory path from a root folder to a terminal folder.

    Attributes:
        folders: Folder for each directory in the chain, root first
        path_length: Number of directories in a complete chain (levels + 1),
            None for a flat tree
        folder_limit: Maximum number of items in any folder of the chain
    """

    def __init__(
        self,
        folders: list[Folder],
        levels: int | None,
        limit: int | None,
        name_factory: Callable[[], str] = random_name,
    ):
        """Initialize tree.

        Args:
            folders: Folders in the chain, root first
            levels: Number of nested subdirectories below the root
            limit: Number of items allowed in any folder of the chain
            name_factory: Callable returning new directory names
        """
        self.folders = folders
        self.path_length = levels + 1 if levels is not None else None
        self.folder_limit = limit
        self.name_factory = name_factory

    @classmethod
    def empty(
        cls,
        root: str | Path,
        levels: int | None,
        limit: int | None,
        name_factory: Callable[[], str] = random_name,
    ) -> "FolderTree":
        """Create a tree with a brand new branch below ``root``.

        A flat tree (``levels`` is None) holds only the root folder.
        """
        tree = cls([Folder(root, limit)], levels, limit, name_factory)
        if levels is not None:
            tree.new_branch_in(tree.root, levels)
            logger.info(f"Created storage tree in {tree.root.path} with {levels} levels")
        return tree

    @classmethod
    def for_path(
        cls,
        path: str | Path,
        root: str | Path,
        limit: int | None,
        name_factory: Callable[[], str] = random_name,
    ) -> "FolderTree":
        """Rebuild the tree whose terminal is ``path``.

        Occupancy is not read here; folders count their entries when asked.

        Raises:
            ValueError: If ``path`` is not inside ``root``
        """
        segment = cls.path_segment(path, root)
        folders = Folder.chain(root, segment, limit)
        return cls(folders, len(segment), limit, name_factory)

    @classmethod
    def recover(
        cls,
        root: str | Path,
        levels: int,
        limit: int | None,
        name_factory: Callable[[], str] = random_name,
    ) -> "FolderTree | None":
        """Rebuild the most recent branch by walking down from ``root``.

        At each level the most recently modified visible subdirectory is
        followed, since branching always creates the newest directory.

        Returns:
            The recovered tree, or None if no branch of ``levels`` depth exists

        Raises:
            ValueError: If the branch continues below ``levels`` directories
        """
        current = Path(os.path.abspath(root))
        segment = []
        for _ in range(levels):
            subdirs = [
                entry
                for entry in os.scandir(current)
                if not entry.name.startswith(HIDDEN_PREFIX)
                and entry.is_dir(follow_symlinks=False)
            ]
            if not subdirs:
                return None
            newest = max(subdirs, key=lambda entry: (entry.stat().st_mtime_ns, entry.name))
            segment.append(newest.name)
            current = current / newest.name

        deeper = [
            entry.name
            for entry in os.scandir(current)
            if not entry.name.startswith(HIDDEN_PREFIX)
            and entry.is_dir(follow_symlinks=False)
        ]
        if deeper:
            raise ValueError(f"{current} holds subdirectories below {levels} levels")

        logger.info(f"Recovered storage tree branch {current}")
        return cls(Folder.chain(root, segment, limit), levels, limit, name_factory)

    @staticmethod
    def path_segment(terminal: str | Path, root: str | Path) -> list[str]:
        """Return the directory names between ``root`` and ``terminal``.

        Raises:
            ValueError: If ``terminal`` is not inside ``root``
        """
        terminal = Path(os.path.abspath(terminal))
        root = Path(os.path.abspath(root))
        return list(terminal.relative_to(root).parts)

    @property
    def actual_path_length(self) -> int:
        """Number of folders currently in the chain."""
        return len(self.folders)

    @property
    def flat(self) -> bool:
        return self.actual_path_length == 1 and self.path_length is None

    @property
    def subdirectories(self) -> int | None:
        """The nesting depth of subdirectories below the root."""
        if self.path_length is None:
            return None
        return self.path_length - 1

    @property
    def tree_limit(self) -> int | None:
        """Total number of items the tree can hold, None if unbounded."""
        if self.folder_limit is None or self.subdirectories is None:
            return None
        return self.folder_limit ** self.subdirectories

    @property
    def root(self) -> Folder:
        return self.folders[0]

    @property
    def terminal(self) -> Folder | None:
        """The most deeply nested folder.

        None if the tree has not been fully initialized with a branch.
        """
        if self.flat:
            return self.root
        if self.actual_path_length != self.path_length:
            return None
        return self.folders[-1]

    @property
    def branch_path(self) -> list[str]:
        """Basenames of every folder in the chain, root included."""
        return [folder.basename for folder in self.folders]

    @property
    def segments(self) -> list[str]:
        """Directory names below the root."""
        return self.branch_path[1:]

    def index(self, folder: Folder) -> int:
        return self.folders.index(folder)

    def levels_below(self, folder: Folder) -> int | None:
        """Return the number of folder levels nested in ``folder``."""
        if self.flat:
            return None
        return self.subdirectories - self.index(folder)

    def available_folder(self) -> Folder | None:
        """Return the nearest folder with room, searching up from the terminal.

        The root directory hosts a single top level folder and is not
        searched; a flat tree always returns its root.

        Returns:
            The first available folder, or None if the branch is exhausted
        """
        if self.flat:
            return self.root

        for folder in reversed(self.folders[1:]):
            if folder.available():
                return folder
        return None

    def new_branch_in(self, folder: Folder, levels: int | None = None) -> Folder | None:
        """Create a new branch of folders in ``folder`` and switch to it.

        Args:
            folder: Folder of the chain to branch in
            levels: Number of new nested folders, defaults to the levels
                below ``folder``

        Returns:
            The new terminal folder, None for a flat tree

        Raises:
            BranchError: If ``folder`` is the terminal
            TreeLimitExceededError: If ``folder`` has no room for a subdirectory
        """
        if self.flat:
            return None

        if folder == self.terminal:
            raise BranchError(folder.path)

        if folder.at_or_over_limit():
            raise self.limit_exceeded()

        if levels is None:
            levels = self.levels_below(folder)
        if levels < 1:
            raise ValueError(f"A branch needs at least one level, got {levels}")
        new_branch = self._new_folders_in(folder, levels)
        new_branch[-1].create_recursive()
        self.folders = self.folders[: self.index(folder) + 1] + new_branch
        logger.info(f"Created branch {self.folders[-1].path}")
        return self.folders[-1]

    def limit_exceeded(self) -> TreeLimitExceededError:
        """Build the error describing this tree's exhausted capacity."""
        return TreeLimitExceededError(
            limit=self.folder_limit, depth=self.subdirectories, capacity=self.tree_limit
        )

    def _unique_folder_in(self, parent: Folder) -> Folder:
        """Return a folder in ``parent`` whose name is not taken yet.

        Raises:
            NameCollisionError: If every attempt hit an existing name
        """
        for _ in range(MAX_NAME_ATTEMPTS):
            candidate = Folder(parent.path / self.name_factory(), self.folder_limit)
            if not candidate.exists():
                return candidate
            logger.debug(f"Directory name collision at {candidate.path}")
        raise NameCollisionError(parent.path, MAX_NAME_ATTEMPTS)

    def _new_folders_in(self, parent: Folder, count: int) -> list[Folder]:
        # Only the first folder can collide; the rest go into directories
        # created by this branch.
        nodes = [self._unique_folder_in(parent)]
        for _ in range(count - 1):
            nodes.append(Folder(nodes[-1].path / self.name_factory(), self.folder_limit))
        return nodes
