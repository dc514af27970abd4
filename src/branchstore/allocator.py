"""Allocation of storage locations in a bounded folder tree.

The Allocator keeps a symlink (``.current_store_path``) pointing at the
tree's terminal directory. On startup the tree is rebuilt from that link;
when the terminal fills up, a new branch is minted and the link is
re-pointed before the file is written.

Only one Allocator may mutate a given root at a time. Callers that need
several writers must serialize calls to ``store`` themselves, e.g. with
a file lock.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .config import DEFAULT_FOLDER_LIMIT, DEFAULT_NESTING_DEPTH, StoreConfig
from .errors import ConfigError, NoDirectoryError, PointerError
from .folder import HIDDEN_PREFIX, Folder
from .folder_tree import FolderTree
from .paths import PathType, format_path
from .storage_utils import atomic_symlink, place_file, random_name, read_link

logger = logging.getLogger(__name__)

CURRENT_STORE_PATH = ".current_store_path"


class Allocator:
    """Stores files in a folder tree, keeping every folder under its limit.

    Example:
        >>> allocator = Allocator("/data/files", nesting_levels=2, folder_limit=1000)
        >>> allocator.copy("report.pdf")
        '/data/files/3f9c0e1d22a4b7c1/a01bd2e3f4c5b6a7/report.pdf'
    """

    def __init__(
        self,
        root: str | Path,
        nesting_levels: int | None = DEFAULT_NESTING_DEPTH,
        folder_limit: int | None = DEFAULT_FOLDER_LIMIT,
        link_location: str | Path | None = None,
        name_factory: Callable[[], str] = random_name,
    ):
        """Initialize allocator and load or create its tree.

        Args:
            root: Base directory of the tree (must exist)
            nesting_levels: Number of nested subdirectories, None for flat mode
            folder_limit: Maximum visible items per folder, None for flat mode
            link_location: Directory for the pointer symlink, defaults to root
            name_factory: Callable returning new directory names

        Raises:
            NoDirectoryError: If root or link_location is not a directory
            ConfigError: If only one of nesting_levels and folder_limit is set
            PointerError: If an existing pointer does not match this tree
        """
        self.directory = Path(os.path.abspath(root))
        if not self.directory.is_dir():
            raise NoDirectoryError(self.directory)

        if (nesting_levels is None) != (folder_limit is None):
            raise ConfigError(
                "nesting_levels and folder_limit must both be set, or both be None for flat mode"
            )
        if nesting_levels is not None and (nesting_levels < 1 or folder_limit < 1):
            raise ConfigError("nesting_levels and folder_limit must be at least 1")

        link_dir = Path(os.path.abspath(link_location)) if link_location else self.directory
        if not link_dir.is_dir():
            raise NoDirectoryError(link_dir)

        self._nesting_levels = nesting_levels
        self._folder_limit = folder_limit
        self._name_factory = name_factory
        self._pointer = link_dir / CURRENT_STORE_PATH
        self.tree = self._load_tree()

    @classmethod
    def from_config(cls, config: StoreConfig, **kwargs) -> "Allocator":
        """Create an allocator from a validated StoreConfig."""
        return cls(
            config.root,
            nesting_levels=config.nesting_depth,
            folder_limit=config.folder_limit,
            link_location=config.link_dir,
            **kwargs,
        )

    @property
    def current_directory(self) -> Path:
        """Absolute path of the pointer symlink."""
        return self._pointer

    @property
    def current_path(self) -> Path:
        """Directory new files are written into (the tree terminal)."""
        return self.tree.terminal.path

    @property
    def linked_path(self) -> Path | None:
        """Directory the pointer resolves to on disk, None if it is missing."""
        return read_link(self._pointer)

    @property
    def nesting_levels(self) -> int | None:
        return self._nesting_levels

    @property
    def folder_limit(self) -> int | None:
        return self._folder_limit

    @property
    def tree_limit(self) -> int | None:
        return self.tree.tree_limit

    def prepare(self) -> Folder:
        """Return a folder with room for one more item, branching if needed.

        Raises:
            TreeLimitExceededError: If no folder on the branch has room
        """
        terminal = self.tree.terminal
        if not terminal.at_or_over_limit():
            return terminal

        folder = self.tree.available_folder()
        if folder is None:
            raise self.tree.limit_exceeded()

        new_terminal = self.tree.new_branch_in(folder)
        self._link(new_terminal.path)
        return new_terminal

    def store(
        self,
        file: str | Path,
        name: str | None = None,
        pathtype: PathType | str = PathType.ABSOLUTE,
        move: bool = False,
    ) -> str:
        """Store a file in the current terminal folder.

        Args:
            file: Path of the file to store
            name: New filename, defaults to the file's own name
            pathtype: Format of the returned path
            move: Move the file instead of copying it

        Returns:
            Path of the stored file, formatted according to ``pathtype``

        Raises:
            FileNotFoundError: If ``file`` is not an existing file
            FileExistsError: If the destination already exists
            TreeLimitExceededError: If the tree is exhausted
        """
        src = Path(file)
        if not src.is_file():
            raise FileNotFoundError(f"Source file not found: {src}")
        filename = name or src.name
        if filename.startswith(HIDDEN_PREFIX) or os.sep in filename:
            raise ValueError(f"Invalid filename for storage: {filename!r}")
        pathtype = PathType(pathtype)

        folder = self.prepare()
        dst = place_file(src, folder.path / filename, move=move)
        logger.debug(f"Stored {src} as {dst}")
        return format_path(dst, self.directory, pathtype)

    def copy(self, file: str | Path, name: str | None = None, pathtype: PathType | str = PathType.ABSOLUTE) -> str:
        """Copy a file into the tree; see store()."""
        return self.store(file, name, pathtype, move=False)

    def move(self, file: str | Path, name: str | None = None, pathtype: PathType | str = PathType.ABSOLUTE) -> str:
        """Move a file into the tree; see store()."""
        return self.store(file, name, pathtype, move=True)

    def _load_tree(self) -> FolderTree:
        if self._nesting_levels is None:
            tree = FolderTree([Folder(self.directory)], None, None, self._name_factory)
            if self.linked_path != tree.terminal.path:
                self._link(tree.terminal.path)
            return tree

        target = self.linked_path
        if target is not None and target.is_dir():
            return self._tree_for_target(target)
        if target is not None:
            logger.warning(f"Store pointer {self._pointer} is dangling ({target}), rebuilding")

        try:
            tree = FolderTree.recover(
                self.directory, self._nesting_levels, self._folder_limit, self._name_factory
            )
        except ValueError as e:
            raise PointerError(self._pointer, self.directory, str(e))
        if tree is None:
            tree = FolderTree.empty(
                self.directory, self._nesting_levels, self._folder_limit, self._name_factory
            )
        self._link(tree.terminal.path)
        return tree

    def _tree_for_target(self, target: Path) -> FolderTree:
        try:
            tree = FolderTree.for_path(target, self.directory, self._folder_limit, self._name_factory)
        except ValueError:
            raise PointerError(self._pointer, target, f"not inside the root {self.directory}")

        if tree.subdirectories != self._nesting_levels:
            raise PointerError(
                self._pointer,
                target,
                f"tree depth is {tree.subdirectories}, configured depth is {self._nesting_levels}",
            )
        logger.debug(f"Loaded storage tree from {self._pointer} -> {target}")
        return tree

    def _link(self, target: Path) -> None:
        """Point the store pointer at ``target``; the only place it is written."""
        atomic_symlink(target, self._pointer)
        logger.info(f"Store pointer {self._pointer} -> {target}")
