"""branchstore - bounded fan-out directory trees for file storage."""

from ._version import __version__
from .allocator import CURRENT_STORE_PATH, Allocator
from .config import StoreConfig
from .errors import (
    BranchError,
    BranchStoreError,
    ConfigError,
    NameCollisionError,
    NoDirectoryError,
    PointerError,
    TreeLimitExceededError,
)
from .folder import Folder
from .folder_tree import FolderTree
from .paths import PathType, format_path

__all__ = [
    "Allocator",
    "BranchError",
    "BranchStoreError",
    "ConfigError",
    "CURRENT_STORE_PATH",
    "Folder",
    "FolderTree",
    "NameCollisionError",
    "NoDirectoryError",
    "PathType",
    "PointerError",
    "StoreConfig",
    "TreeLimitExceededError",
    "format_path",
    "__version__",
]
