"""Storage tree configuration.

Configuration is read from a YAML file (``branchstore.yaml`` in the
working directory unless ``BRANCHSTORE_CONFIG`` points elsewhere)::

    root: /var/lib/myapp/files
    nesting_depth: 2
    folder_limit: 1000
    pointer_location: null

Leaving both ``nesting_depth`` and ``folder_limit`` unset selects flat
mode, where every file goes straight into the root.
"""

import os
from pathlib import Path

from pydantic import Field, model_validator

from .config_base import ConfigModel

CONFIG_ENV_VAR = "BRANCHSTORE_CONFIG"
DEFAULT_CONFIG_FILE = Path("branchstore.yaml")

DEFAULT_NESTING_DEPTH = 2
DEFAULT_FOLDER_LIMIT = 1000


class StoreConfig(ConfigModel):
    """Configuration for a storage tree."""

    root: Path
    """Base directory for the tree (must exist)."""

    nesting_depth: int | None = Field(default=DEFAULT_NESTING_DEPTH, ge=1)
    """Number of nested subdirectories below the root, None for flat mode."""

    folder_limit: int | None = Field(default=DEFAULT_FOLDER_LIMIT, ge=1)
    """Maximum number of visible items per directory, None for flat mode."""

    pointer_location: Path | None = None
    """Directory holding the current store pointer (defaults to the root)."""

    @model_validator(mode="after")
    def check_flat_mode(self) -> "StoreConfig":
        """Depth and limit are either both set or both unset (flat)."""
        if (self.nesting_depth is None) != (self.folder_limit is None):
            raise ValueError(
                "nesting_depth and folder_limit must both be set, "
                "or both be unset for flat mode"
            )
        return self

    @property
    def flat(self) -> bool:
        return self.nesting_depth is None

    @property
    def capacity(self) -> int | None:
        """Total number of items the tree can hold, None if unbounded."""
        if self.flat:
            return None
        return self.folder_limit ** self.nesting_depth

    @property
    def link_dir(self) -> Path:
        return self.pointer_location or self.root

    @staticmethod
    def get_config_path() -> Path:
        """Get the configuration file path.

        Returns:
            Path from BRANCHSTORE_CONFIG, or ./branchstore.yaml
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)
        return DEFAULT_CONFIG_FILE

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to file.

        Args:
            path: Target file, defaults to get_config_path()

        Returns:
            Path the configuration was written to
        """
        path = Path(path) if path else self.get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_yaml(path)
        return path
