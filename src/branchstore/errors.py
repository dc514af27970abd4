"""Error types for branchstore.

Every error carries the structured fields callers need for diagnostics;
the message text is for humans only.
"""


class BranchStoreError(Exception):
    """Base exception for branchstore errors."""
    pass


class ConfigError(BranchStoreError):
    """Configuration error."""
    pass


class NoDirectoryError(BranchStoreError):
    """Raised when a required directory does not exist or is not a directory."""

    def __init__(self, directory, message: str | None = None):
        self.directory = str(directory)
        super().__init__(
            message or f"The directory {self.directory} does not exist or is not a directory"
        )


class BranchError(BranchStoreError):
    """Raised when branching in a folder that can not host a branch (the terminal)."""

    def __init__(self, directory, message: str | None = None):
        self.directory = str(directory)
        super().__init__(
            message or f"Can not branch in {self.directory} because it is a tree terminal"
        )


class TreeLimitExceededError(BranchStoreError):
    """Raised when no folder on the current branch has room for another item.

    Attributes:
        limit: Number of items allowed in any single folder
        depth: Number of nested subdirectories below the root
        capacity: Total number of items the tree can hold (limit ** depth)
    """

    def __init__(self, limit: int | None, depth: int | None, capacity: int | None):
        self.limit = limit
        self.depth = depth
        self.capacity = capacity
        super().__init__(
            "The storage tree has reached the limit of allowed items: "
            f"{limit} items in {depth} subdirectories ({capacity} allowed items in total)"
        )


class PointerError(BranchStoreError):
    """Raised when the current store pointer can not be used to rebuild the tree."""

    def __init__(self, pointer, target, reason: str):
        self.pointer = str(pointer)
        self.target = str(target)
        self.reason = reason
        super().__init__(f"Invalid store pointer {self.pointer} -> {self.target}: {reason}")


class NameCollisionError(BranchStoreError):
    """Raised when no unused random directory name was found in a folder."""

    def __init__(self, directory, attempts: int):
        self.directory = str(directory)
        self.attempts = attempts
        super().__init__(
            f"Could not find an unused directory name in {self.directory} "
            f"after {attempts} attempts"
        )
