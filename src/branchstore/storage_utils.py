"""Storage utilities for atomic operations and safe file handling."""

import logging
import os
import secrets
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def random_name() -> str:
    """Return a random directory segment name (16 lowercase hex chars)."""
    return secrets.token_hex(8)


def atomic_symlink(target: str | Path, link: str | Path) -> None:
    """Point ``link`` at ``target`` atomically using temp link + rename.

    Readers see either the old link or the new one, never a missing link.
    An existing link is replaced.

    Args:
        target: Path the link should resolve to
        link: Location of the symlink

    Raises:
        OSError: If the temp link can not be created or renamed
    """
    link = Path(link)
    tmp_link = link.parent / f".{link.name.lstrip('.')}.{random_name()}.tmp"
    os.symlink(str(target), tmp_link)
    try:
        # Atomic rename (on POSIX systems)
        os.replace(tmp_link, link)
        logger.debug(f"Atomically linked {link} -> {target}")
    except OSError:
        # Clean up temp link on failure
        try:
            tmp_link.unlink()
        except FileNotFoundError:
            pass
        raise


def read_link(link: str | Path) -> Path | None:
    """Read a symlink target, returning None if the link is absent.

    Relative targets are resolved against the link's directory.

    Args:
        link: Symlink path

    Returns:
        Absolute target path or None if not a symlink
    """
    link = Path(link)
    if not link.is_symlink():
        return None
    target = Path(os.readlink(link))
    if not target.is_absolute():
        target = link.parent / target
    return Path(os.path.abspath(target))


def place_file(src: str | Path, dst: str | Path, move: bool = False) -> Path:
    """Copy or move a file to ``dst`` without overwriting.

    Args:
        src: Source file path
        dst: Destination file path
        move: Move instead of copy

    Returns:
        Destination path

    Raises:
        FileNotFoundError: If the source is not an existing file
        FileExistsError: If the destination already exists
    """
    src = Path(src)
    dst = Path(dst)
    if not src.is_file():
        raise FileNotFoundError(f"Source file not found: {src}")
    if dst.exists() or dst.is_symlink():
        raise FileExistsError(f"Destination already exists: {dst}")

    if move:
        shutil.move(str(src), str(dst))
    else:
        shutil.copy2(src, dst)
    logger.debug(f"{'Moved' if move else 'Copied'} {src} to {dst}")
    return dst
