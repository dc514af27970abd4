"""Common Typer options shared across CLI commands.

This module provides reusable option definitions to ensure consistency
and reduce duplication across CLI modules.
"""

from pathlib import Path

import typer


def config_option(help_text: str = "Configuration file (YAML)") -> typer.Option:
    """Create a standard configuration file option.

    Args:
        help_text: Custom help text

    Returns:
        Configured Typer Option
    """
    return typer.Option(
        None,
        "--config",
        "-c",
        help=help_text,
        file_okay=True,
        dir_okay=False,
    )


def root_option(help_text: str = "Root directory of the storage tree") -> typer.Option:
    """Create a root directory option."""
    return typer.Option(None, "--root", "-r", help=help_text, file_okay=False)


def depth_option(help_text: str = "Number of nested subdirectories") -> typer.Option:
    """Create a nesting depth option."""
    return typer.Option(None, "--depth", "-d", min=1, help=help_text)


def limit_option(help_text: str = "Maximum number of items per directory") -> typer.Option:
    """Create a folder limit option."""
    return typer.Option(None, "--limit", "-l", min=1, help=help_text)


def flat_option(help_text: str = "Store everything in the root directory") -> typer.Option:
    """Create a flat mode option."""
    return typer.Option(False, "--flat", help=help_text)


def resolve_options(
    root: Path | None,
    depth: int | None,
    limit: int | None,
    flat: bool,
) -> dict:
    """Collect command line overrides into config field values.

    Args:
        root: Root directory override
        depth: Nesting depth override
        limit: Folder limit override
        flat: Flat mode switch

    Returns:
        Dictionary of StoreConfig fields explicitly given on the command line
    """
    overrides = {}
    if root is not None:
        overrides["root"] = root
    if flat:
        overrides["nesting_depth"] = None
        overrides["folder_limit"] = None
    else:
        if depth is not None:
            overrides["nesting_depth"] = depth
        if limit is not None:
            overrides["folder_limit"] = limit
    return overrides
