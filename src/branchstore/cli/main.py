"""branchstore CLI entry point."""

from pathlib import Path
from typing import List, Optional

import typer

from ..allocator import Allocator
from ..errors import BranchStoreError
from ..paths import PathType
from . import config as config_cli
from .common_options import (
    config_option,
    depth_option,
    flat_option,
    limit_option,
    resolve_options,
    root_option,
)
from .display import error, info, info_dict, section, success, warning
from .utils import get_config_or_exit, setup_logging

# Create main CLI app
app = typer.Typer(
    name="bstore",
    help="Store files in directory trees with bounded fan-out",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(config_cli.app, name="config", help="⚙️ Configure branchstore settings")


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Store files in directory trees with bounded fan-out."""
    setup_logging(verbose)


def _open_allocator(config, root, depth, limit, flat) -> Allocator:
    store_config = get_config_or_exit(config, resolve_options(root, depth, limit, flat))
    try:
        return Allocator.from_config(store_config)
    except BranchStoreError as e:
        error(str(e))
        raise typer.Exit(1)


@app.command()
def store(
    files: List[Path] = typer.Argument(..., help="Files to store", dir_okay=False),
    move: bool = typer.Option(False, "--move", "-m", help="Move files instead of copying"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New filename (single file only)"),
    pathtype: PathType = typer.Option(
        PathType.ABSOLUTE, "--pathtype", "-p", help="Format of the printed paths"
    ),
    config: Optional[Path] = config_option(),
    root: Optional[Path] = root_option(),
    depth: Optional[int] = depth_option(),
    limit: Optional[int] = limit_option(),
    flat: bool = flat_option(),
):
    """Store files in the tree and print where each one went."""
    if name and len(files) > 1:
        error("--name can only be used with a single file")
        raise typer.Exit(1)

    allocator = _open_allocator(config, root, depth, limit, flat)
    for file in files:
        try:
            stored = allocator.store(file, name=name, pathtype=pathtype, move=move)
        except (BranchStoreError, OSError, ValueError) as e:
            error(f"Failed to store {file}: {e}")
            raise typer.Exit(1)
        info(stored)


@app.command()
def status(
    config: Optional[Path] = config_option(),
    root: Optional[Path] = root_option(),
    depth: Optional[int] = depth_option(),
    limit: Optional[int] = limit_option(),
    flat: bool = flat_option(),
):
    """Show the current store pointer and terminal occupancy."""
    allocator = _open_allocator(config, root, depth, limit, flat)
    tree = allocator.tree

    section("Storage tree")
    info_dict({
        "Root": allocator.directory,
        "Pointer": allocator.current_directory,
        "Terminal": allocator.current_path,
        "Depth": allocator.nesting_levels if allocator.nesting_levels is not None else "flat",
        "Folder limit": allocator.folder_limit if allocator.folder_limit is not None else "unbounded",
        "Capacity": allocator.tree_limit if allocator.tree_limit is not None else "unbounded",
    })

    if tree.flat:
        info_dict({"Items in root": tree.root.count()})
        return

    section("Current branch")
    for folder in tree.folders[1:]:
        info_dict({folder.basename: f"{folder.count()}/{folder.limit}"})

    if tree.available_folder() is None:
        warning("Storage tree is exhausted")
    else:
        success("Storage tree has room")


@app.command()
def version():
    """Show branchstore version."""
    from .. import __version__
    info(f"branchstore version: {__version__}")


def main():
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        warning("\nInterrupted by user")
        raise typer.Exit(1)


if __name__ == "__main__":
    main()
