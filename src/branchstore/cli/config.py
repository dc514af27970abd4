"""Configuration management CLI commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.syntax import Syntax

from ..config import StoreConfig
from ..errors import ConfigError
from .common_options import (
    config_option,
    depth_option,
    flat_option,
    limit_option,
    resolve_options,
    root_option,
)
from .display import console, error, info, section, success, warning
from .utils import get_config_or_exit

app = typer.Typer(help="Manage branchstore configuration")


@app.command()
def init(
    root: Path = typer.Option(..., "--root", "-r", help="Root directory of the storage tree", file_okay=False),
    depth: Optional[int] = depth_option(),
    limit: Optional[int] = limit_option(),
    flat: bool = flat_option(),
    pointer_location: Optional[Path] = typer.Option(
        None, "--pointer-location", help="Directory for the current store pointer", file_okay=False
    ),
    config: Optional[Path] = config_option("Configuration file to write"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite without confirmation"),
):
    """Initialize configuration file.

    Writes branchstore.yaml (or the file named by --config or
    BRANCHSTORE_CONFIG) with the given settings and sensible defaults.
    """
    values = resolve_options(root.absolute(), depth, limit, flat)
    if pointer_location is not None:
        values["pointer_location"] = pointer_location.absolute()

    try:
        store_config = StoreConfig.load_or_default(None, **values)
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)

    path = config or StoreConfig.get_config_path()
    if path.exists() and not yes:
        overwrite = typer.confirm(f"{path} already exists. Overwrite?", default=False)
        if not overwrite:
            warning("Configuration not saved")
            raise typer.Exit(0)

    saved = store_config.save(path)
    success(f"Configuration saved to {saved}")
    if store_config.flat:
        info("Flat mode: files are stored directly in the root")
    else:
        info(f"Capacity: {store_config.capacity} items")


@app.command()
def show(
    config: Optional[Path] = config_option(),
    root: Optional[Path] = root_option(),
    depth: Optional[int] = depth_option(),
    limit: Optional[int] = limit_option(),
    flat: bool = flat_option(),
):
    """Display current configuration."""
    store_config = get_config_or_exit(config, resolve_options(root, depth, limit, flat))

    # Display as formatted YAML with syntax highlighting
    yaml_content = store_config.to_yaml_string()
    syntax = Syntax(yaml_content, "yaml", theme="monokai", line_numbers=False)

    section(f"Configuration from {config or StoreConfig.get_config_path()}")
    console.print(syntax)
