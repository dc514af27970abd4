"""Shared utilities for CLI commands."""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from ..config import StoreConfig
from ..errors import ConfigError
from .display import error, info

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def load_config(config_path: Path | None, overrides: dict) -> StoreConfig:
    """Load the store configuration and apply command line overrides.

    Args:
        config_path: Explicit config file, defaults to StoreConfig.get_config_path()
        overrides: Field values given on the command line

    Returns:
        Validated StoreConfig

    Raises:
        ConfigError: If the file is invalid or the merged values do not validate
    """
    path = config_path or StoreConfig.get_config_path()
    if config_path is not None and not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    base = StoreConfig.from_yaml_optional(path)
    data = base.model_dump() if base else {}
    data.update(overrides)
    if "root" not in data:
        raise ConfigError(
            f"No root directory configured: pass --root or create {path}"
        )
    try:
        return StoreConfig(**data)
    except ValidationError as e:
        raise StoreConfig._validation_error(e, None) from e


def get_config_or_exit(config_path: Path | None, overrides: dict) -> StoreConfig:
    """Get config or exit with helpful message.

    Raises:
        typer.Exit: If the configuration can not be loaded
    """
    try:
        return load_config(config_path, overrides)
    except ConfigError as e:
        error(str(e))
        info("Run 'bstore config init --root DIR' to create configuration")
        raise typer.Exit(1)
