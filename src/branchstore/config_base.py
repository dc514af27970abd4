"""Base configuration model with YAML loading capabilities."""

from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .errors import ConfigError

T = TypeVar("T", bound="ConfigModel")


class ConfigModel(BaseModel):
    """Base model with YAML loading/saving capabilities."""

    @classmethod
    def from_yaml(cls: type[T], path: Path) -> T:
        """
        Load and validate configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated configuration model instance

        Raises:
            ConfigError: On file not found, invalid YAML, or validation errors
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise cls._yaml_error(e, path) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {cls.__name__} configuration: {path.name} is not a mapping")

        try:
            return cls(**data)
        except ValidationError as e:
            raise cls._validation_error(e, path) from e

    @classmethod
    def from_yaml_optional(cls: type[T], path: Path | None) -> T | None:
        """
        Load configuration from YAML if path provided and exists.

        Args:
            path: Optional path to YAML configuration file

        Returns:
            Validated configuration model instance or None
        """
        if path and Path(path).exists():
            return cls.from_yaml(path)
        return None

    @classmethod
    def load_or_default(cls: type[T], path: Path | None, **defaults) -> T:
        """
        Load from YAML or create with default values.

        Args:
            path: Optional path to YAML configuration file
            **defaults: Default values if file not provided

        Returns:
            Configuration model instance
        """
        if path and Path(path).exists():
            return cls.from_yaml(path)
        try:
            return cls(**defaults)
        except ValidationError as e:
            raise cls._validation_error(e, None) from e

    def to_yaml(self, path: Path):
        """
        Write configuration to YAML file.

        Args:
            path: Path to write YAML file
        """
        with open(path, "w") as f:
            f.write(self.to_yaml_string())

    def to_yaml_string(self) -> str:
        """
        Convert configuration to YAML string.

        Returns:
            YAML formatted string of the configuration
        """
        return yaml.safe_dump(
            self.model_dump(mode="json", by_alias=True, exclude_unset=False),
            default_flow_style=False,
            sort_keys=False,
        )

    @classmethod
    def _validation_error(cls, error: ValidationError, path: Path | None) -> ConfigError:
        """Format validation errors into a single ConfigError."""
        source = f": {path.name}" if path else ""
        lines = [f"Invalid {cls.__name__} configuration{source}"]

        for err in error.errors():
            field_path = " → ".join(str(loc) for loc in err["loc"])
            if "missing" in err["type"]:
                lines.append(f"  Missing required field: {field_path}")
            elif field_path:
                lines.append(f"  {field_path}: {err['msg']}")
            else:
                lines.append(f"  {err['msg']}")

        return ConfigError("\n".join(lines))

    @classmethod
    def _yaml_error(cls, error: yaml.YAMLError, path: Path) -> ConfigError:
        """Format YAML parsing errors."""
        message = f"Invalid YAML syntax in: {path.name}"

        # Try to extract line number from error
        mark = getattr(error, "problem_mark", None)
        if mark is not None:
            message += f" (line {mark.line + 1}, column {mark.column + 1})"

        return ConfigError(f"{message}\n{error}")
