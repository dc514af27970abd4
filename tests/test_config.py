"""Tests for configuration models and validation."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from branchstore.config import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE, StoreConfig
from branchstore.errors import ConfigError


class TestStoreConfig:
    """Test StoreConfig validation."""

    def test_defaults(self, root):
        """Test default depth and limit."""
        config = StoreConfig(root=root)
        assert config.nesting_depth == 2
        assert config.folder_limit == 1000
        assert config.pointer_location is None
        assert config.link_dir == root
        assert not config.flat

    def test_capacity(self, root):
        """Test total capacity is limit ** depth."""
        assert StoreConfig(root=root, nesting_depth=2, folder_limit=4).capacity == 16
        assert StoreConfig(root=root, nesting_depth=3, folder_limit=10).capacity == 1000

    def test_flat_mode(self, root):
        """Test that unsetting both values selects flat mode."""
        config = StoreConfig(root=root, nesting_depth=None, folder_limit=None)
        assert config.flat
        assert config.capacity is None

    @pytest.mark.parametrize(
        "depth,limit",
        [(None, 4), (2, None)],
    )
    def test_depth_and_limit_coupled(self, root, depth, limit):
        """Test that depth and limit must be set together."""
        with pytest.raises(ValidationError, match="flat mode"):
            StoreConfig(root=root, nesting_depth=depth, folder_limit=limit)

    @pytest.mark.parametrize(
        "depth,limit",
        [(0, 4), (2, 0), (-1, 4)],
    )
    def test_positive_values(self, root, depth, limit):
        """Test that depth and limit must be positive."""
        with pytest.raises(ValidationError):
            StoreConfig(root=root, nesting_depth=depth, folder_limit=limit)

    def test_pointer_location(self, root, tmp_path):
        """Test a separate pointer directory."""
        config = StoreConfig(root=root, pointer_location=tmp_path)
        assert config.link_dir == tmp_path


class TestYamlConfig:
    """Test loading and saving YAML configuration."""

    def test_save_and_load(self, root, tmp_path):
        """Test that a saved configuration loads back unchanged."""
        path = tmp_path / "conf" / "branchstore.yaml"
        config = StoreConfig(root=root, nesting_depth=3, folder_limit=50)

        assert config.save(path) == path
        loaded = StoreConfig.from_yaml(path)

        assert loaded == config
        assert yaml.safe_load(path.read_text())["root"] == str(root)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            StoreConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test that broken YAML raises ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("root: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            StoreConfig.from_yaml(path)

    def test_invalid_values(self, tmp_path, root):
        """Test that validation errors name the bad field."""
        path = tmp_path / "bad.yaml"
        path.write_text(f"root: {root}\nnesting_depth: 0\nfolder_limit: 4\n")
        with pytest.raises(ConfigError, match="nesting_depth"):
            StoreConfig.from_yaml(path)

    def test_missing_root(self, tmp_path):
        """Test that the root is required."""
        path = tmp_path / "bad.yaml"
        path.write_text("nesting_depth: 2\nfolder_limit: 4\n")
        with pytest.raises(ConfigError, match="Missing required field: root"):
            StoreConfig.from_yaml(path)

    def test_not_a_mapping(self, tmp_path):
        """Test that a YAML list is rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            StoreConfig.from_yaml(path)

    def test_from_yaml_optional(self, tmp_path):
        """Test optional loading."""
        assert StoreConfig.from_yaml_optional(None) is None
        assert StoreConfig.from_yaml_optional(tmp_path / "missing.yaml") is None

    def test_load_or_default(self, root, tmp_path):
        """Test falling back to defaults."""
        config = StoreConfig.load_or_default(tmp_path / "missing.yaml", root=root, folder_limit=7)
        assert config.folder_limit == 7
        with pytest.raises(ConfigError):
            StoreConfig.load_or_default(None, root=root, folder_limit=None)

    def test_config_path(self, monkeypatch, tmp_path):
        """Test config path resolution from the environment."""
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert StoreConfig.get_config_path() == DEFAULT_CONFIG_FILE

        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.yaml"))
        assert StoreConfig.get_config_path() == Path(tmp_path / "custom.yaml")
