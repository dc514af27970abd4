"""Tests for stored path formatting."""

import pytest

from branchstore.paths import PathType, format_path


class TestFormatPath:
    """Test each path type."""

    @pytest.fixture
    def stored(self, root):
        return root / "aaaa" / "bbbb" / "file.txt"

    def test_absolute(self, stored, root):
        assert format_path(stored, root, PathType.ABSOLUTE) == str(stored)

    def test_relative(self, stored, root, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert format_path(stored, root, "relative") == "test_dir/aaaa/bbbb/file.txt"

    def test_root(self, stored, root):
        assert format_path(stored, root, "root") == "aaaa/bbbb/file.txt"

    def test_tree(self, stored, root):
        assert format_path(stored, root, PathType.TREE) == "test_dir/aaaa/bbbb/file.txt"

    def test_default_is_absolute(self, stored, root):
        assert format_path(stored, root) == str(stored)

    def test_unknown_type(self, stored, root):
        with pytest.raises(ValueError):
            format_path(stored, root, "bogus")
