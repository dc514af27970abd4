"""Tests for the Folder directory wrapper."""

import pytest

from branchstore.folder import Folder


class TestFolder:
    """Test occupancy and limits of a single folder."""

    @pytest.fixture
    def folder_path(self, root):
        path = root / "folder"
        path.mkdir()
        for i in range(3):
            (path / f"example_{i + 1}.txt").touch()
        (path / ".hidden.txt").touch()
        return path

    def test_count_ignores_hidden_entries(self, folder_path):
        """Test that count only includes visible entries."""
        assert Folder(folder_path).count() == 3

    def test_entries_without_hidden(self, folder_path):
        """Test listing visible entries."""
        assert sorted(Folder(folder_path).entries()) == [
            "example_1.txt",
            "example_2.txt",
            "example_3.txt",
        ]

    def test_entries_with_hidden(self, folder_path):
        """Test listing visible and hidden entries."""
        assert sorted(Folder(folder_path).entries(include_hidden=True)) == [
            ".hidden.txt",
            "example_1.txt",
            "example_2.txt",
            "example_3.txt",
        ]

    def test_count_is_not_cached(self, folder_path):
        """Test that occupancy is re-read on every call."""
        folder = Folder(folder_path, limit=4)
        assert folder.available()

        (folder_path / "example_4.txt").touch()
        assert folder.count() == 4
        assert not folder.available()
        assert folder.at_or_over_limit()

    def test_limits(self, folder_path):
        """Test available and at_or_over_limit against the limit."""
        assert Folder(folder_path, limit=4).available()
        assert not Folder(folder_path, limit=4).at_or_over_limit()
        assert not Folder(folder_path, limit=3).available()
        assert Folder(folder_path, limit=2).at_or_over_limit()

    def test_no_limit_is_always_available(self, folder_path):
        """Test that a folder without a limit never fills up."""
        for i in range(20):
            (folder_path / f"extra_{i}.txt").touch()
        folder = Folder(folder_path)
        assert folder.available()
        assert not folder.at_or_over_limit()

    def test_create_requires_parent(self, root):
        """Test that non-recursive create fails without the parent."""
        folder = Folder(root / "missing" / "child")
        with pytest.raises(FileNotFoundError):
            folder.create()
        assert not folder.exists()

    def test_create(self, root):
        """Test creating a directory and repeating it."""
        folder = Folder(root / "child")
        folder.create()
        folder.create()
        assert folder.is_dir()

    def test_create_recursive(self, root):
        """Test creating a directory with its parents."""
        folder = Folder(root / "a" / "b" / "c")
        folder.create_recursive()
        folder.create_recursive()
        assert folder.is_dir()
        assert Folder(root / "a").count() == 1

    def test_identity(self, root):
        """Test path normalization, basename and equality."""
        folder = Folder(root / "x" / ".." / "child")
        assert folder.path == root / "child"
        assert folder.basename == "child"
        assert folder == Folder(root / "child", limit=10)
        assert folder != Folder(root / "other")
        assert len({folder, Folder(root / "child")}) == 1

    def test_chain(self, root):
        """Test building the folders for a root and its segments."""
        folders = Folder.chain(root, ["a", "b"], limit=4)
        assert [f.path for f in folders] == [root, root / "a", root / "a" / "b"]
        assert all(f.limit == 4 for f in folders)
