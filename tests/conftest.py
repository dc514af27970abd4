"""Test configuration and shared fixtures for branchstore tests."""

import itertools
from pathlib import Path

import pytest


@pytest.fixture
def root(tmp_path) -> Path:
    """Empty root directory for a storage tree."""
    directory = tmp_path / "test_dir"
    directory.mkdir()
    return directory


@pytest.fixture
def nested_folders(root) -> list[Path]:
    """A five level deep chain below root.

    Every folder above the terminal holds its chain child plus two extra
    subdirectories (3 entries); the terminal holds three files.

    Returns:
        Paths of the chain, root first
    """
    folders = [root]
    for i in range(5):
        folders.append(folders[-1] / f"folder_{i + 1}")
    folders[-1].mkdir(parents=True)

    idx = 5
    for folder in folders[:-1]:
        for _ in range(2):
            idx += 1
            (folder / f"folder_{idx}").mkdir()
    for i in range(3):
        (folders[-1] / f"example_{i}.txt").touch()
    return folders


@pytest.fixture
def make_files(tmp_path):
    """Factory creating small source files outside the tree."""
    source_dir = tmp_path / "sources"
    source_dir.mkdir()

    def _make(count: int, prefix: str = "test_file") -> list[Path]:
        paths = []
        for i in range(count):
            path = source_dir / f"{prefix}{i + 1}.txt"
            path.write_text(f"Hi!\n\nI'm {path.name}.")
            paths.append(path)
        return paths

    return _make


@pytest.fixture
def sequential_names():
    """Deterministic directory name factory (seg001, seg002, ...)."""
    counter = itertools.count(1)
    return lambda: f"seg{next(counter):03d}"
