"""Shared pytest fixtures for buildkeep tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from buildkeep.core.config.models import ProjectConfig
from buildkeep.core.io import AbsolutePath, FakeFileSystem, absolute_path


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by logging reconfiguration in the code under test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def workspace(tmp_path: Path) -> AbsolutePath:
    """Create an empty build workspace on disk."""
    path = tmp_path / "build"
    path.mkdir()
    return absolute_path(path)


@pytest.fixture
def store_location(tmp_path: Path) -> AbsolutePath:
    """Create an empty cache store location on disk."""
    path = tmp_path / "cache"
    path.mkdir()
    return absolute_path(path)


# ============================================================================
# Fake Filesystem Fixtures
# ============================================================================


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Provide fresh FakeFileSystem instance."""
    return FakeFileSystem()


@pytest.fixture
def fake_workspace() -> AbsolutePath:
    """Workspace path inside the fake filesystem."""
    return absolute_path("/app")


@pytest.fixture
def fake_store() -> AbsolutePath:
    """Store location inside the fake filesystem."""
    return absolute_path("/cache")


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def v1_config() -> ProjectConfig:
    """Project config with default directories and signature v1."""
    return ProjectConfig(signature="v1")


@pytest.fixture
def v2_config() -> ProjectConfig:
    """Project config with default directories and signature v2."""
    return ProjectConfig(signature="v2")


# ============================================================================
# Tree helpers
# ============================================================================


def _write_tree(root: Path, files: dict[str, str], executables: tuple[str, ...] = ()) -> None:
    """Write a small file tree under root.

    Args:
        root: Directory to populate
        files: Relative path -> content
        executables: Relative paths to mark executable (0o755)
    """
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    for rel in executables:
        (root / rel).chmod(0o755)


def _read_tree(root: Path) -> dict[str, tuple[str, int]]:
    """Snapshot a file tree as relative path -> (content, permission bits)."""
    snapshot = {}
    for path in sorted(root.rglob("*")):
        if path.is_file() and not path.is_symlink():
            snapshot[str(path.relative_to(root))] = (
                path.read_text(encoding="utf-8"),
                path.stat().st_mode & 0o777,
            )
    return snapshot


@pytest.fixture
def write_tree():
    """Provide the tree-writing helper."""
    return _write_tree


@pytest.fixture
def read_tree():
    """Provide the tree-snapshot helper."""
    return _read_tree
