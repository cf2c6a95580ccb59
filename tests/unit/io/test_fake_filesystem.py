"""Tests for FakeFileSystem.

Tests the in-memory fake filesystem implementation.
"""

import pytest

from buildkeep.core.io import AbsolutePath, FakeFileSystem, absolute_path


@pytest.fixture
def fs():
    """Provide fresh FakeFileSystem instance."""
    return FakeFileSystem()


@pytest.fixture
def test_root():
    """Provide test root path."""
    return absolute_path("/test")


class TestJoin:
    """Tests for path joining (no I/O)."""

    def test_join_multiple_parts(self, fs: FakeFileSystem, test_root: AbsolutePath):
        """Test joining multiple path components."""
        result = fs.join(test_root, "a", "b", "c")
        assert str(result) == "/test/a/b/c"

    def test_join_rejects_traversal(self, fs: FakeFileSystem, test_root: AbsolutePath):
        """Test joining a parent reference is rejected."""
        with pytest.raises(ValueError, match="Path traversal"):
            fs.join(test_root, "../etc")


class TestExistence:
    """Tests for existence checks."""

    def test_exists_returns_false_for_nonexistent(
        self, fs: FakeFileSystem, test_root: AbsolutePath
    ):
        """Test that nonexistent paths return False."""
        assert not fs.exists(test_root)

    def test_write_creates_parents(self, fs: FakeFileSystem, test_root: AbsolutePath):
        """Test writing a nested file creates its directories."""
        fs.write_text(fs.join(test_root, "a", "b.txt"), "content")

        assert fs.is_dir(test_root)
        assert fs.is_dir(fs.join(test_root, "a"))
        assert fs.is_file(fs.join(test_root, "a", "b.txt"))


class TestListdir:
    """Tests for directory listing."""

    def test_listdir_returns_immediate_children(
        self, fs: FakeFileSystem, test_root: AbsolutePath
    ):
        """Test listdir returns files and directories one level down."""
        fs.write_text(fs.join(test_root, "file.txt"), "x")
        fs.write_text(fs.join(test_root, "sub", "nested.txt"), "y")

        assert fs.listdir(test_root) == ["file.txt", "sub"]

    def test_listdir_missing_raises(self, fs: FakeFileSystem, test_root: AbsolutePath):
        """Test listdir on a missing directory raises."""
        with pytest.raises(FileNotFoundError):
            fs.listdir(test_root)


class TestReplaceTree:
    """Tests for tree replacement."""

    def test_copies_tree_with_modes(self, fs: FakeFileSystem):
        """Test files and permission bits are copied."""
        src = absolute_path("/src/pkg")
        fs.write_text(fs.join(src, "bin", "tool"), "#!/bin/sh")
        fs.chmod(fs.join(src, "bin", "tool"), 0o755)
        fs.write_text(fs.join(src, "index.js"), "module.exports = 1")

        result = fs.replace_tree(src, absolute_path("/dst/pkg"))

        assert result.files_copied == 2
        assert fs.read_text(absolute_path("/dst/pkg/index.js")) == "module.exports = 1"
        assert fs.mode(absolute_path("/dst/pkg/bin/tool")) == 0o755

    def test_replaces_instead_of_merging(self, fs: FakeFileSystem):
        """Test stale destination files are dropped."""
        fs.write_text(absolute_path("/src/pkg/new.txt"), "new")
        fs.write_text(absolute_path("/dst/pkg/stale.txt"), "stale")

        fs.replace_tree(absolute_path("/src/pkg"), absolute_path("/dst/pkg"))

        assert fs.listdir(absolute_path("/dst/pkg")) == ["new.txt"]

    def test_missing_source_raises(self, fs: FakeFileSystem):
        """Test copying a missing source raises."""
        with pytest.raises(FileNotFoundError):
            fs.replace_tree(absolute_path("/nope"), absolute_path("/dst"))


class TestRemoval:
    """Tests for removal."""

    def test_rmdir_recursive(self, fs: FakeFileSystem, test_root: AbsolutePath):
        """Test recursive removal drops the whole subtree."""
        fs.write_text(fs.join(test_root, "a", "b.txt"), "x")

        fs.rmdir(test_root, recursive=True)

        assert not fs.exists(test_root)
        assert not fs.exists(fs.join(test_root, "a", "b.txt"))

    def test_rmdir_non_recursive_requires_empty(
        self, fs: FakeFileSystem, test_root: AbsolutePath
    ):
        """Test non-recursive removal of a non-empty directory fails."""
        fs.write_text(fs.join(test_root, "b.txt"), "x")

        with pytest.raises(OSError):
            fs.rmdir(test_root)
