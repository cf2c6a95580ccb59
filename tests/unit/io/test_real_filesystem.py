"""Tests for RealFileSystem on a temporary directory."""

import os
from pathlib import Path

import pytest

from buildkeep.core.io import RealFileSystem, absolute_path


@pytest.fixture
def fs():
    """Provide RealFileSystem instance."""
    return RealFileSystem()


class TestJoin:
    """Tests for path joining."""

    def test_join_normalizes(self, fs: RealFileSystem, tmp_path: Path):
        """Test redundant segments are collapsed."""
        result = fs.join(absolute_path(tmp_path), "a/./b/", "c")
        assert result == tmp_path / "a" / "b" / "c"

    def test_join_rejects_escape(self, fs: RealFileSystem, tmp_path: Path):
        """Test a path escaping the base is rejected."""
        with pytest.raises(ValueError, match="Path traversal"):
            fs.join(absolute_path(tmp_path), "a/../../outside")

    def test_join_does_not_follow_symlinks(self, fs: RealFileSystem, tmp_path: Path):
        """Test a symlinked child pointing elsewhere is still joinable."""
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        base = tmp_path / "base"
        base.mkdir()
        (base / "link").symlink_to(elsewhere)

        assert fs.join(absolute_path(base), "link") == base / "link"


class TestWriteText:
    """Tests for atomic text writes."""

    def test_write_and_read(self, fs: RealFileSystem, tmp_path: Path):
        """Test written content reads back and parents are created."""
        target = absolute_path(tmp_path / "nested" / "signature")

        result = fs.write_text(target, "v1\n")

        assert fs.read_text(target) == "v1\n"
        assert result.bytes_written == 3

    def test_write_leaves_no_temp_files(self, fs: RealFileSystem, tmp_path: Path):
        """Test the temp file is renamed away."""
        fs.write_text(absolute_path(tmp_path / "signature"), "v1")
        fs.write_text(absolute_path(tmp_path / "signature"), "v2")

        assert sorted(os.listdir(tmp_path)) == ["signature"]
        assert (tmp_path / "signature").read_text() == "v2"


class TestReplaceTree:
    """Tests for staged tree replacement."""

    def test_preserves_modes_and_symlinks(self, fs: RealFileSystem, tmp_path: Path):
        """Test executables stay executable and symlinks stay symlinks."""
        src = tmp_path / "src"
        (src / "bin").mkdir(parents=True)
        (src / "lib").mkdir()
        (src / "lib" / "cli.js").write_text("#!/usr/bin/env node")
        (src / "lib" / "cli.js").chmod(0o755)
        (src / "bin" / "cli").symlink_to("../lib/cli.js")

        result = fs.replace_tree(absolute_path(src), absolute_path(tmp_path / "dst"))

        dst = tmp_path / "dst"
        assert result.files_copied == 1
        assert (dst / "lib" / "cli.js").stat().st_mode & 0o777 == 0o755
        assert (dst / "bin" / "cli").is_symlink()
        assert os.readlink(dst / "bin" / "cli") == "../lib/cli.js"

    def test_replaces_existing_tree(self, fs: RealFileSystem, tmp_path: Path):
        """Test destination contents are replaced, not merged."""
        src = tmp_path / "src"
        src.mkdir()
        (src / "new.txt").write_text("new")
        dst = tmp_path / "dst"
        dst.mkdir()
        (dst / "stale.txt").write_text("stale")

        fs.replace_tree(absolute_path(src), absolute_path(dst))

        assert sorted(os.listdir(dst)) == ["new.txt"]
        # No staging directories left next to the destination
        assert sorted(os.listdir(tmp_path)) == ["dst", "src"]

    def test_copies_single_file(self, fs: RealFileSystem, tmp_path: Path):
        """Test a file source is copied to a file destination."""
        src = tmp_path / ".npmrc"
        src.write_text("registry=https://example.invalid")
        src.chmod(0o600)

        fs.replace_tree(absolute_path(src), absolute_path(tmp_path / "out" / ".npmrc"))

        copied = tmp_path / "out" / ".npmrc"
        assert copied.read_text() == "registry=https://example.invalid"
        assert copied.stat().st_mode & 0o777 == 0o600

    def test_missing_source_raises(self, fs: RealFileSystem, tmp_path: Path):
        """Test a missing source raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            fs.replace_tree(absolute_path(tmp_path / "nope"), absolute_path(tmp_path / "dst"))
