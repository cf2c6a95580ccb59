"""Tests for cache directory selection."""

import pytest

from buildkeep.core.caching import (
    DEFAULT_CACHE_DIRECTORY,
    CacheConfigError,
    get_cache_directories,
    select_directories,
)
from buildkeep.core.config.models import ProjectConfig


def _config(directories):
    return ProjectConfig(signature="v1", cache_directories=directories)


class TestSelectDirectories:
    """Tests for select_directories."""

    def test_absent_config_uses_default(self):
        """Test no configuration selects exactly the default directory."""
        assert select_directories(_config(None)) == [DEFAULT_CACHE_DIRECTORY]
        assert DEFAULT_CACHE_DIRECTORY == "node_modules"

    def test_empty_config_uses_default(self):
        """Test an empty list means default, not nothing."""
        assert select_directories(_config([])) == ["node_modules"]

    def test_configured_paths_verbatim(self):
        """Test configured paths are returned in order, duplicates included."""
        directories = ["node_modules", "bower_components", "client/node_modules", "node_modules"]

        assert select_directories(_config(directories)) == directories


class TestGetCacheDirectories:
    """Tests for get_cache_directories."""

    def test_empty_when_unconfigured(self):
        """Test the raw list is empty when nothing is configured."""
        assert get_cache_directories(_config(None)) == []

    def test_returns_configured(self):
        """Test configured paths are returned."""
        assert get_cache_directories(_config(["vendor"])) == ["vendor"]


class TestValidation:
    """Tests for misconfiguration rejection."""

    @pytest.mark.parametrize("path", ["/usr/lib/node_modules", "C:\\node_modules"])
    def test_rejects_absolute(self, path: str):
        """Test absolute paths are rejected."""
        with pytest.raises(CacheConfigError, match="relative to the workspace"):
            select_directories(_config([path]))

    @pytest.mark.parametrize("path", ["..", "../shared", "a/../../etc", "."])
    def test_rejects_escaping_or_root(self, path: str):
        """Test paths outside the workspace or naming its root are rejected."""
        with pytest.raises(CacheConfigError, match="inside the workspace"):
            select_directories(_config([path]))

    def test_rejects_empty_string(self):
        """Test an empty path is rejected."""
        with pytest.raises(CacheConfigError, match="empty"):
            select_directories(_config(["node_modules", ""]))

    def test_error_is_value_error(self):
        """Test callers catching ValueError also catch misconfiguration."""
        with pytest.raises(ValueError):
            select_directories(_config(["../x"]))

    def test_allows_inner_parent_reference(self):
        """Test a parent reference that stays inside is accepted."""
        assert select_directories(_config(["a/../b"])) == ["a/../b"]

    @pytest.mark.parametrize("path", ["1:x", "node_modules:v2", "a:b/c"])
    def test_colon_without_drive_letter_is_relative(self, path: str):
        """Test only a letter followed by a colon counts as a drive path."""
        assert select_directories(_config([path])) == [path]

    @pytest.mark.parametrize(
        ("path", "reason"),
        [
            ("  ", "path is empty"),
            ("/abs", "path must be relative to the workspace root"),
            ("d:relative-to-drive", "path must be relative to the workspace root"),
            ("x/../..", "path must stay inside the workspace root"),
        ],
    )
    def test_error_carries_reason(self, path: str, reason: str):
        """Test the raised error records the offending path and why it was rejected."""
        with pytest.raises(CacheConfigError) as excinfo:
            get_cache_directories(_config([path]))

        assert excinfo.value.path == path
        assert excinfo.value.reason == reason
