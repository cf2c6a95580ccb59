"""Tests for the orchestrator-facing function API."""

from pathlib import Path

from buildkeep.core.caching import (
    CacheStatus,
    clear_cache,
    get_cache_directories,
    get_cache_status,
    restore_cache_directories,
    save_cache_directories,
    save_signature,
)
from buildkeep.core.config.models import CacheSettings, ProjectConfig
from buildkeep.core.io import AbsolutePath


class TestStepByStep:
    """Tests driving the cache one operation at a time, as a shell script would."""

    def test_full_cycle(
        self,
        tmp_path: Path,
        workspace: AbsolutePath,
        store_location: AbsolutePath,
        write_tree,
        v1_config: ProjectConfig,
    ):
        """Test status, save, signature, restore and clear compose correctly."""
        write_tree(Path(workspace), {"node_modules/a/index.js": "a", "vendor/v.txt": "v"})

        assert get_cache_status(store_location, v1_config).status is CacheStatus.NO_CACHE

        clear_cache(store_location)
        saved = save_cache_directories(workspace, store_location, "node_modules", "vendor")
        save_signature(store_location, v1_config)

        assert saved.copied == ["node_modules", "vendor"]
        assert get_cache_status(store_location, v1_config).status is CacheStatus.VALID

        fresh = tmp_path / "fresh"
        restored = restore_cache_directories(fresh, store_location, "vendor", "missing")

        assert restored.copied == ["vendor"]
        assert restored.skipped == ["missing"]
        assert (fresh / "vendor" / "v.txt").read_text() == "v"

        clear_cache(store_location)
        assert get_cache_status(store_location, v1_config).status is CacheStatus.NO_CACHE

    def test_settings_namespace(
        self,
        store_location: AbsolutePath,
        v1_config: ProjectConfig,
    ):
        """Test settings select the namespace the signature is written to."""
        save_signature(store_location, v1_config, CacheSettings(namespace="yarn"))

        assert (Path(store_location) / "yarn" / "signature").read_text() == "v1\n"
        assert (Path(store_location) / "yarn" / "format-version").read_text() == "1\n"


class TestGetCacheDirectories:
    """Tests for the raw directory listing."""

    def test_empty_means_default(self):
        """Test an unconfigured project returns an empty list."""
        assert get_cache_directories(ProjectConfig(signature="v1")) == []
