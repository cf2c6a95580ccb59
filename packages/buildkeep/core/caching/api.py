"""Function-level interface for build orchestrators.

Thin wrappers over the store, validator and transfer engine for scripts
that drive the cache step by step instead of through CacheLifecycle.
"""

from pathlib import Path

from buildkeep.core.caching.models import CacheStatusReport, TransferReport
from buildkeep.core.caching.selector import get_cache_directories
from buildkeep.core.caching.signature import SignatureStore
from buildkeep.core.caching.store import CacheStore
from buildkeep.core.caching.transfer import CacheTransfer
from buildkeep.core.caching.validator import CacheValidator
from buildkeep.core.config.models import CacheSettings, ProjectConfig
from buildkeep.core.io import FileSystem, RealFileSystem, absolute_path

__all__ = [
    "clear_cache",
    "get_cache_directories",
    "get_cache_status",
    "restore_cache_directories",
    "save_cache_directories",
    "save_signature",
]


def _open_store(
    store_location: str | Path,
    settings: CacheSettings | None,
    fs: FileSystem | None,
) -> tuple[CacheStore, CacheSettings]:
    settings = settings or CacheSettings()
    store = CacheStore(fs or RealFileSystem(), absolute_path(store_location), settings.namespace)
    return store, settings


def get_cache_status(
    store_location: str | Path,
    config: ProjectConfig,
    settings: CacheSettings | None = None,
    fs: FileSystem | None = None,
) -> CacheStatusReport:
    """Classify the cache at ``store_location`` for a build with ``config``."""
    store, settings = _open_store(store_location, settings, fs)
    return CacheValidator(store, settings).evaluate(config.signature)


def restore_cache_directories(
    workspace: str | Path,
    store_location: str | Path,
    *paths: str,
    settings: CacheSettings | None = None,
    fs: FileSystem | None = None,
) -> TransferReport:
    """Copy ``paths`` from the store into the workspace, skipping uncached ones."""
    store, _ = _open_store(store_location, settings, fs)
    return CacheTransfer(store).restore(list(paths), absolute_path(workspace))


def save_cache_directories(
    workspace: str | Path,
    store_location: str | Path,
    *paths: str,
    settings: CacheSettings | None = None,
    fs: FileSystem | None = None,
) -> TransferReport:
    """Copy ``paths`` from the workspace into the store, skipping absent ones."""
    store, _ = _open_store(store_location, settings, fs)
    return CacheTransfer(store).save(list(paths), absolute_path(workspace))


def clear_cache(
    store_location: str | Path,
    settings: CacheSettings | None = None,
    fs: FileSystem | None = None,
) -> None:
    """Empty the store."""
    store, _ = _open_store(store_location, settings, fs)
    CacheTransfer(store).clear()


def save_signature(
    store_location: str | Path,
    config: ProjectConfig,
    settings: CacheSettings | None = None,
    fs: FileSystem | None = None,
) -> None:
    """Record ``config.signature`` (and the format marker) as the store's producer."""
    store, settings = _open_store(store_location, settings, fs)
    signatures = SignatureStore(store)
    signatures.write_format_version(settings.format_version)
    signatures.write_signature(config.signature)
