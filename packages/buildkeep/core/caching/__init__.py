"""Build artifact cache for buildkeep.

Persists selected workspace directories between builds, guarded by a
signature of the toolchain that produced them.

Key features:
- Signature + format marker validation (valid / no-cache / new-version / invalidated)
- Whole-directory save/restore with permission bits and symlinks preserved
- Staged copies renamed into place per directory
- Clear-then-save-then-signature ordering for crash consistency
- Stale caches kept until the post-build save
"""

from buildkeep.core.caching.api import (
    clear_cache,
    get_cache_status,
    restore_cache_directories,
    save_cache_directories,
    save_signature,
)
from buildkeep.core.caching.errors import CacheConfigError, CacheError
from buildkeep.core.caching.lifecycle import CacheLifecycle
from buildkeep.core.caching.models import (
    AfterBuildResult,
    BeforeBuildResult,
    CacheStatus,
    CacheStatusReport,
    TransferDirection,
    TransferOutcome,
    TransferRecord,
    TransferReport,
)
from buildkeep.core.caching.selector import (
    DEFAULT_CACHE_DIRECTORY,
    get_cache_directories,
    select_directories,
)
from buildkeep.core.caching.signature import SignatureStore, compute_signature
from buildkeep.core.caching.store import CacheStore
from buildkeep.core.caching.transfer import CacheTransfer
from buildkeep.core.caching.validator import CacheValidator, classify_cache

__all__ = [
    # Lifecycle
    "CacheLifecycle",
    # Components
    "CacheStore",
    "CacheTransfer",
    "CacheValidator",
    "SignatureStore",
    "classify_cache",
    "compute_signature",
    "select_directories",
    "DEFAULT_CACHE_DIRECTORY",
    # Orchestrator API
    "clear_cache",
    "get_cache_directories",
    "get_cache_status",
    "restore_cache_directories",
    "save_cache_directories",
    "save_signature",
    # Models
    "AfterBuildResult",
    "BeforeBuildResult",
    "CacheStatus",
    "CacheStatusReport",
    "TransferDirection",
    "TransferOutcome",
    "TransferRecord",
    "TransferReport",
    # Errors
    "CacheError",
    "CacheConfigError",
]
