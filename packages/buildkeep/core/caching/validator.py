"""Cache validity classification.

Evaluated once per build. Nothing here writes to the store: a stale cache
is left in place until the post-build clear, so a build that fails after a
version bump still leaves the previous generation for the next attempt.
"""

import logging

from buildkeep.core.caching.models import CacheStatus, CacheStatusReport
from buildkeep.core.caching.signature import SignatureStore
from buildkeep.core.caching.store import CacheStore
from buildkeep.core.config.models import CacheSettings

logger = logging.getLogger(__name__)


def classify_cache(
    current_signature: str,
    stored_signature: str | None,
    store_populated: bool,
    *,
    enabled: bool = True,
    force_invalidate: bool = False,
    stored_format_version: int | None = None,
    expected_format_version: int | None = None,
) -> CacheStatusReport:
    """
    Classify the cache for the current build.

    Precedence: disabled/forced invalidation, empty store, format marker
    mismatch, signature mismatch, valid.

    Args:
        current_signature: Signature of the current build environment
        stored_signature: Signature persisted with the cache (None if absent)
        store_populated: Whether the store holds anything
        enabled: Caching enabled by settings
        force_invalidate: Operator asked to ignore the existing cache
        stored_format_version: Format marker persisted with the cache
        expected_format_version: Format marker this engine writes; None skips the check

    Returns:
        CacheStatusReport with status and reason
    """

    def report(status: CacheStatus, reason: str) -> CacheStatusReport:
        return CacheStatusReport(
            status=status,
            reason=reason,
            current_signature=current_signature,
            stored_signature=stored_signature,
        )

    if not enabled:
        return report(CacheStatus.INVALIDATED, "Cache disabled by configuration")

    if force_invalidate:
        return report(CacheStatus.INVALIDATED, "Cache invalidation forced by operator")

    if not store_populated:
        return report(CacheStatus.NO_CACHE, "No cache found")

    if expected_format_version is not None and stored_format_version != expected_format_version:
        stored = "none" if stored_format_version is None else str(stored_format_version)
        return report(
            CacheStatus.INVALIDATED,
            f"Cache format changed ({stored} -> {expected_format_version})",
        )

    if stored_signature != current_signature:
        stored = stored_signature if stored_signature is not None else "unknown"
        return report(
            CacheStatus.NEW_VERSION,
            f"New runtime version detected ({stored} -> {current_signature})",
        )

    return report(CacheStatus.VALID, f"Cache signature matches ({current_signature})")


class CacheValidator:
    """Reads store state and classifies the cache."""

    def __init__(self, store: CacheStore, settings: CacheSettings | None = None) -> None:
        self.store = store
        self.settings = settings or CacheSettings()
        self.signatures = SignatureStore(store)

    def evaluate(self, current_signature: str) -> CacheStatusReport:
        """Compute the cache status for a build with the given signature."""
        populated = self.store.is_populated()
        stored_signature = self.signatures.read_signature() if populated else None
        stored_format = self.signatures.read_format_version() if populated else None

        result = classify_cache(
            current_signature,
            stored_signature,
            populated,
            enabled=self.settings.enabled,
            force_invalidate=self.settings.force_invalidate,
            stored_format_version=stored_format,
            expected_format_version=self.settings.format_version,
        )
        logger.debug(f"Cache status {result.status.value}: {result.reason}")
        return result
