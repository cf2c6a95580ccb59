"""Models for the cache engine.

Provides cache status, transfer outcome and lifecycle result models.
"""

from enum import Enum

from pydantic import BaseModel, Field


class CacheStatus(str, Enum):
    """Usability of the cache for the current build (derived, never stored)."""

    VALID = "valid"
    NO_CACHE = "no-cache"
    NEW_VERSION = "new-version"
    INVALIDATED = "invalidated"


class CacheStatusReport(BaseModel):
    """
    Outcome of cache validation.

    Only ``valid`` leads to a restore; every other status is a normal
    cold-start path, not an error.
    """

    status: CacheStatus
    reason: str = Field(description="Human-readable explanation for logs")
    current_signature: str
    stored_signature: str | None = None

    @property
    def should_restore(self) -> bool:
        """True when cached directories should be restored."""
        return self.status is CacheStatus.VALID


class TransferDirection(str, Enum):
    """Direction of a cache transfer."""

    RESTORE = "restore"
    SAVE = "save"


class TransferOutcome(str, Enum):
    """Per-path outcome of a transfer.

    ``missing`` and ``duplicate`` mean the operation had nothing to do.
    Failures are raised, never recorded.
    """

    COPIED = "copied"
    MISSING = "missing"
    DUPLICATE = "duplicate"


class TransferRecord(BaseModel):
    """Result for one cache directory."""

    path: str
    outcome: TransferOutcome
    files_copied: int = Field(default=0, ge=0)
    duration_ms: float = Field(default=0.0, ge=0.0)


class TransferReport(BaseModel):
    """Result of restoring or saving a set of cache directories."""

    direction: TransferDirection
    records: list[TransferRecord] = Field(default_factory=list)

    @property
    def copied(self) -> list[str]:
        """Paths that were copied."""
        return [r.path for r in self.records if r.outcome is TransferOutcome.COPIED]

    @property
    def skipped(self) -> list[str]:
        """Paths that had nothing to transfer."""
        return [r.path for r in self.records if r.outcome is not TransferOutcome.COPIED]


class BeforeBuildResult(BaseModel):
    """Result of the pre-build lifecycle step."""

    status: CacheStatusReport
    directories: list[str] = Field(default_factory=list)
    restore: TransferReport | None = None


class AfterBuildResult(BaseModel):
    """Result of the post-build lifecycle step."""

    directories: list[str] = Field(default_factory=list)
    save: TransferReport | None = None
    signature: str | None = Field(
        default=None, description="Signature written, None when saving was disabled"
    )
