"""Copies cache directories between the store and the build workspace.

Each path is transferred whole: the destination is replaced, never merged.
A path missing on the source side is a normal "nothing to do" outcome.
I/O errors propagate unchanged.
"""

import logging

from buildkeep.core.caching.models import (
    TransferDirection,
    TransferOutcome,
    TransferRecord,
    TransferReport,
)
from buildkeep.core.caching.selector import validate_directories
from buildkeep.core.caching.store import CacheStore
from buildkeep.core.io import AbsolutePath

logger = logging.getLogger(__name__)


class CacheTransfer:
    """
    Restore/save/clear operations for one cache store.

    Paths are validated with the same rules as the directory selector, so
    callers passing paths directly get the same protection.
    """

    def __init__(self, store: CacheStore) -> None:
        self.store = store
        self.fs = store.fs

    def restore(self, directories: list[str], workspace: AbsolutePath) -> TransferReport:
        """
        Copy cached directories into the workspace.

        Args:
            directories: Workspace-relative paths, in restore order
            workspace: Build workspace root

        Returns:
            TransferReport with one record per requested path
        """
        return self._transfer(
            TransferDirection.RESTORE,
            directories,
            source=self.store.entry_path,
            destination=lambda path: self.fs.join(workspace, path),
        )

    def save(self, directories: list[str], workspace: AbsolutePath) -> TransferReport:
        """
        Copy workspace directories into the store.

        Args:
            directories: Workspace-relative paths, in save order
            workspace: Build workspace root

        Returns:
            TransferReport with one record per requested path
        """
        return self._transfer(
            TransferDirection.SAVE,
            directories,
            source=lambda path: self.fs.join(workspace, path),
            destination=self.store.entry_path,
        )

    def clear(self) -> None:
        """Remove every entry and marker from the store. Safe on an empty store."""
        if self.fs.exists(self.store.root):
            self.fs.rmdir(self.store.root, recursive=True)
        self.fs.mkdirs(self.store.root, exist_ok=True)
        logger.debug(f"Cleared {self.store!r}")

    def _transfer(self, direction, directories, source, destination) -> TransferReport:
        validate_directories(list(directories))

        report = TransferReport(direction=direction)
        seen: set[str] = set()

        for path in directories:
            if path in seen:
                logger.debug(f"- {path} (listed twice - skipping)")
                report.records.append(
                    TransferRecord(path=path, outcome=TransferOutcome.DUPLICATE)
                )
                continue
            seen.add(path)

            src = source(path)
            if not self.fs.exists(src):
                if direction is TransferDirection.RESTORE:
                    logger.info(f"- {path} (not cached - skipping)")
                else:
                    logger.info(f"- {path} (nothing to cache)")
                report.records.append(TransferRecord(path=path, outcome=TransferOutcome.MISSING))
                continue

            result = self.fs.replace_tree(src, destination(path))
            logger.info(f"- {path}")
            report.records.append(
                TransferRecord(
                    path=path,
                    outcome=TransferOutcome.COPIED,
                    files_copied=result.files_copied,
                    duration_ms=result.duration_ms,
                )
            )

        return report
