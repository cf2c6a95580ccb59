"""Pre-build and post-build cache sequencing.

The build orchestrator calls :meth:`CacheLifecycle.before_build` before
installing dependencies and :meth:`CacheLifecycle.after_build` once the build
has completed. Every input is passed explicitly; nothing is read from the
working directory or the environment here.

Post-build order is fixed: clear, save, format marker, signature. The
signature is written last so an interrupted save never leaves a signature
vouching for a partial generation.
"""

from buildkeep.core.caching.models import AfterBuildResult, BeforeBuildResult
from buildkeep.core.caching.selector import select_directories
from buildkeep.core.caching.signature import SignatureStore
from buildkeep.core.caching.store import CacheStore
from buildkeep.core.caching.transfer import CacheTransfer
from buildkeep.core.caching.validator import CacheValidator
from buildkeep.core.config.models import CacheSettings, ProjectConfig
from buildkeep.core.io import AbsolutePath, FileSystem, RealFileSystem
from buildkeep.core.utils.logging import get_logger, log_performance


class CacheLifecycle:
    """
    Sequences validation, restore, clear, save and signature writes.

    Only one lifecycle may run against a given store location at a time;
    serialization is the orchestrator's responsibility.
    """

    def __init__(
        self,
        fs: FileSystem | None = None,
        settings: CacheSettings | None = None,
    ) -> None:
        """
        Initialize lifecycle controller.

        Args:
            fs: Filesystem implementation (defaults to the real filesystem)
            settings: Operator cache settings (defaults to CacheSettings())
        """
        self.fs = fs or RealFileSystem()
        self.settings = settings or CacheSettings()

    def open_store(self, store_location: AbsolutePath) -> CacheStore:
        """Build the store layout for a store location."""
        return CacheStore(self.fs, store_location, self.settings.namespace)

    def _logger(self, store: CacheStore, workspace: AbsolutePath):
        return get_logger(
            __name__,
            namespace=store.namespace,
            store=str(store.location),
            workspace=str(workspace),
        )

    @log_performance
    def before_build(
        self,
        workspace: AbsolutePath,
        store_location: AbsolutePath,
        config: ProjectConfig,
    ) -> BeforeBuildResult:
        """
        Restore cached directories when the cache is valid.

        A missing or unusable cache is a cold start, not an error; only I/O
        failures during restore raise.

        Args:
            workspace: Build workspace root
            store_location: Cache store root
            config: Project configuration for this build

        Returns:
            BeforeBuildResult with the status and restore report
        """
        store = self.open_store(store_location)
        log = self._logger(store, workspace)
        status = CacheValidator(store, self.settings).evaluate(config.signature)

        if not status.should_restore:
            log.info(f"Skipping cache restore ({status.status.value}): {status.reason}")
            return BeforeBuildResult(status=status)

        directories = select_directories(config)
        log.info(f"Restoring cache directories ({status.reason})")
        report = CacheTransfer(store).restore(directories, workspace)

        return BeforeBuildResult(status=status, directories=directories, restore=report)

    @log_performance
    def after_build(
        self,
        workspace: AbsolutePath,
        store_location: AbsolutePath,
        config: ProjectConfig,
    ) -> AfterBuildResult:
        """
        Replace the store contents with this build's directories.

        The store is cleared regardless of this build's cache status, then
        the currently selected directories are saved and the signature
        written.

        Args:
            workspace: Build workspace root
            store_location: Cache store root
            config: Project configuration for this build

        Returns:
            AfterBuildResult with the save report and written signature
        """
        # Select first so misconfiguration fails before the old cache is dropped
        directories = select_directories(config)

        store = self.open_store(store_location)
        log = self._logger(store, workspace)
        transfer = CacheTransfer(store)
        transfer.clear()

        if not self.settings.enabled:
            log.info("Skipping cache save (disabled by configuration)")
            return AfterBuildResult()

        log.info("Caching build directories")
        report = transfer.save(directories, workspace)

        signatures = SignatureStore(store)
        signatures.write_format_version(self.settings.format_version)
        signatures.write_signature(config.signature)

        return AfterBuildResult(directories=directories, save=report, signature=config.signature)
