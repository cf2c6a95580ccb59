"""On-disk layout of a cache store.

    <store_location>/<namespace>/
        signature          signature of the cached generation
        format-version     cache-format marker
        entries/<path>     snapshot of each cached path
"""

import logging

from buildkeep.core.io import AbsolutePath, FileSystem

logger = logging.getLogger(__name__)

SIGNATURE_FILENAME = "signature"
FORMAT_VERSION_FILENAME = "format-version"
ENTRIES_DIRNAME = "entries"


class CacheStore:
    """
    Addresses the durable cache area outside the build workspace.

    The store owns ``<store_location>/<namespace>`` exclusively; everything
    under it is removed by a clear.
    """

    def __init__(self, fs: FileSystem, store_location: AbsolutePath, namespace: str = "node"):
        """
        Initialize store layout.

        Args:
            fs: Filesystem implementation
            store_location: Cache root supplied by the build orchestrator
            namespace: Subdirectory owned by this cache
        """
        self.fs = fs
        self.location = store_location
        self.namespace = namespace
        self.root = fs.join(store_location, namespace)

    @property
    def entries_root(self) -> AbsolutePath:
        return self.fs.join(self.root, ENTRIES_DIRNAME)

    @property
    def signature_path(self) -> AbsolutePath:
        return self.fs.join(self.root, SIGNATURE_FILENAME)

    @property
    def format_version_path(self) -> AbsolutePath:
        return self.fs.join(self.root, FORMAT_VERSION_FILENAME)

    def entry_path(self, relative: str) -> AbsolutePath:
        """Location of the snapshot for a workspace-relative path."""
        return self.fs.join(self.entries_root, relative)

    def is_populated(self) -> bool:
        """True when the store holds anything at all (entries or markers)."""
        if not self.fs.is_dir(self.root):
            return False
        return bool(self.fs.listdir(self.root))

    def __repr__(self) -> str:
        return f"CacheStore(root={str(self.root)!r})"
