"""Protocols for filesystem operations.

All cache I/O is synchronous and blocking: a build is a single sequential
process, so there is no async variant of this protocol.
"""

from typing import Protocol

from .models import AbsolutePath, CopyResult, WriteResult


class FileSystem(Protocol):
    """
    Protocol for blocking filesystem operations.

    All implementations must provide atomic write semantics for text files
    and whole-path replacement semantics for tree copies.
    """

    # Path operations (no I/O)
    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """
        Safely join path components.

        Args:
            base: Base absolute path
            *parts: Path segments to join

        Returns:
            New absolute path

        Raises:
            ValueError: If result escapes base directory
        """
        ...

    # Existence checks
    def exists(self, path: AbsolutePath) -> bool:
        """Check if path exists (file, directory or symlink)."""
        ...

    def is_file(self, path: AbsolutePath) -> bool:
        """Check if path exists and is a file."""
        ...

    def is_dir(self, path: AbsolutePath) -> bool:
        """Check if path exists and is a directory."""
        ...

    # Read operations
    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        """
        Read text file contents.

        Raises:
            FileNotFoundError: If file doesn't exist
            OSError: On read failure
        """
        ...

    # Write operations (atomic)
    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """
        Atomically write text to file.

        Uses temp file + atomic replace to ensure readers never
        observe partial writes.

        Raises:
            OSError: On write failure
        """
        ...

    # Directory operations
    def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """Create directory and all parents."""
        ...

    def listdir(self, path: AbsolutePath) -> list[str]:
        """
        List directory contents (names only, sorted).

        Raises:
            FileNotFoundError: If directory doesn't exist
        """
        ...

    # Tree operations
    def replace_tree(self, source: AbsolutePath, destination: AbsolutePath) -> CopyResult:
        """
        Copy a file or directory tree over ``destination``.

        Whatever was at ``destination`` is replaced wholesale (no merge).
        Permission bits and symlinks are preserved. Parent directories of
        ``destination`` are created as needed.

        Raises:
            FileNotFoundError: If source doesn't exist
            OSError: On copy failure
        """
        ...

    # Removal operations
    def rmdir(self, path: AbsolutePath, recursive: bool = False) -> None:
        """
        Remove a directory.

        Raises:
            FileNotFoundError: If directory doesn't exist
        """
        ...
