"""Real filesystem implementation on top of os/shutil.

Provides atomic text writes via temp file + os.replace() and staged tree
replacement via copy-to-temp-sibling + rename.
"""

import logging
import os
from pathlib import Path
import shutil
from tempfile import NamedTemporaryFile, mkdtemp
import time

from .models import AbsolutePath, CopyResult, WriteResult

logger = logging.getLogger(__name__)


class RealFileSystem:
    """
    Real filesystem implementation (blocking).

    Provides atomic writes via temp file + os.replace(). Tree copies are
    staged next to the destination and renamed into place, so a reader never
    sees a half-copied directory under the final name.
    """

    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """Join paths (no I/O)."""
        base_norm = Path(os.path.normpath(base))
        result = Path(os.path.normpath(base_norm.joinpath(*parts)))

        # Security: Ensure result is still under base
        try:
            result.relative_to(base_norm)
        except ValueError as e:
            raise ValueError(f"Path traversal detected: {result} escapes {base}") from e

        return AbsolutePath(result)

    def exists(self, path: AbsolutePath) -> bool:
        """Check existence (dangling symlinks count as existing)."""
        return os.path.lexists(path)

    def is_file(self, path: AbsolutePath) -> bool:
        """Check if file."""
        return os.path.isfile(path)

    def is_dir(self, path: AbsolutePath) -> bool:
        """Check if directory."""
        return os.path.isdir(path)

    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        """Read text file."""
        return Path(path).read_text(encoding=encoding)

    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """Atomically write text file."""
        start = time.perf_counter()
        path_obj = Path(path)

        # Ensure parent directory exists
        path_obj.parent.mkdir(parents=True, exist_ok=True)

        # Atomic write: temp file → replace
        # Create temp file in same directory for atomic replace
        with NamedTemporaryFile(
            mode="w",
            encoding=encoding,
            dir=path_obj.parent,
            prefix=f".{path_obj.name}.",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            try:
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            except OSError:
                tmp.close()
                os.unlink(tmp_path)
                raise

        try:
            os.replace(tmp_path, path_obj)
        except OSError:
            # Clean up temp on failure
            if os.path.lexists(tmp_path):
                os.unlink(tmp_path)
            raise

        duration = (time.perf_counter() - start) * 1000
        bytes_written = len(content.encode(encoding))

        return WriteResult(
            path=str(path),
            bytes_written=bytes_written,
            duration_ms=duration,
        )

    def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """Create directory and parents."""
        os.makedirs(path, exist_ok=exist_ok)

    def listdir(self, path: AbsolutePath) -> list[str]:
        """List directory contents."""
        return sorted(os.listdir(path))

    def replace_tree(self, source: AbsolutePath, destination: AbsolutePath) -> CopyResult:
        """Copy source over destination via a staged sibling directory."""
        start = time.perf_counter()
        src = Path(source)
        dst = Path(destination)

        if not os.path.lexists(src):
            raise FileNotFoundError(f"Source not found: {source}")

        dst.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(mkdtemp(prefix=f".{dst.name}.", suffix=".staging", dir=dst.parent))
        staged = staging / "new"
        displaced = staging / "old"

        files_copied = 0

        def _copy(s: str, d: str) -> str:
            nonlocal files_copied
            files_copied += 1
            return shutil.copy2(s, d)

        try:
            if src.is_dir() and not src.is_symlink():
                shutil.copytree(src, staged, symlinks=True, copy_function=_copy)
            else:
                shutil.copy2(src, staged, follow_symlinks=False)
                files_copied = 1

            if os.path.lexists(dst):
                os.replace(dst, displaced)
            try:
                os.replace(staged, dst)
            except OSError:
                # Put the previous tree back under its name
                if os.path.lexists(displaced) and not os.path.lexists(dst):
                    os.replace(displaced, dst)
                raise
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        duration = (time.perf_counter() - start) * 1000
        logger.debug(f"Copied {files_copied} files {src} -> {dst} in {duration:.1f}ms")

        return CopyResult(
            source=str(src),
            destination=str(dst),
            files_copied=files_copied,
            duration_ms=duration,
        )

    def rmdir(self, path: AbsolutePath, recursive: bool = False) -> None:
        """Remove directory."""
        if recursive:
            shutil.rmtree(path)
        else:
            os.rmdir(path)
