"""In-memory filesystem for fast, isolated testing.

Simulates filesystem operations without disk I/O.
"""

from pathlib import Path
import posixpath

from .models import AbsolutePath, CopyResult, WriteResult

DEFAULT_FILE_MODE = 0o644


class FakeFileSystem:
    """
    In-memory filesystem for testing.

    Tracks text files, directories and file permission bits.
    Symlinks are not modeled. Not thread-safe (use per-test instance).
    """

    def __init__(self) -> None:
        self._files: dict[str, str] = {}
        self._modes: dict[str, int] = {}
        self._dirs: set[str] = {"/"}  # Root always exists

    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """Join paths (no I/O)."""
        base_norm = Path(posixpath.normpath(Path("/") / base))
        result = Path(posixpath.normpath(base_norm.joinpath(*parts)))

        try:
            result.relative_to(base_norm)
        except ValueError as e:
            raise ValueError(f"Path traversal detected: {result} escapes {base}") from e

        return AbsolutePath(result)

    def exists(self, path: AbsolutePath) -> bool:
        """Check existence."""
        path_str = str(Path(path))
        return path_str in self._files or path_str in self._dirs

    def is_file(self, path: AbsolutePath) -> bool:
        """Check if file."""
        return str(Path(path)) in self._files

    def is_dir(self, path: AbsolutePath) -> bool:
        """Check if directory."""
        return str(Path(path)) in self._dirs

    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        """Read text."""
        path_str = str(Path(path))
        if path_str not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        return self._files[path_str]

    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """Write text."""
        path_obj = Path(path)
        path_str = str(path_obj)

        # Auto-create parent directories
        self._ensure_parents(path_obj.parent)

        self._files[path_str] = content
        self._modes.setdefault(path_str, DEFAULT_FILE_MODE)

        return WriteResult(
            path=path_str,
            bytes_written=len(content.encode(encoding)),
            duration_ms=0.0,
        )

    def _ensure_parents(self, path: Path) -> None:
        """Recursively create parent directories."""
        parts = path.parts
        for i in range(1, len(parts) + 1):
            self._dirs.add(str(Path(*parts[:i])))

    def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """Create directory."""
        path_str = str(Path(path))
        if not exist_ok and path_str in self._dirs:
            raise FileExistsError(f"Directory exists: {path}")
        self._ensure_parents(Path(path))

    def listdir(self, path: AbsolutePath) -> list[str]:
        """List directory."""
        path_str = str(Path(path))
        if path_str not in self._dirs:
            raise FileNotFoundError(f"Directory not found: {path}")

        # Find immediate children
        children = []
        for file_path in self._files:
            if Path(file_path).parent == Path(path_str):
                children.append(Path(file_path).name)
        for dir_path in self._dirs:
            if dir_path != path_str and Path(dir_path).parent == Path(path_str):
                children.append(Path(dir_path).name)

        return sorted(set(children))

    def replace_tree(self, source: AbsolutePath, destination: AbsolutePath) -> CopyResult:
        """Copy source over destination."""
        src = str(Path(source))
        dst = str(Path(destination))

        if not self.exists(source):
            raise FileNotFoundError(f"Source not found: {source}")

        self._discard(dst)
        self._ensure_parents(Path(dst).parent)

        if src in self._files:
            self._files[dst] = self._files[src]
            self._modes[dst] = self._modes[src]
            files_copied = 1
        else:
            files_copied = 0
            for dir_path in [d for d in self._dirs if d == src or d.startswith(src + "/")]:
                self._dirs.add(dst + dir_path[len(src) :])
            for file_path in [f for f in self._files if f.startswith(src + "/")]:
                target = dst + file_path[len(src) :]
                self._files[target] = self._files[file_path]
                self._modes[target] = self._modes[file_path]
                files_copied += 1

        return CopyResult(source=src, destination=dst, files_copied=files_copied, duration_ms=0.0)

    def _discard(self, path_str: str) -> None:
        """Drop a path and everything below it."""
        for p in [f for f in self._files if f == path_str or f.startswith(path_str + "/")]:
            del self._files[p]
            self._modes.pop(p, None)
        for p in [d for d in self._dirs if d == path_str or d.startswith(path_str + "/")]:
            self._dirs.discard(p)

    def rmdir(self, path: AbsolutePath, recursive: bool = False) -> None:
        """Remove directory."""
        path_str = str(Path(path))
        if path_str not in self._dirs:
            raise FileNotFoundError(f"Directory not found: {path}")

        if not recursive and self.listdir(path):
            raise OSError(f"Directory not empty: {path}")

        self._discard(path_str)

    # Test helpers

    def chmod(self, path: AbsolutePath, mode: int) -> None:
        """Set permission bits of a file."""
        path_str = str(Path(path))
        if path_str not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        self._modes[path_str] = mode

    def mode(self, path: AbsolutePath) -> int:
        """Get permission bits of a file."""
        path_str = str(Path(path))
        if path_str not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        return self._modes[path_str]
