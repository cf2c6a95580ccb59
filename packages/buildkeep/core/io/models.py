"""Models for filesystem abstraction layer.

Provides type-safe path wrappers and operation result types.
"""

import os
from pathlib import Path
from typing import NewType

from pydantic import BaseModel, Field

# Type-safe path wrapper
AbsolutePath = NewType("AbsolutePath", Path)


def absolute_path(path: str | Path) -> AbsolutePath:
    """
    Validate and construct an absolute path.

    The path is normalized lexically; symlinks are not resolved, so a
    workspace that is itself a symlink keeps its own name.

    Args:
        path: String or Path object

    Returns:
        AbsolutePath instance

    Raises:
        ValueError: If path is not absolute

    Example:
        >>> p = absolute_path("/tmp/cache")
        >>> assert Path(p).is_absolute()
    """
    p = Path(path)
    if not p.is_absolute():
        raise ValueError(f"Path must be absolute: {path}")
    return AbsolutePath(Path(os.path.normpath(p)))


class WriteResult(BaseModel):
    """Result of a filesystem write operation.

    Attributes:
        path: Final path written
        bytes_written: Number of bytes written
        duration_ms: Operation duration in milliseconds
    """

    path: str = Field(description="Final path written")
    bytes_written: int = Field(description="Number of bytes written", ge=0)
    duration_ms: float = Field(description="Operation duration in milliseconds", ge=0.0)


class CopyResult(BaseModel):
    """Result of a tree copy operation.

    Attributes:
        source: Path copied from
        destination: Path copied to
        files_copied: Number of regular files and symlinks copied
        duration_ms: Operation duration in milliseconds
    """

    source: str = Field(description="Path copied from")
    destination: str = Field(description="Path copied to")
    files_copied: int = Field(description="Number of files copied", ge=0)
    duration_ms: float = Field(description="Operation duration in milliseconds", ge=0.0)
