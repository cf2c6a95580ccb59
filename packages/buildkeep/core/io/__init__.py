"""Filesystem abstraction layer for buildkeep.

Provides safe, testable, blocking filesystem operations.

Example:
    >>> from buildkeep.core.io import RealFileSystem, absolute_path
    >>> fs = RealFileSystem()
    >>> path = fs.join(absolute_path("/tmp"), "cache", "signature")
    >>> fs.write_text(path, "v18.17.0; 9.6.7")
    >>> content = fs.read_text(path)
"""

from .impl_fake import FakeFileSystem
from .impl_real import RealFileSystem
from .models import (
    AbsolutePath,
    CopyResult,
    WriteResult,
    absolute_path,
)
from .protocols import FileSystem
from .utils import relative_path_error, sanitize_path_component

__all__ = [
    # Path type and constructor
    "AbsolutePath",
    "absolute_path",
    # Result types
    "WriteResult",
    "CopyResult",
    # Protocols
    "FileSystem",
    # Implementations
    "RealFileSystem",
    "FakeFileSystem",
    # Utilities
    "relative_path_error",
    "sanitize_path_component",
]
