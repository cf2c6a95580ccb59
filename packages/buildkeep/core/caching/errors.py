"""Cache engine errors.

I/O failures are not wrapped: ``OSError`` (including ``shutil.Error``)
propagates to the caller unchanged.
"""


class CacheError(Exception):
    """Base exception for cache engine errors."""

    pass


class CacheConfigError(CacheError, ValueError):
    """Raised when configured cache directories cannot be used safely.

    Examples: absolute paths, paths escaping the workspace, or a path that
    names the workspace root itself.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid cache directory {path!r}: {reason}")
