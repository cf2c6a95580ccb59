"""Signature persistence.

The signature identifies which toolchain produced the cached generation.
Absence is a normal state (first build, or a save that never completed).
"""

import logging

from buildkeep.core.caching.store import CacheStore

logger = logging.getLogger(__name__)


def compute_signature(*versions: str | None) -> str:
    """
    Combine toolchain versions into a signature.

    Empty and None parts are dropped so optional tools don't change the
    signature shape.

    Args:
        *versions: Version strings, e.g. runtime then package manager

    Returns:
        Signature string

    Raises:
        ValueError: If no version is given

    Example:
        >>> compute_signature("v18.17.0", "9.6.7")
        'v18.17.0; 9.6.7'
        >>> compute_signature("v18.17.0", None)
        'v18.17.0'
    """
    parts = [v.strip() for v in versions if v and v.strip()]
    if not parts:
        raise ValueError("At least one version is required to compute a signature")
    return "; ".join(parts)


class SignatureStore:
    """Reads and writes the signature and format marker of a cache store."""

    def __init__(self, store: CacheStore) -> None:
        self.store = store
        self.fs = store.fs

    def read_signature(self) -> str | None:
        """Return the stored signature, or None if never written."""
        return self._read_line(self.store.signature_path)

    def write_signature(self, signature: str) -> None:
        """Persist the signature (atomic replace)."""
        self.fs.write_text(self.store.signature_path, signature.strip() + "\n")
        logger.debug(f"Wrote cache signature {signature!r}")

    def read_format_version(self) -> int | None:
        """Return the stored format marker, or None if absent or unreadable."""
        raw = self._read_line(self.store.format_version_path)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.debug(f"Unreadable format marker {raw!r}")
            return None

    def write_format_version(self, version: int) -> None:
        """Persist the format marker (atomic replace)."""
        self.fs.write_text(self.store.format_version_path, f"{version}\n")

    def _read_line(self, path) -> str | None:
        if not self.fs.is_file(path):
            return None
        try:
            value = self.fs.read_text(path).strip()
        except UnicodeDecodeError:
            logger.debug(f"Undecodable marker file {path}")
            return None
        return value or None
