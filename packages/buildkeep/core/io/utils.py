"""Utility functions for filesystem operations.

Provides relative-path validation and sanitization helpers.
"""

import posixpath
import re


def sanitize_path_component(component: str) -> str:
    """
    Sanitize a string for use as a filesystem path component.

    Replaces unsafe characters with underscores. Used for store namespaces
    that may come from environment variables.

    Args:
        component: String to sanitize

    Returns:
        Filesystem-safe string

    Example:
        >>> sanitize_path_component("node/v18")
        'node_v18'
        >>> sanitize_path_component("valid_name-123")
        'valid_name-123'
    """
    # Replace anything not alphanumeric, dash, underscore, or dot
    return re.sub(r"[^a-zA-Z0-9._-]", "_", component)


def relative_path_error(path: str) -> str | None:
    """
    Check that a path is usable relative to a base directory.

    Backslashes are treated as separators so Windows-style manifests
    validate the same way.

    Args:
        path: Candidate relative path

    Returns:
        None if the path is usable, otherwise why it is not: empty,
        absolute, escaping its base, or naming the base itself

    Example:
        >>> relative_path_error("bower_components/") is None
        True
        >>> relative_path_error("a/../../etc")
        'path must stay inside the workspace root'
    """
    candidate = path.replace("\\", "/").strip()
    if not candidate:
        return "path is empty"
    if candidate.startswith("/") or re.match(r"^[a-zA-Z]:", candidate):
        return "path must be relative to the workspace root"

    normalized = posixpath.normpath(candidate)
    if normalized in (".", "..") or normalized.startswith("../"):
        return "path must stay inside the workspace root"
    return None
