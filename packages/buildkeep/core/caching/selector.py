"""Cache directory selection."""

import logging

from buildkeep.core.caching.errors import CacheConfigError
from buildkeep.core.config.models import ProjectConfig
from buildkeep.core.io import relative_path_error

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIRECTORY = "node_modules"


def get_cache_directories(config: ProjectConfig) -> list[str]:
    """
    Return the configured cache directories, validated.

    An empty list means the project configured nothing and the caller
    should use the default.

    Raises:
        CacheConfigError: If any path is absolute, escapes the workspace,
            or names the workspace root
    """
    directories = list(config.cache_directories or [])
    validate_directories(directories)
    return directories


def select_directories(config: ProjectConfig) -> list[str]:
    """
    Select the directories participating in caching for this build.

    Configured paths are returned verbatim and in order (duplicates are
    left for the transfer engine). Absent or empty configuration selects
    the single default directory.

    Example:
        >>> select_directories(ProjectConfig(signature="v1"))
        ['node_modules']
        >>> select_directories(ProjectConfig(signature="v1", cache_directories=["bower_components"]))
        ['bower_components']
    """
    directories = get_cache_directories(config)
    if not directories:
        logger.debug(f"No cache directories configured; using {DEFAULT_CACHE_DIRECTORY}")
        return [DEFAULT_CACHE_DIRECTORY]
    return directories


def validate_directories(directories: list[str]) -> None:
    """Reject paths that would copy outside the workspace.

    Raises:
        CacheConfigError: On the first invalid path
    """
    for path in directories:
        _validate(path)


def _validate(path: str) -> None:
    reason = relative_path_error(path)
    if reason is not None:
        raise CacheConfigError(path, reason)
