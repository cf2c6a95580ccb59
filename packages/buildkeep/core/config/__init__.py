"""Configuration management for buildkeep."""

from buildkeep.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
    load_project_config,
)
from buildkeep.core.config.models import (
    CACHE_FORMAT_VERSION,
    AppConfig,
    CacheSettings,
    LoggingConfig,
    ProjectConfig,
)

__all__ = [
    # Loaders
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
    "load_project_config",
    # Models
    "AppConfig",
    "CacheSettings",
    "LoggingConfig",
    "ProjectConfig",
    "CACHE_FORMAT_VERSION",
]
