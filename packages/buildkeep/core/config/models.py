"""Configuration models for buildkeep."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from buildkeep.core.io.utils import sanitize_path_component

# Bump to invalidate every existing cache generation on the next build
CACHE_FORMAT_VERSION = 1


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file (default: stderr)")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class CacheSettings(BaseModel):
    """Operator-level cache behavior.

    Attributes:
        enabled: When False, restore is skipped and the store is emptied after the build.
        force_invalidate: Treat any existing cache as unusable for this build.
        namespace: Subdirectory of the store location owned by this cache.
        format_version: Expected cache-format marker; a populated store with a
            different marker is invalidated.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=True, description="Enable cache restore/save")
    force_invalidate: bool = Field(
        default=False, description="Skip restore regardless of signature"
    )
    namespace: str = Field(default="node", min_length=1, description="Store subdirectory")
    format_version: int = Field(
        default=CACHE_FORMAT_VERSION, ge=1, description="Cache-format marker"
    )

    @field_validator("namespace")
    @classmethod
    def _safe_namespace(cls, value: str) -> str:
        return sanitize_path_component(value)


class AppConfig(BaseModel):
    """Application-level configuration (shared across all builds)."""

    model_config = ConfigDict(extra="ignore")  # Forward compatibility
    cache: CacheSettings = CacheSettings()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("buildkeep.yaml")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> AppConfig:
        """Load config from path, or from the default path when present.

        Environment overrides are applied on top.

        Args:
            path: Path to config file, or None to use default

        Returns:
            Loaded config instance

        Raises:
            FileNotFoundError: If an explicitly given config file doesn't exist
            ValidationError: If config is invalid
        """
        from buildkeep.core.config.loader import load_app_config

        return load_app_config(path)


class ProjectConfig(BaseModel):
    """Per-build project configuration consumed by the cache engine.

    ``cache_directories`` is None or empty when the project declares nothing,
    which means "use the default directory", never "cache nothing".
    ``signature`` identifies the toolchain building this workspace.

    Example:
        >>> config = ProjectConfig(signature="v18.17.0; 9.6.7")
        >>> config.cache_directories is None
        True
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    signature: str = Field(min_length=1, description="Current environment signature")
    cache_directories: list[str] | None = Field(
        default=None, description="Workspace-relative paths to cache, in order"
    )

    @field_validator("signature", mode="before")
    @classmethod
    def _strip_signature(cls, value: Any) -> Any:
        # Versions captured from command output carry a trailing newline
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_manifest(cls, manifest: dict[str, Any], signature: str) -> ProjectConfig:
        """Build config from a parsed package manifest.

        Reads ``cacheDirectories`` and falls back to ``cache_directories``.

        Args:
            manifest: Parsed manifest (e.g. package.json contents)
            signature: Current environment signature

        Returns:
            Validated ProjectConfig
        """
        directories = manifest.get("cacheDirectories")
        if directories is None:
            directories = manifest.get("cache_directories")
        return cls.model_validate({"signature": signature, "cache_directories": directories})
