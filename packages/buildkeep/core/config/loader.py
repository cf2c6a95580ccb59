"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from buildkeep.core.config.models import AppConfig, ProjectConfig
from buildkeep.core.utils.json import read_json
from buildkeep.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "package.json"

_FALSE_VALUES = {"0", "false", "no", "off"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("buildkeep.json")
        'json'
        >>> detect_format("buildkeep.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            return read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Invalid YAML in {path}: expected a mapping")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    A missing file at the default path means "all defaults". Environment
    overrides are applied on top of the file.

    Args:
        path: Path to app config file (.json, .yaml, or .yml)
              Defaults to buildkeep.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If an explicitly given path does not exist
        ValidationError: If config is invalid
    """
    if path is None:
        default = AppConfig.default_path()
        config = AppConfig.model_validate(load_config(default)) if default.exists() else AppConfig()
    else:
        config = AppConfig.model_validate(load_config(path))

    return _apply_env_overrides(config)


def load_project_config(manifest_path: str | Path, signature: str) -> ProjectConfig:
    """Load project configuration from a package manifest.

    Only the cache-directory field is read. A missing manifest is not an
    error: the project simply declares no cache directories.

    Args:
        manifest_path: Path to package.json (or a workspace directory containing one)
        signature: Current environment signature

    Returns:
        Validated ProjectConfig

    Raises:
        ValueError: If the manifest is not a valid JSON object
        ValidationError: If cache directories are not a list of strings
    """
    path = Path(manifest_path)
    if path.is_dir():
        path = path / DEFAULT_MANIFEST_NAME

    if not path.exists():
        logger.debug(f"No manifest at {path}; using default cache directories")
        return ProjectConfig(signature=signature)

    try:
        manifest = read_json(path)
    except ValueError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    return ProjectConfig.from_manifest(manifest, signature)


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


def _env_flag(name: str) -> bool | None:
    """Parse a boolean environment variable, None when unset or unrecognized."""
    raw = os.getenv(name)
    if raw is None:
        return None

    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False

    logger.warning(f"Ignoring {name}={raw!r}: expected true or false")
    return None


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    """Overlay cache settings from environment variables.

    - NODE_MODULES_CACHE: "false" disables the cache
    - BUILDKEEP_FORCE_INVALIDATE: "true" forces invalidation
    - BUILDKEEP_CACHE_NAMESPACE: store subdirectory

    Args:
        config: AppConfig loaded from file/defaults

    Returns:
        New AppConfig with overrides applied
    """
    updates: dict[str, Any] = {}

    enabled = _env_flag("NODE_MODULES_CACHE")
    if enabled is not None:
        logger.debug(f"Loaded NODE_MODULES_CACHE={enabled} from environment")
        updates["enabled"] = enabled

    force = _env_flag("BUILDKEEP_FORCE_INVALIDATE")
    if force is not None:
        logger.debug(f"Loaded BUILDKEEP_FORCE_INVALIDATE={force} from environment")
        updates["force_invalidate"] = force

    namespace = os.getenv("BUILDKEEP_CACHE_NAMESPACE")
    if namespace:
        updates["namespace"] = namespace

    if not updates:
        return config

    cache = type(config.cache).model_validate({**config.cache.model_dump(), **updates})
    return config.model_copy(update={"cache": cache})
