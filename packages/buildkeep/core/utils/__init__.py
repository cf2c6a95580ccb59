"""Shared utilities for buildkeep."""

from buildkeep.core.utils.json import read_json
from buildkeep.core.utils.logging import configure_logging, get_logger, log_performance

__all__ = [
    "configure_logging",
    "get_logger",
    "log_performance",
    "read_json",
]
