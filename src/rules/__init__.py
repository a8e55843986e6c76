"""Configuration and inclusion rules for systemmap."""

from rules.config import (
    ConfigError,
    InclusionConfig,
    SystemMapConfig,
    ViewConfig,
    load_config,
)
from rules.inclusion import is_excluded_module, resolve_marker

__all__ = [
    "ConfigError",
    "InclusionConfig",
    "SystemMapConfig",
    "ViewConfig",
    "is_excluded_module",
    "load_config",
    "resolve_marker",
]
