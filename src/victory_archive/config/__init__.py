"""Configuration system for victory-archive.

This module provides TOML-based configuration loading, validation,
and schema definitions for backup plans.
"""

from .loader import ConfigError, find_config_file, load_config
from .schema import Config, GlobalConfig, PlanConfig

__all__ = [
    "GlobalConfig",
    "PlanConfig",
    "Config",
    "load_config",
    "find_config_file",
    "ConfigError",
]
