"""Configuration loading system.

Provides:
- Hierarchical file includes with cycle detection
- Override semantics with dot-notation

Main entry points
-----------------
load_config : Load a configuration from a YAML string
load_config_file : Load a configuration from a YAML file
"""

from .errors import (
    ConfigCycleError,
    ConfigError,
    ConfigIncludeError,
    ConfigPathError,
    ConfigTypeError,
)
from .load import apply_overrides, load_config, load_config_file

__all__ = [
    "load_config",
    "load_config_file",
    "apply_overrides",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigTypeError",
]
