"""Main configuration loading functions.

A configuration file is a YAML document. It may include other files with
a top-level `include` key (a path or a list of paths, relative to the
including file). Included files are merged in order, then the content of the
including file is merged on top of them.
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigCycleError, ConfigIncludeError, ConfigPathError
from .operations import deep_merge, parse_value, set_nested_value

__all__ = ["load_config", "load_config_file"]

# Key under which included files are listed
INCLUDE_KEY = "include"


def _load_recursive(
    cfg_path: Optional[str] = None,
    config_string: Optional[str] = None,
    root_dir: Optional[str] = None,
    include_stack: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Recursively load a configuration with cycle detection.

    Parameters
    ----------
    cfg_path : str, optional
        Path to configuration file (mutually exclusive with config_string)
    config_string : str, optional
        YAML configuration string (mutually exclusive with cfg_path)
    root_dir : str, optional
        Directory used to resolve relative include paths. Defaults to the
        directory of `cfg_path`, or the current directory for strings
    include_stack : List[str], optional
        Stack of files currently being loaded

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary
    """
    if (cfg_path is None) == (config_string is None):
        raise ValueError("Must provide exactly one of cfg_path or config_string")

    # Cycle detection
    include_stack = include_stack or []
    if cfg_path is not None:
        cfg_path = os.path.abspath(cfg_path)
        if cfg_path in include_stack:
            raise ConfigCycleError(include_stack + [cfg_path])
        include_stack = include_stack + [cfg_path]
        root_dir = root_dir or os.path.dirname(cfg_path)
    else:
        root_dir = root_dir or os.getcwd()

    # Load YAML
    try:
        if cfg_path is not None:
            with open(cfg_path, "r", encoding="utf-8") as cfg_yaml:
                cfg = yaml.safe_load(cfg_yaml)
        else:
            cfg = yaml.safe_load(config_string)
    except FileNotFoundError as exc:
        raise ConfigIncludeError(f"Configuration file not found: {cfg_path}") from exc
    except yaml.YAMLError as exc:
        source = cfg_path if cfg_path else "<string>"
        raise ConfigIncludeError(f"Error loading {source}: {exc}") from exc

    if cfg is None:
        return {}

    # Merge the included files, then the content of this file on top
    includes = cfg.pop(INCLUDE_KEY, [])
    if isinstance(includes, str):
        includes = [includes]

    config = {}
    for include in includes:
        include_path = include
        if not os.path.isabs(include_path):
            include_path = os.path.join(root_dir, include_path)
        if not os.path.isfile(include_path):
            raise ConfigIncludeError(f"Included file not found: {include}")

        config = deep_merge(
            config, _load_recursive(cfg_path=include_path, include_stack=include_stack)
        )

    return deep_merge(config, cfg)


def load_config(
    config_string: str,
    root_dir: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Load a configuration from a YAML string.

    Parameters
    ----------
    config_string : str
        YAML configuration string
    root_dir : str, optional
        Directory used to resolve relative include paths
    overrides : Dict[str, Any], optional
        Dot-notation overrides applied after loading

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary
    """
    cfg = _load_recursive(config_string=config_string, root_dir=root_dir)

    return apply_overrides(cfg, overrides)


def load_config_file(
    cfg_path: str, overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Load a configuration from a YAML file.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file
    overrides : Dict[str, Any], optional
        Dot-notation overrides applied after loading

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary
    """
    if not os.path.isfile(cfg_path):
        raise ConfigPathError(f"Configuration not found: {cfg_path}")

    cfg = _load_recursive(cfg_path=cfg_path)

    return apply_overrides(cfg, overrides)


def apply_overrides(
    cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Apply dot-notation overrides to a configuration.

    String values are parsed as YAML, so that `"0.9"` becomes a float.

    Parameters
    ----------
    cfg : Dict[str, Any]
        Configuration dictionary, modified in place
    overrides : Dict[str, Any], optional
        Dictionary of (path, value) pairs

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary
    """
    for key_path, value in (overrides or {}).items():
        set_nested_value(cfg, key_path, parse_value(value))

    return cfg
