"""Dictionary operations used to assemble configurations."""

from copy import deepcopy
from typing import Any, Dict

import yaml

from .errors import ConfigTypeError

__all__ = ["deep_merge", "parse_value", "set_nested_value"]


def deep_merge(
    base_dict: Dict[str, Any], override_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Recursively merge `override_dict` into `base_dict`.

    Parameters
    ----------
    base_dict : Dict[str, Any]
        Base dictionary
    override_dict : Dict[str, Any]
        Override dictionary

    Returns
    -------
    Dict[str, Any]
        Merged dictionary (new copy)
    """
    result = deepcopy(base_dict)
    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def parse_value(value: Any) -> Any:
    """Parse a command-line string value into the appropriate type.

    Parameters
    ----------
    value : Any
        Value to parse (if string, attempts YAML parsing)

    Returns
    -------
    Any
        Parsed value
    """
    if not isinstance(value, str) or value.strip() == "":
        return value

    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def set_nested_value(
    config: Dict[str, Any], key_path: str, value: Any
) -> Dict[str, Any]:
    """Set a nested value using dot notation (e.g. `tasks.selector.eta_max`).

    Missing intermediate dictionaries are created.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary, modified in place
    key_path : str
        Dot-separated path to the value
    value : Any
        Value to set

    Returns
    -------
    Dict[str, Any]
        Modified configuration

    Raises
    ------
    ConfigTypeError
        If the path traverses a value which is not a dictionary
    """
    keys = key_path.split(".")
    current = config
    for key in keys[:-1]:
        if key not in current or current[key] is None:
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ConfigTypeError(
                f"Cannot set '{key_path}': '{key}' is not a dictionary"
            )
        current = current[key]

    current[keys[-1]] = value

    return config
