"""Logic for deep merging configuration dictionaries."""

from typing import Any

# Path tables accumulate across config layers instead of being replaced.
ADDITIVE_KEYS = ("base_paths", "prefix_paths", "vendor_paths")


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Objects are merged recursively.
    - Arrays in 'update' replace 'base' arrays, EXCEPT inside path tables.
    - Directory lists of the same namespace in a path table are concatenated.
    """
    result = base.copy()
    for key, value in update.items():
        if key in ADDITIVE_KEYS and isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge_path_table(result[key], value)
        elif key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            # Default: Replacement (scalars and other arrays)
            result[key] = value
    return result


def _merge_path_table(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for namespace, dirs in update.items():
        if namespace in result:
            result[namespace] = _as_list(result[namespace]) + _as_list(dirs)
        else:
            result[namespace] = dirs
    return result


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else [value]
