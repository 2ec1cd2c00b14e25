"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from autoloader.deep_merge import deep_merge
from autoloader.errors import ConfigError

DEFAULT_CONFIG: dict[str, Any] = {
    "extensions": [".py"],
    "verbose": True,
    "use_include_path": False,
    "include_path_env": "AUTOLOAD_PATH",
    "ancestor_policy": "first_match",
    "errors": {
        "missing_symbol": True,
        "vendor_missing_symbol": True,
        "vendor_missing_file": False,
    },
    "base_paths": {},
    "prefix_paths": {},
    "vendor_paths": {},
    "cache": {
        "path": None,
        "persist": "immediate",
        "accept_legacy": False,
    },
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if not p.exists():
            msg = f"Configuration file not found: {p}"
            raise ConfigError(msg)
        try:
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {p}: {e}"
            raise ConfigError(msg) from e
        if not isinstance(user_config, dict):
            msg = f"Configuration in {p} must be a mapping"
            raise ConfigError(msg)
        config = deep_merge(config, user_config)
    return config
