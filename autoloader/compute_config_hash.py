"""Logic for computing stable hashes of configuration objects."""

import hashlib
import json
from typing import Any

# Keys whose change can make a cached symbol path wrong.
HASHED_KEYS = (
    "extensions",
    "use_include_path",
    "include_path_env",
    "ancestor_policy",
    "base_paths",
    "prefix_paths",
    "vendor_paths",
)


def compute_config_hash(config: dict[str, Any]) -> str:
    """Compute a stable hash of the path-related configuration.

    Uses canonical JSON serialization (sorted keys).
    """
    relevant = {key: config.get(key) for key in HASHED_KEYS}
    config_json = json.dumps(relevant, sort_keys=True, ensure_ascii=True)
    return hashlib.sha256(config_json.encode("utf-8")).hexdigest()
