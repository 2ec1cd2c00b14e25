"""Construction of resolvers from configuration dictionaries."""

import logging
import os
from pathlib import Path
from typing import Any

from autoloader.cached_resolver import PERSIST_POLICIES, CachedResolver
from autoloader.compute_config_hash import compute_config_hash
from autoloader.errors import ConfigError
from autoloader.matcher import ANCESTOR_POLICIES
from autoloader.module_host import ModuleHost, SymbolHost
from autoloader.path_table import as_directory_list
from autoloader.resolver import Resolver
from autoloader.symbol_cache_store import SymbolCacheStore

logger = logging.getLogger(__name__)


def build_resolver(
    config: dict[str, Any],
    host: SymbolHost | None = None,
    *,
    base_dir: str | Path | None = None,
) -> Resolver | CachedResolver:
    """Build a resolver, wrapped in a cache when ``cache.path`` is set.

    Relative directories in the path tables are taken relative to
    ``base_dir`` when it is given.
    """
    if config.get("ancestor_policy") not in ANCESTOR_POLICIES:
        msg = f"ancestor_policy must be one of {ANCESTOR_POLICIES}"
        raise ConfigError(msg)
    extensions = config.get("extensions")
    if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
        msg = "extensions must be a list of strings"
        raise ConfigError(msg)

    errors = config.get("errors", {})
    resolver = Resolver(
        host if host is not None else ModuleHost(),
        extensions=extensions,
        verbose=bool(config.get("verbose", True)),
        use_include_path=bool(config.get("use_include_path", False)),
        include_path_env=config.get("include_path_env", "AUTOLOAD_PATH"),
        ancestor_policy=config["ancestor_policy"],
        raise_on_missing_symbol=bool(errors.get("missing_symbol", True)),
        raise_on_vendor_missing_symbol=bool(errors.get("vendor_missing_symbol", True)),
        raise_on_vendor_missing_file=bool(errors.get("vendor_missing_file", False)),
    )

    for namespace, dirs in _path_table(config, "base_paths", base_dir).items():
        resolver.add_base_path(dirs, namespace)
    for namespace, dirs in _path_table(config, "prefix_paths", base_dir).items():
        resolver.add_prefix_path(dirs, namespace)
    for namespace, dirs in _path_table(config, "vendor_paths", base_dir).items():
        if not namespace:
            msg = "vendor_paths entries need a vendor namespace"
            raise ConfigError(msg)
        resolver.add_vendor_path(namespace, dirs)

    cache = config.get("cache") or {}
    if not cache.get("path"):
        return resolver

    persist = cache.get("persist", "immediate")
    if persist not in PERSIST_POLICIES:
        msg = f"cache.persist must be one of {PERSIST_POLICIES}"
        raise ConfigError(msg)

    cache_path = Path(cache["path"])
    if base_dir is not None and not cache_path.is_absolute():
        cache_path = Path(base_dir) / cache_path
    store = SymbolCacheStore(cache_path, compute_config_hash(config))
    store.load(accept_legacy=bool(cache.get("accept_legacy", False)))
    logger.debug("Loaded %d cached symbol paths from %s", len(store), cache_path)
    return CachedResolver(resolver, store, persist=persist)


def _path_table(
    config: dict[str, Any], key: str, base_dir: str | Path | None
) -> dict[str, list[str]]:
    table = config.get(key) or {}
    if not isinstance(table, dict):
        msg = f"{key} must be a mapping of namespace to directories"
        raise ConfigError(msg)

    result: dict[str, list[str]] = {}
    for namespace, dirs in table.items():
        result[str(namespace or "")] = [
            _anchor(os.fspath(d), base_dir) for d in as_directory_list(dirs)
        ]
    return result


def _anchor(directory: str, base_dir: str | Path | None) -> str:
    if base_dir is None or os.path.isabs(directory):
        return directory
    return os.path.join(os.fspath(base_dir), directory)
