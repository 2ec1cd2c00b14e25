"""Logic for managing a persistent mapping of symbols to the files defining them."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1


class SymbolCacheStore:
    """Manages a persistent cache of symbol to file path mappings."""

    def __init__(self, path: str | Path, current_config_hash: str = "") -> None:
        """Initialize the store with a storage path and current configuration hash."""
        self.path = Path(path)
        self.current_config_hash = current_config_hash
        self.mapping: dict[str, str] = {}
        self.meta: dict[str, Any] = {
            "schema_version": CURRENT_SCHEMA_VERSION,
            "config_hash": current_config_hash,
        }
        self.dirty = False

    def load(self, *, accept_legacy: bool = False) -> None:
        """Load the mapping from disk.

        A flat ``{symbol: path}`` document is a legacy cache; it is only
        accepted (and migrated on the next save) when ``accept_legacy`` is set.
        """
        if not self.path.exists():
            return

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception("Error loading cache %s", self.path)
            return

        if not isinstance(data, dict):
            logger.warning("Cache %s is not a mapping. Ignoring cache.", self.path)
            return

        if "mapping" in data and isinstance(data.get("meta"), dict):
            schema_ver = data["meta"].get("schema_version", 0)
            raw_mapping = data["mapping"]
        else:
            schema_ver = 0
            raw_mapping = data

        if schema_ver != CURRENT_SCHEMA_VERSION:
            if not accept_legacy:
                logger.warning(
                    "Schema version mismatch (%s != %s). Ignoring cache.",
                    schema_ver,
                    CURRENT_SCHEMA_VERSION,
                )
                return
            logger.info("Accepting legacy cache. Will be migrated.")
            self.dirty = True
        else:
            cached_hash = data["meta"].get("config_hash", "")
            if cached_hash != self.current_config_hash:
                logger.warning(
                    "Configuration changed since cache was written. Ignoring cache."
                )
                self.dirty = True
                return

        if not isinstance(raw_mapping, dict):
            logger.warning("Cache %s has no symbol mapping. Ignoring cache.", self.path)
            return

        self.mapping = {
            str(symbol): str(path)
            for symbol, path in raw_mapping.items()
            if isinstance(path, str)
        }

    def lookup(self, symbol: str) -> str | None:
        """Return the cached path for a symbol."""
        return self.mapping.get(symbol)

    def update(self, symbol: str, path: str) -> None:
        """Update or add a mapping for a symbol."""
        if self.mapping.get(symbol) != path:
            self.mapping[symbol] = path
            self.dirty = True

    def remove(self, symbol: str) -> bool:
        """Remove a mapping, returning whether it existed."""
        if self.mapping.pop(symbol, None) is None:
            return False
        self.dirty = True
        return True

    def save(self) -> None:
        """Write the whole cache to disk, replacing the previous file atomically."""
        self.meta["config_hash"] = self.current_config_hash
        self.meta["schema_version"] = CURRENT_SCHEMA_VERSION

        # Create directory if needed
        if not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)

        # A unique sibling temp file, so concurrent writers never share one.
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=self.path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            try:
                json.dump(
                    {"meta": self.meta, "mapping": self.mapping},
                    tmp,
                    indent=2,
                    sort_keys=True,
                )
            except BaseException:
                tmp.close()
                tmp_path.unlink(missing_ok=True)
                raise
        try:
            os.replace(tmp_path, self.path)
        finally:
            tmp_path.unlink(missing_ok=True)
        self.dirty = False
        logger.debug("Saved %d cache entries to %s", len(self.mapping), self.path)

    def __len__(self) -> int:
        return len(self.mapping)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.mapping
