"""Resolver decorator that remembers where symbols were found."""

import logging
from types import TracebackType

from autoloader.resolution_result import ResolutionResult
from autoloader.resolver import Resolver
from autoloader.symbol_cache_store import SymbolCacheStore
from autoloader.symbol_loader import SymbolLoader
from autoloader.symbol_segments import strip_leading_separator

logger = logging.getLogger(__name__)

IMMEDIATE = "immediate"
DEFERRED = "deferred"
PERSIST_POLICIES = (IMMEDIATE, DEFERRED)


class CachedResolver(SymbolLoader):
    """Wraps a :class:`Resolver` with a persisted symbol to file cache.

    A cached path is included directly, skipping every search. If the file
    is gone, or including it does not define the symbol, the entry is
    evicted and the wrapped resolver searches as usual. Successful searches
    are written back to the cache.

    With the ``deferred`` persist policy writes are held until :meth:`flush`
    or :meth:`close`; use the resolver as a context manager to guarantee it.
    """

    def __init__(
        self,
        resolver: Resolver,
        store: SymbolCacheStore,
        *,
        persist: str = IMMEDIATE,
    ) -> None:
        """Initialize the decorator around a resolver and a loaded store."""
        if persist not in PERSIST_POLICIES:
            msg = f"Unknown persist policy: {persist}"
            raise ValueError(msg)
        self.resolver = resolver
        self.store = store
        self.persist = persist

    @property
    def verbose(self) -> bool:  # type: ignore[override]
        return self.resolver.verbose

    def find_file(self, name: object) -> str | None:
        if isinstance(name, str):
            cached = self.store.lookup(strip_leading_separator(name))
            if cached is not None and self.resolver.matcher.exists(cached):
                return cached
        return self.resolver.find_file(name)

    def resolve(self, name: str) -> ResolutionResult | None:
        """Load a symbol from its cached path, falling back to a full search."""
        self.resolver.validate(name)
        key = strip_leading_separator(name)

        cached = self.store.lookup(key)
        if cached is not None:
            result = self._load_cached(name, cached)
            if result is not None:
                return result
            logger.debug("Evicting stale cache entry %s -> %s", key, cached)
            self.store.remove(key)
            # Evictions are always written at once so a stale entry is never served again.
            self._save()

        result = self.resolver.resolve(name)
        if result is not None:
            self.store.update(key, result.path)
            if self.persist == IMMEDIATE:
                self._save()
        return result

    def _save(self) -> None:
        # Write failures are logged and the load carries on without the cache.
        try:
            self.store.save()
        except OSError:
            logger.warning("Could not write cache %s", self.store.path, exc_info=True)

    def _load_cached(self, name: str, path: str) -> ResolutionResult | None:
        if not self.resolver.matcher.exists(path):
            return None
        self.resolver.host.include(path)
        if not self.resolver.host.is_defined(name):
            return None
        logger.debug("Loaded %s from cached path %s", name, path)
        return ResolutionResult(name, path, "cache")

    def flush(self) -> None:
        """Write pending cache changes to disk."""
        if self.store.dirty:
            self.store.save()

    def close(self) -> None:
        self.flush()

    def __enter__(self) -> "CachedResolver":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
