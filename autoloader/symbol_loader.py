"""Shared hook behaviour of resolvers that can be registered with a host."""

import logging
from abc import ABC, abstractmethod

from autoloader.errors import AutoloadError
from autoloader.loader_registry import LoaderRegistry
from autoloader.resolution_result import ResolutionResult

logger = logging.getLogger(__name__)


class SymbolLoader(ABC):
    """Adapts :meth:`resolve` to the callback contract of a loader registry.

    In verbose mode :meth:`load_symbol` returns whether the symbol was
    loaded and lets errors propagate. In silent mode it never raises and
    returns nothing, so it cannot disturb the host's other loaders.
    """

    verbose: bool

    @abstractmethod
    def resolve(self, name: str) -> ResolutionResult | None:
        """Locate, include and verify a symbol."""

    def load_symbol(self, name: str) -> bool | None:
        """Loader callback handed to the registry."""
        if self.verbose:
            return self.resolve(name) is not None
        try:
            self.resolve(name)
        except AutoloadError as e:
            logger.warning("Suppressed autoload error for '%s': %s", name, e)
        return None

    def register(self, registry: LoaderRegistry, *, prepend: bool = False) -> bool:
        """Register :meth:`load_symbol` with a host registry."""
        return registry.register(self.load_symbol, prepend=prepend)

    def unregister(self, registry: LoaderRegistry) -> bool:
        return registry.unregister(self.load_symbol)

    def is_registered(self, registry: LoaderRegistry) -> bool:
        return registry.is_registered(self.load_symbol)
