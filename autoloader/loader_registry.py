"""In-memory ordered list of symbol loader callbacks."""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

Loader = Callable[[str], object]


class LoaderRegistry:
    """Keeps the loaders a host calls, in order, when a symbol is missing.

    Loaders are compared by equality, so the same bound method of the same
    resolver instance is recognized on re-registration.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._loaders: list[Loader] = []

    def register(self, loader: Loader, *, prepend: bool = False) -> bool:
        """Add a loader; registering an already present loader is a no-op."""
        if loader in self._loaders:
            return True
        if prepend:
            self._loaders.insert(0, loader)
        else:
            self._loaders.append(loader)
        logger.debug("Registered loader %r", loader)
        return True

    def unregister(self, loader: Loader) -> bool:
        """Remove a loader, returning False if it was not registered."""
        try:
            self._loaders.remove(loader)
        except ValueError:
            return False
        logger.debug("Unregistered loader %r", loader)
        return True

    def is_registered(self, loader: Loader) -> bool:
        return loader in self._loaders

    def loaders(self) -> list[Loader]:
        return list(self._loaders)

    def autoload(self, name: str, is_defined: Callable[[str], bool]) -> bool:
        """Call loaders in order until one of them defines the symbol."""
        for loader in list(self._loaders):
            loader(name)
            if is_defined(name):
                return True
        return False
