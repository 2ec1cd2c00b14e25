"""Python host runtime that defines symbols by executing files."""

import itertools
import logging
import runpy
from typing import Protocol

from autoloader.errors import IncludeError, SymbolNotFoundError
from autoloader.loader_registry import LoaderRegistry
from autoloader.normalize_namespace import NAMESPACE_SEPARATOR
from autoloader.symbol_segments import strip_leading_separator

logger = logging.getLogger(__name__)


class SymbolHost(Protocol):
    """What a resolver needs from the runtime it loads symbols into."""

    def is_defined(self, name: str) -> bool: ...

    def include(self, path: str) -> None: ...


class ModuleHost:
    """A symbol table filled by running Python files.

    An included file may set a top-level ``__namespace__`` string. Every
    class the file defines at top level is registered as
    ``<namespace>\\<ClassName>``. Included files receive a ``require``
    function that resolves other symbols through the host's registry.
    """

    def __init__(self, registry: LoaderRegistry | None = None) -> None:
        """Initialize an empty symbol table."""
        self.registry = registry if registry is not None else LoaderRegistry()
        self.symbols: dict[str, object] = {}
        self.included: list[str] = []
        self._runs = itertools.count()

    def is_defined(self, name: str) -> bool:
        return strip_leading_separator(name) in self.symbols

    def define(self, name: str, obj: object) -> None:
        self.symbols[strip_leading_separator(name)] = obj

    def get(self, name: str) -> object | None:
        return self.symbols.get(strip_leading_separator(name))

    def include(self, path: str) -> None:
        """Execute a file and register the classes it defines."""
        run_name = f"__autoloader_include_{next(self._runs)}__"
        try:
            namespace = runpy.run_path(
                path, init_globals={"require": self.require}, run_name=run_name
            )
        except Exception as e:
            msg = f"Error while including '{path}': {e}"
            raise IncludeError(msg) from e

        self.included.append(path)
        prefix = namespace.get("__namespace__")
        if not isinstance(prefix, str):
            prefix = ""
        prefix = prefix.strip(NAMESPACE_SEPARATOR)
        for attr, value in namespace.items():
            if isinstance(value, type) and value.__module__ == run_name:
                symbol = f"{prefix}{NAMESPACE_SEPARATOR}{attr}" if prefix else attr
                self.symbols[symbol] = value
                logger.debug("Defined %s from %s", symbol, path)

    def require(self, name: str) -> object:
        """Return a symbol, autoloading it through the registry if needed."""
        name = strip_leading_separator(name)
        if not self.is_defined(name) and not self.registry.autoload(name, self.is_defined):
            msg = f"Symbol '{name}' could not be loaded"
            raise SymbolNotFoundError(msg)
        return self.symbols[name]
