"""Resolution of symbol names to files and loading them into a host."""

import logging
import os
from collections.abc import Callable, Mapping, Sequence

from autoloader.errors import (
    FileMissingAfterMatchError,
    InvalidSymbolNameError,
    SymbolAlreadyDefinedError,
    SymbolNotDefinedAfterIncludeError,
)
from autoloader.include_path import DEFAULT_INCLUDE_PATH_ENV, read_include_path
from autoloader.matcher import ANCESTOR_POLICIES, FIRST_MATCH, Matcher
from autoloader.module_host import SymbolHost
from autoloader.normalize_directory import normalize_directory
from autoloader.path_table import DirectorySpec, PathTable
from autoloader.resolution_result import ResolutionResult
from autoloader.symbol_loader import SymbolLoader
from autoloader.symbol_segments import canonicalize, to_relative_path
from autoloader.vendor_bindings import VendorBindings

logger = logging.getLogger(__name__)


class Resolver(SymbolLoader):
    """Finds the file defining a symbol and includes it.

    Search order:
      1. prefix paths (the registered prefix is replaced by the directory)
      2. vendor paths (most specific binding first)
      3. base paths (the full name mirrors the directory tree, with
         underscores of the last segment treated as separators)
      4. the implicit search path from the environment, when enabled
    """

    def __init__(
        self,
        host: SymbolHost,
        *,
        extensions: Sequence[str] = (".py",),
        verbose: bool = True,
        use_include_path: bool = False,
        include_path_env: str = DEFAULT_INCLUDE_PATH_ENV,
        ancestor_policy: str = FIRST_MATCH,
        raise_on_missing_symbol: bool = True,
        raise_on_vendor_missing_symbol: bool = True,
        raise_on_vendor_missing_file: bool = False,
        exists: Callable[[str], bool] = os.path.isfile,
    ) -> None:
        """Initialize a resolver with empty path tables."""
        if ancestor_policy not in ANCESTOR_POLICIES:
            msg = f"Unknown ancestor policy: {ancestor_policy}"
            raise ValueError(msg)

        self.host = host
        self.matcher = Matcher(extensions, exists)
        self.verbose = verbose
        self.use_include_path = use_include_path
        self.include_path_env = include_path_env
        self.ancestor_policy = ancestor_policy
        self.raise_on_missing_symbol = raise_on_missing_symbol
        self.raise_on_vendor_missing_symbol = raise_on_vendor_missing_symbol
        self.raise_on_vendor_missing_file = raise_on_vendor_missing_file

        self.base_paths = PathTable()
        self.prefix_paths = PathTable()
        self.vendor_paths = VendorBindings()

    @property
    def extensions(self) -> list[str]:
        return self.matcher.extensions

    @extensions.setter
    def extensions(self, extensions: Sequence[str]) -> None:
        self.matcher.extensions = list(extensions)

    def add_base_path(
        self,
        directories: DirectorySpec | Mapping[str, DirectorySpec],
        namespace: str | None = None,
    ) -> "Resolver":
        """Add directories whose layout mirrors the full symbol name."""
        self.base_paths.add(directories, namespace)
        return self

    def add_prefix_path(
        self,
        directories: DirectorySpec | Mapping[str, DirectorySpec],
        namespace: str | None = None,
    ) -> "Resolver":
        """Add directories that replace a namespace prefix of the symbol name.

        With ``add_prefix_path("/usr/lib/foo", "Vendor\\Foo")`` the symbol
        ``Vendor\\Foo\\Bar`` is looked for in ``/usr/lib/foo/Bar.py``.
        """
        self.prefix_paths.add(directories, namespace)
        return self

    def add_vendor_path(self, namespace: str, directories: DirectorySpec) -> "Resolver":
        """Add directories for a vendor or a sub-namespace of a vendor."""
        self.vendor_paths.add(namespace, directories)
        return self

    def validate(self, name: object) -> str:
        """Return the name if it can be loaded, otherwise raise."""
        if not isinstance(name, str) or not name:
            msg = "Invalid symbol name"
            raise InvalidSymbolNameError(msg)
        if self.host.is_defined(name):
            msg = f"Attempting to load '{name}' that already exists"
            raise SymbolAlreadyDefinedError(msg)
        return name

    def find_file(self, name: object) -> str | None:
        """Return the file that would be included for a symbol, if any."""
        if not isinstance(name, str) or not name:
            return None
        result = self.locate(name)
        return result.path if result is not None else None

    def locate(self, name: str) -> ResolutionResult | None:
        """Search every table in order without including anything."""
        match = self.matcher.match_prefix(name, self.prefix_paths)
        if match is not None:
            return ResolutionResult(name, match.path, "prefix", match.namespace)

        vendor = self.matcher.match_vendor(name, self.vendor_paths)
        if vendor.match is not None:
            return ResolutionResult(name, vendor.match.path, "vendor", vendor.match.namespace)
        if vendor.matched and self.raise_on_vendor_missing_file:
            msg = f"Could not load '{name}' from registered vendor paths"
            raise FileMissingAfterMatchError(msg)

        match = self.matcher.match_hierarchical(name, self.base_paths, self.ancestor_policy)
        if match is not None:
            return ResolutionResult(name, match.path, "base", match.namespace)

        if self.use_include_path:
            directories = [normalize_directory(d) for d in read_include_path(self.include_path_env)]
            path = self.matcher.find_candidate(directories, to_relative_path(canonicalize(name)))
            if path is not None:
                return ResolutionResult(name, path, "include_path")

        logger.debug("No file found for %s", name)
        return None

    def resolve(self, name: str) -> ResolutionResult | None:
        """Locate, include and verify a symbol.

        Returns None when no file was found, or when the included file did
        not define the symbol and raising for that case is disabled.
        """
        self.validate(name)
        result = self.locate(name)
        if result is None:
            return None
        return self.include(result)

    def include(self, result: ResolutionResult) -> ResolutionResult | None:
        """Include a located file and check that it defined the symbol."""
        self.host.include(result.path)
        if self.host.is_defined(result.symbol):
            logger.debug("Loaded %s from %s", result.symbol, result.path)
            return result

        should_raise = (
            self.raise_on_vendor_missing_symbol
            if result.strategy == "vendor"
            else self.raise_on_missing_symbol
        )
        if should_raise:
            raise SymbolNotDefinedAfterIncludeError(result.symbol, result.path)
        logger.debug("Included %s but %s is still undefined", result.path, result.symbol)
        return None
