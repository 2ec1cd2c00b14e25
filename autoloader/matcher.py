"""Matching of symbol names against path tables.

Three strategies are supported:

- prefix: a registered namespace is a literal prefix of the symbol name and
  is replaced by the directory; the rest of the name maps verbatim to
  subdirectories.
- vendor: like prefix, but bindings are grouped by vendor and searched most
  specific first.
- hierarchical: the whole name (with underscores of the final segment
  folded into namespace separators) maps to the directory tree below each
  matching directory.

All strategies share :meth:`Matcher.find_candidate`, which tries every
extension of a directory before moving on to the next directory.
"""

import logging
import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from autoloader.normalize_namespace import NAMESPACE_SEPARATOR
from autoloader.path_table import PathTable
from autoloader.symbol_segments import (
    canonicalize,
    strip_leading_separator,
    to_relative_path,
)
from autoloader.vendor_bindings import VendorBindings

logger = logging.getLogger(__name__)

FIRST_MATCH = "first_match"
ACCUMULATE = "accumulate"
ANCESTOR_POLICIES = (FIRST_MATCH, ACCUMULATE)


@dataclass(frozen=True)
class Match:
    """A file found for a symbol together with the namespace key that led to it."""

    path: str
    namespace: str


@dataclass(frozen=True)
class VendorMatch:
    """Outcome of a vendor lookup.

    ``matched`` is set when at least one binding covered the symbol, even if
    no file was found for it.
    """

    match: Match | None
    matched: bool


class Matcher:
    """Finds candidate files for symbols using the configured extensions."""

    def __init__(
        self,
        extensions: Sequence[str] = (".py",),
        exists: Callable[[str], bool] = os.path.isfile,
    ) -> None:
        """Initialize with an ordered extension list and an existence check."""
        self.extensions = list(extensions)
        self.exists = exists

    def find_candidate(self, directories: Iterable[str], relative_path: str) -> str | None:
        """Return the first existing ``directory + relative_path + extension``.

        Directories are the outer loop and extensions the inner one, so an
        earlier directory always wins over a later one.
        """
        for directory in directories:
            for ext in self.extensions:
                candidate = directory + relative_path + ext
                if self.exists(candidate):
                    logger.debug("Found candidate %s", candidate)
                    return candidate
        return None

    def match_prefix(self, name: str, table: PathTable) -> Match | None:
        """Resolve a symbol by replacing a registered prefix with its directories."""
        name = strip_leading_separator(name)
        for namespace, directories in table.items():
            if not name.startswith(namespace):
                continue
            path = self.find_candidate(directories, to_relative_path(name[len(namespace) :]))
            if path is not None:
                return Match(path, namespace)
        return None

    def match_vendor(self, name: str, bindings: VendorBindings) -> VendorMatch:
        """Resolve a symbol through the bindings registered for its vendor."""
        name = strip_leading_separator(name)
        vendor, sep, _ = name.partition(NAMESPACE_SEPARATOR)
        if not sep or vendor not in bindings:
            return VendorMatch(None, False)

        matched = False
        for namespace, directories in bindings.bindings_for(vendor):
            if not name.startswith(namespace):
                continue
            matched = True
            path = self.find_candidate(directories, to_relative_path(name[len(namespace) :]))
            if path is not None:
                return VendorMatch(Match(path, namespace), True)
        return VendorMatch(None, matched)

    def match_hierarchical(
        self, name: str, table: PathTable, policy: str = FIRST_MATCH
    ) -> Match | None:
        """Resolve a symbol whose full name mirrors the directory tree."""
        canon = canonicalize(name)
        relative = to_relative_path(canon)

        if policy == ACCUMULATE:
            return self._match_accumulated(canon, relative, table)
        if policy != FIRST_MATCH:
            msg = f"Unknown ancestor policy: {policy}"
            raise ValueError(msg)

        for namespace, directories in table.items():
            if not canon.startswith(namespace):
                continue
            path = self.find_candidate(directories, relative)
            if path is not None:
                return Match(path, namespace)
        return None

    def _match_accumulated(self, canon: str, relative: str, table: PathTable) -> Match | None:
        # Collect directories of every scoped ancestor key, shallow to deep,
        # then reverse so the deepest (and latest added) directory is first.
        scoped: list[tuple[str, str]] = []
        combined = ""
        for segment in canon.split(NAMESPACE_SEPARATOR):
            combined += segment + NAMESPACE_SEPARATOR
            scoped.extend((combined, d) for d in table.lookup(combined))
        scoped.reverse()

        candidates = scoped + [("", d) for d in table.lookup("")]
        for namespace, directory in candidates:
            path = self.find_candidate([directory], relative)
            if path is not None:
                return Match(path, namespace)
        return None
