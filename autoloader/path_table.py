"""Ordered storage of directory candidates per namespace key."""

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from autoloader.normalize_directory import normalize_directory
from autoloader.normalize_namespace import normalize_namespace

logger = logging.getLogger(__name__)

DirectorySpec = str | os.PathLike[str] | Iterable[str | os.PathLike[str]]


def as_directory_list(value: DirectorySpec) -> list[str | os.PathLike[str]]:
    """Wrap a single directory in a list; pass lists through."""
    if isinstance(value, (str, os.PathLike)):
        return [value]
    return list(value)


class PathTable:
    """Maps normalized namespace keys to ordered lists of directories.

    Keys keep their insertion order and so do the directories within a key:
    the first directory in a list is the first one searched. The empty key
    applies to every symbol.
    """

    def __init__(self) -> None:
        """Initialize an empty table."""
        self._paths: dict[str, list[str]] = {}

    def add(
        self,
        directories: DirectorySpec | Mapping[str, DirectorySpec],
        namespace: str | None = None,
        *,
        prepend: bool = False,
    ) -> "PathTable":
        """Add directories for a namespace.

        ``directories`` may be a single directory, a list of directories or
        a mapping of namespace to directory (or list). When ``namespace`` is
        given, everything in ``directories`` is added under that key.
        Adding to an existing key extends its list; ``prepend`` puts the new
        directories in front instead.
        """
        if namespace is not None:
            entries: Mapping[str, Any] = {namespace: directories}
        elif isinstance(directories, Mapping):
            entries = directories
        else:
            entries = {"": directories}

        for key, value in entries.items():
            normalized_key = normalize_namespace(key)
            new = [normalize_directory(d) for d in as_directory_list(value)]
            current = self._paths.setdefault(normalized_key, [])
            if prepend:
                current[:0] = new
            else:
                current.extend(new)
            logger.debug("Registered %s for namespace '%s'", new, normalized_key)

        return self

    def lookup(self, namespace: str) -> list[str]:
        """Return the directories registered for an exact namespace key."""
        return list(self._paths.get(normalize_namespace(namespace), []))

    def keys(self) -> list[str]:
        return list(self._paths)

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for key, dirs in self._paths.items():
            yield key, list(dirs)

    def as_dict(self) -> dict[str, list[str]]:
        """Return a copy of the table as a plain dictionary."""
        return {key: list(dirs) for key, dirs in self._paths.items()}

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, namespace: object) -> bool:
        return isinstance(namespace, str) and normalize_namespace(namespace) in self._paths
