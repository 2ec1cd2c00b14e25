"""Helpers for splitting symbol names into path segments."""

import os
import re

from autoloader.normalize_namespace import NAMESPACE_SEPARATOR

SECONDARY_SEPARATOR = "_"

# Underscores after the last namespace separator.
_TAIL_UNDERSCORE_RE = re.compile(r"_(?=[^\\]*$)")


def strip_leading_separator(name: str) -> str:
    """Drop a leading global-namespace marker from a symbol name."""
    return name.lstrip(NAMESPACE_SEPARATOR)


def canonicalize(name: str) -> str:
    """Fold underscores of the final segment into namespace separators.

    ``Foo\\Bar_Baz`` becomes ``Foo\\Bar\\Baz`` while ``Foo_Bar\\Baz`` is left
    untouched.
    """
    return _TAIL_UNDERSCORE_RE.sub(
        lambda _: NAMESPACE_SEPARATOR, strip_leading_separator(name)
    )


def split_segments(name: str, *, fold_underscores: bool = False) -> list[str]:
    """Split a symbol name into its namespace segments."""
    if fold_underscores:
        name = canonicalize(name)
    else:
        name = strip_leading_separator(name)
    return name.split(NAMESPACE_SEPARATOR)


def relative_path(segments: list[str]) -> str:
    """Join segments with the directory separator (no extension)."""
    return os.sep.join(segments)


def to_relative_path(name: str) -> str:
    """Convert namespace separators in a name fragment to directory separators."""
    return name.replace(NAMESPACE_SEPARATOR, os.sep)
