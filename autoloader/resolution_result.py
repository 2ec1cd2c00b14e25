"""Data model for the outcome of resolving a symbol to a file."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolutionResult:
    """Represents the file a symbol was resolved to and how it was found."""

    symbol: str
    path: str
    strategy: str  # prefix/vendor/base/include_path/cache
    namespace: str = ""  # matching namespace key, "" for unscoped
