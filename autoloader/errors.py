"""Exceptions raised while resolving and loading symbols."""


class AutoloadError(Exception):
    """Base class for every error raised by the autoloader."""


class InvalidSymbolNameError(AutoloadError, ValueError):
    """The symbol name is empty or not a string."""


class SymbolAlreadyDefinedError(AutoloadError, ValueError):
    """Loading was requested for a symbol that is already defined."""


class FileMissingAfterMatchError(AutoloadError, RuntimeError):
    """A vendor binding matched the symbol but none of its directories had the file."""


class SymbolNotDefinedAfterIncludeError(AutoloadError, RuntimeError):
    """A file was included but it did not define the expected symbol."""

    def __init__(self, symbol: str, path: str) -> None:
        """Record the symbol and the file that failed to define it."""
        super().__init__(f"Included file '{path}' did not define the symbol '{symbol}'")
        self.symbol = symbol
        self.path = path


class IncludeError(AutoloadError):
    """Executing an included file raised an exception."""


class SymbolNotFoundError(AutoloadError, LookupError):
    """No registered loader could define the requested symbol."""


class ConfigError(AutoloadError):
    """The autoloader configuration is invalid."""
