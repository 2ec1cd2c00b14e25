"""Utility for normalizing namespace keys."""

NAMESPACE_SEPARATOR = "\\"


def normalize_namespace(namespace: str, strip: str = NAMESPACE_SEPARATOR) -> str:
    """Trim separators from a namespace key and append exactly one.

    The empty key stays empty and applies to every symbol.
    """
    trimmed = namespace.strip(strip)
    if not trimmed:
        return ""
    return trimmed + NAMESPACE_SEPARATOR
