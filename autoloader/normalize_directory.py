"""Utility for normalizing directory entries stored in path tables."""

import os


def normalize_directory(path: str | os.PathLike[str]) -> str:
    """Return the directory with exactly one trailing separator.

    An empty directory means the current working directory.
    """
    text = os.fspath(path).rstrip("/" + os.sep)
    if not text:
        # rstrip of "/" itself leaves nothing; keep the filesystem root
        text = "." if not os.fspath(path) else ""
    return text + os.sep
