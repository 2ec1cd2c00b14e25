"""Utility for reading the implicit search path from the environment."""

import os

DEFAULT_INCLUDE_PATH_ENV = "AUTOLOAD_PATH"


def read_include_path(env_var: str = DEFAULT_INCLUDE_PATH_ENV) -> list[str]:
    """Return the directories listed in an ``os.pathsep`` separated variable."""
    value = os.environ.get(env_var, "")
    return [entry for entry in value.split(os.pathsep) if entry]
