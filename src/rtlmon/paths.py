"""Config file lookup.

A bare name is looked up in the working directory, then in the
system config directory:

  Dev:        ./rtlmon.toml
  Production: /etc/rtlmon/rtlmon.toml
"""

import os

ETC_DIR = "/etc/rtlmon"
DEFAULT_CONFIG_NAME = "rtlmon.toml"


def search_dirs() -> list[str]:
    """Return the directories searched for a bare config name, in order."""
    return [os.getcwd(), ETC_DIR]


def resolve_config(name: str) -> str:
    """Return the absolute path of config file *name*.

    A *name* containing ``/`` is an explicit path and must exist.
    Anything else is searched for in ``search_dirs()``.

    Raises:
        FileNotFoundError: If no matching file exists.
    """
    if "/" in name:
        candidates = [name]
    else:
        candidates = [os.path.join(d, name) for d in search_dirs()]

    for candidate in candidates:
        if os.path.isfile(candidate):
            return os.path.abspath(candidate)

    raise FileNotFoundError(
        "config file '%s' not found (looked in %s)"
        % (name, ", ".join(os.path.dirname(c) or "." for c in candidates))
    )
