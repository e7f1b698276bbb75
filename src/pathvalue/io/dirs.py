"""
Per-user directories: the home directory and the XDG base directories.

Both are read from the environment once and cached for the life of the
process; `reset()` drops the caches.
"""

import logging
import os
from functools import lru_cache
from typing import Mapping, NamedTuple, Optional

from .. import constants
from .path import Path

logger = logging.getLogger(__name__)


class StandardDirs(NamedTuple):
    cache: Path
    config: Path
    data: Path
    state: Path


@lru_cache(maxsize=None)
def home_dir() -> Path:
    """The current user's home: $HOME, else the password database."""
    home = Path(os.path.expanduser("~"))
    logger.debug(f"Resolved home directory: {home}")
    return home


def resolve_standard_dirs(
    env: Optional[Mapping[str, str]] = None, home: Optional[Path] = None
) -> StandardDirs:
    """
    Resolve XDG directories from `env` (default `os.environ`).

    A set, non-empty `XDG_*_HOME` wins; otherwise the home-relative default
    is used (`~/.cache`, `~/.config`, `~/.local/share`, `~/.local/state`).
    """
    mapping = os.environ if env is None else env
    base = home if home is not None else home_dir()
    resolved = {}
    for name, (var, default) in constants.XDG_DIRS.items():
        value = mapping.get(var) or ""
        if value:
            resolved[name] = Path(value)
        else:
            resolved[name] = base.join(default)
        logger.debug(f"XDG {name} directory: {resolved[name]}")
    return StandardDirs(**resolved)


@lru_cache(maxsize=None)
def standard_dirs() -> StandardDirs:
    return resolve_standard_dirs()


def reset():
    home_dir.cache_clear()
    standard_dirs.cache_clear()
