"""Filesystem locations used by Bash Alias Manager.

All paths hang off a single resolved home directory.  The home directory is
resolved once (honouring ``SNAP_REAL_HOME`` for confined snap installs) and
then injected into the stores as an ``AppPaths`` value, so nothing below
this module reads the process environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .log import logger

HOME_OVERRIDE_ENV = "SNAP_REAL_HOME"

ALIAS_FILE_NAME = ".bash_aliases"
STARTUP_FILE_NAME = ".bashrc"
CONFIG_FILE_NAME = ".bash_alias_manager.json"
PREFERENCES_FILE_NAME = ".bash_alias_manager.yaml"


def resolve_home(environ: Mapping[str, str] | None = None) -> Path:
    """Return the real home directory.

    Inside a snap ``$HOME`` points at the confined per-snap directory;
    ``SNAP_REAL_HOME`` carries the user's actual home.
    """
    env = os.environ if environ is None else environ
    override = env.get(HOME_OVERRIDE_ENV, "")
    if override:
        logger.debug("Using %s=%s as home directory", HOME_OVERRIDE_ENV, override)
        return Path(override)
    return Path.home()


@dataclass(frozen=True)
class AppPaths:
    """Resolved locations of every file the app touches."""

    home: Path
    alias_file: Path
    startup_file: Path
    config_file: Path
    preferences_file: Path

    @classmethod
    def from_home(cls, home: Path) -> AppPaths:
        return cls(
            home=home,
            alias_file=home / ALIAS_FILE_NAME,
            startup_file=home / STARTUP_FILE_NAME,
            config_file=home / CONFIG_FILE_NAME,
            preferences_file=home / PREFERENCES_FILE_NAME,
        )

    @classmethod
    def discover(cls, environ: Mapping[str, str] | None = None) -> AppPaths:
        """Build paths from the environment (``SNAP_REAL_HOME`` or ``~``)."""
        return cls.from_home(resolve_home(environ))
