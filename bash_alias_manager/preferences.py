"""User preferences for Bash Alias Manager.

Loads display and backup settings from ~/.bash_alias_manager.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .log import logger

THEME_NAMES = ("dark", "light")

_DEFAULT_YAML = """\
# Bash Alias Manager Preferences
# Delete this file to reset to defaults.

display:
  theme: "dark"                  # dark or light
  confirm_delete: true           # ask before deleting an alias

backup:
  description: "Bash Aliases Backup"   # Gist description
  public: false                  # create the Gist as public
"""


@dataclass
class DisplayPreferences:
    """Settings for the alias table view."""

    theme: str = "dark"
    confirm_delete: bool = True


@dataclass
class BackupPreferences:
    """Settings applied when creating or updating the backup Gist."""

    description: str = "Bash Aliases Backup"
    public: bool = False


@dataclass
class Preferences:
    """Top-level preferences."""

    display: DisplayPreferences = field(default_factory=DisplayPreferences)
    backup: BackupPreferences = field(default_factory=BackupPreferences)


def load_preferences(path: Path) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if isinstance(data.get("display"), dict):
                ddata = data["display"]
                if str(ddata.get("theme", "")) in THEME_NAMES:
                    prefs.display.theme = str(ddata["theme"])
                if "confirm_delete" in ddata:
                    prefs.display.confirm_delete = bool(ddata["confirm_delete"])
            if isinstance(data.get("backup"), dict):
                bdata = data["backup"]
                if bdata.get("description"):
                    prefs.backup.description = str(bdata["description"])
                if "public" in bdata:
                    prefs.backup.public = bool(bdata["public"])
        except (OSError, yaml.YAMLError, AttributeError):
            logger.debug("Invalid preferences in %s, using defaults", path, exc_info=True)
    else:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("Could not write default preferences to %s", path)

    return prefs


def save_theme(name: str, path: Path) -> None:
    """Persist the theme name to the preferences file.

    Surgically updates only the theme value, preserving the rest of the
    file (including user comments) as-is.
    """
    try:
        text = path.read_text(encoding="utf-8") if path.exists() else _DEFAULT_YAML

        value = f'"{name}"'
        if re.search(r"^\s+theme:", text, re.MULTILINE):
            text = re.sub(
                r"^(\s+theme:)\s*(?:\"[^\"]*\"|\S+)(.*?)$",
                rf"\1 {value}\2",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        elif re.search(r"^display:", text, re.MULTILINE):
            text = re.sub(
                r"^(display:.*)$",
                f"\\1\n  theme: {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        else:
            text = text.rstrip() + f"\n\ndisplay:\n  theme: {value}\n"

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError:
        logger.debug("Could not save theme to %s", path, exc_info=True)
