"""Backup configuration store (GitHub token and Gist id)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ._base import JsonStore


@dataclass
class BackupConfig:
    """Credentials and pointer for the remote Gist backup."""

    github_token: str | None = None
    gist_id: str | None = None

    @property
    def has_token(self) -> bool:
        return bool(self.github_token)

    @property
    def has_backup(self) -> bool:
        return bool(self.github_token) and bool(self.gist_id)


class ConfigStore(JsonStore):
    """Flat ``{github_token, gist_id}`` JSON document.

    A missing or unreadable file simply means nothing is configured yet.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path)

    def load(self) -> BackupConfig:
        """Load the backup configuration from disk."""
        data = self.load_raw()
        return BackupConfig(
            github_token=_optional_str(data.get("github_token")),
            gist_id=_optional_str(data.get("gist_id")),
        )

    def save(self, config: BackupConfig) -> None:
        """Persist the backup configuration."""
        self.save_raw(
            {"github_token": config.github_token or "", "gist_id": config.gist_id or ""}
        )


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None
