"""Backup and restore of the alias file through a GitHub Gist."""

from __future__ import annotations

from collections.abc import Callable

from .errors import (
    BackupNotConfiguredError,
    GistAuthError,
    PermissionDeniedError,
    RestoreWriteDeniedError,
)
from .gist import GistClient
from .log import logger
from .models import Alias
from .persistence import AliasStore, BackupConfig, ConfigStore
from .preferences import BackupPreferences

ClientFactory = Callable[[str], GistClient]


class BackupService:
    """Moves the alias file's bytes to and from the backup Gist.

    The token and Gist id live in a ``ConfigStore``; the id is recorded the
    first time a backup Gist is created and reused for every later backup.
    """

    def __init__(
        self,
        store: AliasStore,
        config_store: ConfigStore,
        client_factory: ClientFactory | None = None,
        preferences: BackupPreferences | None = None,
    ) -> None:
        self.store = store
        self.config_store = config_store
        self.client_factory = client_factory or GistClient
        self.preferences = preferences or BackupPreferences()
        self.config: BackupConfig = config_store.load()
        self._token_unsaved = False

    def set_token(self, token: str) -> None:
        """Use *token* for the next calls; persisted after a successful backup."""
        self.config.github_token = token.strip() or None
        self._token_unsaved = True

    def _client(self) -> GistClient:
        client = self.client_factory(self.config.github_token or "")
        try:
            client.validate_token()
        except GistAuthError:
            if self._token_unsaved:
                # A rejected token that was never stored is forgotten.
                self.config.github_token = None
                self._token_unsaved = False
            raise
        return client

    def backup(self, content: bytes | None = None) -> str:
        """Upload the alias file (or *content*) and return the Gist id.

        When the alias file cannot be read because of sandboxing the
        ``PermissionDeniedError`` propagates; call again with the bytes of a
        file the user picked.
        """
        if not self.config.has_token:
            raise BackupNotConfiguredError("No GitHub token configured")
        client = self._client()
        if content is None:
            content = self.store.read_bytes()
        gist_id = client.upsert_backup(
            content,
            self.config.gist_id,
            description=self.preferences.description,
            public=self.preferences.public,
        )
        self.config.gist_id = gist_id
        self.config_store.save(self.config)
        self._token_unsaved = False
        logger.info("Backed up %d bytes to gist %s", len(content), gist_id)
        return gist_id

    def restore(self) -> list[Alias]:
        """Download the backup, write it to the alias file and reload it."""
        if not self.config.has_backup:
            raise BackupNotConfiguredError("No backup found. Please backup first.")
        client = self._client()
        content = client.fetch_backup(self.config.gist_id or "")
        try:
            self.store.write_bytes(content)
        except PermissionDeniedError as exc:
            raise RestoreWriteDeniedError(str(exc), content) from exc
        logger.info("Restored alias file from gist %s", self.config.gist_id)
        return self.store.load()
