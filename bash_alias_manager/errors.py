"""Exception hierarchy for Bash Alias Manager."""

from __future__ import annotations

from pathlib import Path


class AliasManagerError(Exception):
    """Base class for every error raised by this package."""


class AliasFileError(AliasManagerError):
    """A dotfile could not be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class PermissionDeniedError(AliasFileError):
    """The process lacks rights to access *path* (it may well exist).

    Raised instead of a generic ``AliasFileError`` so callers can fall back
    to a manual import/export flow when the host sandboxes dotfile access.
    """


class StartupFileNotFoundError(AliasFileError):
    """The shell startup file to wire up does not exist."""


class InvalidAliasError(AliasManagerError, ValueError):
    """An alias was submitted with an empty name or command."""


class BackupError(AliasManagerError):
    """Base class for remote backup failures."""


class BackupNotConfiguredError(BackupError):
    """No token (or no backup id) has been configured yet."""


class RestoreWriteDeniedError(BackupError):
    """The fetched backup could not be written to the alias file."""

    def __init__(self, message: str, content: bytes) -> None:
        super().__init__(message)
        self.content = content


class GistError(BackupError):
    """The Gist API call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GistAuthError(GistError):
    """The GitHub token was rejected."""
