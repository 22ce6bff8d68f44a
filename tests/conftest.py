"""Shared test fixtures for the bash-alias-manager test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from bash_alias_manager.platform import AppPaths


@pytest.fixture
def paths(tmp_path: Path) -> AppPaths:
    """AppPaths rooted in a throwaway home directory."""
    return AppPaths.from_home(tmp_path)


@pytest.fixture
def sample_alias_file() -> bytes:
    """A realistic ~/.bash_aliases with noise around the definitions."""
    return (
        b"# Managed by hand\n"
        b"alias ll='ls -la'\n"
        b"\n"
        b'alias gs="git status"\n'
        b"export EDITOR=vim\n"
        b"   alias ..='cd ..'   \n"
    )


# -- Gist stand-in ------------------------------------------------------------


class FakeGist:
    """In-memory replacement for GistClient.

    Calling the instance plays the role of the client factory, so it can be
    passed wherever a ``Callable[[str], GistClient]`` is expected.
    """

    def __init__(self) -> None:
        self.gists: dict[str, bytes] = {}
        self.tokens: list[str] = []
        self.uploads: list[tuple[str | None, str, bool]] = []
        self.valid = True
        self.next_id = "gist-1"

    def __call__(self, token: str) -> FakeGist:
        self.tokens.append(token)
        return self

    def validate_token(self) -> str:
        from bash_alias_manager.errors import GistAuthError

        if not self.valid:
            raise GistAuthError("Invalid GitHub token: 401 Client Error", 401)
        return "octocat"

    def upsert_backup(self, content, gist_id=None, *, description, public) -> str:
        self.uploads.append((gist_id, description, public))
        new_id = gist_id or self.next_id
        self.gists[new_id] = content
        return new_id

    def fetch_backup(self, gist_id: str) -> bytes:
        from bash_alias_manager.errors import GistError

        if gist_id not in self.gists:
            raise GistError("Failed to get Gist: 404 Client Error", 404)
        return self.gists[gist_id]


@pytest.fixture
def fake_gist() -> FakeGist:
    return FakeGist()
