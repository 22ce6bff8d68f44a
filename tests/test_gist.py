"""Tests for the GitHub Gist client.

The HTTP session is a MagicMock returning real ``requests.Response``
objects, so ``raise_for_status`` and ``json()`` behave as in production.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from bash_alias_manager.errors import GistAuthError, GistError
from bash_alias_manager.gist import API_URL, GIST_FILENAME, GistClient


def _response(status: int, body=None, *, content: bytes | None = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r.url = API_URL
    r.encoding = "utf-8"
    if content is None:
        content = json.dumps(body if body is not None else {}).encode("utf-8")
    r._content = content
    return r


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return GistClient("ghp_test", session=session)


def _call(session, n=-1):
    """(method, url, kwargs) of the n-th session.request call."""
    args, kwargs = session.request.call_args_list[n]
    return args[0], args[1], kwargs


# -- validate_token ----------------------------------------------------------


class TestValidateToken:
    def test_returns_login(self, client, session):
        session.request.return_value = _response(200, {"login": "octocat"})
        assert client.validate_token() == "octocat"
        method, url, kwargs = _call(session)
        assert method == "GET"
        assert url == f"{API_URL}/user"
        assert kwargs["headers"]["Authorization"] == "token ghp_test"
        assert kwargs["headers"]["Accept"] == "application/vnd.github+json"
        assert kwargs["timeout"] == client.timeout

    def test_rejected_token(self, client, session):
        session.request.return_value = _response(401, {"message": "Bad credentials"})
        with pytest.raises(GistAuthError) as info:
            client.validate_token()
        assert info.value.status_code == 401

    def test_network_failure(self, client, session):
        session.request.side_effect = requests.ConnectionError("offline")
        with pytest.raises(GistAuthError) as info:
            client.validate_token()
        assert info.value.status_code is None


# -- upsert_backup -----------------------------------------------------------


class TestUpsertBackup:
    def test_creates_private_gist(self, client, session):
        session.request.return_value = _response(201, {"id": "abc123"})
        assert client.upsert_backup(b"alias a='b'\n") == "abc123"
        method, url, kwargs = _call(session)
        assert method == "POST"
        assert url == f"{API_URL}/gists"
        assert kwargs["json"] == {
            "description": "Bash Aliases Backup",
            "public": False,
            "files": {GIST_FILENAME: {"content": "alias a='b'\n"}},
        }

    def test_updates_existing_gist(self, client, session):
        session.request.return_value = _response(200, {"id": "abc123"})
        assert client.upsert_backup(b"x", "abc123") == "abc123"
        method, url, _ = _call(session)
        assert method == "PATCH"
        assert url == f"{API_URL}/gists/abc123"

    def test_update_keeps_id_when_response_lacks_one(self, client, session):
        session.request.return_value = _response(200, {})
        assert client.upsert_backup(b"x", "abc123") == "abc123"

    def test_description_and_visibility(self, client, session):
        session.request.return_value = _response(201, {"id": "1"})
        client.upsert_backup(b"x", description="Mine", public=True)
        payload = _call(session)[2]["json"]
        assert payload["description"] == "Mine"
        assert payload["public"] is True

    @pytest.mark.parametrize("status", [403, 404])
    def test_create_scope_hint(self, client, session, status):
        session.request.return_value = _response(status, {"message": "nope"})
        with pytest.raises(GistError) as info:
            client.upsert_backup(b"x")
        assert info.value.status_code == status
        assert "'gist' scope" in str(info.value)

    def test_create_server_error(self, client, session):
        session.request.return_value = _response(500, {})
        with pytest.raises(GistError) as info:
            client.upsert_backup(b"x")
        assert info.value.status_code == 500
        assert "scope" not in str(info.value)

    def test_update_failure(self, client, session):
        session.request.return_value = _response(404, {})
        with pytest.raises(GistError) as info:
            client.upsert_backup(b"x", "gone")
        assert "update" in str(info.value)

    def test_missing_id_on_create(self, client, session):
        session.request.return_value = _response(201, {})
        with pytest.raises(GistError):
            client.upsert_backup(b"x")


# -- fetch_backup ------------------------------------------------------------


class TestFetchBackup:
    def test_returns_file_content(self, client, session):
        session.request.return_value = _response(
            200, {"files": {GIST_FILENAME: {"content": "alias ll='ls -la'\n"}}}
        )
        assert client.fetch_backup("abc") == b"alias ll='ls -la'\n"
        method, url, _ = _call(session)
        assert method == "GET"
        assert url == f"{API_URL}/gists/abc"

    def test_missing_file(self, client, session):
        session.request.return_value = _response(200, {"files": {"other": {}}})
        with pytest.raises(GistError, match="not found"):
            client.fetch_backup("abc")

    def test_not_found(self, client, session):
        session.request.return_value = _response(404, {})
        with pytest.raises(GistError) as info:
            client.fetch_backup("abc")
        assert info.value.status_code == 404

    def test_truncated_content_uses_raw_url(self, client, session):
        raw_url = "https://gist.githubusercontent.com/raw/bash_aliases"
        session.request.return_value = _response(
            200,
            {
                "files": {
                    GIST_FILENAME: {
                        "content": "alias a=",
                        "truncated": True,
                        "raw_url": raw_url,
                    }
                }
            },
        )
        session.get.return_value = _response(200, content=b"alias a='b'\n")
        assert client.fetch_backup("abc") == b"alias a='b'\n"
        assert session.get.call_args.args[0] == raw_url

    def test_truncated_download_failure(self, client, session):
        session.request.return_value = _response(
            200,
            {"files": {GIST_FILENAME: {"truncated": True, "raw_url": "https://x"}}},
        )
        session.get.return_value = _response(500, content=b"")
        with pytest.raises(GistError):
            client.fetch_backup("abc")


# -- unexpected response bodies ----------------------------------------------


class TestNonJsonResponses:
    """A 2xx body that is not a JSON object (proxy or captive portal page)."""

    PORTAL = b"<html>portal</html>"

    def test_validate_token(self, client, session):
        session.request.return_value = _response(200, content=self.PORTAL)
        with pytest.raises(GistError) as info:
            client.validate_token()
        assert info.value.status_code == 200

    def test_upsert_backup(self, client, session):
        session.request.return_value = _response(200, content=self.PORTAL)
        with pytest.raises(GistError) as info:
            client.upsert_backup(b"alias a='b'\n")
        assert info.value.status_code == 200

    def test_fetch_backup(self, client, session):
        session.request.return_value = _response(200, content=self.PORTAL)
        with pytest.raises(GistError):
            client.fetch_backup("abc")

    def test_json_array_body(self, client, session):
        session.request.return_value = _response(201, [1, 2])
        with pytest.raises(GistError):
            client.upsert_backup(b"x")

    def test_files_not_an_object(self, client, session):
        session.request.return_value = _response(200, {"files": ["bash_aliases"]})
        with pytest.raises(GistError, match="not found"):
            client.fetch_backup("abc")

    def test_file_entry_not_an_object(self, client, session):
        session.request.return_value = _response(200, {"files": {GIST_FILENAME: "x"}})
        with pytest.raises(GistError, match="not found"):
            client.fetch_backup("abc")
