"""GitHub Gist client used as the remote backup for the alias file.

Two operations matter to the rest of the app: ``upsert_backup`` (create or
update the private backup Gist) and ``fetch_backup`` (download it again).
Content is treated as an opaque blob.  Calls are blocking and never
retried; failures surface immediately as ``GistError``.
"""

from __future__ import annotations

import requests

from . import __version__
from .errors import GistAuthError, GistError
from .log import logger

API_URL = "https://api.github.com"
GIST_FILENAME = "bash_aliases"
DEFAULT_DESCRIPTION = "Bash Aliases Backup"
DEFAULT_TIMEOUT = 15


def _api_headers(token: str) -> dict:
    return {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github+json",
        "User-Agent": f"bash-alias-manager/{__version__}",
    }


def _status_of(exc: requests.RequestException) -> int | None:
    response = getattr(exc, "response", None)
    return response.status_code if response is not None else None


def _json_object(r: requests.Response) -> dict:
    """Decode a JSON object body, raising GistError for anything else."""
    try:
        data = r.json()
    except ValueError as e:
        raise GistError(f"Unexpected response from GitHub: {e}", r.status_code) from e
    if not isinstance(data, dict):
        raise GistError("Unexpected response from GitHub", r.status_code)
    return data


class GistClient:
    """Thin wrapper over the Gist endpoints of the GitHub REST API."""

    def __init__(
        self,
        token: str,
        *,
        api_url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.api_url}{path}"
        r = self.session.request(
            method, url, headers=_api_headers(self.token), timeout=self.timeout, **kwargs
        )
        logger.debug("%s %s -> %s", method, url, r.status_code)
        r.raise_for_status()
        return r

    def validate_token(self) -> str:
        """Return the login the token belongs to, or raise ``GistAuthError``."""
        try:
            r = self._request("GET", "/user")
        except requests.RequestException as e:
            raise GistAuthError(f"Invalid GitHub token: {e}", _status_of(e)) from e
        return str(_json_object(r).get("login", ""))

    def upsert_backup(
        self,
        content: bytes,
        gist_id: str | None = None,
        *,
        description: str = DEFAULT_DESCRIPTION,
        public: bool = False,
    ) -> str:
        """Create the backup Gist (no *gist_id*) or update it; return its id."""
        payload = {
            "description": description,
            "public": public,
            "files": {
                GIST_FILENAME: {"content": content.decode("utf-8", errors="replace")}
            },
        }
        if gist_id:
            try:
                r = self._request("PATCH", f"/gists/{gist_id}", json=payload)
            except requests.RequestException as e:
                raise GistError(f"Failed to update Gist: {e}", _status_of(e)) from e
        else:
            try:
                r = self._request("POST", "/gists", json=payload)
            except requests.RequestException as e:
                status = _status_of(e)
                if status in (403, 404):
                    # Usually a token without the 'gist' scope.
                    raise GistError(
                        f"Failed to create Gist (status {status}). Ensure your "
                        f"GitHub token has the 'gist' scope and is valid. Error: {e}",
                        status,
                    ) from e
                raise GistError(f"Failed to create Gist: {e}", status) from e
        new_id = _json_object(r).get("id") or gist_id
        if not new_id:
            raise GistError("GitHub did not return a Gist id", r.status_code)
        return str(new_id)

    def fetch_backup(self, gist_id: str) -> bytes:
        """Download the backed-up alias file content."""
        try:
            r = self._request("GET", f"/gists/{gist_id}")
        except requests.RequestException as e:
            raise GistError(f"Failed to get Gist: {e}", _status_of(e)) from e

        files = _json_object(r).get("files")
        item = files.get(GIST_FILENAME) if isinstance(files, dict) else None
        if not isinstance(item, dict):
            raise GistError(f"{GIST_FILENAME} file not found in gist")

        if item.get("truncated") and item.get("raw_url"):
            # The API truncates large files; the raw URL has the full text.
            try:
                raw = self.session.get(
                    item["raw_url"],
                    headers=_api_headers(self.token),
                    timeout=self.timeout,
                )
                raw.raise_for_status()
            except requests.RequestException as e:
                raise GistError(f"Failed to download Gist content: {e}", _status_of(e)) from e
            return raw.content

        return (item.get("content") or "").encode("utf-8")
