"""Base file stores: raw dotfile I/O and JSON documents."""

from __future__ import annotations

import json
from pathlib import Path

from ..errors import AliasFileError, PermissionDeniedError
from ..log import logger


def read_file_bytes(path: Path) -> bytes:
    """Read *path*, translating OS errors into the package taxonomy.

    ``FileNotFoundError`` is re-raised untouched because callers disagree on
    what a missing file means (empty state vs. error).
    """
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise
    except PermissionError as exc:
        raise PermissionDeniedError(path, f"Permission denied: {path}") from exc
    except OSError as exc:
        raise AliasFileError(path, f"Cannot read {path}: {exc}") from exc


class FileStore:
    """A single file addressed by path, read and written as bytes."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_bytes(self) -> bytes:
        """Return the file's content, or ``b""`` when it does not exist."""
        try:
            return read_file_bytes(self.path)
        except FileNotFoundError:
            logger.debug("%s does not exist, treating as empty", self.path)
            return b""

    def write_bytes(self, content: bytes) -> None:
        """Overwrite the file wholesale."""
        try:
            self.path.write_bytes(content)
        except PermissionError as exc:
            raise PermissionDeniedError(
                self.path, f"Permission denied: {self.path}"
            ) from exc
        except OSError as exc:
            raise AliasFileError(self.path, f"Cannot write {self.path}: {exc}") from exc


class JsonStore:
    """Simple JSON file store.

    Subclasses override ``_default()`` to provide the empty-state value.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    # -- core I/O -------------------------------------------------------------

    def load_raw(self) -> dict:
        """Read and parse the JSON file, returning ``_default()`` on any error."""
        try:
            if self.path.exists():
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    return data
                logger.debug("ignoring non-object JSON in %s", self.path)
        except (OSError, json.JSONDecodeError):
            logger.debug("failed to load JSON store from %s", self.path, exc_info=True)
        return self._default()

    def save_raw(self, data: dict, *, sort_keys: bool = False) -> None:
        """Write *data* as pretty-printed JSON, creating parents as needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys),
                encoding="utf-8",
            )
        except PermissionError as exc:
            raise PermissionDeniedError(
                self.path, f"Permission denied: {self.path}"
            ) from exc
        except OSError as exc:
            raise AliasFileError(self.path, f"Cannot write {self.path}: {exc}") from exc

    # -- override point -------------------------------------------------------

    def _default(self) -> dict:  # noqa: PLR6301
        """Return the empty-state value for this store."""
        return {}
