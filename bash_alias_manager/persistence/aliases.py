"""Alias file store: parse, serialize and persist ``~/.bash_aliases``.

The file format is one alias per line::

    alias ll='ls -la'

Reading is permissive (any line starting with ``alias `` and containing
``=``); writing always emits the single-quoted form above.  Anything else
in the file, comments included, is dropped on the next save.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..errors import AliasFileError, PermissionDeniedError, StartupFileNotFoundError
from ..log import logger
from ..models import Alias
from ._base import FileStore, read_file_bytes

ALIAS_PREFIX = "alias "
QUOTE_CHARS = "'\""

SOURCE_SNIPPET = "\n# Source bash aliases\nif [ -f {path} ]; then\n    . {path}\nfi\n"


def parse_aliases(content: bytes) -> list[Alias]:
    """Parse alias definitions out of arbitrary file content.

    Lines that do not look like ``alias NAME=COMMAND`` are skipped.  The
    command loses any run of quote characters at either end, so
    ``"it's"`` comes back as ``it's`` and ``'a'"b"`` as ``a'"b``.
    """
    aliases: list[Alias] = []
    for raw in content.decode("utf-8", errors="replace").split("\n"):
        line = raw.strip()
        if not line.startswith(ALIAS_PREFIX) or "=" not in line:
            continue
        name, _, command = line[len(ALIAS_PREFIX) :].partition("=")
        name = name.strip()
        if not name:
            continue
        aliases.append(Alias(name=name, command=command.strip().strip(QUOTE_CHARS)))
    return aliases


def serialize_aliases(aliases: Iterable[Alias]) -> bytes:
    """Render aliases in file order as ``alias NAME='COMMAND'`` lines.

    Single quotes inside a command are not escaped.
    """
    return "".join(
        f"{ALIAS_PREFIX}{alias.name}='{alias.command}'\n" for alias in aliases
    ).encode("utf-8")


class AliasStore(FileStore):
    """The persisted alias file.

    Single writer: ``save`` overwrites the file without locking, so edits
    made by another process since ``load`` are lost.
    """

    def __init__(self, path: Path, home: Path | None = None) -> None:
        super().__init__(path)
        self.home = home

    parse = staticmethod(parse_aliases)
    serialize = staticmethod(serialize_aliases)

    def load(self) -> list[Alias]:
        """Load aliases from disk.

        A missing file yields an empty list; a sandboxed one raises
        ``PermissionDeniedError`` so the caller can offer a manual import.
        """
        logger.debug("Loading aliases from %s", self.path)
        try:
            content = read_file_bytes(self.path)
        except FileNotFoundError:
            logger.debug("%s does not exist, starting with no aliases", self.path)
            return []
        aliases = parse_aliases(content)
        logger.debug("Loaded %d aliases", len(aliases))
        return aliases

    def save(self, aliases: Iterable[Alias]) -> None:
        """Persist aliases, replacing the whole file."""
        self.write_bytes(serialize_aliases(aliases))

    def import_bytes(self, content: bytes) -> list[Alias]:
        """Parse content picked by the user or fetched from a backup."""
        return parse_aliases(content)

    # -- shell startup wiring -------------------------------------------------

    def source_path(self) -> str:
        """How the startup snippet should refer to the alias file."""
        if self.home is not None:
            try:
                return "~/" + self.path.relative_to(self.home).as_posix()
            except ValueError:
                pass
        return str(self.path)

    def source_snippet(self) -> str:
        """Shell lines that source the alias file if it exists."""
        return SOURCE_SNIPPET.format(path=self.source_path())

    def ensure_sourced(self, startup_file: Path) -> bool:
        """Make *startup_file* source the alias file.

        Returns True when the snippet was appended and False when a line
        already mentions the alias file.  Existing content is never rewritten.
        """
        marker = self.path.name
        try:
            with startup_file.open("r", encoding="utf-8", errors="replace") as fh:
                for line in fh:
                    if marker in line:
                        return False
            with startup_file.open("a", encoding="utf-8") as fh:
                fh.write(self.source_snippet())
        except FileNotFoundError as exc:
            raise StartupFileNotFoundError(
                startup_file, f"{startup_file} does not exist"
            ) from exc
        except PermissionError as exc:
            raise PermissionDeniedError(
                startup_file, f"Permission denied: {startup_file}"
            ) from exc
        except OSError as exc:
            raise AliasFileError(
                startup_file, f"Cannot update {startup_file}: {exc}"
            ) from exc
        logger.info("Added alias sourcing snippet to %s", startup_file)
        return True
