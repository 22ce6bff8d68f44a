"""Entry point for the Bash Alias Manager CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from . import __version__
from .backup import BackupService
from .errors import AliasManagerError, RestoreWriteDeniedError
from .log import configure_logging, logger
from .persistence import AliasStore, ConfigStore
from .persistence._base import read_file_bytes
from .platform import AppPaths
from .preferences import load_preferences

EXIT_OK = 0
EXIT_ERROR = 1


def _err(message: str) -> None:
    print(f"bash-alias-manager: {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bash-alias-manager",
        description="Manage ~/.bash_aliases, with GitHub Gist backup.",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"bash-alias-manager {__version__}",
    )
    parser.add_argument(
        "--home",
        type=Path,
        help="Home directory holding .bash_aliases (default: $SNAP_REAL_HOME or ~)",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--list",
        "-l",
        action="store_true",
        help="Print the aliases and exit",
    )
    action.add_argument(
        "--import",
        dest="import_file",
        type=Path,
        metavar="FILE",
        help="Replace the alias file with the aliases found in FILE",
    )
    action.add_argument(
        "--backup",
        action="store_true",
        help="Back up the alias file to a private GitHub Gist",
    )
    action.add_argument(
        "--restore",
        action="store_true",
        help="Restore the alias file from the backup Gist",
    )
    parser.add_argument(
        "--token",
        help="GitHub token for --backup/--restore (default: the stored token)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write log output to this file",
    )
    return parser


def cmd_list(store: AliasStore, console: Console | None = None) -> int:
    console = console or Console()
    aliases = store.load()
    if not aliases:
        console.print(f"No aliases in {store.path}")
        return EXIT_OK
    table = Table(title=str(store.path))
    table.add_column("Name", style="bold")
    table.add_column("Command")
    for alias in aliases:
        table.add_row(alias.name, alias.command)
    console.print(table)
    return EXIT_OK


def cmd_import(store: AliasStore, source: Path) -> int:
    try:
        content = read_file_bytes(source)
    except FileNotFoundError:
        _err(f"{source} does not exist")
        return EXIT_ERROR
    aliases = store.import_bytes(content)
    store.save(aliases)
    print(f"Imported {len(aliases)} aliases into {store.path}")
    return EXIT_OK


def cmd_backup(service: BackupService) -> int:
    gist_id = service.backup()
    print(f"Aliases backed up to gist {gist_id}")
    return EXIT_OK


def cmd_restore(service: BackupService) -> int:
    try:
        aliases = service.restore()
    except RestoreWriteDeniedError as e:
        _err(f"{e}; writing the backup to stdout instead")
        sys.stdout.write(e.content.decode("utf-8", errors="replace"))
        return EXIT_ERROR
    print(f"Restored {len(aliases)} aliases into {service.store.path}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run Bash Alias Manager."""
    args = build_parser().parse_args(argv)

    paths = AppPaths.from_home(args.home) if args.home else AppPaths.discover()
    interactive = not (args.list or args.import_file or args.backup or args.restore)
    # The TUI owns the terminal, so it only logs to a file.
    configure_logging(
        verbose=args.verbose and not (interactive and args.log_file is None),
        log_file=args.log_file,
    )

    if interactive:
        from .app import run_app

        run_app(paths)
        return EXIT_OK

    store = AliasStore(paths.alias_file, home=paths.home)
    try:
        if args.list:
            return cmd_list(store)
        if args.import_file:
            return cmd_import(store, args.import_file)

        prefs = load_preferences(paths.preferences_file)
        service = BackupService(
            store, ConfigStore(paths.config_file), preferences=prefs.backup
        )
        if args.token:
            service.set_token(args.token)
        if args.backup:
            return cmd_backup(service)
        return cmd_restore(service)
    except AliasManagerError as e:
        logger.debug("Command failed", exc_info=True)
        _err(str(e))
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
