"""Main Bash Alias Manager application."""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from .backup import BackupService, ClientFactory
from .errors import (
    AliasFileError,
    BackupError,
    BackupNotConfiguredError,
    InvalidAliasError,
    PermissionDeniedError,
    RestoreWriteDeniedError,
    StartupFileNotFoundError,
)
from .log import logger
from .models import AliasList, ChangeKind
from .persistence import AliasStore, ConfigStore
from .persistence._base import FileStore, read_file_bytes
from .platform import AppPaths
from .preferences import THEME_NAMES, Preferences, load_preferences, save_theme
from .theme import CUSTOM_THEMES, THEME_IDS
from .widgets import (
    AliasFormScreen,
    AliasTable,
    ConfirmScreen,
    PathPromptScreen,
    TokenScreen,
)


class AliasManagerApp(App):
    """Bash Alias Manager - edit ~/.bash_aliases in a table."""

    TITLE = "Bash Alias Manager"

    CSS = """
    #status-bar {
        height: 1;
        padding: 0 1;
        color: $text-muted;
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("a", "add_alias", "Add", show=True),
        Binding("e", "edit_alias", "Edit", show=True),
        Binding("d", "delete_alias", "Delete", show=True),
        Binding("r", "reload", "Reload", show=True),
        Binding("i", "import_aliases", "Import", show=True),
        Binding("b", "backup", "Backup", show=True),
        Binding("g", "restore", "Restore", show=True),
        Binding("ctrl+t", "toggle_theme", "Theme", show=False),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        paths: AppPaths,
        client_factory: ClientFactory | None = None,
        preferences: Preferences | None = None,
    ) -> None:
        super().__init__()
        self.paths = paths
        self._prefs = preferences or load_preferences(paths.preferences_file)
        self.store = AliasStore(paths.alias_file, home=paths.home)
        self.backup_service = BackupService(
            self.store,
            ConfigStore(paths.config_file),
            client_factory,
            self._prefs.backup,
        )
        self.aliases = AliasList()
        self.aliases.subscribe(self._on_aliases_changed)

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        # Kept as attributes: App.query_one searches the active, possibly modal, screen.
        self._alias_table = AliasTable(id="alias-table")
        self._status_bar = Static("", id="status-bar")
        yield Header()
        with Vertical(id="main"):
            yield self._alias_table
            yield self._status_bar
        yield Footer()

    def on_mount(self) -> None:
        for theme in CUSTOM_THEMES:
            self.register_theme(theme)
        self.theme = THEME_IDS[self._prefs.display.theme]

        self._load_aliases()
        self._ensure_sourced()
        self._alias_table.focus()

    # ── Helpers ─────────────────────────────────────────────────

    def _modal_open(self) -> bool:
        return len(self.screen_stack) > 1

    def _update_status(self, text: str = "") -> None:
        if not text:
            text = f"{len(self.aliases)} aliases  {self.paths.alias_file}"
        self._status_bar.update(text)

    def _on_aliases_changed(self, kind: ChangeKind) -> None:
        self._alias_table.show_aliases(self.aliases)
        self._update_status()
        # Imported lists are only written once the user changes something.
        if kind != "replaced":
            self._save()

    def _save(self) -> None:
        try:
            self.store.save(self.aliases)
        except AliasFileError as e:
            logger.warning("Saving aliases failed: %s", e)
            self.notify(str(e), title="Save failed", severity="error")

    # ── Loading & import ────────────────────────────────────────

    def _load_aliases(self) -> None:
        try:
            entries = self.store.load()
        except PermissionDeniedError:
            self._update_status("Alias file not accessible")
            self.push_screen(
                ConfirmScreen(
                    "Permission Denied",
                    f"Cannot access {self.paths.alias_file} due to sandboxing. "
                    "Would you like to select the file to import?",
                ),
                self._on_import_confirmed,
            )
            return
        except AliasFileError as e:
            self.notify(str(e), title="Load failed", severity="error")
            return
        self.aliases.replace(entries)

    def _on_import_confirmed(self, confirmed: bool | None) -> None:
        if confirmed:
            self._prompt_import("Select an alias file to import")

    def _prompt_import(self, title: str) -> None:
        self.push_screen(
            PathPromptScreen(title, str(self.paths.alias_file)),
            self._import_from,
        )

    def _import_from(self, path: Path | None) -> None:
        if path is None:
            return
        try:
            content = read_file_bytes(path)
        except FileNotFoundError:
            self.notify(f"{path} does not exist", severity="error")
            return
        except AliasFileError as e:
            self.notify(str(e), title="Import failed", severity="error")
            return
        self.aliases.replace(self.store.import_bytes(content))
        self.notify(f"Imported {len(self.aliases)} aliases from {path}")

    def _ensure_sourced(self) -> None:
        try:
            self.store.ensure_sourced(self.paths.startup_file)
        except PermissionDeniedError:
            self.notify(
                f"Cannot edit {self.paths.startup_file} due to sandboxing. "
                "To load your aliases, add these lines to it manually:\n"
                + self.store.source_snippet(),
                title="Permission Denied",
                severity="warning",
                timeout=30,
            )
        except StartupFileNotFoundError:
            logger.debug("No %s to wire up", self.paths.startup_file)
        except AliasFileError as e:
            logger.warning("Could not update startup file: %s", e)

    # ── Actions ─────────────────────────────────────────────────

    def action_add_alias(self) -> None:
        if self._modal_open():
            return
        self.push_screen(AliasFormScreen("Add Alias"), self._on_add_submitted)

    def _on_add_submitted(self, result: tuple[str, str] | None) -> None:
        if result is None:
            return
        try:
            self.aliases.add(*result)
        except InvalidAliasError as e:
            self.notify(str(e), severity="error")

    def action_edit_alias(self) -> None:
        if self._modal_open():
            return
        index = self._alias_table.selected_index
        if index is None:
            return
        alias = self.aliases[index]

        def on_submitted(result: tuple[str, str] | None) -> None:
            if result is None:
                return
            try:
                self.aliases.update(index, *result)
            except (InvalidAliasError, IndexError) as e:
                self.notify(str(e), severity="error")

        self.push_screen(
            AliasFormScreen("Edit Alias", alias.name, alias.command), on_submitted
        )

    def on_data_table_row_selected(self, event: AliasTable.RowSelected) -> None:
        """Enter on a row opens it for editing."""
        self.action_edit_alias()

    def action_delete_alias(self) -> None:
        if self._modal_open():
            return
        index = self._alias_table.selected_index
        if index is None:
            return
        if not self._prefs.display.confirm_delete:
            self.aliases.remove(index)
            return

        def on_answer(confirmed: bool | None) -> None:
            if confirmed and index < len(self.aliases):
                self.aliases.remove(index)

        self.push_screen(
            ConfirmScreen(
                "Delete Alias",
                f"Are you sure you want to delete '{self.aliases[index].name}'?",
            ),
            on_answer,
        )

    def action_reload(self) -> None:
        if self._modal_open():
            return
        self._load_aliases()

    def action_import_aliases(self) -> None:
        if self._modal_open():
            return
        self._prompt_import("Select an alias file to import")

    def action_toggle_theme(self) -> None:
        names = list(THEME_NAMES)
        current = self._prefs.display.theme
        new = names[(names.index(current) + 1) % len(names)]
        self._prefs.display.theme = new
        self.theme = THEME_IDS[new]
        save_theme(new, self.paths.preferences_file)

    # ── Backup & restore ────────────────────────────────────────

    def action_backup(self) -> None:
        if self._modal_open():
            return
        if self.backup_service.config.has_token:
            self._run_backup()
            return

        def on_token(token: str | None) -> None:
            if token:
                self.backup_service.set_token(token)
                self._run_backup()

        self.push_screen(TokenScreen(), on_token)

    def _run_backup(self, content: bytes | None = None) -> None:
        self._update_status("Backing up...")
        try:
            self.backup_service.backup(content)
        except PermissionDeniedError as e:
            if content is not None:
                self.notify(str(e), title="Backup failed", severity="error")
                self._update_status()
                return
            self.push_screen(
                PathPromptScreen(
                    f"Cannot read {self.paths.alias_file} due to sandboxing. "
                    "Select the file to back up",
                    str(self.paths.alias_file),
                ),
                self._backup_from,
            )
            return
        except (BackupError, AliasFileError) as e:
            self.notify(str(e), title="Backup failed", severity="error")
            self._update_status()
            return
        self._update_status()
        self.notify("Aliases backed up to GitHub Gist successfully!", title="Backup")

    def _backup_from(self, path: Path | None) -> None:
        if path is None:
            self._update_status()
            return
        try:
            content = read_file_bytes(path)
        except FileNotFoundError:
            self.notify(f"{path} does not exist", severity="error")
            return
        except AliasFileError as e:
            self.notify(str(e), title="Backup failed", severity="error")
            return
        self._run_backup(content)

    def action_restore(self) -> None:
        if self._modal_open():
            return
        try:
            entries = self.backup_service.restore()
        except BackupNotConfiguredError as e:
            self.notify(str(e), title="Restore")
            return
        except RestoreWriteDeniedError as e:
            content = e.content

            def on_path(path: Path | None) -> None:
                if path is None:
                    return
                try:
                    FileStore(path).write_bytes(content)
                except AliasFileError as err:
                    self.notify(str(err), title="Restore failed", severity="error")
                    return
                self.aliases.replace(self.store.import_bytes(content))

            self.push_screen(
                PathPromptScreen(
                    f"Cannot write {self.paths.alias_file} due to sandboxing. "
                    "Save the backup to",
                    str(self.paths.home / "bash_aliases.txt"),
                ),
                on_path,
            )
            return
        except (BackupError, AliasFileError) as e:
            self.notify(str(e), title="Restore failed", severity="error")
            return
        self.aliases.replace(entries)
        self.notify("Aliases restored from GitHub Gist successfully!", title="Restore")


def run_app(paths: AppPaths) -> None:
    """Run the Bash Alias Manager application."""
    app = AliasManagerApp(paths)
    app.run()
