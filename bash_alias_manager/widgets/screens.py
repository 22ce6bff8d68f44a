"""Modal screen widgets for Bash Alias Manager."""

from __future__ import annotations

from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

_MODAL_CSS = """
{name} {{
    align: center middle;
}}
{name} > Vertical {{
    width: 70;
    height: auto;
    padding: 1 2;
    border: thick $primary;
    background: $surface;
}}
{name} .modal-title {{
    text-style: bold;
    margin-bottom: 1;
}}
{name} .modal-error {{
    color: $error;
    height: auto;
}}
{name} .modal-buttons {{
    height: auto;
    align-horizontal: right;
    margin-top: 1;
}}
{name} Button {{
    margin-left: 1;
}}
"""


class AliasFormScreen(ModalScreen["tuple[str, str] | None"]):
    """Add/edit form returning ``(name, command)`` or None on cancel."""

    DEFAULT_CSS = _MODAL_CSS.format(name="AliasFormScreen")

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    def __init__(self, title: str, name: str = "", command: str = "") -> None:
        super().__init__()
        self._title = title
        self._initial_name = name
        self._initial_command = command

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self._title, classes="modal-title")
            yield Input(self._initial_name, placeholder="Alias name", id="alias-name")
            yield Input(self._initial_command, placeholder="Command", id="alias-command")
            yield Static("", id="alias-error", classes="modal-error")
            with Horizontal(classes="modal-buttons"):
                yield Button("Save", variant="primary", id="alias-save")
                yield Button("Cancel", id="alias-cancel")

    def on_mount(self) -> None:
        self.query_one("#alias-name", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "alias-save":
            self._submit()
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "alias-name":
            self.query_one("#alias-command", Input).focus()
        else:
            self._submit()

    def _submit(self) -> None:
        name = self.query_one("#alias-name", Input).value.strip()
        command = self.query_one("#alias-command", Input).value.strip()
        if not name or not command:
            self.query_one("#alias-error", Static).update(
                "Name and command are both required."
            )
            return
        self.dismiss((name, command))

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmScreen(ModalScreen[bool]):
    """Yes/No question."""

    DEFAULT_CSS = _MODAL_CSS.format(name="ConfirmScreen")

    BINDINGS = [
        Binding("y", "answer(True)", show=False),
        Binding("n", "answer(False)", show=False),
        Binding("escape", "answer(False)", show=False),
    ]

    def __init__(self, title: str, message: str) -> None:
        super().__init__()
        self._title = title
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self._title, classes="modal-title")
            yield Static(self._message, id="confirm-message")
            with Horizontal(classes="modal-buttons"):
                yield Button("Yes", variant="primary", id="confirm-yes")
                yield Button("No", id="confirm-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-yes")

    def action_answer(self, value: bool) -> None:
        self.dismiss(value)


class TokenScreen(ModalScreen[str]):
    """Prompt for a GitHub personal access token (empty string on cancel)."""

    DEFAULT_CSS = _MODAL_CSS.format(name="TokenScreen")

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Enter GitHub Token", classes="modal-title")
            yield Input(
                placeholder="GitHub Personal Access Token (gist scope)",
                password=True,
                id="token-input",
            )
            with Horizontal(classes="modal-buttons"):
                yield Button("OK", variant="primary", id="token-ok")
                yield Button("Cancel", id="token-cancel")

    def on_mount(self) -> None:
        self.query_one("#token-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "token-ok":
            self.dismiss(self.query_one("#token-input", Input).value.strip())
        else:
            self.dismiss("")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value.strip())

    def action_cancel(self) -> None:
        self.dismiss("")


class PathPromptScreen(ModalScreen["Path | None"]):
    """Ask for a file path; stands in for a native file chooser."""

    DEFAULT_CSS = _MODAL_CSS.format(name="PathPromptScreen")

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    def __init__(self, title: str, initial: str = "") -> None:
        super().__init__()
        self._title = title
        self._initial = initial

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self._title, classes="modal-title")
            yield Input(self._initial, placeholder="Path to file", id="path-input")
            with Horizontal(classes="modal-buttons"):
                yield Button("OK", variant="primary", id="path-ok")
                yield Button("Cancel", id="path-cancel")

    def on_mount(self) -> None:
        self.query_one("#path-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "path-ok":
            self._submit(self.query_one("#path-input", Input).value)
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit(event.value)

    def _submit(self, value: str) -> None:
        value = value.strip()
        self.dismiss(Path(value).expanduser() if value else None)

    def action_cancel(self) -> None:
        self.dismiss(None)
