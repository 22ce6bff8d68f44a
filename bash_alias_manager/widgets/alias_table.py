"""Alias table widget."""

from __future__ import annotations

from collections.abc import Iterable

from textual.widgets import DataTable

from ..models import Alias


class AliasTable(DataTable):
    """Row-per-alias table; the cursor row is the current selection."""

    DEFAULT_CSS = """
    AliasTable {
        height: 1fr;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(cursor_type="row", zebra_stripes=True, **kwargs)

    def show_aliases(self, aliases: Iterable[Alias]) -> None:
        """Re-render every row, keeping the cursor where it was if possible."""
        if not self.columns:
            self.add_columns("Name", "Command")
        previous = self.cursor_row
        self.clear()
        for alias in aliases:
            self.add_row(alias.name, alias.command)
        if self.row_count:
            self.move_cursor(row=min(max(previous, 0), self.row_count - 1))

    @property
    def selected_index(self) -> int | None:
        """Index of the highlighted alias, or None when the table is empty."""
        if not self.row_count:
            return None
        return self.cursor_row
