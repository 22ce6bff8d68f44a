"""Widget classes for the alias manager UI."""

from .alias_table import AliasTable
from .screens import AliasFormScreen, ConfirmScreen, PathPromptScreen, TokenScreen

__all__ = [
    "AliasFormScreen",
    "AliasTable",
    "ConfirmScreen",
    "PathPromptScreen",
    "TokenScreen",
]
