"""Textual themes for Bash Alias Manager.

``THEME_IDS`` maps the preference names in ``preferences.THEME_NAMES`` to
registered Textual theme names.  Only the dark theme is custom; light uses
Textual's built-in one.
"""

from textual.theme import Theme

SHELL_DARK = Theme(
    name="bam-dark",
    primary="#4ec9b0",
    secondary="#d7ba7d",
    accent="#569cd6",
    background="#1b1d23",
    surface="#22252c",
    panel="#2f333d",
    success="#6a9955",
    warning="#d7ba7d",
    error="#f44747",
    dark=True,
)

CUSTOM_THEMES: tuple[Theme, ...] = (SHELL_DARK,)

THEME_IDS: dict[str, str] = {
    "dark": SHELL_DARK.name,
    "light": "textual-light",
}
