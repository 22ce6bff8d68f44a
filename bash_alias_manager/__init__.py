"""Bash Alias Manager - edit ~/.bash_aliases from the terminal."""

__version__ = "0.1.0"
