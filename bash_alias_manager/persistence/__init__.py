"""Persistence layer – each store owns its file path, data format, and I/O."""

from .aliases import AliasStore, parse_aliases, serialize_aliases
from .config import BackupConfig, ConfigStore

__all__ = [
    "AliasStore",
    "BackupConfig",
    "ConfigStore",
    "parse_aliases",
    "serialize_aliases",
]
