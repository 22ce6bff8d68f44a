"""In-memory alias records and the observable alias list."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Literal

from .errors import InvalidAliasError

ChangeKind = Literal["added", "updated", "removed", "replaced"]
Listener = Callable[[ChangeKind], None]


@dataclass(frozen=True)
class Alias:
    """A named shorthand mapped to a shell command."""

    name: str
    command: str


def _validated(name: str, command: str) -> Alias:
    name = name.strip()
    command = command.strip()
    if not name or not command:
        raise InvalidAliasError("Alias name and command must not be empty")
    return Alias(name=name, command=command)


class AliasList:
    """Ordered, duplicate-friendly list of aliases in file order.

    The list notifies subscribers after each mutation with the kind of
    change.  It deliberately holds no selection state; that belongs to
    whichever view is rendering it.
    """

    def __init__(self, aliases: Iterable[Alias] = ()) -> None:
        self._items: list[Alias] = list(aliases)
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Alias]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Alias:
        return self._items[index]

    def to_list(self) -> list[Alias]:
        return list(self._items)

    # -- observers ------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, kind: ChangeKind) -> None:
        for listener in list(self._listeners):
            listener(kind)

    # -- mutation -------------------------------------------------------------

    def add(self, name: str, command: str) -> Alias:
        """Append a new alias and return it."""
        alias = _validated(name, command)
        self._items.append(alias)
        self._notify("added")
        return alias

    def update(self, index: int, name: str, command: str) -> Alias:
        """Replace the alias at *index* in place."""
        self._check_index(index)
        alias = _validated(name, command)
        self._items[index] = alias
        self._notify("updated")
        return alias

    def remove(self, index: int) -> Alias:
        """Delete and return the alias at *index*."""
        self._check_index(index)
        alias = self._items.pop(index)
        self._notify("removed")
        return alias

    def replace(self, aliases: Iterable[Alias]) -> None:
        """Swap in a freshly loaded or imported set of aliases."""
        self._items = list(aliases)
        self._notify("replaced")

    def _check_index(self, index: int) -> None:
        # Negative indexes are rejected: they never come from a selection.
        if not 0 <= index < len(self._items):
            raise IndexError(f"alias index out of range: {index}")
