"""Tests for Alias and the observable AliasList."""

from __future__ import annotations

import pytest

from bash_alias_manager.errors import AliasManagerError, InvalidAliasError
from bash_alias_manager.models import Alias, AliasList


@pytest.fixture
def recorded():
    """An AliasList with two entries plus the list of change kinds it emitted."""
    aliases = AliasList([Alias("ll", "ls -la"), Alias("gs", "git status")])
    kinds: list[str] = []
    aliases.subscribe(kinds.append)
    return aliases, kinds


class TestAlias:
    def test_equality(self):
        assert Alias("a", "b") == Alias("a", "b")
        assert Alias("a", "b") != Alias("a", "c")

    def test_frozen(self):
        alias = Alias("a", "b")
        with pytest.raises(AttributeError):
            alias.name = "c"  # type: ignore[misc]


class TestAliasList:
    def test_sequence_protocol(self, recorded):
        aliases, _ = recorded
        assert len(aliases) == 2
        assert aliases[1] == Alias("gs", "git status")
        assert [a.name for a in aliases] == ["ll", "gs"]
        assert aliases.to_list() == list(aliases)

    def test_add_appends_and_notifies(self, recorded):
        aliases, kinds = recorded
        added = aliases.add("  up  ", "  cd ..  ")
        assert added == Alias("up", "cd ..")
        assert aliases[2] == added
        assert kinds == ["added"]

    def test_add_allows_duplicates(self, recorded):
        aliases, _ = recorded
        aliases.add("ll", "ls -lah")
        assert [a.name for a in aliases] == ["ll", "gs", "ll"]

    @pytest.mark.parametrize("name,command", [("", "ls"), ("ls", ""), ("  ", "ls")])
    def test_add_rejects_empty_fields(self, recorded, name, command):
        aliases, kinds = recorded
        with pytest.raises(InvalidAliasError):
            aliases.add(name, command)
        assert len(aliases) == 2
        assert kinds == []

    def test_invalid_alias_error_is_value_error(self):
        assert issubclass(InvalidAliasError, ValueError)
        assert issubclass(InvalidAliasError, AliasManagerError)

    def test_update_in_place(self, recorded):
        aliases, kinds = recorded
        aliases.update(0, "ll", "ls -lah")
        assert aliases.to_list() == [Alias("ll", "ls -lah"), Alias("gs", "git status")]
        assert kinds == ["updated"]

    def test_update_out_of_range(self, recorded):
        aliases, kinds = recorded
        with pytest.raises(IndexError):
            aliases.update(5, "a", "b")
        with pytest.raises(IndexError):
            aliases.update(-1, "a", "b")
        assert kinds == []

    def test_update_rejects_empty(self, recorded):
        aliases, _ = recorded
        with pytest.raises(InvalidAliasError):
            aliases.update(0, "ll", "   ")
        assert aliases[0] == Alias("ll", "ls -la")

    def test_remove(self, recorded):
        aliases, kinds = recorded
        removed = aliases.remove(0)
        assert removed == Alias("ll", "ls -la")
        assert aliases.to_list() == [Alias("gs", "git status")]
        assert kinds == ["removed"]

    def test_remove_out_of_range(self, recorded):
        aliases, kinds = recorded
        with pytest.raises(IndexError):
            aliases.remove(2)
        assert len(aliases) == 2
        assert kinds == []

    def test_replace(self, recorded):
        aliases, kinds = recorded
        aliases.replace([Alias("k", "kubectl")])
        assert aliases.to_list() == [Alias("k", "kubectl")]
        assert kinds == ["replaced"]

    def test_unsubscribe(self, recorded):
        aliases, kinds = recorded
        aliases.unsubscribe(kinds.append)
        aliases.add("a", "b")
        assert kinds == []

    def test_unsubscribe_unknown_listener_is_noop(self):
        AliasList().unsubscribe(lambda kind: None)
