"""Unit tests for KeyNamespacer."""

import pytest

from nscache.core.errors import NotInNamespace
from nscache.core.namespace import KeyNamespacer


class TestKeyNamespacer:
    """Test physical/logical key mapping."""

    def test_to_physical_prefixes_namespace_and_separator(self):
        namespacer = KeyNamespacer("boop")
        assert namespacer.prefix == "boop-"
        assert namespacer.to_physical("foo") == "boop-foo"

    def test_custom_separator(self):
        namespacer = KeyNamespacer("boop", separator=":")
        assert namespacer.to_physical("foo") == "boop:foo"
        assert namespacer.to_logical("boop:foo") == "foo"

    def test_to_logical_strips_prefix(self):
        namespacer = KeyNamespacer("boop")
        assert namespacer.to_logical("boop-foo") == "foo"

    def test_to_logical_only_strips_leading_prefix(self):
        """Logical keys may themselves contain the prefix text."""
        namespacer = KeyNamespacer("boop")
        physical = namespacer.to_physical("x-boop-y")
        assert namespacer.to_logical(physical) == "x-boop-y"
        assert namespacer.to_logical(namespacer.to_physical("boop-foo")) == "boop-foo"

    def test_to_logical_rejects_foreign_key(self):
        namespacer = KeyNamespacer("boop")
        with pytest.raises(NotInNamespace):
            namespacer.to_logical("other-foo")

    def test_to_logical_rejects_non_string(self):
        namespacer = KeyNamespacer("boop")
        with pytest.raises(NotInNamespace):
            namespacer.to_logical(42)

    def test_not_in_namespace_is_a_key_error(self):
        namespacer = KeyNamespacer("boop")
        with pytest.raises(KeyError):
            namespacer.to_logical("nope")

    def test_overlapping_namespaces_do_not_collide(self):
        """'a' and 'ab' share leading characters but never each other's keys."""
        a = KeyNamespacer("a")
        ab = KeyNamespacer("ab")

        assert not a.owns(ab.to_physical("x"))
        assert not ab.owns(a.to_physical("x"))
        assert a.owns(a.to_physical("x"))

    def test_namespace_without_separator_is_not_owned(self):
        namespacer = KeyNamespacer("boop")
        assert not namespacer.owns("boop")
        assert not namespacer.owns("boopfoo")

    def test_logical_keys_filters_enumeration(self):
        namespacer = KeyNamespacer("boop")
        physical = ["boop-a", "other-b", 7, b"boop-c", "boop-", "boop-d", ("boop-e",)]

        assert namespacer.logical_keys(physical) == ["a", "", "d"]

    def test_empty_namespace_rejected(self):
        with pytest.raises(ValueError):
            KeyNamespacer("")

    def test_empty_separator_rejected(self):
        with pytest.raises(ValueError):
            KeyNamespacer("boop", separator="")

    def test_namespace_containing_separator_rejected(self):
        """'a' would otherwise own every key of 'a-b'."""
        with pytest.raises(ValueError, match="separator"):
            KeyNamespacer("a-b")
        assert KeyNamespacer("a-b", separator=":").prefix == "a-b:"
