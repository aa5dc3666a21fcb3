"""Tests for path splitting and segment resolution."""

import pytest as _pytest

import pathmap.errors as errors
import pathmap.paths as paths


class TestSplitPath:
    """Tests for split_path()."""

    def test_splits_on_default_delimiter(self) -> None:
        """Dotted path splits into segments, left to right."""
        assert paths.split_path("a.b.c") == ("a", "b", "c")

    def test_single_segment(self) -> None:
        """A path without delimiter is one segment."""
        assert paths.split_path("abc") == ("abc",)

    def test_custom_delimiter(self) -> None:
        """Custom delimiter is honored, dots become part of keys."""
        assert paths.split_path("a:b.c", ":") == ("a", "b.c")

    def test_multi_character_delimiter(self) -> None:
        """Delimiters may be longer than one character."""
        assert paths.split_path("a::b", "::") == ("a", "b")

    def test_consecutive_delimiters_yield_empty_segment(self) -> None:
        """'a..b' keeps the empty-string segment between the dots."""
        assert paths.split_path("a..b") == ("a", "", "b")

    def test_empty_string_is_one_empty_segment(self) -> None:
        """An empty path addresses the literal key ''."""
        assert paths.split_path("") == ("",)

    def test_presplit_tuple_used_as_is(self) -> None:
        """Tuple paths are not split, and keep non-string segments."""
        assert paths.split_path(("a.b", 0)) == ("a.b", 0)

    def test_presplit_list_converted_to_tuple(self) -> None:
        """List paths are returned as a tuple."""
        assert paths.split_path(["a", "b"]) == ("a", "b")

    def test_empty_presplit_path_raises(self) -> None:
        """A path must have at least one segment."""
        with _pytest.raises(errors.InvalidPathError):
            paths.split_path(())

    def test_empty_delimiter_raises(self) -> None:
        """Empty delimiter is rejected with a ValueError subclass."""
        with _pytest.raises(ValueError, match="non-empty"):
            paths.split_path("a.b", "")

    def test_scalar_path_converted_to_string(self) -> None:
        """Non-string scalar paths address a single key."""
        assert paths.split_path(3) == ("3",)  # type: ignore[arg-type]


class TestResolveKey:
    """Tests for resolve_key()."""

    def test_exact_key(self) -> None:
        """A segment equal to a key resolves to it."""
        assert paths.resolve_key({"a": 1}, "a") == "a"

    def test_missing_key(self) -> None:
        """A missing key resolves to MISSING."""
        assert paths.resolve_key({"a": 1}, "b") is paths.MISSING

    def test_numeric_string_matches_int_key(self) -> None:
        """'0' reaches integer key 0."""
        assert paths.resolve_key({0: "zero"}, "0") == 0

    def test_int_segment_matches_string_key(self) -> None:
        """Integer segment reaches string key '5'."""
        assert paths.resolve_key({"5": "five"}, 5) == "5"

    def test_exact_key_wins_over_alternate(self) -> None:
        """When both '1' and 1 exist, the exact match is used."""
        assert paths.resolve_key({1: "int", "1": "str"}, "1") == "1"

    def test_non_canonical_number_does_not_match(self) -> None:
        """'01' is not the integer 1."""
        assert paths.resolve_key({1: "one"}, "01") is paths.MISSING

    def test_list_index(self) -> None:
        """List indices resolve from strings and ints."""
        assert paths.resolve_key(["a", "b"], "1") == 1
        assert paths.resolve_key(("a", "b"), 0) == 0

    def test_list_index_out_of_range(self) -> None:
        """Indices past the end and negative indices are missing."""
        assert paths.resolve_key(["a"], "1") is paths.MISSING
        assert paths.resolve_key(["a"], "-1") is paths.MISSING

    def test_leaf_contains_nothing(self) -> None:
        """Strings and scalars are leaves, never traversed."""
        assert paths.resolve_key("text", "0") is paths.MISSING
        assert paths.resolve_key(42, "a") is paths.MISSING
        assert paths.resolve_key(None, "a") is paths.MISSING

    def test_unhashable_segment_is_missing(self) -> None:
        """Unhashable segments cannot be keys."""
        assert paths.resolve_key({"a": 1}, ["a"]) is paths.MISSING


class TestPredicates:
    """Tests for is_container() and is_positional_key()."""

    @_pytest.mark.parametrize("value", [{}, {"a": 1}, [], [1], (1,)])
    def test_containers(self, value: object) -> None:
        """Mappings, lists and tuples are containers."""
        assert paths.is_container(value)

    @_pytest.mark.parametrize("value", ["text", b"bytes", 1, None, 1.5, {1, 2}])
    def test_leaves(self, value: object) -> None:
        """Strings, bytes, scalars and sets are leaves."""
        assert not paths.is_container(value)

    def test_positional_keys(self) -> None:
        """Only non-negative ints are positional."""
        assert paths.is_positional_key(0)
        assert paths.is_positional_key(7)
        assert not paths.is_positional_key(-1)
        assert not paths.is_positional_key(True)
        assert not paths.is_positional_key("0")
