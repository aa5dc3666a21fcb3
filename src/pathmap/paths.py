"""
Path splitting and segment resolution.

A path is an ordered sequence of segments. It is usually given as a string
split on a delimiter ("a.b.c" -> ("a", "b", "c")), but callers may pass
pre-split segments as a tuple or list.

Containers are Mappings (keyed) and lists/tuples (positional). Strings and
bytes are leaves. Resolving a segment against a container finds the key it
addresses, tolerating the str/int split between "0" and 0:

    >>> resolve_key({0: "zero"}, "0")
    0
    >>> resolve_key(["a", "b"], "1")
    1
    >>> resolve_key({"a": 1}, "b") is MISSING
    True
"""

from __future__ import annotations

import collections.abc as _abc
import re as _re
import typing as _typing

import pathmap._types as _types
import pathmap.errors as errors

DEFAULT_DELIMITER = "."

# Canonical decimal integers only: "0", "12", "-3" (not "01", "+1", " 1")
_INT_SEGMENT = _re.compile(r"-?(?:0|[1-9][0-9]*)")


class _MissingType:
    """Sentinel type marking an unresolved segment."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


MISSING: _typing.Final = _MissingType()


def is_container(value: _typing.Any) -> bool:
    """Check if a value can be traversed by a path (Mapping, list or tuple)."""
    if isinstance(value, _abc.Mapping):
        return True
    return isinstance(value, (list, tuple))


def is_positional_key(key: _typing.Any) -> bool:
    """Check if a key is positional (a non-negative int, bools excluded)."""
    return isinstance(key, int) and not isinstance(key, bool) and key >= 0


def split_path(
    path: _types.PathLike,
    delimiter: str = DEFAULT_DELIMITER,
) -> _types.Segments:
    """
    Split a path into its segments.

    Consecutive delimiters are not collapsed: "a..b" yields an empty-string
    segment, which addresses the literal key "".

    Args:
        path: Delimited path string, or a tuple/list of segments used as-is.
        delimiter: Separator for string paths. Must be non-empty.

    Returns:
        Tuple of segments, never empty.

    Raises:
        InvalidPathError: If the delimiter is empty or no segments are given.
    """
    if isinstance(path, (tuple, list)):
        if not path:
            raise errors.InvalidPathError("Path must contain at least one segment")
        return tuple(path)

    if not isinstance(delimiter, str) or not delimiter:
        raise errors.InvalidPathError("Path delimiter must be a non-empty string")

    if not isinstance(path, str):
        # Scalar paths such as 3 address a single key
        path = str(path)

    return tuple(path.split(delimiter))


def resolve_key(container: _typing.Any, segment: _typing.Any) -> _typing.Any:
    """
    Find the key a segment addresses in a container.

    Args:
        container: Value being traversed. Leaves never contain anything.
        segment: One path segment.

    Returns:
        The matching key (or list index), or MISSING if there is none.
    """
    if isinstance(container, _abc.Mapping):
        try:
            if segment in container:
                return segment
        except TypeError:
            # Unhashable segment
            return MISSING
        alternate = _alternate_key(segment)
        if alternate is not MISSING and alternate in container:
            return alternate
        return MISSING

    if isinstance(container, (list, tuple)):
        index = _as_index(segment)
        if index is not MISSING and index < len(container):
            return index
        return MISSING

    return MISSING


def _alternate_key(segment: _typing.Any) -> _typing.Any:
    """Return the int form of a numeric string segment, or the str form of an int."""
    if isinstance(segment, str):
        if _INT_SEGMENT.fullmatch(segment):
            return int(segment)
        return MISSING
    if isinstance(segment, int) and not isinstance(segment, bool):
        return str(segment)
    return MISSING


def _as_index(segment: _typing.Any) -> _typing.Any:
    """Convert a segment to a non-negative list index, or MISSING."""
    if is_positional_key(segment):
        return segment
    if isinstance(segment, str) and _INT_SEGMENT.fullmatch(segment):
        index = int(segment)
        if index >= 0:
            return index
    return MISSING
