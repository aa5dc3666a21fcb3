"""
Path-addressed access to nested mappings.

Read, write, remove and test values inside nested dicts and lists using a
delimited path string:

    >>> data = set_by_path({}, "a.b.c", 42)
    >>> data
    {'a': {'b': {'c': 42}}}
    >>> get_by_path(data, "a.b.c")
    42
    >>> unset_by_path(data, "a.b")
    {'a': {}}

Write semantics are copy-on-write: every container on the written path is
shallow-copied and the input is never modified. Callers must use the
returned value. Containers off the path are shared with the input.

Error policy:
- Reads (get, exists, isset) never fail on structure. A missing segment or
  a leaf in the middle of a path yields the default / False, unless
  get_by_path is asked to raise.
- unset_by_path silently returns the input when the path does not exist.
- set_by_path raises PathConflictError rather than replace a leaf with a
  new mapping.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import logging as _logging
import typing as _typing

import pathmap._types as _types
import pathmap.errors as errors
import pathmap.paths as paths

if _typing.TYPE_CHECKING:
    import pathmap.config as _config

_logger = _logging.getLogger(__name__)


# =============================================================================
# Stateless operations
# =============================================================================


def get_by_path(
    mapping: _typing.Any,
    path: _types.PathLike,
    default: _typing.Any = None,
    *,
    raise_on_missing: bool = False,
    delimiter: str = paths.DEFAULT_DELIMITER,
) -> _typing.Any:
    """
    Get the value at a path.

    Args:
        mapping: The nested mapping to read.
        path: Delimited path string or pre-split segments.
        default: Returned when a segment is missing.
        raise_on_missing: Raise instead of returning the default.
        delimiter: Path separator.

    Returns:
        The value at the path, or default.

    Raises:
        PathNotFoundError: If a segment is missing and raise_on_missing is set.
    """
    segments = paths.split_path(path, delimiter)
    cursor = mapping
    for segment in segments:
        key = paths.resolve_key(cursor, segment)
        if key is paths.MISSING:
            if raise_on_missing:
                _logger.debug("Path %r: segment %r not found", segments, segment)
                raise errors.PathNotFoundError(segment, segments)
            return default
        cursor = cursor[key]
    return cursor


def set_by_path(
    mapping: _types.NestedMapping,
    path: _types.PathLike,
    value: _typing.Any,
    *,
    delimiter: str = paths.DEFAULT_DELIMITER,
) -> _types.NestedMapping:
    """
    Return a copy of mapping with value stored at path.

    Missing intermediate keys are created as empty dicts. The final key is
    assigned unconditionally, replacing any previous value. On a list, the
    index one past the end appends.

    Args:
        mapping: The nested mapping to write into (not modified).
        path: Delimited path string or pre-split segments.
        value: The value to store. Stored as-is, not copied.
        delimiter: Path separator.

    Returns:
        New top-level container reflecting the write.

    Raises:
        InvalidInputError: If mapping is not a container.
        PathConflictError: If an intermediate segment holds a leaf, or a
            list index cannot be created.
    """
    if not paths.is_container(mapping):
        raise errors.InvalidInputError(1, mapping)
    segments = paths.split_path(path, delimiter)
    return _set_in(mapping, segments, 0, value)


def unset_by_path(
    mapping: _types.NestedMapping,
    path: _types.PathLike,
    *,
    delimiter: str = paths.DEFAULT_DELIMITER,
) -> _types.NestedMapping:
    """
    Return a copy of mapping with the key at path removed.

    If any segment is missing the input is returned unchanged. Parents left
    empty by the removal are kept. Removing a list element turns that list
    into a dict of the remaining {index: value} pairs, so later indices do
    not shift and repeating the removal is a no-op.

    Args:
        mapping: The nested mapping to remove from (not modified).
        path: Delimited path string or pre-split segments.
        delimiter: Path separator.

    Returns:
        New top-level container without the key, or mapping itself.
    """
    segments = paths.split_path(path, delimiter)
    result = _unset_in(mapping, segments, 0)
    if result is paths.MISSING:
        return mapping
    return result


def exists_by_path(
    mapping: _typing.Any,
    path: _types.PathLike,
    *,
    delimiter: str = paths.DEFAULT_DELIMITER,
) -> bool:
    """Check that every segment of path exists (the value may be None)."""
    segments = paths.split_path(path, delimiter)
    return _walk(mapping, segments) is not paths.MISSING


def isset_by_path(
    mapping: _typing.Any,
    path: _types.PathLike,
    *,
    delimiter: str = paths.DEFAULT_DELIMITER,
) -> bool:
    """Check that path exists and its value is not None."""
    segments = paths.split_path(path, delimiter)
    value = _walk(mapping, segments)
    return value is not paths.MISSING and value is not None


# =============================================================================
# Traversal helpers
# =============================================================================


def _walk(mapping: _typing.Any, segments: _types.Segments) -> _typing.Any:
    """Resolve segments from mapping, returning MISSING at the first gap."""
    cursor = mapping
    for segment in segments:
        key = paths.resolve_key(cursor, segment)
        if key is paths.MISSING:
            return paths.MISSING
        cursor = cursor[key]
    return cursor


def _shallow_copy(container: _typing.Any) -> _typing.Any:
    """Copy one level of a container into a mutable container of the same kind."""
    if isinstance(container, (_abc.MutableMapping, list)):
        return _copy.copy(container)
    if isinstance(container, _abc.Mapping):
        return dict(container)
    return list(container)


def _set_in(
    container: _typing.Any,
    segments: _types.Segments,
    depth: int,
    value: _typing.Any,
) -> _typing.Any:
    """Rebuild container with value written at segments[depth:]."""
    segment = segments[depth]
    key = paths.resolve_key(container, segment)
    if key is paths.MISSING:
        key = _new_key(container, segment, segments)

    if depth == len(segments) - 1:
        child = value
    else:
        existing = container[key] if _has_slot(container, key) else {}
        if not paths.is_container(existing):
            _logger.debug("Path %r: segment %r holds a leaf", segments, segment)
            raise errors.PathConflictError(segment, segments)
        child = _set_in(existing, segments, depth + 1, value)

    result = _shallow_copy(container)
    if isinstance(result, list) and key == len(result):
        result.append(child)
    else:
        result[key] = child
    return result


def _new_key(
    container: _typing.Any,
    segment: _typing.Any,
    segments: _types.Segments,
) -> _typing.Any:
    """Pick the key under which a missing segment is created."""
    if isinstance(container, _abc.Mapping):
        return segment
    index = paths.resolve_key(list(container) + [None], segment)
    if index is paths.MISSING:
        raise errors.PathConflictError(
            segment,
            segments,
            f"Cannot create index {segment!r} in a sequence of length {len(container)}",
        )
    return index


def _has_slot(container: _typing.Any, key: _typing.Any) -> bool:
    """Check if key is already present (a new list index is not)."""
    if isinstance(container, _abc.Mapping):
        return key in container
    return key < len(container)


def _unset_in(
    container: _typing.Any,
    segments: _types.Segments,
    depth: int,
) -> _typing.Any:
    """Rebuild container without segments[depth:], or MISSING if absent."""
    key = paths.resolve_key(container, segments[depth])
    if key is paths.MISSING:
        return paths.MISSING

    if depth == len(segments) - 1:
        if not isinstance(container, _abc.Mapping):
            # Surviving elements keep their indices as dict keys
            return {index: item for index, item in enumerate(container) if index != key}
        result = _shallow_copy(container)
        del result[key]
        return result

    child = _unset_in(container[key], segments, depth + 1)
    if child is paths.MISSING:
        return paths.MISSING
    result = _shallow_copy(container)
    result[key] = child
    return result


# =============================================================================
# Delimiter-bound accessor
# =============================================================================


class PathAccessor:
    """
    Path operations bound to one delimiter.

    Example:
        >>> accessor = PathAccessor("/")
        >>> accessor.get({"a": {"b.c": 1}}, "a/b.c")
        1

    Use from_settings() to take the delimiter from configuration
    (PATHMAP_PATHS__DELIMITER).
    """

    __slots__ = ("_delimiter",)

    def __init__(self, delimiter: str = paths.DEFAULT_DELIMITER) -> None:
        if not isinstance(delimiter, str) or not delimiter:
            raise errors.InvalidPathError("Path delimiter must be a non-empty string")
        self._delimiter = delimiter

    @classmethod
    def from_settings(cls, settings: _config.Settings | None = None) -> PathAccessor:
        """Create an accessor using the configured delimiter."""
        import pathmap.config as config

        if settings is None:
            settings = config.Settings()
        return cls(settings.paths.delimiter)

    @property
    def delimiter(self) -> str:
        """The path separator used by this accessor."""
        return self._delimiter

    def split(self, path: _types.PathLike) -> _types.Segments:
        """Split a path into segments."""
        return paths.split_path(path, self._delimiter)

    def get(
        self,
        mapping: _typing.Any,
        path: _types.PathLike,
        default: _typing.Any = None,
        *,
        raise_on_missing: bool = False,
    ) -> _typing.Any:
        """Get the value at path. See get_by_path()."""
        return get_by_path(
            mapping,
            path,
            default,
            raise_on_missing=raise_on_missing,
            delimiter=self._delimiter,
        )

    def set(
        self,
        mapping: _types.NestedMapping,
        path: _types.PathLike,
        value: _typing.Any,
    ) -> _types.NestedMapping:
        """Return a copy of mapping with value at path. See set_by_path()."""
        return set_by_path(mapping, path, value, delimiter=self._delimiter)

    def unset(
        self,
        mapping: _types.NestedMapping,
        path: _types.PathLike,
    ) -> _types.NestedMapping:
        """Return a copy of mapping without path. See unset_by_path()."""
        return unset_by_path(mapping, path, delimiter=self._delimiter)

    def exists(self, mapping: _typing.Any, path: _types.PathLike) -> bool:
        return exists_by_path(mapping, path, delimiter=self._delimiter)

    def isset(self, mapping: _typing.Any, path: _types.PathLike) -> bool:
        return isset_by_path(mapping, path, delimiter=self._delimiter)

    def __repr__(self) -> str:
        return f"PathAccessor(delimiter={self._delimiter!r})"
