"""
Flat helpers for mappings and lists.

These complement the path operations with single-level manipulation:
adding and removing entries, splicing around a key, looking up keys by
value, and a few cleanup transforms. Every helper returns a new container
and leaves its input untouched.

Dicts and lists are both accepted where it makes sense. For dicts, an
entry added without an explicit key gets the next free positional index
(one past the largest non-negative int key).
"""

from __future__ import annotations

import collections.abc as _abc
import re as _re
import typing as _typing

import pathmap._types as _types
import pathmap.errors as errors
import pathmap.paths as paths

# Words in camelCase / PascalCase, keeping acronyms together ("HTTPServer")
_CAMEL_WORD = _re.compile(r"[A-Z][A-Z0-9]*(?=$|[A-Z][a-z0-9])|[A-Za-z][a-z0-9]+")
_NUMERIC = _re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


# =============================================================================
# Lookup
# =============================================================================


def get_key_by_value(
    mapping: _types.NestedMapping,
    value: _typing.Any,
    default: _typing.Any = None,
    *,
    strict: bool = True,
) -> _typing.Any:
    """
    Return the first key whose value matches.

    Args:
        mapping: Dict or list to search.
        value: Value to look for.
        default: Returned when nothing matches.
        strict: Also require the same type (so 1 does not match "1" or True).
    """
    for key, candidate in _items(mapping):
        if _matches(candidate, value, strict):
            return key
    return default


def first_value(mapping: _types.NestedMapping, default: _typing.Any = None) -> _typing.Any:
    """Return the first value, or default when empty."""
    for _, value in _items(mapping):
        return value
    return default


def last_value(mapping: _types.NestedMapping, default: _typing.Any = None) -> _typing.Any:
    """Return the last value, or default when empty."""
    values = [value for _, value in _items(mapping)]
    return values[-1] if values else default


def is_assoc(mapping: _types.NestedMapping) -> bool:
    """
    Check whether a container is associative.

    Lists never are. A dict is associative unless its keys are exactly
    0..n-1 in insertion order.
    """
    if not isinstance(mapping, _abc.Mapping):
        return False
    return list(mapping) != list(range(len(mapping)))


def assoc_keys_exist(
    subset: _types.NestedMapping,
    mapping: _types.NestedMapping,
    *,
    raise_on_missing: bool = True,
) -> bool:
    """
    Check that every key of subset exists in mapping, recursively.

    Nested containers in subset are checked against the value at the same
    key in mapping. Values themselves are not compared.

    Raises:
        PathNotFoundError: If a key is missing and raise_on_missing is set.
            The error's path is the full path to the missing key.
    """
    return _keys_exist(subset, mapping, (), raise_on_missing)


def _keys_exist(
    subset: _typing.Any,
    mapping: _typing.Any,
    prefix: _types.Segments,
    raise_on_missing: bool,
) -> bool:
    for key, value in _items(subset):
        resolved = paths.resolve_key(mapping, key)
        if resolved is paths.MISSING:
            if raise_on_missing:
                raise errors.PathNotFoundError(key, prefix + (key,))
            return False
        if paths.is_container(value) and not _keys_exist(
            value, mapping[resolved], prefix + (key,), raise_on_missing
        ):
            return False
    return True


# =============================================================================
# Adding entries
# =============================================================================


def prepend(
    mapping: _types.NestedMapping,
    value: _typing.Any,
    key: _typing.Any = None,
) -> _types.NestedMapping:
    """
    Return a copy with value added at the front.

    For lists, key is ignored. For dicts, an existing key is moved to the
    front with its new value.
    """
    if not isinstance(mapping, _abc.Mapping):
        return [value, *_as_list(mapping)]
    if key is None:
        key = _next_index(mapping)
    result = {key: value}
    for existing, existing_value in mapping.items():
        if existing != key:
            result[existing] = existing_value
    return result


def append(
    mapping: _types.NestedMapping,
    value: _typing.Any,
    key: _typing.Any = None,
) -> _types.NestedMapping:
    """
    Return a copy with value added at the end.

    For lists, key is ignored. For dicts, an existing key keeps its position
    and takes the new value.
    """
    if not isinstance(mapping, _abc.Mapping):
        return [*_as_list(mapping), value]
    result = dict(mapping)
    result[_next_index(mapping) if key is None else key] = value
    return result


def insert_before(
    mapping: _types.NestedMapping,
    position: _typing.Any,
    values: _types.NestedMapping,
) -> _types.NestedMapping:
    """
    Return a copy with values spliced in before the entry at position.

    For dicts, a key of values that already appears before position is
    ignored. A key that appears at or after position moves to the splice
    point and takes the value from values.

    Raises:
        PathNotFoundError: If position does not exist.
    """
    return _splice(mapping, position, values, 0)


def insert_after(
    mapping: _types.NestedMapping,
    position: _typing.Any,
    values: _types.NestedMapping,
) -> _types.NestedMapping:
    """
    Return a copy with values spliced in after the entry at position.

    Keys of values that already exist follow the same rule as in
    insert_before(), with the splice point right after position.

    Raises:
        PathNotFoundError: If position does not exist.
    """
    return _splice(mapping, position, values, 1)


def _splice(
    mapping: _typing.Any,
    position: _typing.Any,
    values: _typing.Any,
    offset: int,
) -> _types.NestedMapping:
    if not paths.is_container(mapping):
        raise errors.InvalidInputError(1, mapping)
    if not paths.is_container(values):
        raise errors.InvalidInputError(3, values)

    resolved = paths.resolve_key(mapping, position)
    if resolved is paths.MISSING:
        raise errors.PathNotFoundError(position, (position,))

    if not isinstance(mapping, _abc.Mapping):
        index = resolved + offset
        items = mapping[:index], [value for _, value in _items(values)], mapping[index:]
        return [item for part in items for item in part]

    keys = list(mapping)
    index = keys.index(resolved) + offset
    result = {key: mapping[key] for key in keys[:index]}
    for key, value in _items(values):
        result.setdefault(key, value)
    for key in keys[index:]:
        result.setdefault(key, mapping[key])
    return result


# =============================================================================
# Removing entries
# =============================================================================


def remove_first(mapping: _types.NestedMapping) -> _types.NestedMapping:
    """Return a copy without the first entry."""
    if not isinstance(mapping, _abc.Mapping):
        return _as_list(mapping)[1:]
    return dict(list(mapping.items())[1:])


def remove_last(mapping: _types.NestedMapping) -> _types.NestedMapping:
    """Return a copy without the last entry."""
    if not isinstance(mapping, _abc.Mapping):
        return _as_list(mapping)[:-1]
    return dict(list(mapping.items())[:-1])


def remove_by_value(
    mapping: _types.NestedMapping,
    value: _typing.Any,
    *,
    strict: bool = True,
) -> _types.NestedMapping:
    """Return a copy without the first entry whose value matches."""
    result = dict(mapping) if isinstance(mapping, _abc.Mapping) else _as_list(mapping)
    key = get_key_by_value(mapping, value, paths.MISSING, strict=strict)
    if key is not paths.MISSING:
        del result[key]
    return result


def unset_empty_values(
    mapping: _types.NestedMapping,
    *,
    recursive: bool = False,
) -> _types.NestedMapping:
    """
    Return a copy without falsy values (None, "", 0, False, empty containers).

    With recursive, nested containers are cleaned as well. A nested container
    is tested before it is cleaned, so one that only becomes empty through
    cleaning is kept.
    """
    kept: list[tuple[_typing.Any, _typing.Any]] = []
    for key, value in _items(mapping):
        if not value:
            continue
        if recursive and paths.is_container(value):
            value = unset_empty_values(value, recursive=True)
        kept.append((key, value))

    if isinstance(mapping, _abc.Mapping):
        return dict(kept)
    return [value for _, value in kept]


# =============================================================================
# Transforms
# =============================================================================


def replace_value(
    mapping: _types.NestedMapping,
    value: str,
    replacement: _typing.Any,
    *,
    recursive: bool = True,
    case_sensitive: bool = True,
) -> _types.NestedMapping:
    """
    Return a copy with every string leaf equal to value replaced.

    Args:
        mapping: Dict or list to transform.
        value: String to look for.
        replacement: Value to put in its place.
        recursive: Also replace inside nested containers.
        case_sensitive: Compare case-sensitively (otherwise casefolded).
    """
    result: dict[_typing.Any, _typing.Any] = {}
    for key, item in _items(mapping):
        if recursive and paths.is_container(item):
            item = replace_value(
                item,
                value,
                replacement,
                recursive=True,
                case_sensitive=case_sensitive,
            )
        elif isinstance(item, str) and _string_is(item, value, case_sensitive):
            item = replacement
        result[key] = item

    if isinstance(mapping, _abc.Mapping):
        return result
    return list(result.values())


def keys_camel_to_underscore(mapping: _types.NestedMapping) -> _types.NestedMapping:
    """Return a copy with camelCase string keys renamed to snake_case, recursively."""
    if not isinstance(mapping, _abc.Mapping):
        return [
            keys_camel_to_underscore(value) if paths.is_container(value) else value
            for value in mapping
        ]
    result: dict[_typing.Any, _typing.Any] = {}
    for key, value in mapping.items():
        if paths.is_container(value):
            value = keys_camel_to_underscore(value)
        result[camel_to_underscore(key) if isinstance(key, str) else key] = value
    return result


def camel_to_underscore(text: str) -> str:
    """
    Convert camelCase or PascalCase to snake_case.

    Example:
        >>> camel_to_underscore("parseHTTPResponse")
        'parse_http_response'
    """
    if _NUMERIC.fullmatch(text):
        return text
    words = []
    for word in _CAMEL_WORD.findall(text):
        words.append(word.lower() if word == word.upper() else word[0].lower() + word[1:])
    return "_".join(words)


def join_non_empty(glue: str, pieces: _typing.Iterable[_typing.Any]) -> str:
    """Join the truthy pieces with glue."""
    return glue.join(str(piece) for piece in pieces if piece)


def split_non_empty(delimiter: str, text: str) -> list[str]:
    """Split text on delimiter, dropping empty pieces."""
    if not delimiter:
        raise errors.InvalidPathError("Delimiter must be a non-empty string")
    return [piece for piece in text.split(delimiter) if piece]


# =============================================================================
# Internal helpers
# =============================================================================


def _items(mapping: _typing.Any) -> _typing.Iterable[tuple[_typing.Any, _typing.Any]]:
    if isinstance(mapping, _abc.Mapping):
        return mapping.items()
    if isinstance(mapping, (list, tuple)):
        return enumerate(mapping)
    raise errors.InvalidInputError(1, mapping)


def _as_list(mapping: _typing.Any) -> list[_typing.Any]:
    if not isinstance(mapping, (list, tuple)):
        raise errors.InvalidInputError(1, mapping)
    return list(mapping)


def _next_index(mapping: _abc.Mapping[_typing.Any, _typing.Any]) -> int:
    positions = [key for key in mapping if paths.is_positional_key(key)]
    return max(positions) + 1 if positions else 0


def _matches(candidate: _typing.Any, value: _typing.Any, strict: bool) -> bool:
    if strict and type(candidate) is not type(value):
        return False
    return bool(candidate == value)


def _string_is(text: str, other: _typing.Any, case_sensitive: bool) -> bool:
    if not isinstance(other, str):
        return False
    if case_sensitive:
        return text == other
    return text.casefold() == other.casefold()
