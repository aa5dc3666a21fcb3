"""
Deep merge of nested mappings.

merge() folds its arguments left to right into a new result:

- Positional keys (non-negative ints, including list indices) are never
  merge targets. Their values are collected in order and numbered after
  the fold, so positional entries from every input are concatenated.
  Indices already held by an associative key that compares equal (True
  or 1.0 for 1) are skipped.
- Any other key is associative. When the result already holds a container
  at that key and the incoming value is a container too, the two are merged
  recursively. Otherwise the incoming value replaces the old one, so the
  last input wins for scalars.

Example:
    >>> merge({"a": {"x": 1}, "tags": ["red"]}, {"a": {"y": 2}, "tags": ["blue"]})
    {'a': {'x': 1, 'y': 2}, 'tags': ['red', 'blue']}
    >>> merge({0: "a"}, {0: "b"})
    {0: 'a', 1: 'b'}
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import logging as _logging
import typing as _typing

import pathmap._types as _types
import pathmap.errors as errors
import pathmap.paths as paths

_logger = _logging.getLogger(__name__)


def merge(*mappings: _types.NestedMapping) -> _types.NestedMapping:
    """
    Deep merge any number of nested mappings.

    Arguments are validated before anything is merged: one bad argument
    fails the whole call.

    Args:
        *mappings: Dicts (or other Mappings), lists or tuples.

    Returns:
        A list when every argument is a list or tuple, otherwise a dict.
        Values are deep-copied, so the result shares nothing with the inputs.

    Raises:
        InvalidInputError: If an argument is not a container. The error's
            argument_index is 1-based.
    """
    for index, mapping in enumerate(mappings, start=1):
        if not paths.is_container(mapping):
            _logger.debug("merge: argument %d is %s", index, type(mapping).__name__)
            raise errors.InvalidInputError(index, mapping)

    result: dict[_typing.Any, _typing.Any] = {}
    positional: list[_typing.Any] = []

    for mapping in mappings:
        for key, value in _items(mapping):
            if paths.is_positional_key(key):
                positional.append(_copy.deepcopy(value))
            elif (
                key in result
                and paths.is_container(result[key])
                and paths.is_container(value)
            ):
                result[key] = merge(result[key], value)
            else:
                result[key] = _copy.deepcopy(value)

    if mappings and all(isinstance(mapping, (list, tuple)) for mapping in mappings):
        return positional

    # Indices go after the fold; keys such as True or 1.0 already hold theirs
    next_index = 0
    for value in positional:
        while next_index in result:
            next_index += 1
        result[next_index] = value
        next_index += 1
    return result


def _items(mapping: _types.NestedMapping) -> _typing.Iterable[tuple[_typing.Any, _typing.Any]]:
    """Iterate (key, value) pairs, using indices as keys for sequences."""
    if isinstance(mapping, _abc.Mapping):
        return mapping.items()
    return enumerate(mapping)
