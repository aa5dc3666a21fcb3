"""
Type aliases for pathmap.

This module provides type aliases used throughout the package:
- Segments: Tuple of keys representing a nested key path
- PathLike: A delimited path string or pre-split segments
- NestedMapping: A mapping or list whose values may nest further
"""

from __future__ import annotations

import typing as _typing

# Example: ("config", "model", "name") represents config.model.name
Segments: _typing.TypeAlias = tuple[_typing.Any, ...]

PathLike: _typing.TypeAlias = _typing.Union[str, _typing.Sequence[_typing.Any]]

NestedMapping: _typing.TypeAlias = _typing.Union[
    _typing.Mapping[_typing.Any, _typing.Any],
    _typing.Sequence[_typing.Any],
]
