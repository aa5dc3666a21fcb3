"""
Exception types raised by pathmap.

Every error derives from PathmapError, and each also derives from the
built-in exception a caller would expect for that situation, so existing
``except KeyError`` / ``except TypeError`` handlers keep working:

- PathNotFoundError (KeyError): a path segment is missing (strict reads)
- PathConflictError (TypeError): a write would descend into a leaf
- InvalidInputError (TypeError): an argument is not a container
- InvalidPathError (ValueError): the path or delimiter is unusable
"""

from __future__ import annotations

import typing as _typing

if _typing.TYPE_CHECKING:
    import pathlib as _pathlib


class PathmapError(Exception):
    """Base class for all pathmap errors."""

    pass


class PathNotFoundError(PathmapError, KeyError):
    """A path segment does not exist in the mapping being read."""

    def __init__(self, segment: _typing.Any, path: tuple[_typing.Any, ...] = ()) -> None:
        self.segment = segment
        self.path = path
        super().__init__(f"Path segment {segment!r} does not exist")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class PathConflictError(PathmapError, TypeError):
    """A write needs to descend through a key that holds a leaf value."""

    def __init__(
        self,
        segment: _typing.Any,
        path: tuple[_typing.Any, ...] = (),
        message: str | None = None,
    ) -> None:
        self.segment = segment
        self.path = path
        if message is None:
            message = f"Path segment {segment!r} exists already and is not a mapping"
        super().__init__(message)


class InvalidInputError(PathmapError, TypeError):
    """An argument is not a mapping or sequence container."""

    def __init__(self, argument_index: int, value: _typing.Any = None) -> None:
        # 1-based, as shown to users
        self.argument_index = argument_index
        super().__init__(
            f"Argument {argument_index} is not a mapping (got {type(value).__name__})"
        )


class InvalidPathError(PathmapError, ValueError):
    """The path or its delimiter cannot be split into segments."""

    pass


class DocumentError(PathmapError):
    """A document could not be read, parsed, or written."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in document {path}: {message}")
