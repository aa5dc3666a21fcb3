"""
Loading and dumping nested mappings as YAML or JSON documents.

The format is chosen by file suffix: ".json" is read and written as JSON,
anything else as YAML. JSON output keeps insertion order; YAML output does
not sort keys either.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import pathmap._types as _types
import pathmap.deep_merge as deep_merge
import pathmap.errors as errors
import pathmap.paths as paths

_logger = _logging.getLogger(__name__)

Format: _typing.TypeAlias = _typing.Literal["yaml", "json"]


def format_for_path(path: _pathlib.Path | str) -> Format:
    """Return the document format implied by a file suffix."""
    return "json" if _pathlib.Path(path).suffix.lower() == ".json" else "yaml"


def parse_document(content: str, fmt: Format = "yaml") -> _typing.Any:
    """
    Parse document text.

    Raises:
        yaml.YAMLError / json.JSONDecodeError: If the text is malformed.
    """
    if fmt == "json":
        return _json.loads(content)
    return _yaml.safe_load(content)


def load_document(path: _pathlib.Path | str) -> _types.NestedMapping:
    """
    Load a document file into a nested mapping.

    Args:
        path: File to read.

    Returns:
        Parsed content. An empty document loads as an empty dict.

    Raises:
        DocumentError: If the file cannot be read, is malformed, or its
            top level is not a mapping or list.
    """
    path = _pathlib.Path(path)

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise errors.DocumentError(path, f"permission denied: {e}") from e
    except UnicodeDecodeError as e:
        raise errors.DocumentError(path, f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise errors.DocumentError(path, f"cannot read file: {e}") from e

    fmt = format_for_path(path)
    try:
        parsed = parse_document(content, fmt) if content.strip() else None
    except (_yaml.YAMLError, _json.JSONDecodeError) as e:
        raise errors.DocumentError(path, f"invalid {fmt.upper()}: {e}") from e

    if parsed is None:
        _logger.debug("Document %s is empty", path)
        return {}

    if not paths.is_container(parsed):
        raise errors.DocumentError(
            path,
            f"document must be a mapping or list, got {type(parsed).__name__}",
        )

    return _typing.cast(_types.NestedMapping, parsed)


def load_documents(*files: _pathlib.Path | str) -> _types.NestedMapping:
    """
    Load several documents and deep merge them, later files winning.

    Raises:
        DocumentError: If any file fails to load.
    """
    documents = [load_document(path) for path in files]
    _logger.debug("Merging %d documents", len(documents))
    return deep_merge.merge(*documents)


def dump_document(data: _typing.Any, fmt: Format = "yaml") -> str:
    """Serialize data as YAML or JSON text."""
    if fmt == "json":
        return _json.dumps(data, indent=2, default=str) + "\n"
    return _yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def write_document(path: _pathlib.Path | str, data: _typing.Any) -> None:
    """
    Write data to a file, in the format implied by its suffix.

    Raises:
        DocumentError: If the data cannot be serialized or the file written.
    """
    path = _pathlib.Path(path)
    try:
        text = dump_document(data, format_for_path(path))
    except (_yaml.YAMLError, TypeError, ValueError) as e:
        raise errors.DocumentError(path, f"cannot serialize: {e}") from e

    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise errors.DocumentError(path, f"cannot write file: {e}") from e
    _logger.debug("Wrote %s", path)
