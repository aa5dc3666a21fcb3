"""
pathmap - path-addressed access to nested mappings.

Read, write, remove and test values deep inside dicts and lists with
dotted paths, and deep merge several nested mappings into one.

Example:
    >>> import pathmap
    >>> data = pathmap.set_by_path({}, "server.port", 8080)
    >>> pathmap.get_by_path(data, "server.port")
    8080
    >>> pathmap.merge(data, {"server": {"host": "localhost"}})
    {'server': {'port': 8080, 'host': 'localhost'}}

The YAML/JSON document functions are re-exported here. The flat container
helpers (prepend, insert_after, replace_value, ...) live in pathmap.helpers
and are imported from that submodule.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("pathmap")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from pathmap.accessor import (  # noqa: E402
    PathAccessor,
    exists_by_path,
    get_by_path,
    isset_by_path,
    set_by_path,
    unset_by_path,
)
from pathmap.deep_merge import merge  # noqa: E402
from pathmap.documents import (  # noqa: E402
    dump_document,
    load_document,
    load_documents,
    write_document,
)
from pathmap.errors import (  # noqa: E402
    DocumentError,
    InvalidInputError,
    InvalidPathError,
    PathConflictError,
    PathmapError,
    PathNotFoundError,
)
from pathmap.paths import DEFAULT_DELIMITER, split_path  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "DEFAULT_DELIMITER",
    "DocumentError",
    "InvalidInputError",
    "InvalidPathError",
    "PathAccessor",
    "PathConflictError",
    "PathNotFoundError",
    "PathmapError",
    "dump_document",
    "exists_by_path",
    "get_by_path",
    "isset_by_path",
    "load_document",
    "load_documents",
    "merge",
    "set_by_path",
    "split_path",
    "unset_by_path",
    "write_document",
]
