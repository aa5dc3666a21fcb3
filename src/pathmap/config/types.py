"""Configuration type definitions for pathmap settings.

This module defines the Pydantic models nested within the main Settings
class:

- PathsConfig: delimiter used to split path strings
- OutputConfig: document format and color for command output
- LoggingConfig: log level

All types use `extra="allow"` so unknown keys in config files are kept
instead of silently dropped. Use `get_extra_fields()` to inspect them.
"""

import typing as _typing

import pydantic as _pydantic

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config types.

    Unknown fields are preserved so config files can be audited for typos.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but are not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}


# =============================================================================
# Sections
# =============================================================================


class PathsConfig(ConfigBase):
    """
    Path parsing settings.

    YAML section: paths.*
    """

    delimiter: str = "."
    """Separator between path segments."""

    @_pydantic.field_validator("delimiter")
    @classmethod
    def _delimiter_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("delimiter must be a non-empty string")
        return value


class OutputConfig(ConfigBase):
    """
    Command output settings.

    YAML section: output.*
    """

    format: _typing.Literal["yaml", "json"] = "yaml"
    """Document format for printed values."""

    color: bool | None = None
    """Syntax highlighting. None = auto-detect TTY."""


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "warning"
    """Log level."""
