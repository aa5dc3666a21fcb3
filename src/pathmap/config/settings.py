"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with PATHMAP_ prefix
3. .env file (if present)
4. Layered YAML config files:
   - Project config: ./.pathmap.yaml
   - User config: ~/.config/pathmap/config.yaml

Nested config uses double underscore delimiter:
  PATHMAP_PATHS__DELIMITER=/
  PATHMAP_LOGGING__LEVEL=debug
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import pathmap.config.sources as sources
import pathmap.config.types as types


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Priority:
    1. PATHMAP_ENV_FILE if set (explicit override)
    2. .env in the current directory
    3. None (rely on environment variables)
    """
    if env_file := _os.environ.get("PATHMAP_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
        # If explicitly set but doesn't exist, don't fall back silently
        return None

    if _pathlib.Path(".env").exists():
        return ".env"

    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    pathmap configuration settings.

    All settings can be overridden via environment variables with PATHMAP_ prefix.
    For nested config, use double underscore: PATHMAP_PATHS__DELIMITER=/

    Config precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (PATHMAP_*)
    3. .env file
    4. Project config (./.pathmap.yaml)
    5. User config (~/.config/pathmap/config.yaml)
    6. Built-in defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="PATHMAP_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args), highest
        2. env_settings (PATHMAP_* env vars)
        3. dotenv_settings (.env file)
        4. yaml_settings (project and user config.yaml)
        5. (defaults via Field definitions), lowest
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.YamlSettingsSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file."""
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    # =========================================================================
    # Nested config sections
    # =========================================================================

    paths: types.PathsConfig = _pydantic.Field(default_factory=types.PathsConfig)
    """Path parsing (delimiter)."""

    output: types.OutputConfig = _pydantic.Field(default_factory=types.OutputConfig)
    """Command output (format, color)."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging (level)."""

    # =========================================================================
    # Convenience accessors
    # =========================================================================

    @property
    def delimiter(self) -> str:
        """Shortcut for paths.delimiter."""
        return self.paths.delimiter

    @property
    def log_level(self) -> str:
        """Shortcut for logging.level."""
        return self.logging.level
