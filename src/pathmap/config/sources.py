"""Custom pydantic-settings source for pathmap configuration.

Configuration layers (in precedence order, highest first):
1. Environment variables (handled by pydantic-settings)
2. Project config: .pathmap.yaml in the current directory
3. User config: ~/.config/pathmap/config.yaml (or PATHMAP_CONFIG_DIR)

The YAML layers are combined with pathmap's own deep merge, so nested
sections merge key by key while scalars from the higher layer win.

Environment variables:
- PATHMAP_CONFIG_DIR: Override user config directory (default: ~/.config/pathmap)
"""

import collections.abc as _abc
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import pathmap.deep_merge as deep_merge
import pathmap.errors as errors

_logger = _logging.getLogger(__name__)

# Environment variable for overriding user config directory
ENV_CONFIG_DIR = "PATHMAP_CONFIG_DIR"

PROJECT_CONFIG_NAME = ".pathmap.yaml"


class ConfigFileError(errors.PathmapError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


class YamlSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that loads from layered YAML config files.

    Flow:
    1. Load each existing YAML file into a dict
    2. Deep merge the dicts, lowest precedence first
    3. Return the merged dict to pydantic-settings for validation
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        project_dir: _pathlib.Path | None = None,
        *,
        user_config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            project_dir: Directory holding .pathmap.yaml. Defaults to cwd.
            user_config_path: Override path for user config file (for testing).
                If not provided, uses PATHMAP_CONFIG_DIR env var or default XDG path.
        """
        super().__init__(settings_cls)
        self._project_dir = project_dir
        self._user_config_path = user_config_path
        self._loaded_layers: list[tuple[str, _pathlib.Path]] = []
        self._data = self._load_config_layers()

    def _load_config_layers(self) -> dict[str, _typing.Any]:
        """Load and merge config files, lowest precedence first."""
        layers: list[dict[str, _typing.Any]] = []

        for name, path in reversed(self.get_layer_paths()):
            if not path.exists():
                continue
            content = self._load_yaml_file(path)
            if content:
                layers.append(content)
                self._loaded_layers.append((name, path))
                _logger.debug("Loaded %s config from %s", name, path)

        merged = deep_merge.merge(*layers)
        return _typing.cast(dict[str, _typing.Any], merged)

    def get_layer_paths(self) -> list[tuple[str, _pathlib.Path]]:
        """
        Get all config layer locations.

        Returns:
            List of (layer_name, path) tuples, highest precedence first.
        """
        project_dir = self._project_dir or _pathlib.Path.cwd()
        return [
            ("project", project_dir / PROJECT_CONFIG_NAME),
            ("user", self._get_user_config_path()),
        ]

    def get_loaded_layers(self) -> list[tuple[str, _pathlib.Path]]:
        """Get the layers that were actually loaded, lowest precedence first."""
        return list(self._loaded_layers)

    def _get_user_config_path(self) -> _pathlib.Path:
        """Get path to user config, respecting override and env var."""
        if self._user_config_path is not None:
            return self._user_config_path

        config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
        if config_dir_env:
            return _pathlib.Path(config_dir_env) / "config.yaml"

        # Default XDG path
        return _pathlib.Path.home() / ".config" / "pathmap" / "config.yaml"

    def _load_yaml_file(self, path: _pathlib.Path) -> dict[str, _typing.Any] | None:
        """
        Load a YAML file and return its contents as a dict.

        Returns:
            Parsed YAML contents, or None if the file is empty.

        Raises:
            ConfigFileError: If the file cannot be read, is malformed YAML,
                or contains non-dict content at the top level.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ConfigFileError(path, f"not valid UTF-8: {e}") from e
        except OSError as e:
            raise ConfigFileError(path, f"cannot read file: {e}") from e

        try:
            parsed = _yaml.safe_load(content)
        except _yaml.YAMLError as e:
            raise ConfigFileError(path, f"invalid YAML: {e}") from e

        if parsed is None:
            return None

        if not isinstance(parsed, dict):
            type_name = type(parsed).__name__
            raise ConfigFileError(
                path,
                f"config must be a YAML mapping (dict), got {type_name}",
            )

        return parsed

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        """
        Get value for a field from the merged config.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (_abc.Mapping, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Return merged config as a plain dict for Pydantic validation."""
        return dict(self._data)
