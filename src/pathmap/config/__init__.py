"""
Configuration module for pathmap.

Uses pydantic-settings for environment variable loading.
"""

from pathmap.config.settings import Settings
from pathmap.config.sources import ConfigFileError, YamlSettingsSource

__all__ = ["ConfigFileError", "Settings", "YamlSettingsSource"]
