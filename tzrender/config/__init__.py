"""Configuration loading for tzrender."""

from .settings import (
    CustomFormatSettings,
    LoggingSettings,
    TzRenderSettings,
    find_config_file,
    load_settings,
)
from .store import ConfigStore

__all__ = [
    "ConfigStore",
    "CustomFormatSettings",
    "LoggingSettings",
    "TzRenderSettings",
    "find_config_file",
    "load_settings",
]
