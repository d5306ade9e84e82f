"""Configuration management for twig2html."""

from .settings import (
    CONFIG_FILE_NAME,
    Settings,
    discover_settings_path,
    get_settings,
    load_settings,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "Settings",
    "discover_settings_path",
    "get_settings",
    "load_settings",
]
