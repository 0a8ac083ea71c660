"""
Configuration package for placefinder.
"""

from .settings import (
    Settings,
    LogLevel,
    PlacesSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "LogLevel",
    "PlacesSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
