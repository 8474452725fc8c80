"""Configuration module for mentionbox."""

from mentionbox.config.settings import LogLevel, Settings, get_settings

__all__ = [
    "LogLevel",
    "Settings",
    "get_settings",
]
