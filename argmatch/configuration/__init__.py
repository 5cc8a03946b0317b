"""argmatch configuration package."""

from argmatch.configuration.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
