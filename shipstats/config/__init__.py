"""Configuration package."""

from shipstats.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
