"""Persistent user-interface preferences for the GAPID client."""

from .settings import Point, RecentFiles, Settings, SettingsStore

__version__ = "0.1.0"

__all__ = ["Point", "RecentFiles", "Settings", "SettingsStore", "__version__"]
