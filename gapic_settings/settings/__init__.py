"""Persistent UI settings.

Window geometry, layout, last used paths, trace options and the recently
opened files survive restarts in a flat ``.gapic`` property file in the
user's home folder.

Design goals:
  * Loading always produces a usable record (missing/bad values -> defaults)
  * Saving never raises into the UI
  * No global instance: the application owns the record and passes it around
"""

from .codec import decode_settings, encode_settings
from .model import Point, Settings
from .recent import MAX_RECENT_FILES, RecentFiles
from .store import SettingsStore

__all__ = [
    "MAX_RECENT_FILES",
    "Point",
    "RecentFiles",
    "Settings",
    "SettingsStore",
    "decode_settings",
    "encode_settings",
]
