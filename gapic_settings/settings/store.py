from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .. import properties
from .codec import decode_settings, encode_settings
from .model import Settings

LOGGER = logging.getLogger(__name__)

SETTINGS_FILE = ".gapic"
HEADER = " GAPIC Properties"


@dataclass
class SettingsStore:
    """Load/save :class:`Settings` from a property file in the user's home folder.

    Neither operation raises on I/O problems: a file that cannot be read
    loads as defaults, and a failed save is logged and dropped.
    """

    filename: str = SETTINGS_FILE
    home: Path = field(default_factory=Path.home)

    def path(self) -> Path:
        return Path(self.home) / self.filename

    def load(self) -> Settings:
        path = self.path()
        if not (path.is_file() and os.access(path, os.R_OK)):
            return Settings()

        try:
            with path.open("r", encoding="utf-8", errors="replace") as fp:
                text = fp.read()
        except OSError:
            LOGGER.debug("IO error reading properties from %s", path, exc_info=True)
            return Settings()

        return decode_settings(properties.load_properties(text))

    def save(self, settings: Settings) -> None:
        path = self.path()
        tmp = None
        text = properties.dump_properties(encode_settings(settings), HEADER)

        # Write next to the target and swap, so a failed write keeps the old file.
        try:
            # Follow a symlinked settings file so the link itself survives.
            target = path.resolve()
            tmp = target.with_name(target.name + ".tmp")
            tmp.write_text(text, encoding="utf-8")
            if target.exists():
                shutil.copymode(target, tmp)
            os.replace(tmp, target)
        except (OSError, RuntimeError, UnicodeError):
            LOGGER.debug("IO error writing properties to %s", path, exc_info=True)
        finally:
            if tmp is not None and tmp.exists():
                try:
                    tmp.unlink()
                except OSError:
                    pass


__all__ = ["HEADER", "SETTINGS_FILE", "SettingsStore"]
