"""Settings record persisted between runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .recent import RecentFiles


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass
class Settings:
    """UI preferences: window geometry, layout, last used paths and trace options.

    One instance is loaded at startup, handed to whatever needs it and saved
    back at shutdown. The values below are the defaults used for any key that
    is missing or unreadable in the settings file.
    """

    # Window geometry; None means "not set yet" and lets the UI pick.
    window_location: Optional[Point] = None
    window_size: Optional[Point] = None

    hide_scrubber: bool = False
    hide_left: bool = False
    hide_right: bool = False
    splitter_weights: List[int] = field(default_factory=lambda: [15, 85])

    # Tab placement by tab name.
    left_tabs: List[str] = field(default_factory=list)
    center_tabs: List[str] = field(default_factory=list)
    right_tabs: List[str] = field(default_factory=list)
    hidden_tabs: List[str] = field(default_factory=lambda: ["Log"])
    tab_weights: List[int] = field(default_factory=lambda: [20, 60, 20])

    last_open_dir: str = ""
    report_splitter_weights: List[int] = field(default_factory=lambda: [75, 25])
    shader_splitter_weights: List[int] = field(default_factory=lambda: [70, 30])
    texture_splitter_weights: List[int] = field(default_factory=lambda: [20, 80])

    # Last trace dialog options.
    trace_device: str = ""
    trace_package: str = ""
    trace_out_dir: str = ""
    trace_out_file: str = ""
    trace_clear_cache: bool = False
    trace_disable_pcs: bool = False

    skip_welcome_screen: bool = False
    recent_files: RecentFiles = field(default_factory=RecentFiles)

    def add_to_recent(self, path: str) -> None:
        self.recent_files.add(path)

    def get_recent(self) -> List[str]:
        return self.recent_files.get_recent()


__all__ = ["Point", "Settings"]
