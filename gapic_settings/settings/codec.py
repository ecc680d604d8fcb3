"""Conversion between :class:`Settings` and a flat ``str -> str`` property mapping.

Decoding never raises: a missing or malformed value yields the default of the
field it belongs to, without affecting any other field.
"""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, MutableMapping, Optional, Sequence

from .model import Point, Settings
from .recent import RecentFiles


_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _parse_int(value: str) -> int:
    # Signed 32-bit decimal, no surrounding whitespace.
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"not an integer: {value!r}")
    out = int(value)
    if not _INT_MIN <= out <= _INT_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return out


# Decoding helpers -----------------------------------------------------------
def get_int(props: Mapping[str, str], name: str, default: int) -> int:
    value = props.get(name)
    if value is None:
        return default
    try:
        return _parse_int(value)
    except ValueError:
        return default


def get_point(props: Mapping[str, str], name: str) -> Optional[Point]:
    x = get_int(props, name + ".x", -1)
    y = get_int(props, name + ".y", -1)
    return Point(x, y) if (x >= 0 and y >= 0) else None


def get_bool(props: Mapping[str, str], name: str) -> bool:
    return props.get(name, "").lower() == "true"


def get_int_list(props: Mapping[str, str], name: str, default: List[int]) -> List[int]:
    """All-or-nothing: one bad element means ``default`` for the whole list."""
    value = props.get(name)
    if value is None:
        return default
    try:
        return [_parse_int(v) for v in value.split(",")]
    except ValueError:
        return default


def get_string_list(props: Mapping[str, str], name: str, default: List[str]) -> List[str]:
    value = props.get(name)
    if value is None:
        return default
    return [v.strip() for v in value.split(",") if v.strip()]


# Encoding helpers -----------------------------------------------------------
def set_point(props: MutableMapping[str, str], name: str, point: Optional[Point]) -> None:
    if point is not None:
        props[name + ".x"] = str(point.x)
        props[name + ".y"] = str(point.y)


def set_bool(props: MutableMapping[str, str], name: str, value: bool) -> None:
    props[name] = "true" if value else "false"


def set_int_list(props: MutableMapping[str, str], name: str, value: Sequence[int]) -> None:
    props[name] = ",".join(str(v) for v in value)


def set_string_list(props: MutableMapping[str, str], name: str, value: Sequence[str]) -> None:
    # No escaping: an element containing "," comes back as several elements.
    props[name] = ",".join(value)


def decode_settings(props: Mapping[str, str]) -> Settings:
    """Build a :class:`Settings` from ``props``, using defaults where needed."""
    s = Settings()
    s.window_location = get_point(props, "window.pos")
    s.window_size = get_point(props, "window.size")
    s.hide_scrubber = get_bool(props, "hide.scrubber")
    s.hide_left = get_bool(props, "hide.left")
    s.hide_right = get_bool(props, "hide.right")
    s.splitter_weights = get_int_list(props, "splitter.weights", s.splitter_weights)
    s.left_tabs = get_string_list(props, "tabs.left", s.left_tabs)
    s.center_tabs = get_string_list(props, "tabs.center", s.center_tabs)
    s.right_tabs = get_string_list(props, "tabs.right", s.right_tabs)
    s.hidden_tabs = get_string_list(props, "tabs.hidden", s.hidden_tabs)
    s.tab_weights = get_int_list(props, "tabs.weights", s.tab_weights)
    s.last_open_dir = props.get("lastOpenDir", s.last_open_dir)
    s.report_splitter_weights = get_int_list(
        props, "report.splitter.weights", s.report_splitter_weights
    )
    s.shader_splitter_weights = get_int_list(
        props, "shader.splitter.weights", s.shader_splitter_weights
    )
    s.texture_splitter_weights = get_int_list(
        props, "texture.splitter.weights", s.texture_splitter_weights
    )
    s.trace_device = props.get("trace.device", s.trace_device)
    s.trace_package = props.get("trace.package", s.trace_package)
    s.trace_out_dir = props.get("trace.dir", s.trace_out_dir)
    s.trace_out_file = props.get("trace.file", s.trace_out_file)
    s.trace_clear_cache = get_bool(props, "trace.clearCache")
    s.trace_disable_pcs = get_bool(props, "trace.disablePCS")
    s.skip_welcome_screen = get_bool(props, "skip.welcome")
    s.recent_files = RecentFiles(get_string_list(props, "open.recent", list(s.recent_files)))
    return s


def encode_settings(s: Settings) -> Dict[str, str]:
    """Flatten ``s`` into the property mapping written to the settings file."""
    props: Dict[str, str] = {}
    set_point(props, "window.pos", s.window_location)
    set_point(props, "window.size", s.window_size)
    set_bool(props, "hide.scrubber", s.hide_scrubber)
    set_bool(props, "hide.left", s.hide_left)
    set_bool(props, "hide.right", s.hide_right)
    set_int_list(props, "splitter.weights", s.splitter_weights)
    set_string_list(props, "tabs.left", s.left_tabs)
    set_string_list(props, "tabs.center", s.center_tabs)
    set_string_list(props, "tabs.right", s.right_tabs)
    set_string_list(props, "tabs.hidden", s.hidden_tabs)
    set_int_list(props, "tabs.weights", s.tab_weights)
    props["lastOpenDir"] = s.last_open_dir
    set_int_list(props, "report.splitter.weights", s.report_splitter_weights)
    set_int_list(props, "shader.splitter.weights", s.shader_splitter_weights)
    set_int_list(props, "texture.splitter.weights", s.texture_splitter_weights)
    props["trace.device"] = s.trace_device
    props["trace.package"] = s.trace_package
    props["trace.dir"] = s.trace_out_dir
    props["trace.file"] = s.trace_out_file
    set_bool(props, "trace.clearCache", s.trace_clear_cache)
    set_bool(props, "trace.disablePCS", s.trace_disable_pcs)
    set_bool(props, "skip.welcome", s.skip_welcome_screen)
    set_string_list(props, "open.recent", s.recent_files.entries)
    return props


__all__ = [
    "decode_settings",
    "encode_settings",
    "get_bool",
    "get_int",
    "get_int_list",
    "get_point",
    "get_string_list",
    "set_bool",
    "set_int_list",
    "set_point",
    "set_string_list",
]
