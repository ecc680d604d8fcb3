from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

import pytest

from gapic_settings.settings import Point, Settings, SettingsStore


def test_settings_defaults_load_when_missing(tmp_path: Path) -> None:
    store = SettingsStore(home=tmp_path)
    assert store.path() == tmp_path / ".gapic"
    assert store.load() == Settings()


def test_settings_roundtrip_save_load(tmp_path: Path) -> None:
    store = SettingsStore(home=tmp_path)
    s = Settings()
    s.window_location = Point(5, 6)
    s.hide_scrubber = True
    s.tab_weights = [10, 80, 10]
    s.last_open_dir = "/traces"
    s.trace_device = "emulator-5554"
    s.add_to_recent("/traces/b.gfxtrace")
    s.add_to_recent("/traces/a.gfxtrace")
    store.save(s)

    loaded = store.load()
    assert loaded == s
    assert loaded.recent_files.entries == ("/traces/a.gfxtrace", "/traces/b.gfxtrace")


def test_saved_file_format(tmp_path: Path) -> None:
    store = SettingsStore(home=tmp_path)
    store.save(Settings())

    lines = store.path().read_text(encoding="utf-8").splitlines()
    assert lines[0] == "# GAPIC Properties"
    assert lines[1].startswith("#")
    assert "splitter.weights=15,85" in lines
    assert "tabs.hidden=Log" in lines
    assert "skip.welcome=false" in lines
    assert not any(line.startswith("window.") for line in lines)
    assert not list(tmp_path.glob("*.tmp"))


def test_save_truncates_previous_content(tmp_path: Path) -> None:
    store = SettingsStore(home=tmp_path)
    store.path().write_text("stale.key=1\n" * 100, encoding="utf-8")
    store.save(Settings())
    assert "stale.key" not in store.path().read_text(encoding="utf-8")


def test_load_partially_corrupt_file(tmp_path: Path) -> None:
    store = SettingsStore(home=tmp_path)
    store.path().write_text(
        "this line has no separator\n"
        "splitter.weights=1,x,3\n"
        "hide.left=TRUE\n"
        "hide.right=yes\n"
        "window.size.x=800\n"
        "window.size.y=600\n",
        encoding="utf-8",
    )
    loaded = store.load()
    assert loaded.splitter_weights == [15, 85]
    assert loaded.hide_left is True
    assert loaded.hide_right is False
    assert loaded.window_size == Point(800, 600)


def test_load_undecodable_bytes(tmp_path: Path) -> None:
    store = SettingsStore(home=tmp_path)
    store.path().write_bytes(b"trace.device=\xff\xfe\nhide.left=true\n")
    loaded = store.load()
    assert loaded.hide_left is True
    assert loaded.trace_device == "\ufffd\ufffd"


def test_load_directory_returns_defaults(tmp_path: Path) -> None:
    store = SettingsStore(home=tmp_path)
    store.path().mkdir()
    assert store.load() == Settings()


def test_load_io_error_is_logged_and_ignored(tmp_path: Path, monkeypatch, caplog) -> None:
    store = SettingsStore(home=tmp_path)
    store.path().write_text("hide.left=true\n", encoding="utf-8")

    def boom(*args, **kwargs):
        raise OSError("disk on fire")

    monkeypatch.setattr(Path, "open", boom)
    with caplog.at_level(logging.DEBUG, logger="gapic_settings.settings.store"):
        loaded = store.load()

    assert loaded == Settings()
    assert any("IO error reading properties" in r.getMessage() for r in caplog.records)
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_save_io_error_is_logged_and_ignored(tmp_path: Path, caplog) -> None:
    store = SettingsStore(home=tmp_path / "does" / "not" / "exist")
    with caplog.at_level(logging.DEBUG, logger="gapic_settings.settings.store"):
        store.save(Settings())

    assert not store.path().exists()
    assert any("IO error writing properties" in r.getMessage() for r in caplog.records)


def test_failed_save_keeps_previous_file(tmp_path: Path, monkeypatch) -> None:
    store = SettingsStore(home=tmp_path)
    s = Settings()
    s.trace_package = "com.example.old"
    store.save(s)

    def boom(*args, **kwargs):
        raise OSError("no space left")

    monkeypatch.setattr("gapic_settings.settings.store.os.replace", boom)
    s.trace_package = "com.example.new"
    store.save(s)

    assert store.load().trace_package == "com.example.old"
    assert not list(tmp_path.glob("*.tmp"))


def test_recent_view_survives_save(tmp_path: Path) -> None:
    trace = tmp_path / "present.gfxtrace"
    trace.write_text("x")
    missing = str(tmp_path / "missing.gfxtrace")

    store = SettingsStore(home=tmp_path)
    s = Settings()
    s.add_to_recent(missing)
    s.add_to_recent(str(trace))
    assert s.get_recent() == [str(trace)]

    store.save(s)
    assert store.load().recent_files.entries == (str(trace), missing)


@pytest.mark.parametrize("value", ["", "10,,20", "10, 20"])
def test_bad_weights_on_disk_use_defaults(tmp_path: Path, value: str) -> None:
    store = SettingsStore(home=tmp_path)
    store.path().write_text(f"tabs.weights={value}\n", encoding="utf-8")
    assert store.load().tab_weights == [20, 60, 20]


def test_save_non_utf8_recent_path(tmp_path: Path) -> None:
    # Linux file names that are not valid UTF-8 decode to lone surrogates.
    path = os.fsdecode(b"/traces/caf\xe9.gfxtrace")
    store = SettingsStore(home=tmp_path)
    s = Settings()
    s.add_to_recent(path)
    store.save(s)

    assert "\\uDCE9" in store.path().read_text(encoding="utf-8")
    assert store.load().recent_files.entries == (path,)
    assert not list(tmp_path.glob("*.tmp"))


def test_load_then_save_surrogate_pair_escape(tmp_path: Path) -> None:
    store = SettingsStore(home=tmp_path)
    store.path().write_text("trace.file=\\uD83D\\uDE00.gfxtrace\n", encoding="utf-8")

    loaded = store.load()
    assert loaded.trace_out_file == "\U0001F600.gfxtrace"

    store.save(loaded)
    assert store.load().trace_out_file == "\U0001F600.gfxtrace"
    assert not list(tmp_path.glob("*.tmp"))


def test_unencodable_text_is_logged_and_ignored(tmp_path: Path, monkeypatch, caplog) -> None:
    store = SettingsStore(home=tmp_path)

    def bad_dump(*args, **kwargs):
        return "trace.file=\ud800\n"

    monkeypatch.setattr("gapic_settings.settings.store.properties.dump_properties", bad_dump)
    with caplog.at_level(logging.DEBUG, logger="gapic_settings.settings.store"):
        store.save(Settings())

    assert not store.path().exists()
    assert not list(tmp_path.glob("*.tmp"))
    assert any("IO error writing properties" in r.getMessage() for r in caplog.records)


def test_save_writes_through_symlink(tmp_path: Path) -> None:
    dotfiles = tmp_path / "dotfiles"
    dotfiles.mkdir()
    target = dotfiles / "gapic"
    target.write_text("hide.left=true\n", encoding="utf-8")
    target.chmod(0o600)

    home = tmp_path / "home"
    home.mkdir()
    (home / ".gapic").symlink_to(target)

    store = SettingsStore(home=home)
    s = store.load()
    assert s.hide_left is True
    s.trace_device = "pixel"
    store.save(s)

    assert (home / ".gapic").is_symlink()
    assert "trace.device=pixel" in target.read_text(encoding="utf-8")
    assert stat.S_IMODE(target.stat().st_mode) == 0o600
    assert store.load().trace_device == "pixel"
    assert not list(dotfiles.glob("*.tmp"))


def test_save_through_symlink_loop_is_ignored(tmp_path: Path) -> None:
    (tmp_path / ".gapic").symlink_to(tmp_path / ".gapic")
    SettingsStore(home=tmp_path).save(Settings())
    assert (tmp_path / ".gapic").is_symlink()
