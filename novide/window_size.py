"""Persistent window geometry stored as JSON between sessions."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

SETTINGS_FILE = "novide-settings.json"
_APP_DIR = "novide"

_I32 = (-(1 << 31), (1 << 31) - 1)
_U32 = (0, (1 << 32) - 1)
_U64 = (0, (1 << 64) - 1)


@dataclass(frozen=True)
class GridSize:
    width: int
    height: int


DEFAULT_GRID_SIZE = GridSize(width=100, height=50)
MIN_GRID_SIZE = GridSize(width=20, height=6)
MAX_GRID_SIZE = GridSize(width=10000, height=1000)


@dataclass(frozen=True)
class MaximizedWindow:
    """The window was maximized."""


@dataclass(frozen=True)
class WindowedWindow:
    """The window was not maximized; sizes are ``None`` when not remembered."""

    position: tuple[int, int] = (0, 0)
    pixel_size: tuple[int, int] | None = None
    grid_size: GridSize | None = None


PersistentWindowSettings = MaximizedWindow | WindowedWindow


def _data_local_dir() -> Path:
    if os.name == "nt":
        local = os.environ.get("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_DATA_HOME")
    return Path(xdg) if xdg and Path(xdg).is_absolute() else Path.home() / ".local" / "share"


def settings_path(data_dir: str | os.PathLike[str] | None = None) -> Path:
    """Return the settings file path under ``data_dir`` or the user data dir."""
    base = _data_local_dir() if data_dir is None else Path(data_dir)
    return base / _APP_DIR / SETTINGS_FILE


def _window_to_obj(window_settings: PersistentWindowSettings) -> Any:
    if isinstance(window_settings, MaximizedWindow):
        return "Maximized"
    if isinstance(window_settings, WindowedWindow):
        x, y = window_settings.position
        pixel = window_settings.pixel_size
        grid = window_settings.grid_size
        return {
            "Windowed": {
                "position": {"x": x, "y": y},
                "pixel_size": None if pixel is None else {"width": pixel[0], "height": pixel[1]},
                "grid_size": None if grid is None else {"width": grid.width, "height": grid.height},
            }
        }
    raise TypeError(f"not window settings: {window_settings!r}")


def to_json(window_settings: PersistentWindowSettings) -> str:
    return json.dumps({"window": _window_to_obj(window_settings)}, separators=(",", ":"))


def _int_field(obj: dict[str, Any], key: str, bounds: tuple[int, int]) -> int:
    if key not in obj:
        raise ValueError(f"missing field `{key}`")
    value = obj[key]
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"invalid type for `{key}`: expected an integer")
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"value out of range for `{key}`: {value}")
    return value


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"invalid type for {what}: expected an object")
    return value


def _parse_windowed(body: Any) -> WindowedWindow:
    body = _object(body, "Windowed")
    position = (0, 0)
    if body.get("position") is not None:
        pos = _object(body["position"], "position")
        position = (_int_field(pos, "x", _I32), _int_field(pos, "y", _I32))
    pixel_size = None
    if body.get("pixel_size") is not None:
        size = _object(body["pixel_size"], "pixel_size")
        pixel_size = (_int_field(size, "width", _U32), _int_field(size, "height", _U32))
    grid_size = None
    if body.get("grid_size") is not None:
        grid = _object(body["grid_size"], "grid_size")
        grid_size = GridSize(_int_field(grid, "width", _U64), _int_field(grid, "height", _U64))
    return WindowedWindow(position=position, pixel_size=pixel_size, grid_size=grid_size)


def from_json(text: str) -> PersistentWindowSettings:
    """Parse the settings file contents; raise ``ValueError`` if malformed."""
    data = _object(json.loads(text), "settings")
    if "window" not in data:
        raise ValueError("missing field `window`")
    window = data["window"]
    if window == "Maximized":
        return MaximizedWindow()
    if isinstance(window, dict) and len(window) == 1 and "Windowed" in window:
        return _parse_windowed(window["Windowed"])
    raise ValueError(f"unknown window variant: {window!r}")


def load_last_window_settings(
    path: str | os.PathLike[str] | None = None,
) -> PersistentWindowSettings:
    """Read the last saved window settings.

    Raises ``OSError`` if the file cannot be read and ``ValueError`` if it is
    malformed.
    """
    file = settings_path() if path is None else Path(path)
    return from_json(file.read_text(encoding="utf-8"))


def save_window_settings(
    window_settings: PersistentWindowSettings,
    path: str | os.PathLike[str] | None = None,
) -> Path:
    """Write the window settings, creating parent directories; return the path."""
    file = settings_path() if path is None else Path(path)
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(to_json(window_settings), encoding="utf-8")
    return file


def build_persistent_settings(
    minimized: bool | None,
    maximized: bool,
    pixel_size: tuple[int, int],
    grid_size: GridSize,
    position: tuple[int, int] | None,
    remember_window_size: bool,
    remember_window_position: bool,
) -> PersistentWindowSettings | None:
    """Decide what to persist for the current window state.

    Returns ``None`` when the window is minimized, since its size is then
    unreliable.
    """
    if minimized is True:
        return None
    if maximized and remember_window_size:
        return MaximizedWindow()
    kept_position = position if remember_window_position and position is not None else (0, 0)
    return WindowedWindow(
        position=kept_position,
        pixel_size=pixel_size if remember_window_size else None,
        grid_size=grid_size if remember_window_size else None,
    )