"""Settings that control the editor window."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from novide.from_value import parse_u32
from novide.settings import Settings, register_setting_group


@dataclass(frozen=True)
class WindowSettingsChanged:
    """A window setting that the editor changed, with its new value."""

    field: str
    value: Any


@dataclass(frozen=True)
class WindowSettings:
    refresh_rate: int = 60
    refresh_rate_idle: int = 5
    idle: bool = True
    transparency: float = 1.0
    scale_factor: float = 1.0
    fullscreen: bool = False
    iso_layout: bool = False
    remember_window_size: bool = True
    remember_window_position: bool = True
    hide_mouse_when_typing: bool = False
    touch_deadzone: float = 6.0
    touch_drag_timeout: float = 0.17
    background_color: str = ""
    confirm_quit: bool = True
    padding_top: int = field(default=0, metadata={"parser": parse_u32})
    padding_left: int = field(default=0, metadata={"parser": parse_u32})
    padding_right: int = field(default=0, metadata={"parser": parse_u32})
    padding_bottom: int = field(default=0, metadata={"parser": parse_u32})
    theme: str = ""
    input_macos_alt_is_meta: bool = False
    input_ime: bool = True
    mouse_move_event: bool = field(default=False, metadata={"option": "mousemoveevent"})
    observed_lines: int | None = field(default=None, metadata={"option": "lines"})
    observed_columns: int | None = field(default=None, metadata={"option": "columns"})

    @classmethod
    def register(
        cls,
        settings: Settings,
        on_change: Callable[[WindowSettingsChanged], None] | None = None,
    ) -> None:
        """Register the window settings; ``on_change`` receives editor-side changes."""

        def forward(name: str, value: Any) -> None:
            if on_change is not None:
                on_change(WindowSettingsChanged(name, value))

        register_setting_group(settings, cls, forward)