"""Translation of pointer, wheel and touch input into editor mouse commands."""

from __future__ import annotations

import enum
import math
import time
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Any

from novide.keyboard import KeyboardManager
from novide.settings import Settings
from novide.window_settings import WindowSettings

Rect = tuple[float, float, float, float]
FontDimensions = tuple[int, int]


@dataclass(frozen=True)
class WindowRegion:
    """A drawn editor window and the pixel rectangle it covers."""

    id: int
    left: float
    top: float
    right: float
    bottom: float
    event_grid_id: int | None = None

    @property
    def bounds(self) -> Rect:
        return (self.left, self.top, self.right, self.bottom)

    @property
    def event_id(self) -> int:
        """The grid id that mouse events for this window are addressed to."""
        return self.id if self.event_grid_id is None else self.event_grid_id

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom


class TouchPhase(enum.Enum):
    STARTED = "started"
    MOVED = "moved"
    ENDED = "ended"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class MouseButtonCommand:
    button: str
    action: str
    grid_id: int
    position: tuple[int, int]
    modifier_string: str


@dataclass(frozen=True)
class DragCommand:
    button: str
    grid_id: int
    position: tuple[int, int]
    modifier_string: str


@dataclass(frozen=True)
class ScrollCommand:
    direction: str
    grid_id: int
    position: tuple[int, int]
    modifier_string: str


MouseCommand = MouseButtonCommand | DragCommand | ScrollCommand


def clamp_position(
    position: tuple[float, float],
    region: Rect,
    font_dimensions: FontDimensions,
) -> tuple[float, float]:
    """Keep ``position`` inside ``region`` so a whole cell still fits."""
    x, y = position
    left, top, right, bottom = region
    font_width, font_height = font_dimensions
    return (
        max(min(x, right - font_width), left),
        max(min(y, bottom - font_height), top),
    )


def _saturating_unsigned(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    return int(value)


def to_grid_coords(
    position: tuple[float, float], font_dimensions: FontDimensions
) -> tuple[int, int]:
    """Convert a pixel position into grid cell coordinates."""
    font_width, font_height = font_dimensions
    return (
        _saturating_unsigned(position[0]) // font_width,
        _saturating_unsigned(position[1]) // font_height,
    )


_BUTTON_NAMES = {"left": "left", "right": "right", "middle": "middle"}


def button_text(button: str) -> str | None:
    """Name a mouse button for the editor; ``None`` for unsupported buttons."""
    return _BUTTON_NAMES.get(str(button).lower())


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class _TouchTrace:
    start_time: float
    start: tuple[float, float]
    last: tuple[float, float]
    left_deadzone_once: bool


class MouseManager:
    """Tracks pointer, drag, scroll and touch state and emits mouse commands.

    Commands are handed to ``send``. ``settings`` is either a settings store
    holding :class:`WindowSettings`, a :class:`WindowSettings` instance, or
    ``None`` for the defaults.
    """

    def __init__(
        self,
        send: Callable[[MouseCommand], Any],
        keyboard_manager: KeyboardManager | None = None,
        settings: Settings | WindowSettings | None = None,
    ) -> None:
        self._send = send
        self.keyboard_manager = keyboard_manager or KeyboardManager()
        self._settings = settings
        self.dragging: str | None = None
        self.drag_position: tuple[int, int] = (0, 0)
        self.has_moved = False
        self.position: tuple[int, int] = (0, 0)
        self.relative_position: tuple[int, int] = (0, 0)
        self.scroll_position: list[float] = [0.0, 0.0]
        self._touches: dict[Hashable, _TouchTrace] = {}
        self.window_under_mouse: WindowRegion | None = None
        self.mouse_hidden = False
        self.enabled = True

    def _window_settings(self) -> WindowSettings:
        if isinstance(self._settings, Settings):
            return self._settings.get(WindowSettings)
        if self._settings is None:
            return WindowSettings()
        return self._settings

    def _modifiers(self) -> str:
        return self.keyboard_manager.format_modifier_string("", True)

    def handle_pointer_motion(
        self,
        x: int,
        y: int,
        regions: Iterable[WindowRegion],
        font_dimensions: FontDimensions,
        window_size: tuple[int, int],
    ) -> None:
        width, height = window_size
        if x < 0 or x >= width or y < 0 or y >= height:
            return
        position = (float(x), float(y))
        regions = list(regions)

        # While dragging, events go to the window the drag started on;
        # otherwise to the topmost window, which is drawn last.
        relevant: WindowRegion | None = None
        if self.dragging is not None:
            if self.window_under_mouse is not None:
                target_id = self.window_under_mouse.id
                relevant = next((r for r in regions if r.id == target_id), None)
        else:
            for region in regions:
                if region.contains(*position):
                    relevant = region

        bounds = relevant.bounds if relevant is not None else (0.0, 0.0, float(width), float(height))
        clamped = clamp_position(position, bounds, font_dimensions)
        self.position = to_grid_coords(clamped, font_dimensions)

        if relevant is None:
            return

        relative = (clamped[0] - relevant.left, clamped[1] - relevant.top)
        self.relative_position = to_grid_coords(relative, font_dimensions)

        previous = self.drag_position
        self.drag_position = self.relative_position
        moved = self.drag_position != previous

        if self.dragging is not None and moved:
            self._send(
                DragCommand(
                    button=self.dragging,
                    grid_id=relevant.event_id,
                    position=self.drag_position,
                    modifier_string=self._modifiers(),
                )
            )
        else:
            self.window_under_mouse = relevant
            if moved and self._window_settings().mouse_move_event:
                self._send(
                    MouseButtonCommand(
                        button="move",
                        action="",
                        grid_id=relevant.event_id,
                        position=self.relative_position,
                        modifier_string=self._modifiers(),
                    )
                )

        self.has_moved = self.dragging is not None and (self.has_moved or moved)

    def handle_pointer_transition(self, button: str, down: bool) -> None:
        if not self.enabled:
            return
        text = button_text(button)
        if text is None:
            return
        details = self.window_under_mouse
        if details is not None:
            position = (
                self.drag_position if not down and self.has_moved else self.relative_position
            )
            self._send(
                MouseButtonCommand(
                    button=text,
                    action="press" if down else "release",
                    grid_id=details.event_id,
                    position=position,
                    modifier_string=self._modifiers(),
                )
            )
        self.dragging = text if down else None
        if self.dragging is None:
            self.has_moved = False

    def _scroll_axis(self, axis: int, amount: float, increase: str, decrease: str) -> None:
        previous = int(self.scroll_position[axis])
        self.scroll_position[axis] += amount
        new = int(self.scroll_position[axis])
        if new == previous:
            return
        command = ScrollCommand(
            direction=increase if new > previous else decrease,
            grid_id=self.window_under_mouse.id if self.window_under_mouse is not None else 0,
            position=self.drag_position,
            modifier_string=self._modifiers(),
        )
        for _ in range(abs(new - previous)):
            self._send(command)

    def handle_line_scroll(self, x: float, y: float) -> None:
        if not self.enabled:
            return
        self._scroll_axis(1, y, "up", "down")
        self._scroll_axis(0, x, "left", "right")

    def handle_pixel_scroll(
        self, font_dimensions: FontDimensions, delta: tuple[float, float]
    ) -> None:
        font_width, font_height = font_dimensions
        self.handle_line_scroll(delta[0] / font_width, delta[1] / font_height)

    def handle_touch(
        self,
        finger_id: Hashable,
        location: tuple[float, float],
        phase: TouchPhase,
        regions: Iterable[WindowRegion],
        font_dimensions: FontDimensions,
        window_size: tuple[int, int],
    ) -> None:
        regions = list(regions)
        location = (float(location[0]), float(location[1]))

        def motion(point: tuple[float, float]) -> None:
            self.handle_pointer_motion(
                _round_half_away(point[0]),
                _round_half_away(point[1]),
                regions,
                font_dimensions,
                window_size,
            )

        if phase is TouchPhase.STARTED:
            enable_deadzone = self._window_settings().touch_deadzone >= 0.0
            self._touches[finger_id] = _TouchTrace(
                start_time=time.monotonic(),
                start=location,
                last=location,
                left_deadzone_once=not enable_deadzone,
            )
        elif phase is TouchPhase.MOVED:
            dragging_just_now = False
            trace = self._touches.get(finger_id)
            if trace is not None:
                if not trace.left_deadzone_once:
                    settings = self._window_settings()
                    distance = math.hypot(
                        trace.start[0] - location[0], trace.start[1] - location[1]
                    )
                    if distance >= settings.touch_deadzone:
                        trace.left_deadzone_once = True
                    timeout = max(settings.touch_drag_timeout, 0.0)
                    elapsed = time.monotonic() - trace.start_time
                    if self.dragging is None and elapsed >= timeout:
                        dragging_just_now = True

                if self.dragging is not None or dragging_just_now:
                    motion(location)
                elif trace.left_deadzone_once:
                    delta = (trace.last[0] - location[0], location[1] - trace.last[1])
                    trace.last = location
                    self.handle_pixel_scroll(font_dimensions, delta)

            if dragging_just_now:
                motion(location)
                self.handle_pointer_transition("left", True)
        else:
            trace = self._touches.pop(finger_id, None)
            if trace is None:
                return
            if self.dragging is not None:
                self.handle_pointer_transition("left", False)
            if not trace.left_deadzone_once:
                motion(trace.start)
                self.handle_pointer_transition("left", True)
                self.handle_pointer_transition("left", False)

    def handle_key_pressed(self) -> bool:
        """Note a key press; return ``True`` if the cursor should be hidden now."""
        if self._window_settings().hide_mouse_when_typing and not self.mouse_hidden:
            self.mouse_hidden = True
            return True
        return False

    def handle_cursor_shown(self) -> bool:
        """Note pointer movement; return ``True`` if the cursor should be shown again."""
        if self.mouse_hidden:
            self.mouse_hidden = False
            return True
        return False