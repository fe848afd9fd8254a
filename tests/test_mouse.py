import pytest

from novide.keyboard import KeyboardManager, Modifiers
from novide.mouse import (
    DragCommand,
    MouseButtonCommand,
    MouseManager,
    ScrollCommand,
    TouchPhase,
    WindowRegion,
    button_text,
    clamp_position,
    to_grid_coords,
)
from novide.settings import Settings
from novide.window_settings import WindowSettings

FONT = (8, 16)
WINDOW = (800, 600)
REGION = WindowRegion(id=2, left=80, top=32, right=400, bottom=320, event_grid_id=1)


def cell(region, col, row):
    return (region.left + FONT[0] * col, region.top + FONT[1] * row)


def make(settings=None, keyboard=None):
    sent = []
    manager = MouseManager(sent.append, keyboard, settings)
    return manager, sent


def test_clamp_position_inside_is_unchanged():
    point = (120.0, 50.0)
    assert clamp_position(point, REGION.bounds, FONT) == point


def test_clamp_position_stays_within_region():
    for point in [(0.0, 0.0), (1000.0, 1000.0), (-5.0, 700.0)]:
        x, y = clamp_position(point, REGION.bounds, FONT)
        assert REGION.left <= x <= REGION.right - FONT[0]
        assert REGION.top <= y <= REGION.bottom - FONT[1]


def test_to_grid_coords_round_trip():
    for col, row in [(0, 0), (3, 5), (17, 2)]:
        assert to_grid_coords((col * FONT[0] + 0.5, row * FONT[1] + 0.5), FONT) == (col, row)


def test_to_grid_coords_negative_saturates():
    assert to_grid_coords((-10.0, -3.0), FONT) == (0, 0)


@pytest.mark.parametrize("name", ["left", "right", "middle"])
def test_button_text_known(name):
    assert button_text(name) == name


def test_button_text_unknown():
    assert button_text("back") is None


def test_motion_outside_window_ignored():
    manager, sent = make(WindowSettings(mouse_move_event=True))
    manager.handle_pointer_motion(-1, 10, [REGION], FONT, WINDOW)
    manager.handle_pointer_motion(10, WINDOW[1], [REGION], FONT, WINDOW)
    assert sent == []
    assert manager.window_under_mouse is None


def test_motion_sends_move_when_enabled():
    manager, sent = make(WindowSettings(mouse_move_event=True))
    x, y = cell(REGION, 3, 5)
    manager.handle_pointer_motion(x, y, [REGION], FONT, WINDOW)
    assert sent == [MouseButtonCommand("move", "", REGION.event_id, (3, 5), "")]
    assert manager.window_under_mouse == REGION


def test_motion_without_move_event_is_silent():
    manager, sent = make(WindowSettings(mouse_move_event=False))
    x, y = cell(REGION, 3, 5)
    manager.handle_pointer_motion(x, y, [REGION], FONT, WINDOW)
    assert sent == []
    assert manager.relative_position == (3, 5)


def test_motion_picks_topmost_region():
    top = WindowRegion(id=7, left=80, top=32, right=200, bottom=200)
    manager, _ = make()
    x, y = cell(REGION, 1, 1)
    manager.handle_pointer_motion(x, y, [REGION, top], FONT, WINDOW)
    assert manager.window_under_mouse == top


def test_settings_store_is_read():
    store = Settings()
    store.set(WindowSettings(mouse_move_event=True))
    manager, sent = make(store)
    x, y = cell(REGION, 2, 2)
    manager.handle_pointer_motion(x, y, [REGION], FONT, WINDOW)
    assert [c.button for c in sent] == ["move"]


def test_click_press_and_release():
    manager, sent = make()
    x, y = cell(REGION, 4, 6)
    manager.handle_pointer_motion(x, y, [REGION], FONT, WINDOW)
    manager.handle_pointer_transition("left", True)
    manager.handle_pointer_transition("left", False)
    assert sent == [
        MouseButtonCommand("left", "press", REGION.event_id, (4, 6), ""),
        MouseButtonCommand("left", "release", REGION.event_id, (4, 6), ""),
    ]
    assert manager.dragging is None


def test_drag_sends_drag_and_release_at_drag_position():
    manager, sent = make()
    manager.handle_pointer_motion(*cell(REGION, 1, 1), [REGION], FONT, WINDOW)
    manager.handle_pointer_transition("right", True)
    manager.handle_pointer_motion(*cell(REGION, 5, 2), [REGION], FONT, WINDOW)
    manager.handle_pointer_transition("right", False)
    assert sent[1] == DragCommand("right", REGION.event_id, (5, 2), "")
    assert sent[2] == MouseButtonCommand("right", "release", REGION.event_id, (5, 2), "")
    assert manager.has_moved is False


def test_disabled_manager_sends_nothing():
    manager, sent = make()
    manager.enabled = False
    manager.handle_pointer_motion(*cell(REGION, 1, 1), [REGION], FONT, WINDOW)
    manager.handle_pointer_transition("left", True)
    manager.handle_line_scroll(0.0, 3.0)
    assert sent == []
    assert manager.dragging is None


def test_unknown_button_ignored():
    manager, sent = make()
    manager.handle_pointer_motion(*cell(REGION, 1, 1), [REGION], FONT, WINDOW)
    manager.handle_pointer_transition("back", True)
    assert sent == []
    assert manager.dragging is None


def test_line_scroll_vertical():
    manager, sent = make()
    manager.handle_line_scroll(0.0, 3.0)
    assert sent == [ScrollCommand("up", 0, (0, 0), "")] * 3
    sent.clear()
    manager.handle_line_scroll(0.0, -1.0)
    assert [c.direction for c in sent] == ["down"]


def test_line_scroll_horizontal():
    manager, sent = make()
    manager.handle_line_scroll(2.0, 0.0)
    assert [c.direction for c in sent] == ["left", "left"]
    sent.clear()
    manager.handle_line_scroll(-1.0, 0.0)
    assert [c.direction for c in sent] == ["right"]


def test_line_scroll_accumulates_fractions():
    manager, sent = make()
    manager.handle_line_scroll(0.0, 0.5)
    assert sent == []
    manager.handle_line_scroll(0.0, 0.5)
    assert [c.direction for c in sent] == ["up"]


def test_scroll_uses_window_id_and_drag_position():
    manager, sent = make()
    manager.handle_pointer_motion(*cell(REGION, 3, 4), [REGION], FONT, WINDOW)
    manager.handle_line_scroll(0.0, 1.0)
    assert sent == [ScrollCommand("up", REGION.id, (3, 4), "")]


def test_pixel_scroll_converts_by_font_size():
    manager, sent = make()
    manager.handle_pixel_scroll(FONT, (0.0, FONT[1] * 2.0))
    assert [c.direction for c in sent] == ["up", "up"]


def test_modifier_string_included():
    keyboard = KeyboardManager()
    keyboard.set_modifiers(Modifiers(control=True))
    manager, sent = make(keyboard=keyboard)
    manager.handle_line_scroll(0.0, 1.0)
    assert sent[0].modifier_string == keyboard.format_modifier_string("", True)
    assert "C-" in sent[0].modifier_string


def test_touch_tap_clicks_at_start():
    manager, sent = make(WindowSettings(touch_deadzone=6.0, touch_drag_timeout=100.0))
    point = cell(REGION, 2, 3)
    manager.handle_touch("finger", point, TouchPhase.STARTED, [REGION], FONT, WINDOW)
    manager.handle_touch("finger", point, TouchPhase.ENDED, [REGION], FONT, WINDOW)
    assert sent == [
        MouseButtonCommand("left", "press", REGION.event_id, (2, 3), ""),
        MouseButtonCommand("left", "release", REGION.event_id, (2, 3), ""),
    ]


def test_touch_drag_after_timeout():
    manager, sent = make(WindowSettings(touch_deadzone=6.0, touch_drag_timeout=0.0))
    start = cell(REGION, 1, 1)
    manager.handle_touch(1, start, TouchPhase.STARTED, [REGION], FONT, WINDOW)
    manager.handle_touch(1, cell(REGION, 1, 1), TouchPhase.MOVED, [REGION], FONT, WINDOW)
    assert manager.dragging == "left"
    assert sent[-1] == MouseButtonCommand("left", "press", REGION.event_id, (1, 1), "")
    manager.handle_touch(1, cell(REGION, 1, 1), TouchPhase.ENDED, [REGION], FONT, WINDOW)
    assert sent[-1].action == "release"
    assert manager.dragging is None


def test_touch_swipe_scrolls():
    manager, sent = make(WindowSettings(touch_deadzone=-1.0, touch_drag_timeout=100.0))
    start = (200.0, 100.0)
    manager.handle_touch(1, start, TouchPhase.STARTED, [REGION], FONT, WINDOW)
    manager.handle_touch(
        1, (start[0], start[1] + FONT[1] * 2), TouchPhase.MOVED, [REGION], FONT, WINDOW
    )
    assert [c.direction for c in sent] == ["up", "up"]
    sent.clear()
    manager.handle_touch(1, start, TouchPhase.CANCELLED, [REGION], FONT, WINDOW)
    assert sent == []


def test_unknown_touch_end_ignored():
    manager, sent = make()
    manager.handle_touch(9, (10.0, 10.0), TouchPhase.ENDED, [REGION], FONT, WINDOW)
    assert sent == []


def test_hide_mouse_when_typing():
    manager, _ = make(WindowSettings(hide_mouse_when_typing=True))
    assert manager.handle_key_pressed() is True
    assert manager.handle_key_pressed() is False
    assert manager.handle_cursor_shown() is True
    assert manager.handle_cursor_shown() is False


def test_keys_do_not_hide_mouse_by_default():
    manager, _ = make()
    assert manager.handle_key_pressed() is False
    assert manager.mouse_hidden is False