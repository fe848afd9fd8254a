# novide

Input handling and settings machinery for a graphical editor front end. It is plain
Python and has no third-party dependencies.

## Modules

- `novide.ring_buffer.RingBuffer` is a fixed-size ring buffer that is always full.
  `rotate(num)` moves its logical start. Indexing wraps in both directions, so
  negative indices and indices past the length are both valid. `iter_range(start, end)`
  iterates over a range of logical indices. `resize(new_size, default_value)` keeps the
  logical order and fills any new slots with copies of the default.
  `clone_from_iter(iterable)` overwrites elements in logical order.
- `novide.from_value` holds `parse_f32`, `parse_u64`, `parse_u32`, `parse_i32`,
  `parse_string`, `parse_bool` and `parse_optional`. Each one takes the current value
  and a received value, and returns the new value.
  - If the received value has the wrong type, the function logs an error and returns
    the current value unchanged.
  - `parse_u32` and `parse_i32` wrap out-of-range integers to 32 bits.
  - `parse_f32` rounds to single precision.
- `novide.config` has `Config`, a dataclass with these optional fields:
  - `wsl`, `no_multigrid`, `maximized`, `vsync`, `srgb` and `idle`, all booleans
  - `neovim_bin`, `frame` and `theme`

  It works with a `config.toml` file, whose keys are written in kebab case, for example
  `no-multigrid`:
  - `Config.load_from_path(path)` returns `None` when the file does not exist. It raises
    `ConfigError` when the file cannot be read or parsed.
  - `Config.write_to_env(environ)` exports each option that is set. The variables are
    `NOVIDE_WSL`, `NOVIDE_NO_MULTIGRID`, `NOVIDE_MAXIMIZED`, `NOVIDE_VSYNC`,
    `NOVIDE_SRGB`, `NOVIDE_IDLE`, `NOVIDE_FRAME`, `NOVIDE_THEME` and `NEOVIM_BIN`. It
    writes to `os.environ` when `environ` is not given.
  - `Config.init(path, environ)` does both steps. It prints load errors to stderr.
  - `config_path()` returns the default location. That is `novide/config.toml` under
    `$XDG_CONFIG_HOME`, `~/.config`, or `%APPDATA%` on Windows.
- `novide.window_size` stores the last window state as JSON.
  - The state is either `MaximizedWindow` or `WindowedWindow`. `WindowedWindow` holds a
    `position`, an optional `pixel_size` and an optional `GridSize`.
  - `to_json` and `from_json` convert the state to and from JSON. `from_json` raises
    `ValueError` on malformed input.
  - `save_window_settings` and `load_last_window_settings` write and read the state.
    The default path comes from `settings_path()`, which is
    `novide/novide-settings.json` under the user's local data directory.
  - `build_persistent_settings(...)` decides what should be saved. It returns `None`
    for a minimized window, because its size is then unreliable.
  - The module also defines the constants `DEFAULT_GRID_SIZE`, `MIN_GRID_SIZE` and
    `MAX_GRID_SIZE`.
- `novide.settings` provides `Settings`, a store that holds one value per type. Use
  `set(value)` and `get(cls)` to write and read it.
  - It keeps update and reader handlers for each `SettingLocation`. A location is
    either `SettingLocation.neovide_global(name)`, which is a `neovide_`-prefixed
    global variable, or `SettingLocation.neovim_option(name)`.
  - The async `read_initial_values(nvim)` pulls values from any client object that has
    the async methods `get_var`, `set_var` and `get_option`. If the editor does not know
    a global, the local value is pushed to it instead.
  - `handle_setting_changed_notification` and `handle_option_changed_notification`
    apply changes that the editor reports.
  - `register_setting_group(settings, group_cls, on_change)` wires up every field of a
    dataclass. A field whose metadata has `option` maps to that editor option.
- `novide.window_settings` provides the `WindowSettings` dataclass, covering refresh
  rates, padding, touch deadzone, theme, IME and so on.
  `WindowSettings.register(settings, on_change)` registers it. The `on_change` callback
  receives `WindowSettingsChanged(field, value)` events.
- `novide.keyboard` provides `KeyboardManager`. It formats `KeyEvent` values into the
  editor's key notation, for example `<C-S-A>`, `<M-Left>`, `<lt>`, `<kEnter>` or
  `<Space>`.
  - The output depends on the current `Modifiers` and on the `use_alt` flag.
  - IME preedit text suppresses key events.
  - `get_special_key` and `numpad_key_name` are also available on their own.
- `novide.mouse` provides `MouseManager`. It turns pointer motion, button transitions,
  line and pixel scrolling, and touch gestures into command values. The command types
  are `MouseButtonCommand`, `DragCommand` and `ScrollCommand`.
  - Commands are handed to a `send` callback.
  - Drawn windows are described by `WindowRegion`. The helpers `clamp_position`,
    `to_grid_coords` and `button_text` are exposed.
  - `handle_key_pressed()` and `handle_cursor_shown()` report whether the cursor
    should be hidden or shown again.

## What this package does not do

There is no application or command here. The package:

- does not open a window or render anything;
- does not start or connect to an editor process;
- does not call any window-system API.

The managers return or send plain values. Delivering those values to the editor, and
showing or hiding the cursor, is left to the caller.

## Installation

```
pip install .
```

To install with the test dependencies and run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from novide.ring_buffer import RingBuffer
from novide.keyboard import KeyboardManager, KeyEvent, Modifiers

buffer = RingBuffer(5, 0)
buffer.clone_from_iter([1, 2, 3, 4, 5])
buffer.rotate(2)
assert list(buffer) == [3, 4, 5, 1, 2]
assert buffer[-2] == 1

keyboard = KeyboardManager(use_alt=True)
keyboard.set_modifiers(Modifiers(control=True))
assert keyboard.format_modifier_string("a", False) == "C-"
assert keyboard.format_key(KeyEvent(named_key="ArrowLeft")) == "<C-Left>"
```