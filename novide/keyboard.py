"""Translation of key presses into the editor's key notation."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Modifiers:
    shift: bool = False
    control: bool = False
    alt: bool = False
    super_key: bool = False


class KeyLocation(enum.Enum):
    STANDARD = "standard"
    LEFT = "left"
    RIGHT = "right"
    NUMPAD = "numpad"


@dataclass(frozen=True)
class KeyEvent:
    """A key press or release.

    ``logical_key`` is the character the key produces, ``named_key`` the name
    of a non-character key such as ``"ArrowDown"``, and ``physical_key`` the
    physical key code such as ``"Numpad9"``.
    """

    logical_key: str | None = None
    named_key: str | None = None
    text: str | None = None
    location: KeyLocation = KeyLocation.STANDARD
    physical_key: str | None = None
    pressed: bool = True
    is_synthetic: bool = False


_NAMED_KEYS: dict[str, str] = {
    "ArrowDown": "Down",
    "ArrowLeft": "Left",
    "ArrowRight": "Right",
    "ArrowUp": "Up",
    "Backspace": "BS",
    "Delete": "Del",
    "End": "End",
    "Enter": "Enter",
    "Escape": "Esc",
    "Home": "Home",
    "Insert": "Insert",
    "PageDown": "PageDown",
    "PageUp": "PageUp",
    "Tab": "Tab",
    **{f"F{number}": f"F{number}" for number in range(1, 36)},
}

_NUMPAD_KEYS: dict[str, str] = {
    "NumpadDivide": "kDivide",
    "NumpadStar": "kMultiply",
    "NumpadSubtract": "kMinus",
    "NumpadAdd": "kPlus",
    "NumpadEnter": "kEnter",
    "NumpadDecimal": "kDel",
}

# Physical key -> (name with numlock, name without numlock)
_NUMPAD_NUMBER_KEYS: dict[str, tuple[str, str]] = {
    "Numpad9": ("k9", "kPageUp"),
    "Numpad8": ("k8", "kUp"),
    "Numpad7": ("k7", "kHome"),
    "Numpad6": ("k6", "kRight"),
    "Numpad5": ("k5", "kOrigin"),
    "Numpad4": ("k4", "kLeft"),
    "Numpad3": ("k3", "kPageDown"),
    "Numpad2": ("k2", "kDown"),
    "Numpad1": ("k1", "kEnd"),
    "Numpad0": ("k0", "Insert"),
}


def _is_ascii_alphabetic_char(text: str) -> bool:
    return len(text) == 1 and text.isascii() and text.isalpha()


def numpad_key_name(event: KeyEvent) -> str | None:
    """Name a numpad key; digit keys depend on whether numlock produced text."""
    if event.physical_key is None:
        return None
    if event.physical_key in _NUMPAD_KEYS:
        return _NUMPAD_KEYS[event.physical_key]
    names = _NUMPAD_NUMBER_KEYS.get(event.physical_key)
    if names is None:
        return None
    with_numlock, without_numlock = names
    return with_numlock if event.text is not None else without_numlock


def get_special_key(event: KeyEvent) -> str | None:
    """Return the key-notation name of a special key, or ``None``."""
    if event.location is KeyLocation.NUMPAD:
        return numpad_key_name(event)
    if event.named_key is None:
        return None
    if event.named_key == "Space":
        # Space can finish a dead key sequence; only then is it not special.
        return "Space" if event.text == " " else None
    return _NAMED_KEYS.get(event.named_key)


class KeyboardManager:
    """Tracks modifier and IME state and formats key events."""

    def __init__(self, use_alt: bool = True) -> None:
        self.use_alt = use_alt
        self.modifiers = Modifiers()
        self.ime_preedit: tuple[str, tuple[int, int] | None] = ("", None)

    def set_modifiers(self, modifiers: Modifiers) -> None:
        logger.debug("%r", modifiers)
        self.modifiers = modifiers

    def handle_key_event(self, event: KeyEvent) -> str | None:
        """Return the keyboard input to send for ``event``, if any."""
        if event.is_synthetic or self.ime_preedit[0] or not event.pressed:
            return None
        text = self.format_key(event)
        if text is not None:
            logger.debug("Key pressed %s %r", text, self.modifiers)
        return text

    def handle_ime_commit(self, text: str) -> str:
        logger.debug("Ime commit %s", text)
        return text

    def handle_ime_preedit(self, text: str, cursor_offset: tuple[int, int] | None) -> None:
        self.ime_preedit = (text, cursor_offset)

    def format_key(self, event: KeyEvent) -> str | None:
        special = get_special_key(event)
        if special is not None:
            return self._format_key_text(special, True)
        text = event.text if event.text is not None else event.logical_key
        if text is None:
            return None
        return self._format_key_text(text, False)

    def _format_key_text(self, text: str, is_special: bool) -> str:
        # The editor uppercases shifted ascii letters itself; do the same here.
        if self.modifiers.shift and _is_ascii_alphabetic_char(text):
            text = text.upper()
        modifiers = self.format_modifier_string(text, is_special)
        if text == "<":
            text, is_special = "lt", True
        if modifiers:
            return f"<{modifiers}{text}>"
        return f"<{text}>" if is_special else text

    def format_modifier_string(self, text: str, is_special: bool) -> str:
        """Build the modifier prefix for ``text``.

        Shift is only sent with special keys, or with control and an ascii
        letter; alt is sent when alt counts as meta or with special keys.
        """
        state = self.modifiers
        include_shift = is_special or (state.control and _is_ascii_alphabetic_char(text))
        include_alt = self.use_alt or is_special
        parts = []
        if state.shift and include_shift:
            parts.append("S-")
        if state.control:
            parts.append("C-")
        if state.alt and include_alt:
            parts.append("M-")
        if state.super_key:
            parts.append("D-")
        return "".join(parts)