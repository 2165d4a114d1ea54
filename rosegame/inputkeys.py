"""Keyboard keys and mouse buttons watched by the engine, with display names and scancodes."""

from __future__ import annotations

from enum import IntEnum


class InputKey(IntEnum):
    """Keys an entity can listen to."""

    A = 0
    D = 1
    LEFT = 2
    RIGHT = 3
    DELETE = 4
    LCTRL = 5
    RCTRL = 6
    N = 7
    Q = 8
    W = 9
    E = 10
    C = 11
    M = 12
    S = 13
    X = 14
    O = 15
    G = 16
    F2 = 17
    LSHIFT = 18
    RSHIFT = 19
    LALT = 20
    RALT = 21
    P = 22
    ESC = 23


class InputMouse(IntEnum):
    """Mouse buttons an entity can listen to."""

    LEFT_BUTTON = 0
    RIGHT_BUTTON = 1
    MIDDLE_BUTTON = 2


_KEY_NAMES = {
    InputKey.A: "A",
    InputKey.D: "D",
    InputKey.LEFT: "Left Arrow",
    InputKey.RIGHT: "Right Arrow",
    InputKey.DELETE: "Delete",
    InputKey.LCTRL: "Left Ctrl",
    InputKey.RCTRL: "Right Ctrl",
    InputKey.N: "N",
    InputKey.Q: "Q",
    InputKey.W: "W",
    InputKey.E: "E",
    InputKey.C: "C",
    InputKey.M: "M",
    InputKey.S: "S",
    InputKey.X: "X",
    InputKey.O: "O",
    InputKey.G: "G",
    InputKey.F2: "F2",
    InputKey.LSHIFT: "Left Shift",
    InputKey.RSHIFT: "Right Shift",
    InputKey.LALT: "Left Alt",
    InputKey.RALT: "Right Alt",
    InputKey.P: "P",
    InputKey.ESC: "Escape",
}

# USB HID usage codes, as used for keyboard scancodes.
_KEY_SCANCODES = {
    InputKey.A: 4,
    InputKey.D: 7,
    InputKey.LEFT: 80,
    InputKey.RIGHT: 79,
    InputKey.DELETE: 76,
    InputKey.LCTRL: 224,
    InputKey.RCTRL: 228,
    InputKey.N: 17,
    InputKey.Q: 20,
    InputKey.W: 26,
    InputKey.E: 8,
    InputKey.C: 6,
    InputKey.M: 16,
    InputKey.S: 22,
    InputKey.X: 27,
    InputKey.O: 18,
    InputKey.G: 10,
    InputKey.F2: 59,
    InputKey.LSHIFT: 225,
    InputKey.RSHIFT: 229,
    InputKey.LALT: 226,
    InputKey.RALT: 230,
    InputKey.P: 19,
    InputKey.ESC: 41,
}

_MOUSE_NAMES = {
    InputMouse.LEFT_BUTTON: "Left Button",
    InputMouse.RIGHT_BUTTON: "Right Button",
    InputMouse.MIDDLE_BUTTON: "Middle Button",
}


def key_name(key: int) -> str:
    """Display name of a key; raises ValueError for an unknown key."""
    return _KEY_NAMES[InputKey(key)]


def mouse_button_name(button: int) -> str:
    """Display name of a mouse button; raises ValueError for an unknown button."""
    return _MOUSE_NAMES[InputMouse(button)]


def key_scancode(key: int) -> int:
    """Keyboard scancode of a key; raises ValueError for an unknown key."""
    return _KEY_SCANCODES[InputKey(key)]