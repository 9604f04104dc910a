"""Sixteen-key hexadecimal keypad state."""

from __future__ import annotations

KEY_COUNT = 16

# Physical keys in keypad order: index 0 is "1", index 15 is "v".
KEY_LAYOUT = (
    "1", "2", "3", "4",
    "q", "w", "e", "r",
    "a", "s", "d", "f",
    "z", "x", "c", "v",
)

_KEY_INDEX = {name: index for index, name in enumerate(KEY_LAYOUT)}


class Keyboard:
    """Pressed/released state of the sixteen keypad keys."""

    def __init__(self) -> None:
        self.keys = [False] * KEY_COUNT

    @staticmethod
    def _check(key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise IndexError(f"key {key} is outside the keypad")
        return key

    def is_key_pressed(self, key: int) -> bool:
        """Return whether keypad key ``key`` is held down."""
        return self.keys[self._check(key)]

    def get_pressed_key(self) -> int | None:
        """Return the lowest pressed key, or None when no key is down."""
        return next((index for index, pressed in enumerate(self.keys) if pressed), None)

    def set(self, key: int, pressed: bool) -> None:
        """Record keypad key ``key`` as pressed or released."""
        self.keys[self._check(key)] = pressed

    @staticmethod
    def map_key(key_name: str) -> int:
        """Map a physical key name to its keypad index; unknown keys map to 0."""
        return _KEY_INDEX.get(key_name.lower(), 0)