"""Monochrome 64x32 display buffer with XOR sprite drawing."""

from __future__ import annotations

from collections.abc import Sequence


class Screen:
    """A 64x32 one-bit frame buffer that tracks whether it changed."""

    WIDTH = 64
    HEIGHT = 32

    def __init__(self) -> None:
        self.buffer = bytearray(self.WIDTH * self.HEIGHT)
        self.dirty = True

    def _index(self, x: int, y: int) -> int:
        index = y * self.WIDTH + x
        if x < 0 or y < 0 or index >= len(self.buffer):
            raise IndexError(f"pixel ({x}, {y}) is outside the screen")
        return index

    def clear(self) -> None:
        """Turn every pixel off."""
        self.buffer = bytearray(self.WIDTH * self.HEIGHT)
        self.dirty = True

    def get_pixel(self, x: int, y: int) -> int:
        """Return 1 if the pixel at (x, y) is lit, otherwise 0."""
        return self.buffer[self._index(x, y)]

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        """Light or clear the pixel at (x, y)."""
        self.buffer[self._index(x, y)] = 1 if value else 0
        self.dirty = True

    def draw(self, coords: tuple[int, int], sprite_data: Sequence[int]) -> bool:
        """XOR a sprite onto the screen, wrapping at the edges.

        Each byte of ``sprite_data`` is one 8-pixel row, most significant bit
        leftmost. Returns True if any lit pixel was turned off.
        """
        origin_x, origin_y = coords
        collision = False
        for row_offset, row in enumerate(sprite_data):
            for bit in range(8):
                if (row >> (7 - bit)) & 0x01 != 1:
                    continue
                x = (origin_x + bit) % self.WIDTH
                y = (origin_y + row_offset) % self.HEIGHT
                old = self.get_pixel(x, y)
                if old == 1:
                    collision = True
                self.set_pixel(x, y, old != 1)
        return collision