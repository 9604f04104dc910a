"""Scaled, tinted view of the emulator display with run controls."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from chippus.chip8 import Emulator  # noqa: E402
from chippus.screen import Screen  # noqa: E402


@dataclass
class RGBA:
    """A colour with components in the range 0.0 to 1.0."""

    r: float
    g: float
    b: float
    a: float

    def to_array(self) -> tuple[float, float, float, float]:
        """Return the components as an (r, g, b, a) tuple."""
        return (self.r, self.g, self.b, self.a)

    @staticmethod
    def to_rgba_normalized(color) -> tuple[float, float, float, float]:
        """Scale four 0-255 components down to the 0.0-1.0 range."""
        r, g, b, a = color
        return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def to_rgba255(self) -> tuple[int, int, int, int]:
        """Return the colour as four 0-255 integers, clamped."""
        return tuple(
            max(0, min(255, round(component * 255))) for component in self.to_array()
        )


def _default_color() -> RGBA:
    return RGBA(0.0, 0.76, 0.02, 1.0)


_LIT = bytes((0xFF, 0xFF, 0xFF, 0xFF))
_UNLIT = bytes((0x00, 0x00, 0x00, 0xFF))


@dataclass
class EmulatorWindow:
    """Holds the RGBA pixels of the emulator screen and draws them scaled."""

    scale: float = 11.0
    color: RGBA = field(default_factory=_default_color)
    width: int = Screen.WIDTH
    height: int = Screen.HEIGHT
    data: bytearray = field(init=False)

    def __post_init__(self) -> None:
        self.data = bytearray(self.width * self.height * 4)

    @property
    def size(self) -> tuple[int, int]:
        """Size in pixels of the scaled image."""
        return (int(self.width * self.scale), int(self.height * self.scale))

    def update(self, emulator: Emulator) -> None:
        """Copy the emulator's screen into the RGBA pixel data."""
        self.data = bytearray(
            b"".join(_LIT if pixel == 1 else _UNLIT for pixel in emulator.screen.buffer)
        )

    def pause(self, emulator: Emulator) -> None:
        """Stop the emulator from running cycles."""
        emulator.pause = True

    def start(self, emulator: Emulator) -> None:
        """Let the emulator run cycles."""
        emulator.pause = False

    def step(self, emulator: Emulator, dt: float) -> None:
        """Run exactly one cycle and leave the emulator paused."""
        emulator.pause = False
        emulator.execute_cycle(dt)
        emulator.pause = True

    def to_surface(self) -> pygame.Surface:
        """Return the screen as a tinted surface scaled to ``size``."""
        image = pygame.image.frombuffer(
            bytes(self.data), (self.width, self.height), "RGBA"
        ).copy()
        image.fill(self.color.to_rgba255(), special_flags=pygame.BLEND_RGBA_MULT)
        return pygame.transform.scale(image, self.size)

    def render(self, surface: pygame.Surface, position) -> pygame.Rect:
        """Draw the scaled screen onto ``surface`` and return the area covered."""
        return surface.blit(self.to_surface(), position)