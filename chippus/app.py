"""Desktop front end: ROM picker, CPU and code views, and the main loop."""

from __future__ import annotations

import argparse
import os
from collections.abc import Callable
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from chippus.chip8 import Emulator  # noqa: E402
from chippus.emu_window import RGBA, EmulatorWindow  # noqa: E402
from chippus.keyboard import Keyboard  # noqa: E402

TITLE = "CHIPPUS - CHIP8 EMU"
WINDOW_SIZE = (1398, 632)
FONT_SIZE = 18
FRAME_RATE = 500
DEFAULT_ROM_DIR = Path("roms")

CLEAR_COLOR = (8, 8, 8)
PANEL_COLOR = (20, 20, 20)
TITLE_COLOR = (94, 69, 75)
TEXT_COLOR = (230, 230, 230)
HIGHLIGHT_COLOR = (0, 255, 0)
BUTTON_COLOR = (60, 70, 62)
BUTTON_HOVER_COLOR = (100, 115, 104)

ROMS_RECT = pygame.Rect(1031, 5, 363, 623)
CPU_RECT = pygame.Rect(728, 418, 300, 210)
CODE_RECT = pygame.Rect(728, 5, 300, 410)
ABOUT_RECT = pygame.Rect(5, 418, 720, 210)
SCREEN_POSITION = (5, 5)

COLOR_PRESETS = (
    RGBA(0.0, 0.76, 0.02, 1.0),
    RGBA(1.0, 1.0, 1.0, 1.0),
    RGBA(1.0, 0.69, 0.0, 1.0),
    RGBA(0.3, 0.6, 1.0, 1.0),
)

ABOUT_TEXT = (
    "Welcome to CHIPPUS! Yet another Chip8 Emulator.",
    "",
    "How to use this Emulator?",
    "Step - 1:",
    "    Select ROM file.",
    "",
    "Step - 2:",
    "    Use these Controls:",
    "    1,2,3,4,",
    "    Q,W,E,R,",
    "    A,S,D,F,",
    "    Z,X,C,V",
)


class Application:
    """Owns the emulator, the list of ROMs and the on-screen panels."""

    def __init__(
        self,
        rom_dir: str | os.PathLike[str] = DEFAULT_ROM_DIR,
        emulator: Emulator | None = None,
    ) -> None:
        self.emulator = emulator if emulator is not None else Emulator()
        self.roms = self.load_roms(rom_dir)
        self.screen_window = EmulatorWindow()
        self._buttons: list[tuple[pygame.Rect, Callable[[], None]]] = []
        self._rom_scroll = 0
        self._last_dt = 0.0
        self._color_index = 0

    @staticmethod
    def load_roms(rom_dir: str | os.PathLike[str]) -> list[Path]:
        """Find every ``.ch8`` file below ``rom_dir``, sorted by path."""
        return sorted(path for path in Path(rom_dir).glob("**/*.ch8") if path.is_file())

    def select_rom(self, index: int) -> None:
        """Load the ROM at ``index`` in the list and start running it."""
        self.emulator.load_rom(self.roms[index])

    def set_key_state(self, key_name: str, state: bool) -> None:
        """Press or release the keypad key mapped to a physical key name."""
        self.emulator.keyboard.set(Keyboard.map_key(key_name), state)

    def cpu_state_lines(self) -> list[str]:
        """Return the text of the CPU state panel."""
        emu = self.emulator
        lines = [f"PC: {_hex(emu.pc)}", f"I: {_hex(emu.i)}"]
        registers = [f"V{index:X}: {_hex(value)}" for index, value in enumerate(emu.v)]
        lines.extend(" ".join(registers[row : row + 4]) for row in range(0, len(registers), 4))
        lines.append(f"Delay Timer: {emu.delay_timer}")
        lines.append(f"Sound Timer: {emu.sound_timer}")
        lines.extend(["Stack:", f"(Size: {len(emu.stack)}),", "Values:"])
        lines.append(" ".join(f"{value:X}" for value in emu.stack))
        return lines

    def code_lines(self) -> list[tuple[str, bool]]:
        """Return each loaded instruction as text, flagged when it is at the PC."""
        start, end = self.emulator.code_memory_location()
        code = self.emulator.ram[start:end]
        return [
            (f"{offset + 1:>4}: {high:02X}{low:02X}", self.emulator.pc == start + offset)
            for offset, (high, low) in zip(range(0, len(code), 2), zip(code[0::2], code[1::2]))
        ]

    def render(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        """Draw every panel onto ``surface``."""
        surface.fill(CLEAR_COLOR)
        self._buttons = []
        self._render_emulator(surface, font)
        self._render_roms(surface, font)
        self._render_cpu_state(surface, font)
        self._render_code(surface, font)
        self._render_about(surface, font)

    def run(self) -> None:
        """Open the window and run the event loop until it is closed."""
        pygame.init()
        try:
            display = pygame.display.set_mode(WINDOW_SIZE)
            pygame.display.set_caption(TITLE)
            font = pygame.font.Font(None, FONT_SIZE)
            clock = pygame.time.Clock()
            self.screen_window.update(self.emulator)
            running = True
            while running:
                dt = clock.tick(FRAME_RATE) / 1000.0
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                        self.set_key_state(
                            pygame.key.name(event.key), event.type == pygame.KEYDOWN
                        )
                    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        self._click(event.pos)
                    elif event.type == pygame.MOUSEWHEEL:
                        self._scroll_roms(-event.y)

                self._last_dt = dt
                self.emulator.execute_cycle(dt)
                if self.emulator.screen.dirty:
                    self.emulator.screen.dirty = False
                    self.screen_window.update(self.emulator)

                self.render(display, font)
                pygame.display.flip()
        finally:
            pygame.quit()

    def _click(self, pos) -> None:
        for rect, action in self._buttons:
            if rect.collidepoint(pos):
                action()
                return

    def _scroll_roms(self, amount: int) -> None:
        self._rom_scroll = max(0, min(len(self.roms) - 1, self._rom_scroll + amount))

    def _cycle_color(self) -> None:
        self._color_index = (self._color_index + 1) % len(COLOR_PRESETS)
        self.screen_window.color = COLOR_PRESETS[self._color_index]

    def _panel(self, surface, font, title: str, rect: pygame.Rect) -> int:
        pygame.draw.rect(surface, PANEL_COLOR, rect, border_radius=8)
        bar = pygame.Rect(rect.x, rect.y, rect.width, font.get_linesize() + 4)
        pygame.draw.rect(surface, TITLE_COLOR, bar, border_radius=8)
        surface.blit(font.render(title, True, TEXT_COLOR), (rect.x + 6, rect.y + 2))
        return bar.bottom + 4

    def _button(self, surface, font, label: str, rect: pygame.Rect, action) -> None:
        hovered = rect.collidepoint(pygame.mouse.get_pos()) if pygame.get_init() else False
        pygame.draw.rect(
            surface, BUTTON_HOVER_COLOR if hovered else BUTTON_COLOR, rect, border_radius=8
        )
        text = font.render(label, True, TEXT_COLOR)
        surface.blit(text, text.get_rect(center=rect.center))
        self._buttons.append((rect, action))

    def _render_emulator(self, surface, font) -> None:
        image_rect = self.screen_window.render(surface, SCREEN_POSITION)
        height = font.get_linesize() + 8
        x = image_rect.x
        y = image_rect.bottom + 4
        controls = (
            ("PAUSE", lambda: self.screen_window.pause(self.emulator)),
            ("START", lambda: self.screen_window.start(self.emulator)),
            ("STEP", lambda: self.screen_window.step(self.emulator, self._last_dt)),
            ("COLOR", self._cycle_color),
        )
        for label, action in controls:
            width = font.size(label)[0] + 20
            self._button(surface, font, label, pygame.Rect(x, y, width, height), action)
            x += width + 6

    def _render_roms(self, surface, font) -> None:
        y = self._panel(surface, font, "ROMs Available", ROMS_RECT)
        height = font.get_linesize() + 6
        for index, rom in enumerate(self.roms[self._rom_scroll :], start=self._rom_scroll):
            if y + height > ROMS_RECT.bottom - 4:
                break
            rect = pygame.Rect(ROMS_RECT.x + 15, y, 333, height)
            self._button(surface, font, rom.name, rect, lambda i=index: self.select_rom(i))
            y += height + 4

    def _render_cpu_state(self, surface, font) -> None:
        y = self._panel(surface, font, "Current CPU State", CPU_RECT)
        for line in self.cpu_state_lines():
            surface.blit(font.render(line, True, TEXT_COLOR), (CPU_RECT.x + 6, y))
            y += font.get_linesize()

    def _render_code(self, surface, font) -> None:
        top = self._panel(surface, font, "Code", CODE_RECT)
        line_height = font.get_linesize()
        visible = max(1, (CODE_RECT.bottom - top - 4) // line_height)
        lines = self.code_lines()
        current = next((index for index, (_, at_pc) in enumerate(lines) if at_pc), 0)
        first = max(0, min(current - visible // 2, len(lines) - visible))
        y = top
        for text, at_pc in lines[first : first + visible]:
            color = HIGHLIGHT_COLOR if at_pc else TEXT_COLOR
            surface.blit(font.render(text, True, color), (CODE_RECT.x + 6, y))
            y += line_height

    def _render_about(self, surface, font) -> None:
        y = self._panel(surface, font, "About", ABOUT_RECT)
        for line in ABOUT_TEXT:
            surface.blit(font.render(line, True, TEXT_COLOR), (ABOUT_RECT.x + 6, y))
            y += font.get_linesize() - 4


def _hex(value: int) -> str:
    return f"0x{value:X}"


def main(argv=None) -> int:
    """Start the emulator window."""
    parser = argparse.ArgumentParser(prog="chippus", description="CHIP-8 emulator")
    parser.add_argument(
        "--roms",
        type=Path,
        default=DEFAULT_ROM_DIR,
        help="directory searched recursively for .ch8 files",
    )
    args = parser.parse_args(argv)
    Application(rom_dir=args.roms).run()
    return 0