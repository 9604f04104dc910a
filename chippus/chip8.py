"""CHIP-8 virtual machine: memory, registers, timers and instruction set."""

from __future__ import annotations

import os
import random
from pathlib import Path

from chippus.keyboard import Keyboard
from chippus.screen import Screen

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
REGISTER_COUNT = 16
TIMER_PERIOD = 1.0 / 60.0

FONT = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)


class Emulator:
    """A CHIP-8 machine that executes one instruction per cycle."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.reset()

    def reset(self) -> None:
        """Return the machine to its power-on state, paused, with the font loaded."""
        self.ram = bytearray(MEMORY_SIZE)
        self.ram[: len(FONT)] = FONT
        self.stack: list[int] = []
        self.v = bytearray(REGISTER_COUNT)
        self.i = 0
        self.pc = PROGRAM_START
        self.delay_timer = 0
        self.sound_timer = 0
        self.screen = Screen()
        self.keyboard = Keyboard()
        self.pause = True
        self._total_dt = 0.0
        self._rom_len = 0

    def fetch_instruction(self) -> int:
        """Read the big-endian 16-bit instruction at the program counter."""
        return (self.ram[self.pc] << 8) | self.ram[self.pc + 1]

    def _memory_span(self, start: int, length: int) -> slice:
        if start < 0 or start + length > MEMORY_SIZE:
            raise IndexError(f"memory range {start:#x}+{length} is out of bounds")
        return slice(start, start + length)

    def execute_instruction(self, instruction: int) -> None:
        """Decode and execute one instruction, advancing the program counter."""
        op = (instruction >> 12) & 0xF
        x = (instruction >> 8) & 0xF
        y = (instruction >> 4) & 0xF
        n = instruction & 0xF
        nnn = instruction & 0x0FFF
        kk = instruction & 0x00FF
        v = self.v

        self.pc += 2

        match (op, x, y, n):
            case (0x0, 0x0, 0xE, 0x0):
                self.screen.clear()
            case (0x0, 0x0, 0xE, 0xE):
                if self.stack:
                    self.pc = self.stack.pop()
            case (0x1, _, _, _):
                self.pc = nnn
            case (0x2, _, _, _):
                self.stack.append(self.pc)
                self.pc = nnn
            case (0x3, _, _, _):
                if v[x] == kk:
                    self.pc += 2
            case (0x4, _, _, _):
                if v[x] != kk:
                    self.pc += 2
            case (0x5, _, _, 0x0):
                if v[x] == v[y]:
                    self.pc += 2
            case (0x6, _, _, _):
                v[x] = kk
            case (0x7, _, _, _):
                v[x] = (v[x] + kk) & 0xFF
            case (0x8, _, _, 0x0):
                v[x] = v[y]
            case (0x8, _, _, 0x1):
                v[x] |= v[y]
            case (0x8, _, _, 0x2):
                v[x] &= v[x]
            case (0x8, _, _, 0x3):
                v[x] ^= v[y]
            case (0x8, _, _, 0x4):
                total = v[x] + v[y]
                v[x] = total & 0xFF
                v[0xF] = 1 if total > 0xFF else 0
            case (0x8, _, _, 0x5):
                no_borrow = v[x] >= v[y]
                v[x] = (v[x] - v[y]) & 0xFF
                v[0xF] = 1 if no_borrow else 0
            case (0x8, _, _, 0x6):
                v[0xF] = v[x] & 1
                v[x] >>= 1
            case (0x8, _, _, 0x7):
                no_borrow = v[y] >= v[x]
                v[x] = (v[y] - v[x]) & 0xFF
                v[0xF] = 1 if no_borrow else 0
            case (0x8, _, _, 0xE):
                v[0xF] = v[x] >> 7
                v[x] = (v[x] << 1) & 0xFF
            case (0x9, _, _, 0x0):
                if v[x] != v[y]:
                    self.pc += 2
            case (0xA, _, _, _):
                self.i = nnn
            case (0xB, _, _, _):
                self.pc = nnn + v[0]
            case (0xC, _, _, _):
                v[x] = self._rng.randrange(256) & kk
            case (0xD, _, _, _):
                sprite = self.ram[self._memory_span(self.i, n)]
                v[0xF] = 1 if self.screen.draw((v[x], v[y]), sprite) else 0
            case (0xE, _, 0x9, 0xE):
                if self.keyboard.is_key_pressed(v[x]):
                    self.pc += 2
            case (0xE, _, 0xA, 0x1):
                if not self.keyboard.is_key_pressed(v[x]):
                    self.pc += 2
            case (0xF, _, 0x0, 0x7):
                v[x] = self.delay_timer
            case (0xF, _, 0x0, 0xA):
                key = self.keyboard.get_pressed_key()
                if key is None:
                    # Stay on this instruction until a key is pressed.
                    self.pc -= 2
                else:
                    v[x] = key
            case (0xF, _, 0x1, 0x5):
                self.delay_timer = v[x]
            case (0xF, _, 0x1, 0x8):
                self.sound_timer = v[x]
            case (0xF, _, 0x1, 0xE):
                self.i += v[x]
            case (0xF, _, 0x2, 0x9):
                self.i = v[x] * 5
            case (0xF, _, 0x3, 0x3):
                span = self._memory_span(self.i, 3)
                self.ram[span] = bytes([v[x] // 100, (v[x] // 10) % 10, v[x] % 10])
            case (0xF, _, 0x5, 0x5):
                self.ram[self._memory_span(self.i, x + 1)] = v[: x + 1]
                self.i += x + 1
            case (0xF, _, 0x5, 0x6):
                v[: x + 1] = self.ram[self._memory_span(self.i, x + 1)]
                self.i += x + 1
            case _:
                pass

    def execute_cycle(self, dt: float) -> None:
        """Advance timers by ``dt`` seconds and run one instruction unless paused."""
        if self.pause:
            return
        self._update_timer(dt)
        self.execute_instruction(self.fetch_instruction())

    def load_rom(self, romfile: str | os.PathLike[str]) -> None:
        """Reset the machine, copy a ROM file to 0x200 and start running."""
        contents = Path(romfile).read_bytes()
        capacity = MEMORY_SIZE - PROGRAM_START
        if len(contents) > capacity:
            raise ValueError(
                f"ROM '{romfile}' is {len(contents)} bytes; at most {capacity} fit in memory"
            )
        self.reset()
        self.ram[PROGRAM_START : PROGRAM_START + len(contents)] = contents
        self._rom_len = len(contents)
        self.pause = False

    def code_memory_location(self) -> tuple[int, int]:
        """Return the start and end addresses of the loaded program."""
        return (PROGRAM_START, PROGRAM_START + self._rom_len)

    def _update_timer(self, dt: float) -> None:
        if self.delay_timer > 0:
            self._total_dt += dt
            while self._total_dt > TIMER_PERIOD:
                self._total_dt -= TIMER_PERIOD
                self.delay_timer = max(0, self.delay_timer - 1)