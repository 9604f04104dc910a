# chippus

A CHIP-8 emulator. Its window shows the 64×32 display, the current CPU
state (program counter, index register, V0–VF, the timers and the call
stack), the loaded program's code with the instruction at the program
counter highlighted, and a list of ROMs to choose from.

## Installing

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Running

```
chippus
chippus --roms path/to/roms
```

`--roms` names the directory searched recursively for `*.ch8` files; it
defaults to `roms` in the current directory. Click a ROM in the
"ROMs Available" list to load it and start it; the mouse wheel scrolls
the list.

### Controls

The sixteen CHIP-8 keys map to the left-hand block of a keyboard:

```
1 2 3 4
Q W E R
A S D F
Z X C V
```

Below the display are four buttons:

- **PAUSE** stops the emulator.
- **START** lets it run again.
- **STEP** runs exactly one instruction and leaves it paused.
- **COLOR** cycles the display tint through a few preset colours.

Escape or closing the window quits.

## Using the emulator core

The core runs without a window:

```python
from chippus.chip8 import Emulator

emu = Emulator()
emu.load_rom("game.ch8")      # resets, loads at 0x200 and unpauses
emu.execute_cycle(1 / 60)     # advance the delay timer and run one instruction
print(hex(emu.pc), list(emu.v))
```

- `Emulator(rng=...)` takes an optional `random.Random` used by the
  `Cxkk` instruction, so runs can be made repeatable.
- `load_rom` raises `ValueError` when the file does not fit in memory
  above 0x200, and the usual `OSError` when it cannot be read.
- `execute_instruction(instruction)` runs a single 16-bit instruction
  directly; `fetch_instruction()` reads the one at the program counter.
- `code_memory_location()` gives the start and end addresses of the
  loaded program; `reset()` returns to the paused power-on state with
  the font in memory.

`Emulator.screen` is a `chippus.screen.Screen` (64×32, one byte per
pixel, with a `dirty` flag set whenever it changes). `Emulator.keyboard`
is a `chippus.keyboard.Keyboard` whose `set(key, pressed)` takes a key
number from 0 to 15; `Keyboard.map_key(name)` turns a key name such as
`"q"` into that number, and unknown names map to 0.

`chippus.emu_window.EmulatorWindow` turns the screen into a scaled,
tinted pygame surface, and `chippus.app.Application` holds the ROM list
and draws the panels.

## What it does not do

There is no sound: the sound timer can be set and read, but it is never
counted down and nothing is played. The emulator runs one instruction
per frame of the window's loop rather than at a configurable clock
speed.