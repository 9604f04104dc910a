import pytest

from chippus.app import Application
from chippus.chip8 import Emulator, PROGRAM_START


@pytest.fixture
def rom_dir(tmp_path):
    (tmp_path / "games").mkdir()
    (tmp_path / "games" / "b.ch8").write_bytes(bytes([0x12, 0x00]))
    (tmp_path / "a.ch8").write_bytes(bytes([0x12, 0x00, 0xAB, 0xCD]))
    (tmp_path / "notes.txt").write_text("not a rom")
    return tmp_path


def test_load_roms_finds_nested_ch8_files(rom_dir):
    roms = Application.load_roms(rom_dir)
    assert [path.name for path in roms] == ["a.ch8", "b.ch8"]
    assert roms == sorted(roms)


def test_load_roms_missing_directory_is_empty(tmp_path):
    assert Application.load_roms(tmp_path / "absent") == []


def test_select_rom_loads_and_starts(rom_dir):
    app = Application(rom_dir=rom_dir)
    app.select_rom(0)
    assert app.emulator.pause is False
    assert app.emulator.code_memory_location() == (PROGRAM_START, PROGRAM_START + 4)
    assert app.emulator.ram[PROGRAM_START : PROGRAM_START + 4] == bytes([0x12, 0x00, 0xAB, 0xCD])


def test_select_rom_out_of_range(rom_dir):
    app = Application(rom_dir=rom_dir)
    with pytest.raises(IndexError):
        app.select_rom(len(app.roms))


def test_set_key_state_maps_physical_key(tmp_path):
    app = Application(rom_dir=tmp_path)
    app.set_key_state("Q", True)
    assert app.emulator.keyboard.is_key_pressed(4)
    app.set_key_state("q", False)
    assert app.emulator.keyboard.get_pressed_key() is None


def test_set_key_state_unknown_key_maps_to_zero(tmp_path):
    app = Application(rom_dir=tmp_path)
    app.set_key_state("space", True)
    assert app.emulator.keyboard.get_pressed_key() == 0


def test_cpu_state_lines_show_registers(tmp_path):
    app = Application(rom_dir=tmp_path)
    app.emulator.execute_instruction(0xA123)
    lines = app.cpu_state_lines()
    assert lines[0] == "PC: 0x202"
    assert lines[1] == "I: 0x123"
    register_lines = [line for line in lines if line.startswith("V")]
    assert len(register_lines) == 4
    assert all(line.count(":") == 4 for line in register_lines)


def test_cpu_state_lines_show_stack(tmp_path):
    app = Application(rom_dir=tmp_path)
    app.emulator.execute_instruction(0x2300)
    lines = app.cpu_state_lines()
    assert "(Size: 1)," in lines
    assert lines[-1] == f"{PROGRAM_START + 2:X}"


def test_code_lines_mark_current_instruction(rom_dir):
    app = Application(rom_dir=rom_dir, emulator=Emulator())
    app.select_rom(0)
    lines = app.code_lines()
    assert len(lines) == 2
    assert [at_pc for _, at_pc in lines] == [True, False]
    assert lines[1][0].endswith("ABCD")
    app.emulator.pc = PROGRAM_START + 2
    assert [at_pc for _, at_pc in app.code_lines()] == [False, True]


def test_code_lines_empty_without_rom(tmp_path):
    app = Application(rom_dir=tmp_path)
    assert app.code_lines() == []