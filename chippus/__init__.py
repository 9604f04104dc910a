"""A CHIP-8 emulator core with a pygame desktop front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]