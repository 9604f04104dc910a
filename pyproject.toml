[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chippus"
version = "0.1.0"
description = "A CHIP-8 emulator with a desktop window showing the screen, CPU state and program code"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["chip8", "chip-8", "emulator", "interpreter", "retro"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
chippus = "chippus.app:main"

[tool.hatch.build.targets.wheel]
packages = ["chippus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
