"""Subcommands of the tsactl command-line interface."""

from .base import Command, apply, print_table
from .device import DeviceCommand
from .level import LevelCommand
from .marker import MarkerCommand
from .menu import MenuCommand
from .preset import PresetCommand
from .raw import RawCommand
from .save import SaveCommand
from .signal import SignalCommand
from .sweep import SweepCommand
from .trace import TraceCommand

# Registration order is the order shown in --help
COMMANDS: list[type[Command]] = [
    DeviceCommand,
    LevelCommand,
    MarkerCommand,
    MenuCommand,
    PresetCommand,
    RawCommand,
    SaveCommand,
    SignalCommand,
    SweepCommand,
    TraceCommand,
]

__all__ = [
    "COMMANDS",
    "Command",
    "apply",
    "print_table",
    "DeviceCommand",
    "LevelCommand",
    "MarkerCommand",
    "MenuCommand",
    "PresetCommand",
    "RawCommand",
    "SaveCommand",
    "SignalCommand",
    "SweepCommand",
    "TraceCommand",
]
