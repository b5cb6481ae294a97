"""Preset command: load and save instrument presets."""

import argparse

from ...drivers.base import SpectrumAnalyzerBase
from ..types import unsigned
from .base import Command, Operation, apply


class PresetCommand(Command):
    """Load or save a preset slot."""

    name = "preset"
    aliases = ("pr",)
    help = "Load or save device presets"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        group = parser.add_mutually_exclusive_group()
        group.add_argument(
            "-l", "--load", type=unsigned, metavar="SLOT", help="Load preset"
        )
        group.add_argument(
            "-s", "--save", type=unsigned, metavar="SLOT", help="Save preset"
        )

    def operations(self) -> list[Operation]:
        ops = []
        if self.args.load is not None:
            ops.append(self.load_preset)
        if self.args.save is not None:
            ops.append(self.save_preset)
        return ops

    def load_preset(self, device: SpectrumAnalyzerBase) -> None:
        slot = self.args.load
        apply(f"load preset {slot}", device.load_preset, slot)

    def save_preset(self, device: SpectrumAnalyzerBase) -> None:
        slot = self.args.save
        apply(f"save preset {slot}", device.save_preset, slot)
