"""Signal command: spur removal."""

import argparse

from ...drivers.base import SpectrumAnalyzerBase
from ..types import choice
from .base import Command, Operation, apply

SPUR_OPTIONS = ["on", "off", "auto"]


class SignalCommand(Command):
    """Signal processing settings."""

    name = "signal"
    aliases = ("sig",)
    help = "Configure signal processing options"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--spur",
            type=choice(SPUR_OPTIONS),
            metavar="<on|off|auto>",
            help="Spur removal",
        )

    def operations(self) -> list[Operation]:
        spur = self.args.spur
        if spur == "on":
            return [self.enable_spur_removal]
        if spur == "off":
            return [self.disable_spur_removal]
        if spur == "auto":
            return [self.enable_auto_spur_removal]
        return []

    def enable_spur_removal(self, device: SpectrumAnalyzerBase) -> None:
        apply("enable spur removal", device.enable_spur_removal)

    def disable_spur_removal(self, device: SpectrumAnalyzerBase) -> None:
        apply("disable spur removal", device.disable_spur_removal)

    def enable_auto_spur_removal(self, device: SpectrumAnalyzerBase) -> None:
        apply("set spur removal to auto", device.enable_auto_spur_removal)
