"""Level command: trace unit, reference level, scale and LNA."""

import argparse

from ...drivers.base import TRACE_UNIT_OPTIONS, SpectrumAnalyzerBase
from ..types import choice
from .base import Command, Operation, apply


class LevelCommand(Command):
    """Set trace unit, reference level, scale and LNA."""

    name = "level"
    aliases = ("lv",)
    help = "Set trace unit, reference level, and scale"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("level flags")
        group.add_argument(
            "-u",
            "--unit",
            type=choice(TRACE_UNIT_OPTIONS),
            metavar="UNIT",
            help=f"Trace unit ({', '.join(TRACE_UNIT_OPTIONS)})",
        )
        ref = group.add_mutually_exclusive_group()
        ref.add_argument("--ref", type=int, metavar="LEVEL", help="Reference level")
        ref.add_argument(
            "--ref-auto", action="store_true", help="Automatic reference level"
        )
        group.add_argument("-s", "--scale", type=float, help="Scale per division")
        group.add_argument(
            "--lna",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Enable the low noise amplifier",
        )

    def operations(self) -> list[Operation]:
        args = self.args
        ops = []

        if args.unit is not None:
            ops.append(self.set_unit)
        if args.ref is not None:
            ops.append(self.set_ref_level)
        if args.ref_auto:
            ops.append(self.set_ref_level_auto)
        if args.scale is not None:
            ops.append(self.set_scale)
        if args.lna is not None:
            ops.append(self.enable_lna if args.lna else self.disable_lna)

        return ops

    def set_unit(self, device: SpectrumAnalyzerBase) -> None:
        unit = self.args.unit
        apply(f"set trace unit to {unit}", device.set_trace_unit, unit)

    def set_ref_level(self, device: SpectrumAnalyzerBase) -> None:
        level = self.args.ref
        apply(f"set reference level to {level}", device.set_ref_level, level)

    def set_ref_level_auto(self, device: SpectrumAnalyzerBase) -> None:
        apply("set reference level to auto", device.set_ref_level_auto)

    def set_scale(self, device: SpectrumAnalyzerBase) -> None:
        scale = self.args.scale
        apply(f"set trace scale to {scale:g}", device.set_trace_scale, scale)

    def enable_lna(self, device: SpectrumAnalyzerBase) -> None:
        apply("enable LNA", device.enable_lna)

    def disable_lna(self, device: SpectrumAnalyzerBase) -> None:
        apply("disable LNA", device.disable_lna)
