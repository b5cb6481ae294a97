"""Trace command: enable traces and set calculation modes."""

import argparse

from ...drivers.base import TRACE_CALC_OPTIONS, SpectrumAnalyzerBase, Trace
from ..errors import CommandError
from ..types import choice, unsigned
from .base import Command, Operation, apply, print_table

TRACE_CALC_CHOICES = ["off"] + TRACE_CALC_OPTIONS


def trace_row(t: Trace) -> list[str]:
    return [f"Trace {t.trace}:", t.unit, f"{t.ref_level:f}", f"{t.scale:f}"]


class TraceCommand(Command):
    """Enable traces and set calculation modes."""

    name = "trace"
    aliases = ("tr",)
    help = "Enable traces and set calculation modes"
    show_without_operations = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "trace", type=unsigned, nargs="?", default=0, metavar="id", help="Trace id"
        )

        group = parser.add_argument_group("trace flags")
        group.add_argument("-e", "--enable", action="store_true", help="Enable trace")
        group.add_argument("-d", "--disable", action="store_true", help="Disable trace")
        group.add_argument(
            "-c",
            "--calc",
            type=choice(TRACE_CALC_CHOICES),
            metavar="MODE",
            help=f"Enable trace calculation ({', '.join(TRACE_CALC_CHOICES)})",
        )

    def operations(self) -> list[Operation]:
        args = self.args
        ops = []

        if args.enable:
            ops.append(self.enable_trace)
        if args.disable:
            ops.append(self.disable_trace)
        if args.calc is not None:
            ops.append(
                self.disable_trace_calc if args.calc == "off" else self.enable_trace_calc
            )

        return ops

    def validate(self, operations: list[Operation]) -> None:
        if operations and not self.args.trace:
            raise CommandError('expected "<id>"')

    def show(self, device: SpectrumAnalyzerBase) -> None:
        if self.args.trace:
            print_table([trace_row(device.get_trace(self.args.trace))])
            return

        print("Active traces:")
        print_table([trace_row(t) for t in device.get_traces()])

    def enable_trace(self, device: SpectrumAnalyzerBase) -> None:
        trace = self.args.trace
        apply(f"enable trace #{trace}", device.enable_trace, trace)

    def disable_trace(self, device: SpectrumAnalyzerBase) -> None:
        trace = self.args.trace
        apply(f"disable trace #{trace}", device.disable_trace, trace)

    def disable_trace_calc(self, device: SpectrumAnalyzerBase) -> None:
        trace = self.args.trace
        apply(
            f"disable calculations on trace #{trace}", device.disable_trace_calc, trace
        )

    def enable_trace_calc(self, device: SpectrumAnalyzerBase) -> None:
        trace, mode = self.args.trace, self.args.calc

        # Calculations only show on a visible trace
        apply(f"enable trace #{trace}", device.enable_trace, trace)
        apply(
            f"enable trace calculation {mode} for trace #{trace}",
            device.enable_trace_calc,
            trace,
            mode,
        )
