"""Marker command: enable markers, set frequency, delta and tracking."""

import argparse

from ...drivers.base import Marker, SpectrumAnalyzerBase
from ...utils.format import format_frequency
from ..errors import CommandError
from ..types import frequency_rel, marker_delta, unsigned
from .base import Command, Operation, apply, print_table


def marker_row(m: Marker) -> list[str]:
    return [
        f"Marker {m.marker}:",
        format_frequency(m.frequency),
        f"{m.value:g}",
        f"(Index {m.index})",
    ]


class MarkerCommand(Command):
    """Enable marker, set frequency, and tracking."""

    name = "marker"
    aliases = ("mk",)
    help = "Enable marker, set frequency, and tracking"
    show_without_operations = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "marker", type=unsigned, nargs="?", default=0, metavar="id", help="Marker id"
        )

        group = parser.add_argument_group("marker flags")
        state = group.add_mutually_exclusive_group()
        state.add_argument("-e", "--enable", action="store_true", help="Enable marker")
        state.add_argument("-d", "--disable", action="store_true", help="Disable marker")
        group.add_argument(
            "-t", "--trace", type=unsigned, metavar="TRACE", help="Assign marker to trace"
        )
        group.add_argument(
            "-f",
            "--freq",
            dest="frequency",
            type=frequency_rel,
            metavar="FREQ",
            help="Set marker to frequency",
        )
        group.add_argument(
            "-p",
            "--peak",
            action="store_true",
            help="Move marker to peak of assigned trace",
        )
        group.add_argument(
            "--delta",
            type=marker_delta,
            metavar="<OFF|MARKER>",
            help="Enable delta mode (off or reference marker)",
        )
        group.add_argument(
            "--track",
            dest="tracking",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Enable tracking mode",
        )

    def operations(self) -> list[Operation]:
        args = self.args
        ops = []

        if args.enable:
            ops.append(self.enable_marker)
        if args.disable:
            ops.append(self.disable_marker)
        if args.trace is not None:
            ops.append(self.assign_trace)
        if args.frequency is not None:
            ops.append(self.set_frequency)
        if args.delta is not None and args.delta.off:
            ops.append(self.disable_delta)
        if args.delta is not None and args.delta.ref_marker > 0:
            ops.append(self.enable_delta)
        if args.peak:
            ops.append(self.set_peak)
        if args.tracking is not None:
            ops.append(self.enable_tracking if args.tracking else self.disable_tracking)

        return ops

    def validate(self, operations: list[Operation]) -> None:
        if operations and not self.args.marker:
            raise CommandError('expected "<id>"')

    def show(self, device: SpectrumAnalyzerBase) -> None:
        # Details about a specific marker
        if self.args.marker:
            print_table([marker_row(device.get_marker(self.args.marker))])
            return

        print("Active markers:")
        print_table([marker_row(m) for m in device.get_markers()])

    def enable_marker(self, device: SpectrumAnalyzerBase) -> None:
        marker = self.args.marker
        apply(f"enable marker #{marker}", device.enable_marker, marker)

    def disable_marker(self, device: SpectrumAnalyzerBase) -> None:
        marker = self.args.marker
        apply(f"disable marker #{marker}", device.disable_marker, marker)

    def assign_trace(self, device: SpectrumAnalyzerBase) -> None:
        marker, trace = self.args.marker, self.args.trace
        apply(
            f"assign marker #{marker} to trace #{trace}",
            device.set_marker_trace,
            marker,
            trace,
        )

    def set_frequency(self, device: SpectrumAnalyzerBase) -> None:
        marker = self.args.marker
        freq = self.args.frequency.resolve(lambda: device.get_marker(marker).frequency)
        apply(
            f"set marker #{marker} to frequency {format_frequency(freq)}",
            device.set_marker_frequency,
            marker,
            freq,
        )

    def enable_delta(self, device: SpectrumAnalyzerBase) -> None:
        marker, ref = self.args.marker, self.args.delta.ref_marker
        apply(
            f"enable delta mode for marker #{marker} relative to marker #{ref}",
            device.enable_marker_delta,
            marker,
            ref,
        )

    def disable_delta(self, device: SpectrumAnalyzerBase) -> None:
        marker = self.args.marker
        apply(
            f"disable delta mode for marker #{marker}",
            device.disable_marker_delta,
            marker,
        )

    def set_peak(self, device: SpectrumAnalyzerBase) -> None:
        marker = self.args.marker
        apply(f"set marker #{marker} to peak", device.move_marker_peak, marker)

    def enable_tracking(self, device: SpectrumAnalyzerBase) -> None:
        marker = self.args.marker
        apply(
            f"enable tracking for marker #{marker}",
            device.enable_marker_tracking,
            marker,
        )

    def disable_tracking(self, device: SpectrumAnalyzerBase) -> None:
        marker = self.args.marker
        apply(
            f"disable tracking for marker #{marker}",
            device.disable_marker_tracking,
            marker,
        )
