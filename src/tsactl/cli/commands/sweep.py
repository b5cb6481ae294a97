"""Sweep command: frequency range, points, time and sweep state."""

import argparse

from ...drivers.base import SWEEP_MODE_OPTIONS, DeviceError, SpectrumAnalyzerBase
from ...utils.format import format_frequency, format_time_duration
from ..errors import CommandError
from ..types import choice, frequency, frequency_rel, time_duration, unsigned
from .base import Command, Operation, apply


class SweepCommand(Command):
    """Set sweep parameters like frequency range and mode."""

    name = "sweep"
    aliases = ("sw",)
    help = "Set sweep parameters like freq range and mode"
    show_without_operations = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("sweep flags")
        group.add_argument("-p", "--pause", action="store_true", help="Pause sweep")
        group.add_argument("-r", "--resume", action="store_true", help="Resume sweep")
        group.add_argument(
            "-m",
            "--mode",
            type=choice(SWEEP_MODE_OPTIONS),
            metavar="MODE",
            help=f"Sweep mode ({', '.join(SWEEP_MODE_OPTIONS)})",
        )
        group.add_argument(
            "-s", "--start", type=frequency_rel, metavar="FREQ", help="Start frequency"
        )
        group.add_argument(
            "-e", "--stop", type=frequency_rel, metavar="FREQ", help="Stop frequency"
        )
        group.add_argument(
            "-S", "--span", type=frequency_rel, metavar="FREQ", help="Span frequency"
        )
        group.add_argument(
            "-C", "--center", type=frequency_rel, metavar="FREQ", help="Center frequency"
        )
        group.add_argument(
            "-M",
            "--center-marker",
            type=unsigned,
            metavar="MARKER",
            help="Set center frequency from marker",
        )
        group.add_argument(
            "-n", "--points", type=unsigned, help="Number of sweep points"
        )
        group.add_argument("-t", "--time", type=time_duration, help="Sweep time")
        group.add_argument(
            "--cw",
            type=frequency,
            metavar="FREQ",
            help="Set continuous wave frequency",
        )

    def operations(self) -> list[Operation]:
        args = self.args
        ops = []

        if args.pause:
            ops.append(self.pause_sweep)
        if args.resume:
            ops.append(self.resume_sweep)
        if args.mode is not None:
            ops.append(self.set_sweep_mode)
        if args.start is not None:
            ops.append(self.set_sweep_start)
        if args.stop is not None:
            ops.append(self.set_sweep_stop)
        if args.span is not None:
            ops.append(self.set_sweep_span)
        if args.center is not None:
            ops.append(self.set_sweep_center)
        if args.center_marker is not None:
            ops.append(self.set_sweep_center_from_marker)
        if args.points is not None:
            ops.append(self.set_sweep_points)
        if args.time is not None:
            ops.append(self.set_sweep_time)
        if args.cw is not None:
            ops.append(self.set_sweep_cw)

        return ops

    def show(self, device: SpectrumAnalyzerBase) -> None:
        state = device.get_sweep_status()
        sweep = device.get_sweep()

        print(f"Status: {state}")
        if sweep.is_cw:
            print(f"Frequency: {format_frequency(sweep.start)} (CW)")
        else:
            print(
                f"Frequency: {format_frequency(sweep.start)} to "
                f"{format_frequency(sweep.stop)} ({sweep.points} points)"
            )
            print(f"Center: {format_frequency(sweep.center)}")
            print(f"Span: {format_frequency(sweep.span)}")

    def pause_sweep(self, device: SpectrumAnalyzerBase) -> None:
        apply("pause sweep", device.pause_sweep)

    def resume_sweep(self, device: SpectrumAnalyzerBase) -> None:
        apply("resume sweep", device.resume_sweep)

    def set_sweep_mode(self, device: SpectrumAnalyzerBase) -> None:
        mode = self.args.mode
        apply(f"set sweep mode to {mode}", device.set_sweep_mode, mode)

    def set_sweep_start(self, device: SpectrumAnalyzerBase) -> None:
        freq = self.args.start.resolve(lambda: device.get_sweep().start)
        apply(
            f"set sweep start frequency to {format_frequency(freq)}",
            device.set_sweep_start,
            freq,
        )

    def set_sweep_stop(self, device: SpectrumAnalyzerBase) -> None:
        freq = self.args.stop.resolve(lambda: device.get_sweep().stop)
        apply(
            f"set sweep stop frequency to {format_frequency(freq)}",
            device.set_sweep_stop,
            freq,
        )

    def set_sweep_span(self, device: SpectrumAnalyzerBase) -> None:
        freq = self.args.span.resolve(lambda: device.get_sweep().span)
        apply(
            f"set sweep span frequency to {format_frequency(freq)}",
            device.set_sweep_span,
            freq,
        )

    def set_sweep_center(self, device: SpectrumAnalyzerBase) -> None:
        freq = self.args.center.resolve(lambda: device.get_sweep().center)
        apply(
            f"set sweep center frequency to {format_frequency(freq)}",
            device.set_sweep_center,
            freq,
        )

    def set_sweep_center_from_marker(self, device: SpectrumAnalyzerBase) -> None:
        marker_id = self.args.center_marker
        try:
            marker = device.get_marker(marker_id)
        except DeviceError as e:
            raise CommandError(f"failed to get marker #{marker_id}: {e}") from e
        apply(
            f"set sweep center frequency from marker #{marker_id} "
            f"({format_frequency(marker.frequency)})",
            device.set_sweep_center,
            marker.frequency,
        )

    def set_sweep_points(self, device: SpectrumAnalyzerBase) -> None:
        points = self.args.points
        apply(f"set sweep points to {points}", device.set_sweep_points, points)

    def set_sweep_time(self, device: SpectrumAnalyzerBase) -> None:
        time_us = self.args.time
        apply(
            f"set sweep time to {format_time_duration(time_us)}",
            device.set_sweep_time,
            time_us,
        )

    def set_sweep_cw(self, device: SpectrumAnalyzerBase) -> None:
        freq = self.args.cw
        apply(
            f"set sweep cw frequency to {format_frequency(freq)}",
            device.set_sweep_cw,
            freq,
        )
