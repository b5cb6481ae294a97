"""Save command: screen captures and trace data to files."""

import argparse
import os
from datetime import datetime

from ...config.constants import (
    FILENAME_CAPTURE_DEFAULT,
    FILENAME_TRACE_DEFAULT,
    FILENAME_TRACE_MULTI_DEFAULT,
)
from ...drivers.base import DeviceError, SpectrumAnalyzerBase
from ...utils.export import TraceExporter, replace_filename_placeholders, save_capture
from ..errors import CommandError
from ..types import id_list
from .base import Command, Operation


class SaveCommand(Command):
    """Save screen capture or trace data."""

    name = "save"
    help = "Export screen capture or trace data to file"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("save flags")
        what = group.add_mutually_exclusive_group()
        what.add_argument(
            "-c", "--capture", action="store_true", help="Save screen capture as PNG"
        )
        what.add_argument(
            "-t",
            "--trace",
            type=id_list,
            action="extend",
            metavar="ID[,ID...]",
            help="Save trace data as CSV (repeatable)",
        )
        group.add_argument(
            "-o",
            "--output",
            metavar="PATH",
            help="Output file (placeholders: <date>, <time>, <trace>)",
        )

    def operations(self) -> list[Operation]:
        if self.args.capture:
            return [self.save_capture]
        if self.args.trace:
            return [self.save_traces]
        return []

    def output_path(self, default: str, trace: int | None = None) -> str:
        """Expand placeholders and place relative names in the output folder."""
        filename = replace_filename_placeholders(
            self.args.output or default, now=datetime.now(), trace=trace
        )
        if os.path.isabs(filename):
            return filename
        return os.path.join(self.settings.output_folder or ".", filename)

    def save_capture(self, device: SpectrumAnalyzerBase) -> None:
        try:
            image = device.capture()
        except DeviceError as e:
            raise CommandError(f"failed to capture screen: {e}") from e

        path = save_capture(image, self.output_path(FILENAME_CAPTURE_DEFAULT))
        print(f"capture saved to {path}")

    def save_traces(self, device: SpectrumAnalyzerBase) -> None:
        traces = self.args.trace
        exporter = TraceExporter()

        data = []
        for trace in traces:
            try:
                data.append(device.get_trace_data(trace))
            except DeviceError as e:
                raise CommandError(f"failed to get trace #{trace} data: {e}") from e

        if len(data) == 1:
            trace = traces[0]
            path = exporter.export_single(
                data[0], self.output_path(FILENAME_TRACE_DEFAULT, trace=trace)
            )
            print(f"trace {trace} data saved to {path}")
        else:
            path = exporter.export_multiple(
                data, self.output_path(FILENAME_TRACE_MULTI_DEFAULT)
            )
            print(f"traces {traces} saved to {path}")
