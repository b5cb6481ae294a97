"""
Export of trace data to CSV and screen captures to PNG.
"""

import csv
import os
from datetime import datetime

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from ..config.constants import FILENAME_DATE_FORMAT, FILENAME_TIME_FORMAT  # noqa: E402
from ..drivers.base import TraceData  # noqa: E402


def replace_filename_placeholders(
    filename: str, now: datetime | None = None, trace: int | None = None
) -> str:
    """
    Expand ``<date>``, ``<time>`` and ``<trace>`` in a filename template.

    Args:
        filename: Template, e.g. "SA_<date>_<time>_<trace>.csv"
        now: Timestamp to use (current time if None)
        trace: Trace id for ``<trace>`` (left untouched if None)

    Returns:
        Expanded filename
    """
    now = now or datetime.now()
    filename = filename.replace("<date>", now.strftime(FILENAME_DATE_FORMAT))
    filename = filename.replace("<time>", now.strftime(FILENAME_TIME_FORMAT))
    if trace is not None:
        filename = filename.replace("<trace>", str(trace))
    return filename


def format_value(value: float) -> str:
    """Shortest plain decimal representation, no exponent."""
    return np.format_float_positional(value, trim="-")


def _prepare_path(path: str) -> str:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return path


class TraceExporter:
    """Export trace data to CSV files."""

    def export_single(self, data: TraceData, path: str) -> str:
        """
        Export one trace as long format CSV.

        Columns: trace, point, frequency, value

        Returns:
            Path of the written file
        """
        if len(data.frequencies) != len(data.values):
            raise ValueError(f"Trace {data.trace} data length mismatch with frequencies")

        with open(_prepare_path(path), "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["trace", "point", "frequency", "value"])
            for point, (freq, value) in enumerate(zip(data.frequencies, data.values)):
                writer.writerow([data.trace, point, int(freq), format_value(value)])

        return path

    def export_multiple(self, traces: list[TraceData], path: str) -> str:
        """
        Export several traces side by side.

        Columns: point, frequency, value_t<N> for every trace. All traces
        must come from the same sweep.

        Returns:
            Path of the written file
        """
        if not traces:
            raise ValueError("No traces provided for export")

        frequencies = traces[0].frequencies
        for data in traces:
            if len(data.values) != len(frequencies):
                raise ValueError(
                    f"Trace {data.trace} data length mismatch with frequencies"
                )

        with open(_prepare_path(path), "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(
                ["point", "frequency"] + [f"value_t{data.trace}" for data in traces]
            )
            for point, freq in enumerate(frequencies):
                row = [point, int(freq)]
                row.extend(format_value(data.values[point]) for data in traces)
                writer.writerow(row)

        return path


def save_capture(image: np.ndarray, path: str) -> str:
    """
    Save a screen capture as PNG.

    Args:
        image: RGB uint8 array of shape (height, width, 3)
        path: Output file path

    Returns:
        Path of the written file
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected RGB image, got shape {image.shape}")

    plt.imsave(_prepare_path(path), image, format="png")
    return path
