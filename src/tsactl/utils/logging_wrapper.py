"""
Logging wrapper for tinySA drivers.

Logs every shell command sent to the instrument and every response received,
for debugging serial communication (``--debug``).
"""

import sys
from datetime import datetime, timezone
from typing import Callable, TextIO

from ..config.constants import (
    BINARY_PREVIEW_LENGTH,
    BINARY_RATIO_THRESHOLD,
    RESPONSE_TRUNCATE_LENGTH,
)
from ..drivers.base import SpectrumAnalyzerBase


def is_likely_binary(data: bytes) -> bool:
    """Check whether a payload is mostly non-printable bytes."""
    if not data:
        return False
    non_printable = sum(
        1 for b in data if (b < 0x20 or b > 0x7E) and b not in b"\n\r\t"
    )
    return non_printable / len(data) > BINARY_RATIO_THRESHOLD


def escape_message(message: str) -> str:
    return message.replace("\n", "\\n").replace("\r", "\\r")


def stderr_logger(message: str, level: str, stream: TextIO | None = None) -> None:
    """
    Log callback writing timestamped debug lines.

    Args:
        message: Command or response text
        level: "tx" for data sent, "rx" for data received
        stream: Output stream (stderr if None)
    """
    stream = stream or sys.stderr
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    stream.write(f"{timestamp} [DEBUG] {level}: {escape_message(message)}\n")


class LoggingDeviceWrapper:
    """Wrapper that intercepts driver transport methods to log shell traffic."""

    def __init__(
        self, device: SpectrumAnalyzerBase, log_callback: Callable[[str, str], None]
    ):
        """
        Initialize logging wrapper.

        Args:
            device: Driver instance to wrap
            log_callback: Callback function(message, level) for logging
        """
        self._device = device
        self._log = log_callback

        self._wrap_transport_methods()

    def _wrap_transport_methods(self):
        """Wrap the driver's low-level query methods with logging."""
        original_query = self._device._query
        original_query_binary = self._device._query_binary

        def logged_query(command: str) -> str:
            self._log(command, "tx")
            response = original_query(command)

            encoded = response.encode("utf-8", errors="replace")
            if is_likely_binary(encoded):
                self._log(f"0x{encoded[:BINARY_PREVIEW_LENGTH].hex()}", "rx")
            elif len(response) > RESPONSE_TRUNCATE_LENGTH:
                line_count = len(response.splitlines())
                self._log(
                    f"[{line_count} lines: {response[:RESPONSE_TRUNCATE_LENGTH]}...]",
                    "rx",
                )
            else:
                self._log(response, "rx")

            return response

        def logged_query_binary(command: str, size: int) -> bytes:
            self._log(command, "tx")
            data = original_query_binary(command, size)
            preview = data[:BINARY_PREVIEW_LENGTH].hex()
            self._log(f"[{len(data)} bytes: 0x{preview}...]", "rx")
            return data

        # Replace methods on the driver instance
        self._device._query = logged_query
        self._device._query_binary = logged_query_binary

    def __enter__(self):
        self._device.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return self._device.__exit__(exc_type, exc_val, exc_tb)

    def __getattr__(self, name):
        """Pass through all other attributes to wrapped driver."""
        return getattr(self._device, name)
