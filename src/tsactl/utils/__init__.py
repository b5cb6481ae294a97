"""Quantity conversion, export and logging utilities."""

from .export import TraceExporter, replace_filename_placeholders, save_capture
from .format import format_frequency, format_time_duration
from .logging_wrapper import LoggingDeviceWrapper, stderr_logger
from .parse import (
    MalformedQuantityError,
    MissingSignError,
    QuantityError,
    QuantityOverflowError,
    UnknownUnitError,
    parse_frequency,
    parse_relative_frequency,
    parse_time_duration,
)

__all__ = [
    "TraceExporter",
    "replace_filename_placeholders",
    "save_capture",
    "format_frequency",
    "format_time_duration",
    "LoggingDeviceWrapper",
    "stderr_logger",
    "QuantityError",
    "MalformedQuantityError",
    "UnknownUnitError",
    "QuantityOverflowError",
    "MissingSignError",
    "parse_frequency",
    "parse_relative_frequency",
    "parse_time_duration",
]
