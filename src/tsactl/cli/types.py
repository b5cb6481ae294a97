"""
Argument types for the command-line parser.

Each function converts one raw command-line token and raises
``argparse.ArgumentTypeError`` with a readable message on bad input, so
argparse reports it as a usage error.
"""

import argparse
from collections.abc import Callable
from dataclasses import dataclass

from ..utils.parse import (
    INT64_MAX,
    QuantityError,
    parse_frequency,
    parse_relative_frequency,
    parse_time_duration,
)
from .errors import CommandError


@dataclass(frozen=True)
class FrequencyDelta:
    """Frequency argument that is either absolute or relative to a device value."""

    value: int
    relative: bool = False

    def resolve(self, reference: Callable[[], int]) -> int:
        """
        Compute the frequency to send to the device.

        Args:
            reference: Returns the current device value, only called for
                relative deltas

        Returns:
            Absolute frequency in Hz

        Raises:
            CommandError: If the result would be negative
        """
        freq = self.value + reference() if self.relative else self.value
        if freq < 0:
            raise CommandError(f"invalid frequency: {freq}")
        return freq


@dataclass(frozen=True)
class MarkerDelta:
    """Delta marker setting: reference marker id, or off."""

    ref_marker: int = 0
    off: bool = False


def frequency(text: str) -> int:
    """Absolute frequency in Hz."""
    try:
        return parse_frequency(text)
    except QuantityError as e:
        raise argparse.ArgumentTypeError(f"failed to parse frequency: {e}") from e


def frequency_rel(text: str) -> FrequencyDelta:
    """Relative (``+1M``, ``-500k``) or absolute frequency."""
    try:
        return FrequencyDelta(parse_relative_frequency(text), relative=True)
    except QuantityError:
        pass

    value = frequency(text)
    if value > INT64_MAX:
        raise argparse.ArgumentTypeError(
            "failed to parse frequency: conversion error: value too large"
        )
    return FrequencyDelta(value, relative=False)


def time_duration(text: str) -> int:
    """Time in microseconds."""
    try:
        return parse_time_duration(text)
    except QuantityError as e:
        raise argparse.ArgumentTypeError(f"failed to parse time: {e}") from e


def unsigned(text: str) -> int:
    """Non-negative integer (ids, counts)."""
    try:
        value = int(text, 10)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid value '{text}'") from e
    if value < 0:
        raise argparse.ArgumentTypeError(f"value must not be negative: {text}")
    return value


def id_list(text: str) -> list[int]:
    """Comma separated ids, e.g. ``1,2,3``."""
    return [unsigned(part.strip()) for part in text.split(",") if part.strip()]


def marker_delta(text: str) -> MarkerDelta:
    """``off`` or a reference marker id."""
    if text.lower() == "off":
        return MarkerDelta(off=True)
    try:
        return MarkerDelta(ref_marker=unsigned(text))
    except argparse.ArgumentTypeError as e:
        raise argparse.ArgumentTypeError(
            f"failed to parse marker delta value: {e}"
        ) from e


def choice(options: list[str]) -> Callable[[str], str]:
    """
    Build a case-insensitive choice type returning the canonical spelling.

    Example:
        >>> choice(["dBm", "dBuV"])("DBM")
        'dBm'
    """
    lookup = {option.lower(): option for option in options}

    def convert(text: str) -> str:
        try:
            return lookup[text.lower()]
        except KeyError:
            valid = ", ".join(options)
            raise argparse.ArgumentTypeError(
                f"invalid option '{text}', must be one of: {valid}"
            ) from None

    return convert
