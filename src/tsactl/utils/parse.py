"""
Quantity parsing for command-line values.

Converts user supplied frequencies, relative frequency offsets and time
durations into exact integer base units (hertz and microseconds). All
scaling is done with decimal arithmetic so that values like ``1.000000001ghz``
come out exact instead of suffering binary floating-point rounding.
"""

import re
from decimal import Decimal, InvalidOperation, localcontext

UINT64_MAX = 2**64 - 1
INT64_MAX = 2**63 - 1

FREQUENCY_UNITS = {
    "": 1,
    "hz": 1,
    "k": 1_000,
    "khz": 1_000,
    "m": 1_000_000,
    "mhz": 1_000_000,
    "g": 1_000_000_000,
    "ghz": 1_000_000_000,
}

# Keyed by the first character of the unit, "us" and "µs" both map via "u"/"µ"
TIME_UNITS = {
    "u": 1,
    "µ": 1,  # micro sign
    "μ": 1,  # greek small letter mu
    "m": 1_000,
    "s": 1_000_000,
}

_METRIC_RE = re.compile(r"^(\d+(?:\.\d+)?)([a-z]*)$")
_SCIENTIFIC_RE = re.compile(r"^(\d+(?:\.\d+)?)(?:e(\d+))?$")
_TIME_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(\S*)$")


class QuantityError(ValueError):
    """Base class for all quantity parsing errors."""


class MalformedQuantityError(QuantityError):
    """Input does not match any accepted grammar."""


class UnknownUnitError(QuantityError):
    """Input carries a unit suffix that is not recognized."""

    def __init__(self, message: str, unit: str = ""):
        super().__init__(message)
        self.unit = unit


class QuantityOverflowError(QuantityError):
    """Parsed value does not fit the target integer width."""


class MissingSignError(QuantityError):
    """Relative value given without a leading '+' or '-'."""


def _scale(number: str, multiplier: int) -> Decimal:
    """Multiply a decimal literal without losing any digits."""
    with localcontext() as ctx:
        # Enough digits for the literal plus the largest multiplier
        ctx.prec = len(number) + 12
        return Decimal(number) * multiplier


def _to_uint64(value: Decimal) -> int:
    """Truncate to an integer, rejecting anything outside uint64."""
    if value.adjusted() >= 20 or value > UINT64_MAX:
        raise QuantityOverflowError("conversion error: value too large")
    return int(value)


def parse_frequency(text: str) -> int:
    """
    Parse a frequency string into hertz.

    Accepts metric prefixed values (``100M``, ``1.5ghz``, ``0.3k``), bare
    hertz (``1000``) and scientific notation (``100e6``, ``1.4e9``).

    Args:
        text: Frequency string, case-insensitive

    Returns:
        Frequency in Hz, fractional hertz truncated

    Raises:
        MalformedQuantityError: If the text is not a frequency
        UnknownUnitError: If the unit suffix is not recognized
        QuantityOverflowError: If the value does not fit in 64 bits
    """
    freq_str = text.lower()

    match = _METRIC_RE.match(freq_str)
    if match:
        number, unit = match.groups()
        multiplier = FREQUENCY_UNITS.get(unit)
        if multiplier is None:
            raise UnknownUnitError(f"invalid unit '{unit}'", unit)
        return _to_uint64(_scale(number, multiplier))

    if _SCIENTIFIC_RE.match(freq_str):
        try:
            value = Decimal(freq_str)
        except InvalidOperation as e:
            raise MalformedQuantityError(
                f"invalid frequency format: {freq_str}"
            ) from e
        return _to_uint64(value)

    raise MalformedQuantityError(f"invalid frequency format: {freq_str}")


def parse_relative_frequency(text: str) -> int:
    """
    Parse a signed frequency offset such as ``+100k`` or ``-2M``.

    The sign is mandatory and scientific notation is not accepted.

    Returns:
        Signed offset in Hz

    Raises:
        MissingSignError: If the text does not start with '+' or '-'
        MalformedQuantityError: If the remainder is not a frequency
        UnknownUnitError: If the unit suffix is not recognized
        QuantityOverflowError: If the offset does not fit in signed 64 bits
    """
    if len(text) < 2:
        raise MalformedQuantityError(f"invalid relative frequency: {text}")

    sign, abs_str = text[0], text[1:]
    if sign not in "+-":
        raise MissingSignError("relative frequency must start with '+' or '-'")

    if "e" in abs_str or "E" in abs_str:
        raise MalformedQuantityError(
            f"scientific notation not supported in relative frequency: {text}"
        )

    try:
        abs_val = parse_frequency(abs_str)
    except UnknownUnitError as e:
        raise UnknownUnitError(f"failed to parse frequency: {e}", e.unit) from e
    except QuantityError as e:
        raise type(e)(f"failed to parse frequency: {e}") from e

    if abs_val > INT64_MAX:
        raise QuantityOverflowError("value too large for int64")

    return -abs_val if sign == "-" else abs_val


def parse_time_duration(text: str) -> int:
    """
    Parse a time duration into microseconds.

    Units are picked by their first letter: ``u``/``µ`` microseconds,
    ``m`` milliseconds, ``s`` seconds, optionally followed by ``s``
    (``1.5ms``, ``100us``, ``2 s``). Fractions are truncated.

    Raises:
        MalformedQuantityError: If the number or unit is missing
        UnknownUnitError: If the unit is not recognized
        QuantityOverflowError: If the value does not fit in 64 bits
    """
    match = _TIME_RE.match(text.strip().lower())
    if not match or not match.group(2):
        raise MalformedQuantityError(f"invalid time format: {text}")

    number, unit = match.groups()
    multiplier = TIME_UNITS.get(unit[0])
    if multiplier is None or unit[1:] not in ("", "s"):
        raise UnknownUnitError(f"unknown time unit: {unit}", unit)

    return _to_uint64(_scale(number, multiplier))
