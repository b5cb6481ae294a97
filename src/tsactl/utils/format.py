"""
Human readable formatting of device quantities.

The instrument reports frequencies in Hz and times in microseconds. These
helpers scale them to the largest fitting unit and print the exact decimal
value, e.g. ``13001`` Hz becomes ``"13.001 kHz"``.
"""

FREQUENCY_SCALES = [
    (1_000_000_000, "GHz"),
    (1_000_000, "MHz"),
    (1_000, "kHz"),
    (1, "Hz"),
]

TIME_SCALES = [
    (1_000_000, "s"),
    (1_000, "ms"),
    (1, "µs"),
]


def format_decimal(value: int, divisor: int) -> str:
    """
    Divide ``value`` by a power of ten and render the exact quotient.

    Integer division keeps every digit, trailing zeros and a bare
    decimal point are dropped.

    Args:
        value: Non-negative integer quantity
        divisor: Power of ten (1, 1000, ...)

    Returns:
        Minimal decimal string, e.g. ``"4.500000001"`` or ``"13"``
    """
    if value < 0:
        raise ValueError(f"Quantity must not be negative: {value}")

    whole, remainder = divmod(value, divisor)
    if remainder == 0:
        return str(whole)

    digits = len(str(divisor)) - 1
    fraction = str(remainder).zfill(digits).rstrip("0")
    return f"{whole}.{fraction}"


def _format_scaled(value: int, scales: list[tuple[int, str]]) -> str:
    for divisor, unit in scales:
        if value >= divisor:
            return f"{format_decimal(value, divisor)} {unit}"
    # Below the smallest scale, only reachable for zero
    divisor, unit = scales[-1]
    return f"{format_decimal(value, divisor)} {unit}"


def format_frequency(freq_hz: int) -> str:
    """Format a frequency in Hz, e.g. ``2100000`` -> ``"2.1 MHz"``."""
    return _format_scaled(freq_hz, FREQUENCY_SCALES)


def format_time_duration(time_us: int) -> str:
    """Format a duration in microseconds, e.g. ``1500`` -> ``"1.5 ms"``."""
    return _format_scaled(time_us, TIME_SCALES)
