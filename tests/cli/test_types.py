"""Tests for command-line argument types."""

import argparse

import pytest

from tsactl.cli.errors import CommandError
from tsactl.cli.types import (
    FrequencyDelta,
    MarkerDelta,
    choice,
    frequency,
    frequency_rel,
    id_list,
    marker_delta,
    time_duration,
    unsigned,
)


@pytest.mark.unit
class TestFrequencyTypes:
    """Test frequency argument conversion."""

    def test_frequency(self):
        """Test absolute frequency."""
        assert frequency("100M") == 100_000_000

    def test_frequency_error(self):
        """Test that parse errors become usage errors with a prefix."""
        with pytest.raises(
            argparse.ArgumentTypeError,
            match="failed to parse frequency: invalid unit 'x'",
        ):
            frequency("1x")

    def test_frequency_rel_relative(self):
        """Test signed offsets."""
        assert frequency_rel("+1M") == FrequencyDelta(1_000_000, relative=True)
        assert frequency_rel("-500k") == FrequencyDelta(-500_000, relative=True)

    def test_frequency_rel_absolute(self):
        """Test that unsigned values fall back to absolute parsing."""
        assert frequency_rel("100M") == FrequencyDelta(100_000_000, relative=False)
        assert frequency_rel("1.4e9") == FrequencyDelta(1_400_000_000)

    def test_frequency_rel_error(self):
        """Test that invalid values report the absolute parse error."""
        with pytest.raises(argparse.ArgumentTypeError, match="failed to parse frequency"):
            frequency_rel("abc")
        with pytest.raises(argparse.ArgumentTypeError, match="failed to parse frequency"):
            frequency_rel("+1e3")

    def test_frequency_rel_too_large(self):
        """Test that absolute values must fit a signed delta."""
        with pytest.raises(argparse.ArgumentTypeError, match="value too large"):
            frequency_rel(str(2**63))


@pytest.mark.unit
class TestFrequencyDelta:
    """Test resolving deltas against device values."""

    def test_absolute_ignores_reference(self):
        """Test that absolute values never query the device."""

        def reference():
            raise AssertionError("reference should not be read")

        assert FrequencyDelta(100).resolve(reference) == 100

    def test_relative_adds_reference(self):
        assert FrequencyDelta(-1_000, relative=True).resolve(lambda: 5_000) == 4_000

    def test_negative_result(self):
        """Test that a negative result is rejected."""
        with pytest.raises(CommandError, match="invalid frequency: -1000"):
            FrequencyDelta(-2_000, relative=True).resolve(lambda: 1_000)


@pytest.mark.unit
class TestOtherTypes:
    """Test time, id and choice types."""

    def test_time_duration(self):
        assert time_duration("1.5ms") == 1500

    def test_time_duration_error(self):
        with pytest.raises(
            argparse.ArgumentTypeError, match="failed to parse time: unknown time unit"
        ):
            time_duration("1x")

    def test_unsigned(self):
        assert unsigned("3") == 3
        with pytest.raises(argparse.ArgumentTypeError, match="must not be negative"):
            unsigned("-1")
        with pytest.raises(argparse.ArgumentTypeError, match="invalid value"):
            unsigned("one")

    def test_id_list(self):
        assert id_list("1,2, 3") == [1, 2, 3]
        assert id_list("4") == [4]

    def test_marker_delta(self):
        assert marker_delta("off") == MarkerDelta(off=True)
        assert marker_delta("OFF") == MarkerDelta(off=True)
        assert marker_delta("2") == MarkerDelta(ref_marker=2)
        with pytest.raises(argparse.ArgumentTypeError, match="marker delta"):
            marker_delta("on")

    def test_choice(self):
        convert = choice(["dBm", "dBuV"])
        assert convert("DBUV") == "dBuV"
        with pytest.raises(
            argparse.ArgumentTypeError,
            match="invalid option 'dB', must be one of: dBm, dBuV",
        ):
            convert("dB")
