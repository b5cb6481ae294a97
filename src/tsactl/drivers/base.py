"""
Abstract base class for tinySA spectrum analyzer drivers.

The base class implements every instrument capability on top of the
text shell protocol. Concrete drivers only provide the transport: open and
close the port, run a command and return its text response, and run a
command that answers with a fixed-size binary payload.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from ..config.constants import (
    DEFAULT_BAUDRATE,
    DEFAULT_TIMEOUT_MS,
    MODEL_PREFIXES,
    SCREEN_SIZE_TINYSA,
    SCREEN_SIZE_TINYSA_ULTRA,
)
from . import shell_commands as cmd

TRACE_CALC_OPTIONS = ["minh", "maxh", "maxd", "aver4", "aver16", "aver", "quasip"]
TRACE_UNIT_OPTIONS = ["dBm", "dBmV", "dBuV", "RAW", "V", "W"]
SWEEP_MODE_OPTIONS = ["normal", "precise", "fast", "noise"]

_MARKER_RE = re.compile(r"^(\d+)\s+(\d+)\s+(\d+)\s+(\S+)$")
_TRACE_RE = re.compile(r"^(\d+):\s+(\S+)\s+(\S+)\s+(\S+)$")
_TRACE_VALUE_RE = re.compile(r"^trace\s+\d+\s+value\s+(\d+)\s+(\S+)$")


class DeviceError(Exception):
    """Instrument rejected a command or returned an unexpected response."""


@dataclass
class DeviceConfig:
    """Serial connection parameters."""

    port: str = ""
    baudrate: int = DEFAULT_BAUDRATE
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def build_address(self) -> str:
        """Build VISA serial resource address string."""
        if not self.port:
            raise ValueError("Serial port must be configured before connecting")
        port = self.port.strip()
        if port.upper().startswith("COM") and port[3:].isdigit():
            return f"ASRL{port[3:]}::INSTR"
        return f"ASRL{port}::INSTR"


@dataclass(frozen=True)
class Sweep:
    """Current sweep range in Hz."""

    start: int
    stop: int
    points: int

    @property
    def span(self) -> int:
        return self.stop - self.start

    @property
    def center(self) -> int:
        return self.start + self.span // 2

    @property
    def is_cw(self) -> bool:
        return self.start == self.stop


@dataclass(frozen=True)
class Marker:
    marker: int
    index: int
    frequency: int
    value: float


@dataclass(frozen=True)
class Trace:
    trace: int
    unit: str
    ref_level: float
    scale: float


@dataclass(frozen=True)
class TraceData:
    """Measured values of one trace, one entry per sweep point."""

    trace: int
    frequencies: np.ndarray
    values: np.ndarray

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class DeviceInfo:
    model: str
    version: str
    hardware_version: str


def _parse_int(text: str, what: str) -> int:
    try:
        return int(text.split()[0])
    except (ValueError, IndexError) as e:
        raise DeviceError(f"unexpected {what} response: {text!r}") from e


class SpectrumAnalyzerBase(ABC):
    """Abstract base class for tinySA controllers."""

    driver_name: str = "Unknown"

    def __init__(self, config: DeviceConfig | None = None):
        """
        Initialize controller.

        Args:
            config: Connection configuration (uses defaults if None)
        """
        self.config = config or DeviceConfig()
        self._connected = False
        self._info = DeviceInfo(model="", version="", hardware_version="")

    # ===== Transport =====

    @abstractmethod
    def connect(self) -> bool:
        """
        Open the connection and identify the instrument.

        Returns:
            True if connection successful

        Raises:
            ValueError: If no port is configured
            DeviceError: If the instrument does not answer like a tinySA
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection."""
        pass

    @abstractmethod
    def _query(self, command: str) -> str:
        """
        Run a shell command and return its text output.

        The echoed command line and the trailing prompt are removed.
        """
        pass

    @abstractmethod
    def _query_binary(self, command: str, size: int) -> bytes:
        """Run a shell command that answers with ``size`` raw bytes."""
        pass

    def _send_command(self, command: str) -> str:
        """Run a setter command and fail if the shell rejects it."""
        response = self._query(command)
        stripped = response.strip()
        keyword = command.split()[0]
        if stripped.lower().startswith("usage:") or stripped == f"{keyword}?":
            raise DeviceError(f"command '{command}' rejected: {stripped}")
        return response

    def is_connected(self) -> bool:
        """Check if connected to the instrument."""
        return self._connected

    def __enter__(self):
        """Context manager entry."""
        if not self._connected:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    # ===== Identification =====

    def _identify(self) -> None:
        """Read the firmware version and derive the model from it."""
        lines = self._query(cmd.CMD_VERSION).strip().splitlines()
        if not lines:
            raise DeviceError("empty version response")

        version = lines[0].strip()
        hardware = ""
        for line in lines[1:]:
            if line.lower().startswith("hw version"):
                hardware = line.split(":", 1)[-1].strip()

        model = ""
        for prefix, name in MODEL_PREFIXES.items():
            if version.lower().startswith(prefix):
                model = name
                break
        if not model:
            raise DeviceError(f"unsupported instrument: {version!r}")

        self._info = DeviceInfo(model=model, version=version, hardware_version=hardware)

    @property
    def model(self) -> str:
        return self._info.model

    @property
    def version(self) -> str:
        return self._info.version

    @property
    def hardware_version(self) -> str:
        return self._info.hardware_version

    @property
    def screen_size(self) -> tuple[int, int]:
        """Screen (width, height) in pixels."""
        if self.model == "tinySA Ultra":
            return SCREEN_SIZE_TINYSA_ULTRA
        return SCREEN_SIZE_TINYSA

    def get_info(self) -> DeviceInfo:
        return self._info

    # ===== Device =====

    def reset(self, dfu: bool = False) -> None:
        """Reset the instrument, optionally into DFU bootloader mode."""
        self._send_command(cmd.CMD_RESET_DFU if dfu else cmd.CMD_RESET)

    def get_device_id(self) -> int:
        response = self._query(cmd.CMD_DEVICE_ID).strip()
        return _parse_int(response.removeprefix("deviceid").strip(), "device id")

    def set_device_id(self, device_id: int) -> None:
        self._send_command(cmd.cmd_set_device_id(device_id))

    def get_battery_voltage(self) -> int:
        """Battery voltage in mV."""
        return _parse_int(self._query(cmd.CMD_BATTERY).strip(), "battery voltage")

    def get_battery_offset_voltage(self) -> int:
        """Battery offset voltage in mV."""
        response = self._query(cmd.CMD_BATTERY_OFFSET).strip()
        return _parse_int(response, "battery offset")

    def set_battery_offset_voltage(self, offset_mv: int) -> None:
        self._send_command(cmd.cmd_set_battery_offset(offset_mv))

    def trigger_menu(self, menu_ids: list[int]) -> None:
        self._send_command(cmd.cmd_trigger_menu(menu_ids))

    def load_preset(self, preset: int) -> None:
        self._send_command(cmd.cmd_load_preset(preset))

    def save_preset(self, preset: int) -> None:
        self._send_command(cmd.cmd_save_preset(preset))

    def send_raw(self, command: str) -> str:
        """Send a command verbatim and return the unprocessed response."""
        return self._query(command)

    def capture(self) -> np.ndarray:
        """
        Capture the screen.

        Returns:
            RGB image as uint8 array of shape (height, width, 3)
        """
        width, height = self.screen_size
        data = self._query_binary(cmd.CMD_CAPTURE, width * height * 2)
        if len(data) != width * height * 2:
            raise DeviceError(
                f"short capture: expected {width * height * 2} bytes, got {len(data)}"
            )

        # RGB565, big endian on the wire
        pixels = np.frombuffer(data, dtype=">u2").reshape(height, width)
        rgb = np.empty((height, width, 3), dtype=np.uint8)
        rgb[..., 0] = ((pixels >> 11) & 0x1F) << 3
        rgb[..., 1] = ((pixels >> 5) & 0x3F) << 2
        rgb[..., 2] = (pixels & 0x1F) << 3
        return rgb

    # ===== Sweep =====

    def get_sweep(self) -> Sweep:
        response = self._query(cmd.CMD_SWEEP).strip()
        parts = response.split()
        try:
            start, stop, points = (int(p) for p in parts[:3])
        except ValueError as e:
            raise DeviceError(f"unexpected sweep response: {response!r}") from e
        return Sweep(start=start, stop=stop, points=points)

    def get_sweep_status(self) -> str:
        return self._query(cmd.CMD_STATUS).strip()

    def pause_sweep(self) -> None:
        self._send_command(cmd.CMD_PAUSE)

    def resume_sweep(self) -> None:
        self._send_command(cmd.CMD_RESUME)

    def set_sweep_mode(self, mode: str) -> None:
        if mode not in SWEEP_MODE_OPTIONS:
            raise ValueError(f"Invalid sweep mode: {mode}")
        self._send_command(cmd.cmd_set_sweep_mode(mode))

    def set_sweep_start(self, freq_hz: int) -> None:
        self._send_command(cmd.cmd_sweep("start", freq_hz))

    def set_sweep_stop(self, freq_hz: int) -> None:
        self._send_command(cmd.cmd_sweep("stop", freq_hz))

    def set_sweep_center(self, freq_hz: int) -> None:
        self._send_command(cmd.cmd_sweep("center", freq_hz))

    def set_sweep_span(self, freq_hz: int) -> None:
        self._send_command(cmd.cmd_sweep("span", freq_hz))

    def set_sweep_cw(self, freq_hz: int) -> None:
        self._send_command(cmd.cmd_sweep("cw", freq_hz))

    def set_sweep_points(self, points: int) -> None:
        self._send_command(cmd.cmd_sweep("points", points))

    def set_sweep_time(self, time_us: int) -> None:
        self._send_command(cmd.cmd_set_sweep_time(time_us))

    # ===== Markers =====

    @staticmethod
    def _parse_marker(line: str) -> Marker:
        match = _MARKER_RE.match(line.strip())
        if not match:
            raise DeviceError(f"unexpected marker response: {line!r}")
        marker, index, freq, value = match.groups()
        return Marker(
            marker=int(marker), index=int(index), frequency=int(freq), value=float(value)
        )

    def get_marker(self, marker: int) -> Marker:
        response = self._query(cmd.cmd_marker(marker)).strip()
        return self._parse_marker(response)

    def get_markers(self) -> list[Marker]:
        """All active markers."""
        response = self._query(cmd.CMD_MARKER)
        return [self._parse_marker(line) for line in response.splitlines() if line.strip()]

    def enable_marker(self, marker: int) -> None:
        self._send_command(cmd.cmd_marker(marker, "on"))

    def disable_marker(self, marker: int) -> None:
        self._send_command(cmd.cmd_marker(marker, "off"))

    def set_marker_trace(self, marker: int, trace: int) -> None:
        self._send_command(cmd.cmd_marker(marker, "trace", trace))

    def set_marker_frequency(self, marker: int, freq_hz: int) -> None:
        self._send_command(cmd.cmd_marker(marker, freq_hz))

    def move_marker_peak(self, marker: int) -> None:
        self._send_command(cmd.cmd_marker(marker, "peak"))

    def enable_marker_delta(self, marker: int, ref_marker: int) -> None:
        self._send_command(cmd.cmd_marker(marker, "delta", ref_marker))

    def disable_marker_delta(self, marker: int) -> None:
        self._send_command(cmd.cmd_marker(marker, "delta", "off"))

    def enable_marker_tracking(self, marker: int) -> None:
        self._send_command(cmd.cmd_marker(marker, "tracking", "on"))

    def disable_marker_tracking(self, marker: int) -> None:
        self._send_command(cmd.cmd_marker(marker, "tracking", "off"))

    # ===== Traces =====

    @staticmethod
    def _parse_trace(line: str) -> Trace:
        match = _TRACE_RE.match(line.strip())
        if not match:
            raise DeviceError(f"unexpected trace response: {line!r}")
        trace, unit, ref_level, scale = match.groups()
        return Trace(
            trace=int(trace), unit=unit, ref_level=float(ref_level), scale=float(scale)
        )

    def get_trace(self, trace: int) -> Trace:
        response = self._query(cmd.cmd_trace(trace)).strip()
        return self._parse_trace(response)

    def get_traces(self) -> list[Trace]:
        """All active traces."""
        response = self._query(cmd.CMD_TRACE)
        return [self._parse_trace(line) for line in response.splitlines() if line.strip()]

    def enable_trace(self, trace: int) -> None:
        self._send_command(cmd.cmd_trace(trace, "view", "on"))

    def disable_trace(self, trace: int) -> None:
        self._send_command(cmd.cmd_trace(trace, "view", "off"))

    def enable_trace_calc(self, trace: int, mode: str) -> None:
        if mode not in TRACE_CALC_OPTIONS:
            raise ValueError(f"Invalid trace calculation: {mode}")
        self._send_command(cmd.cmd_trace_calc(trace, mode))

    def disable_trace_calc(self, trace: int) -> None:
        self._send_command(cmd.cmd_trace_calc(trace, "off"))

    def get_frequencies(self) -> np.ndarray:
        """Frequency of every sweep point in Hz."""
        response = self._query(cmd.CMD_FREQUENCIES)
        try:
            freqs = [int(line) for line in response.split()]
        except ValueError as e:
            raise DeviceError("unexpected frequencies response") from e
        return np.array(freqs, dtype=np.uint64)

    def get_trace_data(self, trace: int) -> TraceData:
        """
        Read the measured values of a trace.

        Returns:
            TraceData with frequencies (Hz) and values (in the trace unit)
        """
        freqs = self.get_frequencies()
        response = self._query(cmd.cmd_trace(trace, "value"))

        values = np.full(len(freqs), np.nan)
        for line in response.splitlines():
            match = _TRACE_VALUE_RE.match(line.strip())
            if not match:
                continue
            point = int(match.group(1))
            if point < len(values):
                values[point] = float(match.group(2))

        if len(freqs) == 0 or np.isnan(values).all():
            raise DeviceError(f"no data received for trace {trace}")

        return TraceData(trace=trace, frequencies=freqs, values=values)

    # ===== Level =====

    def set_trace_unit(self, unit: str) -> None:
        if unit not in TRACE_UNIT_OPTIONS:
            raise ValueError(f"Invalid trace unit: {unit}")
        self._send_command(cmd.cmd_set_trace_unit(unit))

    def set_ref_level(self, level: int) -> None:
        self._send_command(cmd.cmd_set_ref_level(level))

    def set_ref_level_auto(self) -> None:
        self._send_command(cmd.CMD_REF_LEVEL_AUTO)

    def set_trace_scale(self, scale: float) -> None:
        self._send_command(cmd.cmd_set_trace_scale(scale))

    def enable_lna(self) -> None:
        self._send_command(cmd.CMD_LNA_ON)

    def disable_lna(self) -> None:
        self._send_command(cmd.CMD_LNA_OFF)

    # ===== Signal =====

    def enable_spur_removal(self) -> None:
        self._send_command(cmd.cmd_set_spur_removal("on"))

    def disable_spur_removal(self) -> None:
        self._send_command(cmd.cmd_set_spur_removal("off"))

    def enable_auto_spur_removal(self) -> None:
        self._send_command(cmd.cmd_set_spur_removal("auto"))
