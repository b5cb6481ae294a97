"""
tinySA spectrum analyzer driver.

Talks to the instrument's text shell over its USB virtual COM port using a
pyvisa serial (ASRL) resource. Works with the original tinySA and the
tinySA Ultra; the model is detected from the firmware version string.
"""

import pyvisa
import serial.tools.list_ports

from ..config.constants import (
    CAPTURE_TIMEOUT_MS,
    SHELL_LINE_ENDING,
    SHELL_PROMPT,
    TINYSA_USB_PID,
    TINYSA_USB_VID,
)
from .base import DeviceConfig, DeviceError, SpectrumAnalyzerBase


def find_device() -> str | None:
    """
    Look for a connected tinySA by its USB vendor and product id.

    Returns:
        Serial port name (e.g. /dev/ttyACM0 or COM3), or None if not found
    """
    for port in serial.tools.list_ports.comports():
        if port.vid == TINYSA_USB_VID and port.pid == TINYSA_USB_PID:
            return port.device
    return None


def strip_echo(response: str, command: str) -> str:
    """Remove the echoed command line from a shell response."""
    lines = response.replace("\r", "").split("\n")
    # The previous prompt leaves a space in front of the echo
    if lines and lines[0].strip() == command.strip():
        lines = lines[1:]
    return "\n".join(lines).strip()


class TinySA(SpectrumAnalyzerBase):
    """tinySA / tinySA Ultra controller."""

    driver_name = "tinySA"

    def __init__(self, config: DeviceConfig | None = None):
        """
        Initialize tinySA controller.

        Args:
            config: Connection configuration (uses defaults if None)
        """
        super().__init__(config)
        self.inst: pyvisa.resources.Resource | None = None

    def connect(self) -> bool:
        """
        Open the serial port and identify the instrument.

        Returns:
            True if connection successful

        Raises:
            ValueError: If no port is configured
            DeviceError: If the instrument does not identify as a tinySA
        """
        address = self.config.build_address()

        # Use pyvisa-py backend only (no NI-VISA dependency)
        try:
            rm = pyvisa.ResourceManager("@py")
        except Exception:
            rm = pyvisa.ResourceManager()

        try:
            self.inst = rm.open_resource(address)
            self.inst.baud_rate = self.config.baudrate
            self.inst.timeout = self.config.timeout_ms
            self.inst.write_termination = SHELL_LINE_ENDING
            self.inst.read_termination = SHELL_PROMPT
            self._connected = True

            # Flush anything pending up to the next prompt
            self.inst.write("")
            self.inst.read()

            self._identify()
            return True

        except Exception:
            self._cleanup_failed_connection()
            raise

    def _cleanup_failed_connection(self) -> None:
        """Clean up resources after failed connection attempt."""
        if self.inst:
            try:
                self.inst.close()
            except pyvisa.errors.VisaIOError:
                pass
            self.inst = None
        self._connected = False

    def disconnect(self) -> None:
        """Close the serial port."""
        self._cleanup_failed_connection()

    def _ensure_connected(self) -> None:
        """Ensure instrument is connected, raise error if not."""
        if not self._connected or self.inst is None:
            raise RuntimeError("Not connected to tinySA")

    def _query(self, command: str) -> str:
        """Run shell command and return its output."""
        self._ensure_connected()
        self.inst.write(command)
        return strip_echo(self.inst.read(), command)

    def _query_binary(self, command: str, size: int) -> bytes:
        """Run shell command answering with a raw binary payload."""
        self._ensure_connected()
        timeout = self.inst.timeout
        self.inst.timeout = CAPTURE_TIMEOUT_MS
        try:
            self.inst.write(command)
            echo = self.inst.read(termination="\n")
            if echo.strip() != command:
                raise DeviceError(f"unexpected echo for '{command}': {echo!r}")
            data = self.inst.read_bytes(size)
            # Consume the trailing prompt
            self.inst.read()
        finally:
            self.inst.timeout = timeout
        return bytes(data)
