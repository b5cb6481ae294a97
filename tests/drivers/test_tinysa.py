"""
Unit tests for the tinySA driver.

Tests connection handling and shell commands against the mock shell.
"""

from types import SimpleNamespace
from unittest.mock import patch

import numpy as np
import pytest

from tests.fixtures.mock_shell import VERSION_TINYSA_ULTRA
from tsactl.drivers import DeviceConfig, DeviceError, TinySA, find_device
from tsactl.drivers.tinysa import strip_echo


class TestHelpers:
    """Test module level helpers."""

    @pytest.mark.unit
    def test_strip_echo(self):
        """Test echo and line ending removal."""
        assert strip_echo(" sweep\r\n0 350000000 450\r\n", "sweep") == "0 350000000 450"
        assert strip_echo("\r\n", "") == ""
        assert strip_echo("other\r\n", "sweep") == "other"

    @pytest.mark.unit
    def test_find_device(self):
        """Test USB id based discovery."""
        ports = [
            SimpleNamespace(vid=0x1234, pid=0x0001, device="/dev/ttyUSB0"),
            SimpleNamespace(vid=0x0483, pid=0x5740, device="/dev/ttyACM1"),
        ]
        with patch("serial.tools.list_ports.comports", return_value=ports):
            assert find_device() == "/dev/ttyACM1"

    @pytest.mark.unit
    def test_find_device_none(self):
        """Test discovery without a matching port."""
        with patch("serial.tools.list_ports.comports", return_value=[]):
            assert find_device() is None


class TestConnection:
    """Test connecting and disconnecting."""

    @pytest.mark.unit
    def test_connect(self, device_config, mock_pyvisa_resource_manager, mock_shell):
        """Test that connect configures the port and identifies the device."""
        device = TinySA(device_config)
        assert device.connect() is True

        assert device.is_connected()
        assert mock_pyvisa_resource_manager.opened == ["ASRL/dev/ttyACM0::INSTR"]
        assert mock_shell.baud_rate == 115200
        assert mock_shell.timeout == 1000
        assert mock_shell.write_termination == "\r"
        assert mock_shell.read_termination == "ch>"
        assert mock_shell.command_history == ["", "version"]
        assert device.model == "tinySA"
        assert device.version == "tinySA_v1.4-143-g864bb27"

    @pytest.mark.unit
    def test_connect_ultra(self, device_config, mock_pyvisa_resource_manager, mock_shell):
        """Test tinySA Ultra detection."""
        mock_shell.version = VERSION_TINYSA_ULTRA
        with TinySA(device_config) as device:
            assert device.model == "tinySA Ultra"
            assert device.hardware_version == "V0.4.5.1"
            assert device.screen_size == (480, 320)

    @pytest.mark.unit
    def test_connect_unsupported(
        self, device_config, mock_pyvisa_resource_manager, mock_shell
    ):
        """Test that a failed identification closes the port."""
        mock_shell.version = "NanoVNA-H 1.2"
        device = TinySA(device_config)
        with pytest.raises(DeviceError, match="unsupported instrument"):
            device.connect()
        assert not device.is_connected()
        assert mock_shell._closed

    @pytest.mark.unit
    def test_connect_without_port(self, mock_pyvisa_resource_manager):
        """Test that connecting without port raises error."""
        with pytest.raises(ValueError, match="Serial port must be configured"):
            TinySA(DeviceConfig()).connect()

    @pytest.mark.unit
    def test_context_manager(self, device_config, mock_pyvisa_resource_manager, mock_shell):
        """Test that the context manager closes the port."""
        with TinySA(device_config) as device:
            assert device.is_connected()
        assert not device.is_connected()
        assert mock_shell._closed

    @pytest.mark.unit
    def test_query_not_connected(self, device_config):
        """Test that commands require a connection."""
        with pytest.raises(RuntimeError, match="Not connected"):
            TinySA(device_config).get_sweep()


class TestSweepCommands:
    """Test sweep related commands."""

    @pytest.mark.unit
    def test_get_sweep(self, connected_device):
        sweep = connected_device.get_sweep()
        assert (sweep.start, sweep.stop, sweep.points) == (0, 350_000_000, 450)

    @pytest.mark.unit
    def test_set_range(self, connected_device, mock_shell):
        connected_device.set_sweep_start(100_000_000)
        connected_device.set_sweep_stop(200_000_000)
        assert mock_shell.command_history[-2:] == [
            "sweep start 100000000",
            "sweep stop 200000000",
        ]
        assert connected_device.get_sweep().center == 150_000_000

    @pytest.mark.unit
    def test_center_span_cw(self, connected_device, mock_shell):
        connected_device.set_sweep_center(100_000_000)
        connected_device.set_sweep_span(2_000_000)
        sweep = connected_device.get_sweep()
        assert (sweep.start, sweep.stop) == (99_000_000, 101_000_000)

        connected_device.set_sweep_cw(433_920_000)
        assert connected_device.get_sweep().is_cw

    @pytest.mark.unit
    def test_points_time_mode(self, connected_device, mock_shell):
        connected_device.set_sweep_points(290)
        connected_device.set_sweep_time(1500)
        connected_device.set_sweep_mode("precise")
        assert mock_shell.sweep_points == 290
        assert mock_shell.sweep_time == "1500u"
        assert mock_shell.sweep_mode == "precise"

    @pytest.mark.unit
    def test_pause_resume(self, connected_device):
        connected_device.pause_sweep()
        assert connected_device.get_sweep_status() == "Paused"
        connected_device.resume_sweep()
        assert connected_device.get_sweep_status() == "Resumed"

    @pytest.mark.unit
    def test_frequencies(self, connected_device):
        freqs = connected_device.get_frequencies()
        assert len(freqs) == 450
        assert freqs[0] == 0
        assert freqs[-1] == 350_000_000


class TestMarkerTraceCommands:
    """Test marker and trace commands."""

    @pytest.mark.unit
    def test_marker(self, connected_device, mock_shell):
        marker = connected_device.get_marker(1)
        assert marker.frequency == 101_250_000
        assert marker.value == pytest.approx(-86.5)

        connected_device.enable_marker(2)
        connected_device.set_marker_frequency(2, 5_000_000)
        assert [m.marker for m in connected_device.get_markers()] == [1, 2]
        assert connected_device.get_marker(2).frequency == 5_000_000

        connected_device.disable_marker(2)
        assert [m.marker for m in connected_device.get_markers()] == [1]

    @pytest.mark.unit
    def test_marker_modes(self, connected_device, mock_shell):
        connected_device.set_marker_trace(1, 2)
        connected_device.move_marker_peak(1)
        connected_device.enable_marker_delta(1, 2)
        connected_device.disable_marker_delta(1)
        connected_device.enable_marker_tracking(1)
        connected_device.disable_marker_tracking(1)
        assert mock_shell.command_history[-6:] == [
            "marker 1 trace 2",
            "marker 1 peak",
            "marker 1 delta 2",
            "marker 1 delta off",
            "marker 1 tracking on",
            "marker 1 tracking off",
        ]

    @pytest.mark.unit
    def test_missing_marker_rejected(self, connected_device):
        with pytest.raises(DeviceError, match="unexpected marker response"):
            connected_device.get_marker(4)

    @pytest.mark.unit
    def test_traces(self, connected_device, mock_shell):
        connected_device.enable_trace(2)
        connected_device.enable_trace_calc(2, "maxh")
        assert mock_shell.traces[2]["calc"] == "maxh"
        assert [t.trace for t in connected_device.get_traces()] == [1, 2]

        connected_device.disable_trace_calc(2)
        connected_device.disable_trace(2)
        assert mock_shell.command_history[-2:] == ["calc 2 off", "trace 2 view off"]
        assert [t.trace for t in connected_device.get_traces()] == [1]

    @pytest.mark.unit
    def test_trace_data(self, connected_device, mock_shell):
        data = connected_device.get_trace_data(1)
        assert len(data) == 450
        assert data.values[10] == pytest.approx(mock_shell.trace_value(1, 10))
        assert not np.isnan(data.values).any()


class TestLevelAndDeviceCommands:
    """Test level, signal and device commands."""

    @pytest.mark.unit
    def test_level(self, connected_device, mock_shell):
        connected_device.set_trace_unit("dBuV")
        connected_device.set_ref_level(-20)
        connected_device.set_trace_scale(5.0)
        connected_device.enable_lna()
        assert mock_shell.unit == "dBuV"
        assert mock_shell.ref_level == -20.0
        assert mock_shell.scale == 5.0
        assert mock_shell.lna is True

        connected_device.set_ref_level_auto()
        connected_device.disable_lna()
        assert mock_shell.command_history[-2:] == ["trace reflevel auto", "lna off"]

    @pytest.mark.unit
    def test_spur(self, connected_device, mock_shell):
        connected_device.enable_spur_removal()
        assert mock_shell.spur == "on"
        connected_device.disable_spur_removal()
        assert mock_shell.spur == "off"
        connected_device.enable_auto_spur_removal()
        assert mock_shell.spur == "auto"

    @pytest.mark.unit
    def test_device(self, connected_device, mock_shell):
        connected_device.set_device_id(3)
        assert connected_device.get_device_id() == 3
        assert connected_device.get_battery_voltage() == 4120

        connected_device.set_battery_offset_voltage(250)
        assert connected_device.get_battery_offset_voltage() == 250

    @pytest.mark.unit
    def test_menu_preset_reset(self, connected_device, mock_shell):
        connected_device.trigger_menu([6, 2])
        connected_device.load_preset(1)
        connected_device.reset(dfu=True)
        assert mock_shell.menu_history == [[6, 2]]
        assert mock_shell.preset == ("load", 1)
        assert mock_shell.command_history[-1] == "reset dfu"

    @pytest.mark.unit
    def test_send_raw(self, connected_device):
        assert connected_device.send_raw("vbat") == "4120 mV"
        assert connected_device.send_raw("bogus") == "bogus?"


class TestCapture:
    """Test screen capture over the shell."""

    @pytest.mark.unit
    def test_capture(self, connected_device, mock_shell):
        image = connected_device.capture()
        assert image.shape == (240, 320, 3)
        assert list(image[0, 0]) == [248, 0, 0]
        # Prompt consumed, shell still in sync
        assert connected_device.get_sweep().points == 450
        assert mock_shell.timeout == 1000

    @pytest.mark.unit
    def test_capture_ultra(self, device_config, mock_pyvisa_resource_manager, mock_shell):
        mock_shell.version = VERSION_TINYSA_ULTRA
        with TinySA(device_config) as device:
            assert device.capture().shape == (320, 480, 3)
