"""
Pytest configuration and shared fixtures.

Provides mocks, fixtures, and helpers for testing without hardware.
"""

from unittest.mock import patch

import pytest
import pyvisa

from tests.fixtures.mock_shell import MockResourceManager, MockShellResource
from tsactl.drivers import DeviceConfig, TinySA

PORT = "/dev/ttyACM0"
ADDRESS = f"ASRL{PORT}::INSTR"


# ===== Settings Isolation =====


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path):
    """Keep settings written during tests out of the real user config."""
    config_dir = tmp_path / "config"
    with patch("tsactl.config.settings.user_config_dir", return_value=str(config_dir)):
        yield config_dir


# ===== Configuration Fixtures =====


@pytest.fixture
def device_config():
    """Create a basic serial configuration for testing."""
    return DeviceConfig(port=PORT, baudrate=115200, timeout_ms=1000)


# ===== VISA Mock Fixtures =====


@pytest.fixture
def mock_shell():
    """Create a mock tinySA shell resource."""
    return MockShellResource()


@pytest.fixture
def mock_pyvisa_resource_manager(monkeypatch, mock_shell):
    """
    Mock pyvisa ResourceManager globally.

    This ensures no real VISA backend is used; the test port resolves to
    the ``mock_shell`` fixture.
    """
    mock_rm = MockResourceManager()
    mock_rm.add_resource(ADDRESS, mock_shell)

    def mock_resource_manager_factory(backend=None):
        return mock_rm

    monkeypatch.setattr(pyvisa, "ResourceManager", mock_resource_manager_factory)
    return mock_rm


# ===== Driver Fixtures =====


@pytest.fixture
def connected_device(device_config, mock_pyvisa_resource_manager):
    """Create and connect a tinySA driver talking to the mock shell."""
    device = TinySA(device_config)
    device.connect()
    yield device
    if device.is_connected():
        device.disconnect()
