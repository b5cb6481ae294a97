"""Tests for settings persistence and management."""

import json
from unittest.mock import patch

import pytest

from tsactl.config.settings import AppSettings, SettingsManager


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create temporary config directory."""
    config_dir = tmp_path / "settings"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def settings_manager(temp_config_dir):
    """Create settings manager with temporary config directory."""
    with patch(
        "tsactl.config.settings.user_config_dir", return_value=str(temp_config_dir)
    ):
        manager = SettingsManager()
        yield manager


@pytest.mark.unit
class TestAppSettings:
    """Test AppSettings dataclass."""

    def test_default_initialization(self):
        """Test default settings initialization."""
        settings = AppSettings()
        assert settings.last_device == ""
        assert settings.device_history == []
        assert settings.baudrate == 115200
        assert settings.output_folder == "."

    def test_custom_initialization(self):
        """Test custom settings initialization."""
        settings = AppSettings(last_device="COM3", baudrate=9600)
        assert settings.last_device == "COM3"
        assert settings.baudrate == 9600

    def test_post_init_mutable_defaults(self):
        """Test that mutable defaults are properly initialized."""
        settings1 = AppSettings()
        settings2 = AppSettings()

        settings1.device_history.append("/dev/ttyACM0")
        assert "/dev/ttyACM0" in settings1.device_history
        assert "/dev/ttyACM0" not in settings2.device_history


@pytest.mark.unit
class TestSettingsManager:
    """Test SettingsManager functionality."""

    def test_initialization(self, settings_manager, temp_config_dir):
        """Test manager initialization."""
        assert settings_manager.config_dir == temp_config_dir
        assert isinstance(settings_manager.settings, AppSettings)

    def test_load_missing_file_returns_defaults(self, settings_manager):
        """Test loading when config file doesn't exist."""
        settings = settings_manager.load()
        assert settings == AppSettings()

    def test_save_creates_config_file(self, settings_manager):
        """Test saving creates config file."""
        settings_manager.settings.last_device = "/dev/ttyACM0"
        settings_manager.save()

        assert settings_manager.config_file.exists()

        with open(settings_manager.config_file) as f:
            data = json.load(f)

        assert data["last_device"] == "/dev/ttyACM0"

    def test_save_creates_missing_directory(self, tmp_path):
        """Test that save creates the config directory."""
        config_dir = tmp_path / "new" / "dir"
        with patch("tsactl.config.settings.user_config_dir", return_value=str(config_dir)):
            manager = SettingsManager()
            manager.save(AppSettings(output_folder="captures"))

        assert (config_dir / "settings.json").exists()

    def test_save_load_roundtrip(self, settings_manager):
        """Test save/load preserves data."""
        settings_manager.settings.last_device = "COM4"
        settings_manager.settings.baudrate = 9600
        settings_manager.settings.output_folder = "/tmp/sa"
        settings_manager.save()

        # Load in new manager instance
        with patch(
            "tsactl.config.settings.user_config_dir",
            return_value=str(settings_manager.config_dir),
        ):
            new_manager = SettingsManager()
            loaded = new_manager.load()

        assert loaded.last_device == "COM4"
        assert loaded.baudrate == 9600
        assert loaded.output_folder == "/tmp/sa"

    def test_corrupted_config_returns_defaults(self, settings_manager):
        """Test that corrupted config returns defaults."""
        settings_manager.config_file.write_text("{ invalid json }")

        settings = settings_manager.load()
        assert isinstance(settings, AppSettings)
        assert settings.last_device == ""

    def test_unknown_keys_return_defaults(self, settings_manager):
        """Test that a config with unexpected fields falls back to defaults."""
        settings_manager.config_file.write_text(json.dumps({"last_host": "x"}))

        assert settings_manager.load() == AppSettings()

    def test_add_device_to_history(self, settings_manager):
        """Test that the newest device is remembered first."""
        settings_manager.add_device_to_history("/dev/ttyACM0")
        settings_manager.add_device_to_history("/dev/ttyACM1")

        assert settings_manager.settings.last_device == "/dev/ttyACM1"
        assert settings_manager.settings.device_history == [
            "/dev/ttyACM1",
            "/dev/ttyACM0",
        ]

    def test_add_device_to_history_removes_duplicates(self, settings_manager):
        """Test that adding duplicate device moves it to the front."""
        settings_manager.settings.device_history = ["COM1", "COM2", "COM3"]
        settings_manager.add_device_to_history("COM2")

        assert settings_manager.settings.device_history == ["COM2", "COM1", "COM3"]

    def test_add_device_to_history_limits_size(self, settings_manager):
        """Test that device history respects max size."""
        for i in range(20):
            settings_manager.add_device_to_history(f"COM{i}")

        history = settings_manager.settings.device_history
        assert len(history) == SettingsManager.MAX_DEVICE_HISTORY
        assert history[0] == "COM19"

    def test_add_device_to_history_ignores_empty(self, settings_manager):
        """Test that empty/whitespace devices are ignored."""
        settings_manager.add_device_to_history("")
        settings_manager.add_device_to_history("   ")

        assert settings_manager.settings.device_history == []
        assert settings_manager.settings.last_device == ""
