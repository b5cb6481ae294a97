"""
Configuration management with XDG-compliant persistent settings.

Provides cross-platform configuration storage following OS conventions:
- Linux/Unix: XDG_CONFIG_HOME (~/.config/tsactl/)
- macOS: ~/Library/Application Support/tsactl/
- Windows: %APPDATA%/tsactl/
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .constants import DEFAULT_BAUDRATE, MAX_DEVICE_HISTORY


@dataclass
class AppSettings:
    """Application settings that persist across sessions."""

    # Connection settings
    last_device: str = ""
    device_history: list[str] = None
    baudrate: int = DEFAULT_BAUDRATE

    # Output settings
    output_folder: str = "."

    def __post_init__(self):
        """Initialize mutable defaults."""
        if self.device_history is None:
            self.device_history = []


class SettingsManager:
    """Manages application settings with automatic persistence."""

    APP_NAME = "tsactl"
    CONFIG_FILE = "settings.json"

    MAX_DEVICE_HISTORY = MAX_DEVICE_HISTORY

    def __init__(self):
        """Initialize settings manager."""
        self.config_dir = Path(user_config_dir(self.APP_NAME))
        self.config_file = self.config_dir / self.CONFIG_FILE
        self.settings = AppSettings()

    def load(self) -> AppSettings:
        """
        Load settings from disk.

        Returns:
            Loaded settings (or defaults if file doesn't exist)
        """
        if not self.config_file.exists():
            return self.settings

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = json.load(f)

            self.settings = AppSettings(**data)
            return self.settings

        except (json.JSONDecodeError, TypeError, ValueError):
            # If config is corrupted, start fresh with defaults
            self.settings = AppSettings()
            return self.settings

    def save(self, settings: AppSettings | None = None) -> None:
        """
        Save settings to disk.

        Args:
            settings: Settings to save (uses current if None)
        """
        if settings is not None:
            self.settings = settings

        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(asdict(self.settings), f, indent=2)

    def add_device_to_history(self, device: str) -> None:
        """
        Remember a serial port as the last used device (most recent first).

        Args:
            device: Serial port name, e.g. /dev/ttyACM0 or COM3
        """
        if not device or not device.strip():
            return

        device = device.strip()
        self.settings.last_device = device

        if device in self.settings.device_history:
            self.settings.device_history.remove(device)

        self.settings.device_history.insert(0, device)

        if len(self.settings.device_history) > self.MAX_DEVICE_HISTORY:
            self.settings.device_history = self.settings.device_history[
                : self.MAX_DEVICE_HISTORY
            ]
