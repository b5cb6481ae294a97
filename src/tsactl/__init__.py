"""tsactl - command line tool for the tinySA spectrum analyzer"""

__version__ = "0.1.0"

from .config.settings import AppSettings, SettingsManager  # noqa: E402
from .drivers import DeviceConfig, DeviceError, SpectrumAnalyzerBase, TinySA  # noqa: E402
from .utils import (  # noqa: E402
    format_frequency,
    format_time_duration,
    parse_frequency,
    parse_relative_frequency,
    parse_time_duration,
)

__all__ = [
    "TinySA",
    "SpectrumAnalyzerBase",
    "DeviceConfig",
    "DeviceError",
    "SettingsManager",
    "AppSettings",
    "parse_frequency",
    "parse_relative_frequency",
    "parse_time_duration",
    "format_frequency",
    "format_time_duration",
]
