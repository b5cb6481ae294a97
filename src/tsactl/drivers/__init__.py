"""tinySA drivers package."""

from .base import (
    SWEEP_MODE_OPTIONS,
    TRACE_CALC_OPTIONS,
    TRACE_UNIT_OPTIONS,
    DeviceConfig,
    DeviceError,
    DeviceInfo,
    Marker,
    SpectrumAnalyzerBase,
    Sweep,
    Trace,
    TraceData,
)
from .tinysa import TinySA, find_device

__all__ = [
    "SpectrumAnalyzerBase",
    "DeviceConfig",
    "DeviceError",
    "DeviceInfo",
    "Marker",
    "Sweep",
    "Trace",
    "TraceData",
    "TinySA",
    "find_device",
    "SWEEP_MODE_OPTIONS",
    "TRACE_CALC_OPTIONS",
    "TRACE_UNIT_OPTIONS",
]
