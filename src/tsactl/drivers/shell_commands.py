"""
Shell command constants for tinySA control.

This module centralizes all shell commands sent to the instrument,
making it easier to maintain and adapt for different firmware versions.
Frequencies are always sent as integer Hz.
"""

# Device information
CMD_VERSION = "version"
CMD_DEVICE_ID = "deviceid"
CMD_BATTERY = "vbat"
CMD_BATTERY_OFFSET = "vbat_offset"
CMD_RESET = "reset"
CMD_RESET_DFU = "reset dfu"
CMD_CAPTURE = "capture"

# Sweep commands
CMD_SWEEP = "sweep"
CMD_STATUS = "status"
CMD_PAUSE = "pause"
CMD_RESUME = "resume"
CMD_FREQUENCIES = "frequencies"

# Marker / trace listing
CMD_MARKER = "marker"
CMD_TRACE = "trace"

# Level and signal commands
CMD_LNA_ON = "lna on"
CMD_LNA_OFF = "lna off"
CMD_REF_LEVEL_AUTO = "trace reflevel auto"


def cmd_set_device_id(device_id: int) -> str:
    """Set the user assigned device id."""
    return f"deviceid {device_id}"


def cmd_set_battery_offset(offset_mv: int) -> str:
    """Set battery voltage offset in mV."""
    return f"vbat_offset {offset_mv}"


def cmd_sweep(setting: str, value: int) -> str:
    """Set a sweep parameter (start, stop, center, span, cw, points)."""
    return f"sweep {setting} {value}"


def cmd_set_sweep_mode(mode: str) -> str:
    """Set sweep mode (normal, precise, fast, noise)."""
    return f"sweep {mode}"


def cmd_set_sweep_time(time_us: int) -> str:
    """Set sweep time, the firmware accepts an SI suffixed value."""
    return f"sweeptime {time_us}u"


def cmd_marker(marker: int, *args) -> str:
    """Build a marker command, e.g. ``marker 1 on``."""
    return " ".join(["marker", str(marker), *(str(a) for a in args)])


def cmd_trace(trace: int, *args) -> str:
    """Build a trace command, e.g. ``trace 1 view on``."""
    return " ".join(["trace", str(trace), *(str(a) for a in args)])


def cmd_trace_calc(trace: int, mode: str) -> str:
    """Set trace calculation mode (off, minh, maxh, ...)."""
    return f"calc {trace} {mode}"


def cmd_set_trace_unit(unit: str) -> str:
    """Set display unit for all traces."""
    return f"trace {unit}"


def cmd_set_ref_level(level: int) -> str:
    """Set reference level."""
    return f"trace reflevel {level}"


def cmd_set_trace_scale(scale: float) -> str:
    """Set display scale per division."""
    return f"trace scale {scale:g}"


def cmd_set_spur_removal(state: str) -> str:
    """Set spur removal (on, off, auto)."""
    return f"spur {state}"


def cmd_trigger_menu(menu_ids: list[int]) -> str:
    """Trigger a menu path, e.g. ``menu 6 2``."""
    return " ".join(["menu", *(str(i) for i in menu_ids)])


def cmd_load_preset(preset: int) -> str:
    """Load preset (0 = startup)."""
    return f"load {preset}"


def cmd_save_preset(preset: int) -> str:
    """Save preset (0 = startup)."""
    return f"save {preset}"
