"""
Configuration constants for the tinySA control tool.

This module centralizes all hardcoded values to make the application
easier to maintain and configure.
"""

# Serial connection defaults
DEFAULT_BAUDRATE = 115200
DEFAULT_TIMEOUT_MS = 5000
CAPTURE_TIMEOUT_MS = 10000

# USB identifiers of the tinySA virtual COM port (STM32 CDC)
TINYSA_USB_VID = 0x0483
TINYSA_USB_PID = 0x5740

# Shell framing
SHELL_PROMPT = "ch>"
SHELL_LINE_ENDING = "\r"

# Screen sizes (width, height) for capture decoding
SCREEN_SIZE_TINYSA = (320, 240)
SCREEN_SIZE_TINYSA_ULTRA = (480, 320)

# Version string prefixes reported by the firmware
MODEL_PREFIXES = {
    "tinysa4": "tinySA Ultra",
    "tinysa": "tinySA",
}

# Environment variables for global options
ENV_DEVICE = "TSACTL_DEVICE"
ENV_BAUDRATE = "TSACTL_BAUDRATE"
ENV_DEBUG = "TSACTL_DEBUG"

# Default export filenames (placeholders: <date>, <time>, <trace>)
FILENAME_CAPTURE_DEFAULT = "SA_<date>_<time>.png"
FILENAME_TRACE_DEFAULT = "SA_<date>_<time>_<trace>.csv"
FILENAME_TRACE_MULTI_DEFAULT = "SA_<date>_<time>.csv"
FILENAME_DATE_FORMAT = "%y%m%d"
FILENAME_TIME_FORMAT = "%H%M%S"

# Debug log truncation
RESPONSE_TRUNCATE_LENGTH = 200
BINARY_PREVIEW_LENGTH = 32
BINARY_RATIO_THRESHOLD = 0.3

# History limits
MAX_DEVICE_HISTORY = 10

# Column padding for tabular output
TABLE_PADDING = 3
