"""Command-line interface for tsactl."""

from .errors import CommandError
from .parser import apply_cli_settings, create_cli_parser
from .runner import open_device, resolve_port, run_command

__all__ = [
    "CommandError",
    "create_cli_parser",
    "apply_cli_settings",
    "open_device",
    "resolve_port",
    "run_command",
]
