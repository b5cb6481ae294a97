"""CLI command runner for tsactl."""

import argparse
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from ..config.settings import AppSettings, SettingsManager
from ..drivers import DeviceConfig, TinySA, find_device
from ..drivers.base import SpectrumAnalyzerBase
from ..utils.logging_wrapper import LoggingDeviceWrapper, stderr_logger
from .errors import CommandError
from .parser import apply_cli_settings


def resolve_port(args: argparse.Namespace, settings: AppSettings) -> str:
    """
    Pick the serial port to use.

    Order: --device flag (or its environment variable), a tinySA found by
    USB id, then the last port that worked.
    """
    if args.device:
        return args.device

    port = find_device()
    if port:
        return port

    if settings.last_device:
        return settings.last_device

    raise CommandError("no tinySA found, use --device to select a serial port")


def create_device_config(args: argparse.Namespace, settings: AppSettings) -> DeviceConfig:
    """Create device config from arguments and settings."""
    return DeviceConfig(port=resolve_port(args, settings), baudrate=settings.baudrate)


@contextmanager
def open_device(
    args: argparse.Namespace, settings_manager: SettingsManager
) -> Iterator[SpectrumAnalyzerBase]:
    """
    Connect to the instrument for the duration of a command.

    The port is remembered in the settings once the connection succeeds.
    """
    settings = settings_manager.settings
    device = TinySA(create_device_config(args, settings))

    if args.debug:
        device = LoggingDeviceWrapper(device, stderr_logger)

    with device:
        settings_manager.add_device_to_history(device.config.port)
        settings_manager.save()
        yield device


def run_command(args: argparse.Namespace) -> int:
    """Run the selected subcommand and return the exit status."""
    try:
        # Load settings
        settings_manager = SettingsManager()
        settings = apply_cli_settings(args, settings_manager.load())

        command = args.command_class(args, settings)
        if not command.run(lambda: open_device(args, settings_manager)):
            args.command_parser.print_usage()

        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
