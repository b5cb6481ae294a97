"""Command-line argument parser for tsactl."""

import argparse
import os

from .. import __version__
from ..config.constants import ENV_BAUDRATE, ENV_DEBUG, ENV_DEVICE
from ..config.settings import AppSettings
from .commands import COMMANDS


def env_flag(name: str) -> bool:
    """True if the environment variable is set to a truthy value."""
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def create_cli_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="tsactl",
        description="Command line tool for the tinySA spectrum analyzer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the current sweep
  tsactl sweep

  # Center on 100 MHz with a 2 MHz span
  tsactl sweep --center 100M --span 2M

  # Move marker 1 up by 500 kHz, then back down (negative values need "=")
  tsactl marker 1 --freq +500k
  tsactl marker 1 --freq=-500k

  # Save traces 1 and 2 to a single CSV file
  tsactl save --trace 1,2
        """,
    )

    # Connection parameters
    conn_group = parser.add_argument_group("connection settings")
    conn_group.add_argument(
        "-D",
        "--device",
        default=os.environ.get(ENV_DEVICE),
        metavar="PORT",
        help=f"Serial port, e.g. /dev/ttyACM0 or COM3 (env: {ENV_DEVICE})",
    )
    conn_group.add_argument(
        "--baudrate",
        type=int,
        default=os.environ.get(ENV_BAUDRATE),
        help=f"Serial baud rate (default: 115200, env: {ENV_BAUDRATE})",
    )
    conn_group.add_argument(
        "--debug",
        action="store_true",
        default=env_flag(ENV_DEBUG),
        help=f"Log shell traffic to stderr (env: {ENV_DEBUG})",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    for command_class in COMMANDS:
        sub = subparsers.add_parser(
            command_class.name,
            aliases=list(command_class.aliases),
            help=command_class.help,
            description=command_class.help,
        )
        command_class.add_arguments(sub)
        sub.set_defaults(command_class=command_class, command_parser=sub)

    return parser


def apply_cli_settings(args: argparse.Namespace, settings: AppSettings) -> AppSettings:
    """Apply CLI arguments to settings object."""
    # Connection settings
    if args.device:
        settings.last_device = args.device
    if args.baudrate:
        settings.baudrate = args.baudrate

    return settings
