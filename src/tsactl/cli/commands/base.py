"""
Base class for command-line commands.

A command turns its parsed flags into an ordered list of operations and
applies them one after another to a single device handle. Commands that
have nothing to do either print a status overview or ask the caller to
print usage.
"""

import argparse
from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractContextManager

from ...config.constants import TABLE_PADDING
from ...config.settings import AppSettings
from ...drivers.base import DeviceError, SpectrumAnalyzerBase
from ..errors import CommandError

Operation = Callable[[SpectrumAnalyzerBase], None]
DeviceOpener = Callable[[], AbstractContextManager]


def apply(message: str, func: Callable, *args) -> None:
    """
    Print what is about to happen, then do it.

    Device failures are re-raised as CommandError("failed to <message>: ...").
    """
    print(message)
    try:
        func(*args)
    except DeviceError as e:
        raise CommandError(f"failed to {message}: {e}") from e


def print_table(rows: list[list[str]], indent: str = "  ") -> None:
    """Print rows as left-aligned columns."""
    if not rows:
        return
    columns = max(len(row) for row in rows)
    widths = [
        max((len(row[i]) for row in rows if i < len(row)), default=0)
        for i in range(columns)
    ]
    for row in rows:
        cells = [
            cell.ljust(widths[i] + TABLE_PADDING) if i < len(row) - 1 else cell
            for i, cell in enumerate(row)
        ]
        print(indent + "".join(cells))


class Command(ABC):
    """Abstract base class for commands."""

    name: str = ""
    aliases: tuple[str, ...] = ()
    help: str = ""

    # Show a status overview when no flags are given instead of usage
    show_without_operations: bool = False

    def __init__(self, args: argparse.Namespace, settings: AppSettings | None = None):
        """
        Initialize command.

        Args:
            args: Parsed command-line arguments
            settings: Persisted application settings
        """
        self.args = args
        self.settings = settings or AppSettings()

    @classmethod
    @abstractmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Register the command's flags on its subparser."""
        pass

    @abstractmethod
    def operations(self) -> list[Operation]:
        """Operations requested by the flags, in the order they apply."""
        pass

    def validate(self, operations: list[Operation]) -> None:
        """Reject invalid flag combinations before touching the device."""

    def show(self, device: SpectrumAnalyzerBase) -> None:
        """Print a status overview (commands with show_without_operations)."""
        raise NotImplementedError

    def run(self, open_device: DeviceOpener) -> bool:
        """
        Run the command.

        Args:
            open_device: Returns a context manager yielding a connected device

        Returns:
            False if there was nothing to do and usage should be printed
        """
        ops = self.operations()
        self.validate(ops)

        if not ops and not self.show_without_operations:
            return False

        with open_device() as device:
            if ops:
                for op in ops:
                    op(device)
            else:
                self.show(device)

        return True
