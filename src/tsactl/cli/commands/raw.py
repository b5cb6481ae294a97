"""Raw command: send a shell command verbatim."""

import argparse

from ...drivers.base import DeviceError, SpectrumAnalyzerBase
from ..errors import CommandError
from .base import Command, Operation


def contains_binary(text: str) -> bool:
    """True if the text has any character outside printable ASCII and whitespace."""
    return any((ch < " " or ch > "~") and ch not in "\n\r\t" for ch in text)


class RawCommand(Command):
    """Send a raw command and print the response."""

    name = "raw"
    help = "Send low-level raw commands"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "words", nargs="*", metavar="CMD", help="Command and its arguments"
        )

    def operations(self) -> list[Operation]:
        return [self.send] if self.args.words else []

    def send(self, device: SpectrumAnalyzerBase) -> None:
        command = " ".join(self.args.words)
        try:
            response = device.send_raw(command)
        except DeviceError as e:
            raise CommandError(f"failed to send raw command: {e}") from e

        if not response or contains_binary(response):
            print(response, end="")
        else:
            print(response)
