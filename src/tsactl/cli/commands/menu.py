"""Menu command: trigger on-screen menu entries."""

import argparse

from ...drivers.base import SpectrumAnalyzerBase
from ..types import unsigned
from .base import Command, Operation, apply


class MenuCommand(Command):
    """Trigger menu entries by their ids."""

    name = "menu"
    help = "Trigger menu actions by ID"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "ids",
            type=unsigned,
            nargs="+",
            metavar="ID",
            help="Menu entry ids, outermost first",
        )

    def operations(self) -> list[Operation]:
        return [self.trigger_menu] if self.args.ids else []

    def trigger_menu(self, device: SpectrumAnalyzerBase) -> None:
        ids = self.args.ids
        apply(
            f"trigger menu {', '.join(str(i) for i in ids)}",
            device.trigger_menu,
            ids,
        )
