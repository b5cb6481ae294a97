"""Device command: reset, identification and battery."""

import argparse

from ...drivers.base import DeviceError, SpectrumAnalyzerBase
from ..errors import CommandError
from ..types import unsigned
from .base import Command, Operation, apply


class DeviceCommand(Command):
    """Device information, reset, id and battery settings."""

    name = "device"
    aliases = ("dev",)
    help = "Access device status, ID, battery, and firmware info"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("device flags")
        group.add_argument("-r", "--reset", action="store_true", help="Reset device")
        group.add_argument(
            "--reset-dfu", action="store_true", help="Reset device into DFU mode"
        )
        group.add_argument("--id", action="store_true", help="Get device id")
        group.add_argument(
            "--set-id", type=unsigned, metavar="ID", help="Set device id"
        )
        group.add_argument(
            "-i", "--info", action="store_true", help="Get device information"
        )
        group.add_argument(
            "-b", "--bat", action="store_true", help="Get battery voltage"
        )
        group.add_argument(
            "--bat-offset", action="store_true", help="Get battery offset voltage"
        )
        group.add_argument(
            "--set-bat-offset",
            type=unsigned,
            metavar="MV",
            help="Set battery offset voltage in mV",
        )

    def operations(self) -> list[Operation]:
        args = self.args
        ops = []

        if args.reset:
            ops.append(self.reset)
        if args.reset_dfu:
            ops.append(self.reset_dfu)
        if args.id:
            ops.append(self.print_device_id)
        if args.set_id is not None:
            ops.append(self.set_device_id)
        if args.info:
            ops.append(self.print_info)
        if args.bat:
            ops.append(self.print_battery)
        if args.bat_offset:
            ops.append(self.print_battery_offset)
        if args.set_bat_offset is not None:
            ops.append(self.set_battery_offset)

        return ops

    def reset(self, device: SpectrumAnalyzerBase) -> None:
        apply("reset device", device.reset)

    def reset_dfu(self, device: SpectrumAnalyzerBase) -> None:
        apply("reset device into DFU mode", device.reset, True)

    def print_device_id(self, device: SpectrumAnalyzerBase) -> None:
        try:
            device_id = device.get_device_id()
        except DeviceError as e:
            raise CommandError(f"failed to get device id: {e}") from e
        print(f"Device id: {device_id}")

    def set_device_id(self, device: SpectrumAnalyzerBase) -> None:
        device_id = self.args.set_id
        apply(f"set device id to {device_id}", device.set_device_id, device_id)

    def print_info(self, device: SpectrumAnalyzerBase) -> None:
        info = device.get_info()
        print(f"Model: {info.model}")
        print(f"Firmware version: {info.version}")
        print(f"Hardware version: {info.hardware_version}")

    def print_battery(self, device: SpectrumAnalyzerBase) -> None:
        try:
            voltage = device.get_battery_voltage()
        except DeviceError as e:
            raise CommandError(f"failed to get battery voltage: {e}") from e
        print(f"Battery voltage: {voltage} mV")

    def print_battery_offset(self, device: SpectrumAnalyzerBase) -> None:
        try:
            offset = device.get_battery_offset_voltage()
        except DeviceError as e:
            raise CommandError(f"failed to get battery offset voltage: {e}") from e
        print(f"Battery offset voltage: {offset} mV")

    def set_battery_offset(self, device: SpectrumAnalyzerBase) -> None:
        offset = self.args.set_bat_offset
        apply(
            f"set battery offset voltage to {offset} mV",
            device.set_battery_offset_voltage,
            offset,
        )
