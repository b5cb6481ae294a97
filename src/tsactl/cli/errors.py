"""Errors raised by command-line operations."""


class CommandError(Exception):
    """Command could not be carried out (invalid combination or device failure)."""
