"""
Test fixtures and mocks for tsactl tests.

This module provides:
- A mock pyvisa serial resource simulating the tinySA shell
- A mock resource manager handing out mock shells
"""

from .mock_shell import (
    VERSION_TINYSA,
    VERSION_TINYSA_ULTRA,
    MockResourceManager,
    MockShellResource,
)

__all__ = [
    "MockShellResource",
    "MockResourceManager",
    "VERSION_TINYSA",
    "VERSION_TINYSA_ULTRA",
]
