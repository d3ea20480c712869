"""
Emulated machine setup.

This package contains:
- profile: Per-architecture machine parameters
- qemu: QEMU command line construction and the foreground launcher
"""

from .profile import MachineProfile, resolve_profile
from .qemu import QemuEmulator, build_command, drive_spec, format_command

__all__ = [
    "MachineProfile",
    "resolve_profile",
    "QemuEmulator",
    "build_command",
    "drive_spec",
    "format_command",
]
