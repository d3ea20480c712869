"""
Boot environment preparation.

This package stages the kernel on an ESP directory and finds the UEFI
firmware that will boot it.
"""

from .esp import BootEnvironment, assemble, boot_file_name
from .firmware import FirmwareLocator, firmware_candidates, locate_firmware

__all__ = [
    "BootEnvironment",
    "assemble",
    "boot_file_name",
    "FirmwareLocator",
    "firmware_candidates",
    "locate_firmware",
]
