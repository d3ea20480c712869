"""
Fixed settings shared by every architecture.

Architecture-specific values live in the table in aether_boot.arch.
"""

from pathlib import Path

# Staging directory for the EFI System Partition, relative to the working directory
ESP_DIRNAME = "esp"

# Directory under the ESP root that firmware scans for removable-media boot files
EFI_BOOT_DIR = Path("EFI") / "BOOT"

# The kernel crate produces this UEFI application
KERNEL_ARTIFACT = "aether.efi"
KERNEL_NAME = "Aether Kernel"

CARGO_EXECUTABLE = "cargo"
CARGO_PROFILE = "release"
# rustup installs cargo under the home directory; it's often missing from
# PATH in non-login shells
CARGO_BIN_SUBDIR = Path(".cargo") / "bin"

# Guest RAM for every profile
MEMORY = "512M"

# Serial console and QEMU monitor multiplexed onto the controlling terminal
SERIAL = "mon:stdio"

# Exit code reported when the operator interrupts the emulator
INTERRUPTED_EXIT_CODE = 130
