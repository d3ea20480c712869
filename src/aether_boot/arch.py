"""
Supported guest architectures.

Everything that differs between architectures lives in ARCH_INFO, a single
table keyed by Architecture. The firmware locator, ESP assembler, profile
resolver and command builder all read from it rather than branching on the
architecture themselves.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from . import config


class Architecture(Enum):
    """A guest architecture the kernel can be built and booted for."""

    X86_64 = "x86_64"
    AARCH64 = "aarch64"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MachineProfile:
    """
    Emulated hardware needed to boot one architecture.

    Attributes:
        machine: QEMU machine type
        cpu: CPU model, or None to take the machine's default
        memory: Guest RAM size in QEMU notation
        drive_interface: Block interface for the ESP drive, or None for
            the machine's default interface
        graphics: Whether to show a graphical display
        serial: Serial backend for the guest console
    """

    machine: str
    cpu: str | None
    memory: str
    drive_interface: str | None
    graphics: bool = False
    serial: str = config.SERIAL

    def __str__(self) -> str:
        return (
            f"machine={self.machine} cpu={self.cpu or 'default'} "
            f"memory={self.memory} drive={self.drive_interface or 'default'}"
        )


@dataclass(frozen=True)
class ArchInfo:
    """
    Per-architecture constants.

    Attributes:
        target_triple: Rust target the kernel is built for
        boot_file_name: UEFI removable-media boot file under EFI/BOOT
        emulator: QEMU system emulator executable
        firmware_paths: System firmware locations in priority order,
            relative to the system root
        fallback_firmware: Firmware file name looked up in the working
            directory when no system firmware is installed
        firmware_url: Where to download the fallback firmware from
        profile: Emulated machine for this architecture
    """

    target_triple: str
    boot_file_name: str
    emulator: str
    firmware_paths: tuple[Path, ...]
    fallback_firmware: str
    firmware_url: str
    profile: MachineProfile


ARCH_INFO: dict[Architecture, ArchInfo] = {
    # The legacy PC machine brings a default CPU and an IDE controller,
    # so neither needs to be spelled out.
    Architecture.X86_64: ArchInfo(
        target_triple="x86_64-unknown-uefi",
        boot_file_name="BOOTX64.EFI",
        emulator="qemu-system-x86_64",
        firmware_paths=(
            Path("opt/homebrew/share/qemu/edk2-x86_64-code.fd"),  # Homebrew
            Path("usr/share/OVMF/OVMF_CODE.fd"),  # Debian and Ubuntu
        ),
        fallback_firmware="OVMF.fd",
        firmware_url="https://www.kraxel.org/repos/jenkins/edk2/",
        profile=MachineProfile(
            machine="pc",
            cpu=None,
            memory=config.MEMORY,
            drive_interface=None,
        ),
    ),
    # 'virt' has no default CPU or disk controller.
    Architecture.AARCH64: ArchInfo(
        target_triple="aarch64-unknown-uefi",
        boot_file_name="BOOTAA64.EFI",
        emulator="qemu-system-aarch64",
        firmware_paths=(
            Path("opt/homebrew/share/qemu/edk2-aarch64-code.fd"),  # Homebrew
            Path("usr/share/qemu-efi-aarch64/QEMU_EFI.fd"),  # Debian and Ubuntu
        ),
        fallback_firmware="QEMU_EFI.fd",
        firmware_url="https://releases.linaro.org/components/kernel/uefi-linaro/latest/",
        profile=MachineProfile(
            machine="virt",
            cpu="cortex-a72",
            memory=config.MEMORY,
            drive_interface="virtio",
        ),
    ),
}


def arch_info(architecture: Architecture) -> ArchInfo:
    """Get the constants for an architecture."""
    return ARCH_INFO[architecture]
