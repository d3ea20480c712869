"""
EFI System Partition staging.

QEMU's vvfat driver ("fat:rw:<dir>") exposes a host directory to the guest
as a FAT drive, so the ESP is just a directory tree. UEFI firmware without
any boot entries falls back to the removable-media path EFI/BOOT/BOOT<arch>.EFI,
which means the kernel binary is the only file the ESP needs.
"""

import shutil
from dataclasses import dataclass
from pathlib import Path

from aether_boot import config
from aether_boot.arch import Architecture, arch_info
from aether_boot.errors import FilesystemError, MissingArtifactError


@dataclass(frozen=True)
class BootEnvironment:
    """
    An assembled ESP staging directory.

    Attributes:
        architecture: Architecture the boot file was built for
        root: The ESP directory handed to the emulator
        boot_file: Path of the kernel inside the ESP
    """

    architecture: Architecture
    root: Path
    boot_file: Path

    @property
    def relative_boot_path(self) -> Path:
        """Boot file path as seen by the firmware (relative to the ESP root)."""
        return self.boot_file.relative_to(self.root)


def boot_file_name(architecture: Architecture) -> str:
    """The removable-media boot file name for an architecture."""
    return arch_info(architecture).boot_file_name


def check_kernel(architecture: Architecture, kernel_path: Path) -> None:
    """
    Make sure the build left a real kernel behind.

    An empty file would be copied happily and then boot nothing, so it
    counts as a failed build just like a missing one.

    Raises:
        MissingArtifactError: If the file is missing, not a file, or empty.
    """
    if not kernel_path.exists():
        raise MissingArtifactError(architecture, kernel_path, "missing")
    if not kernel_path.is_file():
        raise MissingArtifactError(architecture, kernel_path, "not a regular file")
    if kernel_path.stat().st_size == 0:
        raise MissingArtifactError(architecture, kernel_path, "empty")


def assemble(
    architecture: Architecture,
    kernel_path: str | Path,
    esp_root: str | Path,
) -> BootEnvironment:
    """
    Stage a kernel binary as the ESP's default boot file.

    Creates esp_root/EFI/BOOT if needed and copies the kernel to the
    architecture's boot file name, replacing whatever was there. Safe to
    run repeatedly against the same directory.

    Args:
        architecture: The guest architecture
        kernel_path: The built kernel binary
        esp_root: The ESP staging directory

    Returns:
        The assembled boot environment.

    Raises:
        MissingArtifactError: If the kernel binary is missing or empty
        FilesystemError: If the ESP tree can't be created or written
    """
    kernel_path = Path(kernel_path)
    esp_root = Path(esp_root)
    check_kernel(architecture, kernel_path)

    boot_dir = esp_root / config.EFI_BOOT_DIR
    try:
        boot_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(boot_dir, e) from e

    boot_file = boot_dir / boot_file_name(architecture)
    try:
        shutil.copyfile(kernel_path, boot_file)
    except OSError as e:
        raise FilesystemError(boot_file, e) from e

    return BootEnvironment(architecture=architecture, root=esp_root, boot_file=boot_file)
