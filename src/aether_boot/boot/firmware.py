"""
UEFI firmware discovery.

QEMU doesn't ship a default UEFI firmware for either architecture, and every
platform installs it somewhere different. We check a fixed list of locations
in priority order:

1. The package manager's location (Homebrew's edk2 build)
2. The distribution's location (Debian/Ubuntu OVMF and qemu-efi packages)
3. A firmware file dropped next to the project by hand

The first regular, readable file wins. The file's contents are trusted as-is.
"""

import logging
import os
from pathlib import Path
from typing import Iterable

from aether_boot.arch import Architecture, arch_info
from aether_boot.errors import FirmwareNotFoundError

logger = logging.getLogger(__name__)


def firmware_candidates(
    architecture: Architecture,
    search_dir: str | Path,
    system_root: str | Path = "/",
) -> list[Path]:
    """
    List where to look for firmware, most preferred first.

    Args:
        architecture: The guest architecture
        search_dir: Directory holding the manually supplied fallback file
        system_root: Root that the system locations are resolved against

    Returns:
        The system locations followed by the fallback file.
    """
    info = arch_info(architecture)
    root = Path(system_root)
    candidates = [root / path for path in info.firmware_paths]
    candidates.append(Path(search_dir) / info.fallback_firmware)
    return candidates


def is_usable(path: Path) -> bool:
    """Check that a path is a regular file we can read."""
    return path.is_file() and os.access(path, os.R_OK)


def missing_firmware_hint(architecture: Architecture, search_dir: str | Path) -> str:
    """Tell the operator where to get firmware and where to put it."""
    info = arch_info(architecture)
    return (
        f"Please download {info.fallback_firmware} from: {info.firmware_url}\n"
        f"And place it in {search_dir}"
    )


def locate_firmware(
    architecture: Architecture,
    candidates: Iterable[str | Path],
    hint: str | None = None,
) -> Path:
    """
    Find the first usable firmware image.

    Args:
        architecture: The guest architecture (used for reporting)
        candidates: Paths to check, in priority order
        hint: Remediation text for the error; defaults to the download
            location for the architecture

    Returns:
        The first candidate that is a regular, readable file.

    Raises:
        FirmwareNotFoundError: If no candidate is usable. The error lists
            every path that was checked.
    """
    tried = []
    for candidate in candidates:
        path = Path(candidate)
        tried.append(path)
        if is_usable(path):
            logger.debug(f"Found {architecture} firmware at {path}")
            return path
        logger.debug(f"No usable {architecture} firmware at {path}")

    if hint is None:
        hint = f"Please download UEFI firmware from: {arch_info(architecture).firmware_url}"
    raise FirmwareNotFoundError(architecture, tried, hint)


class FirmwareLocator:
    """
    Finds UEFI firmware for a given architecture.

    Usage:
        locator = FirmwareLocator(search_dir=Path.cwd())
        firmware = locator.locate(Architecture.AARCH64)
    """

    def __init__(self, search_dir: str | Path, system_root: str | Path = "/"):
        """
        Args:
            search_dir: Directory checked last, for hand-placed firmware
            system_root: Root for the system locations (always / outside tests)
        """
        self.search_dir = Path(search_dir)
        self.system_root = Path(system_root)

    def candidates(self, architecture: Architecture) -> list[Path]:
        """Candidate firmware paths for an architecture, in priority order."""
        return firmware_candidates(architecture, self.search_dir, self.system_root)

    def locate(self, architecture: Architecture) -> Path:
        """
        Find firmware for an architecture.

        Raises:
            FirmwareNotFoundError: If none of the candidates exist.
        """
        return locate_firmware(
            architecture,
            self.candidates(architecture),
            hint=missing_firmware_hint(architecture, self.search_dir),
        )
