"""
QEMU command construction and launch.

The emulator runs in the foreground with our stdio: the guest's serial
console and the QEMU monitor share the terminal (mon:stdio), and the run
ends when the guest powers off or the operator quits QEMU (Ctrl-A X).
"""

import shlex
import shutil
import subprocess
from pathlib import Path

from aether_boot import config
from aether_boot.arch import Architecture, MachineProfile, arch_info
from aether_boot.errors import EmulatorLaunchError


def drive_spec(profile: MachineProfile, esp_root: str | Path) -> str:
    """
    Build the -drive value exposing the ESP directory as a raw FAT disk.

    For aarch64 with an ESP at /work/esp this gives:
        if=virtio,format=raw,file=fat:rw:/work/esp
    """
    spec = f"format=raw,file=fat:rw:{esp_root}"
    if profile.drive_interface:
        spec = f"if={profile.drive_interface},{spec}"
    return spec


def build_command(
    architecture: Architecture,
    profile: MachineProfile,
    firmware: str | Path,
    esp_root: str | Path,
) -> list[str]:
    """
    Build the full QEMU argv.

    Args:
        architecture: Selects the emulator binary
        profile: Machine parameters
        firmware: UEFI firmware image, loaded as the boot ROM
        esp_root: ESP staging directory

    Returns:
        The command line, starting with the emulator executable.
    """
    command = [arch_info(architecture).emulator, "-M", profile.machine]
    if profile.cpu:
        command += ["-cpu", profile.cpu]
    command += [
        "-m", profile.memory,
        "-bios", str(firmware),
        "-drive", drive_spec(profile, esp_root),
    ]
    if not profile.graphics:
        command.append("-nographic")
    command += ["-serial", profile.serial]
    return command


def format_command(command: list[str]) -> str:
    """Render a command as a copy-pasteable shell line."""
    return " ".join(shlex.quote(str(arg)) for arg in command)


class QemuEmulator:
    """
    Runs QEMU as a foreground process.

    Usage:
        emulator = QemuEmulator()
        exit_code = emulator.launch(command)
    """

    def launch(self, command: list[str]) -> int:
        """
        Run the emulator until it exits.

        Args:
            command: Full argv, as built by build_command()

        Returns:
            QEMU's exit code, or 130 if interrupted from the keyboard.

        Raises:
            EmulatorLaunchError: If the emulator isn't installed or can't
                be started.
        """
        executable = command[0]
        if shutil.which(executable) is None:
            raise EmulatorLaunchError(
                f"QEMU executable '{executable}' not found. "
                "Install QEMU (e.g. 'brew install qemu' or your distribution's "
                "qemu-system package)."
            )

        print(f"$ {format_command(command)}")
        try:
            process = subprocess.Popen(command)
        except OSError as e:
            raise EmulatorLaunchError(f"Failed to start {executable}: {e}") from e

        try:
            process.wait()
        except KeyboardInterrupt:
            # Ctrl-C reaches QEMU through the terminal as well; wait for it
            # to finish shutting down on its own terms.
            process.wait()
            print("\nInterrupted")
            return config.INTERRUPTED_EXIT_CODE
        return process.returncode
