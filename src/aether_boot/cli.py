"""
Command-line interface for aether-boot.

This module defines all CLI commands using the Typer library. There is one
launch command per architecture and none of them take options: everything
is derived from the architecture and the current directory.
"""

from pathlib import Path
from typing import Annotated

import typer

from aether_boot import __version__
from aether_boot.arch import Architecture

app = typer.Typer(
    name="aether-boot",
    help="aether-boot - Build the Aether kernel and boot it under QEMU with UEFI",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"aether-boot {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """aether-boot - Build the Aether kernel and boot it under QEMU with UEFI."""
    pass


def make_launcher(workdir: Path):
    """Create a launcher that really runs cargo and QEMU."""
    from aether_boot.build import CargoBuild
    from aether_boot.launcher import Launcher
    from aether_boot.machine import QemuEmulator

    return Launcher(workdir, CargoBuild(workdir), QemuEmulator())


def boot(architecture: Architecture) -> None:
    """Run a launcher for the architecture and exit with its result."""
    from aether_boot.errors import BootError

    try:
        exit_code = make_launcher(Path.cwd()).run(architecture)
    except BootError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=e.exit_code) from e

    if exit_code != 0:
        raise typer.Exit(code=exit_code)


@app.command("x86_64")
def boot_x86_64() -> None:
    """
    Build the kernel for x86_64-unknown-uefi and boot it.

    Uses OVMF firmware on a legacy PC machine. The serial console and the
    QEMU monitor share this terminal; quit with Ctrl-A X.
    """
    boot(Architecture.X86_64)


@app.command("aarch64")
def boot_aarch64() -> None:
    """
    Build the kernel for aarch64-unknown-uefi and boot it.

    Uses the EDK2 ArmVirt firmware on a 'virt' machine with a Cortex-A72.
    The serial console and the QEMU monitor share this terminal; quit with
    Ctrl-A X.
    """
    boot(Architecture.AARCH64)


@app.command("info")
def info() -> None:
    """
    Show what each architecture would boot with.

    Lists the build target, boot file, emulator, machine profile and every
    firmware location that is checked, marking the one that would be used.
    Nothing is built or launched.
    """
    from aether_boot.arch import arch_info
    from aether_boot.boot.firmware import FirmwareLocator, is_usable

    locator = FirmwareLocator(Path.cwd())

    for architecture in Architecture:
        arch = arch_info(architecture)
        print(f"{architecture}")
        print("=" * 60)
        print(f"Target:     {arch.target_triple}")
        print(f"Boot file:  EFI/BOOT/{arch.boot_file_name}")
        print(f"Emulator:   {arch.emulator}")
        print(f"Machine:    {arch.profile}")
        print("Firmware:")

        selected = None
        for candidate in locator.candidates(architecture):
            found = is_usable(candidate)
            if found and selected is None:
                selected = candidate
                marker = "*"
            else:
                marker = "+" if found else "-"
            print(f"  {marker} {candidate}")

        if selected is None:
            print(f"  No firmware found. Download from: {arch.firmware_url}")
        print()


def run_x86() -> None:
    """Entry point for run-qemu-x86."""
    app(["x86_64"], prog_name="run-qemu-x86")


def run_arm64() -> None:
    """Entry point for run-qemu-arm64."""
    app(["aarch64"], prog_name="run-qemu-arm64")


if __name__ == "__main__":
    app()
