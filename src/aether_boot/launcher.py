"""
Boot orchestration.

A run is a straight line: build the kernel, stage it on the ESP, find
firmware, pick the machine profile, start QEMU. Any failure stops the run
before the emulator starts, so QEMU is never launched with missing firmware
or an empty boot file.

The build tool and the emulator are passed in, which lets tests drive the
whole sequence without cargo or QEMU installed.
"""

from dataclasses import dataclass
from pathlib import Path

from . import config
from .arch import Architecture, MachineProfile, arch_info
from .boot import BootEnvironment, FirmwareLocator, assemble
from .errors import BuildError
from .machine import build_command, resolve_profile


@dataclass
class LaunchPlan:
    """
    Everything needed to start the emulator.

    Attributes:
        architecture: The guest architecture
        environment: The assembled ESP
        firmware: UEFI firmware image used as the boot ROM
        profile: Emulated machine parameters
        command: Full emulator argv
    """

    architecture: Architecture
    environment: BootEnvironment
    firmware: Path
    profile: MachineProfile
    command: list[str]


class Launcher:
    """
    Builds, stages and boots the kernel for one architecture.

    Usage:
        launcher = Launcher(Path.cwd(), CargoBuild(Path.cwd()), QemuEmulator())
        exit_code = launcher.run(Architecture.X86_64)

    The builder needs a build(architecture) method returning a BuildResult;
    the emulator needs a launch(command) method returning an exit code.
    """

    def __init__(self, workdir: str | Path, builder, emulator, system_root: str | Path = "/"):
        """
        Args:
            workdir: Project directory; holds the ESP staging directory and
                any hand-placed fallback firmware
            builder: Kernel build collaborator
            emulator: Emulator collaborator
            system_root: Root for system firmware locations
        """
        self.workdir = Path(workdir)
        self.builder = builder
        self.emulator = emulator
        self.firmware_locator = FirmwareLocator(self.workdir, system_root)

    @property
    def esp_root(self) -> Path:
        """The ESP staging directory."""
        return self.workdir / config.ESP_DIRNAME

    def prepare(self, architecture: Architecture) -> LaunchPlan:
        """
        Run every step up to, but not including, the emulator launch.

        Raises:
            BuildError: If the build fails
            MissingArtifactError: If the build produced no usable kernel
            FilesystemError: If the ESP can't be written
            FirmwareNotFoundError: If no firmware is installed
        """
        triple = arch_info(architecture).target_triple
        print(f"[Build] Building {config.KERNEL_NAME} for {triple}...")
        result = self.builder.build(architecture)
        if not result.ok:
            raise BuildError(architecture, result.returncode)

        environment = assemble(architecture, result.artifact, self.esp_root)
        print(f"[ESP] Staged {result.artifact} as {environment.relative_boot_path}")

        firmware = self.firmware_locator.locate(architecture)
        print(f"[QEMU] Using UEFI firmware: {firmware}")

        profile = resolve_profile(architecture)
        command = build_command(architecture, profile, firmware, environment.root)

        return LaunchPlan(
            architecture=architecture,
            environment=environment,
            firmware=firmware,
            profile=profile,
            command=command,
        )

    def run(self, architecture: Architecture) -> int:
        """
        Build, stage and boot the kernel.

        Blocks until the emulator exits. The ESP is left in place afterwards.

        Returns:
            The emulator's exit code.
        """
        plan = self.prepare(architecture)
        print(f"[QEMU] Starting QEMU {architecture}...")
        return self.emulator.launch(plan.command)
