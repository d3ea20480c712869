"""
Kernel build step.

The kernel is a cargo project targeting <arch>-unknown-uefi. A release build
leaves a PE/COFF UEFI application at target/<triple>/release/aether.efi.
"""

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from . import config
from .arch import Architecture, arch_info
from .errors import BuildError


@dataclass
class BuildResult:
    """
    Outcome of a kernel build.

    Attributes:
        architecture: What was built
        returncode: The build tool's exit code
        artifact: Where the kernel binary is expected
    """

    architecture: Architecture
    returncode: int
    artifact: Path

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def artifact_path(architecture: Architecture, project_dir: str | Path) -> Path:
    """Where a build for the architecture leaves the kernel binary."""
    return (
        Path(project_dir)
        / "target"
        / arch_info(architecture).target_triple
        / config.CARGO_PROFILE
        / config.KERNEL_ARTIFACT
    )


def cargo_bin_dir() -> Path | None:
    """Where rustup puts cargo, or None if there is no home directory."""
    try:
        return Path.home() / config.CARGO_BIN_SUBDIR
    except RuntimeError:
        return None


def cargo_env() -> dict[str, str]:
    """The current environment with ~/.cargo/bin at the front of PATH."""
    env = dict(os.environ)
    bin_dir = cargo_bin_dir()
    if bin_dir is not None:
        path = env.get("PATH", "")
        env["PATH"] = os.pathsep.join(filter(None, [str(bin_dir), path]))
    return env


class CargoBuild:
    """
    Builds the kernel with cargo.

    Usage:
        builder = CargoBuild(project_dir)
        result = builder.build(Architecture.X86_64)
        if result.ok:
            print(result.artifact)
    """

    def __init__(self, project_dir: str | Path, cargo: str = config.CARGO_EXECUTABLE):
        self.project_dir = Path(project_dir)
        self.cargo = cargo

    def command(self, architecture: Architecture) -> list[str]:
        """The cargo invocation for an architecture."""
        return [
            self.cargo,
            "build",
            f"--{config.CARGO_PROFILE}",
            "--target",
            arch_info(architecture).target_triple,
        ]

    def build(self, architecture: Architecture) -> BuildResult:
        """
        Build the kernel, streaming cargo's output to the terminal.

        Returns:
            The build result. A failing build is reported through the
            return code, not raised.

        Raises:
            BuildError: If cargo can't be run at all.
        """
        try:
            completed = subprocess.run(
                self.command(architecture),
                cwd=self.project_dir,
                env=cargo_env(),
            )
        except OSError as e:
            raise BuildError(
                architecture, reason=f"could not run '{self.cargo}' ({e})"
            ) from e

        return BuildResult(
            architecture=architecture,
            returncode=completed.returncode,
            artifact=artifact_path(architecture, self.project_dir),
        )
