"""
Errors raised while preparing and launching a boot.

Every failure aborts the run where it happens. The CLI is the only place
that catches these and turns them into an exit code.
"""

from pathlib import Path


class BootError(Exception):
    """Base class for all launch failures."""

    exit_code = 1


class BuildError(BootError):
    """The kernel build step failed."""

    def __init__(self, architecture, returncode: int | None = None, reason: str = ""):
        self.architecture = architecture
        self.returncode = returncode
        if returncode and returncode > 0:
            self.exit_code = returncode

        message = f"Kernel build for {architecture} failed"
        if returncode is not None:
            message += f" with exit code {returncode}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MissingArtifactError(BootError):
    """The build reported success but left no usable kernel binary."""

    def __init__(self, architecture, path: Path, reason: str):
        self.architecture = architecture
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            f"Kernel binary for {architecture} is {reason}: {self.path}. "
            "Rebuild the kernel."
        )


class FirmwareNotFoundError(BootError):
    """
    No UEFI firmware image was found for the architecture.

    Attributes:
        architecture: The architecture that was searched for
        tried: Every candidate path, in the order they were checked
        hint: What the operator can do about it
    """

    def __init__(self, architecture, tried: list[Path], hint: str):
        self.architecture = architecture
        self.tried = list(tried)
        self.hint = hint

        lines = [f"UEFI firmware for {architecture} not found!", "Searched:"]
        lines += [f"  {path}" for path in self.tried]
        lines.append(hint)
        super().__init__("\n".join(lines))


class FilesystemError(BootError):
    """Creating or writing the ESP staging tree failed."""

    def __init__(self, path: Path, error: OSError):
        self.path = Path(path)
        self.error = error
        super().__init__(f"Could not write {self.path}: {error.strerror or error}")


class EmulatorLaunchError(BootError):
    """The emulator could not be started."""

    pass
