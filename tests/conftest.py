"""
Shared fixtures: fake collaborators standing in for cargo and QEMU.
"""

from pathlib import Path

import pytest

from aether_boot.build import BuildResult, artifact_path

KERNEL_BYTES = b"MZ\x90\x00" + bytes(range(256)) * 16


class FakeBuilder:
    """Pretends to run cargo, optionally writing a kernel binary."""

    def __init__(self, project_dir: Path, data: bytes | None = KERNEL_BYTES, returncode: int = 0):
        self.project_dir = project_dir
        self.data = data
        self.returncode = returncode
        self.calls = []

    def build(self, architecture):
        self.calls.append(architecture)
        artifact = artifact_path(architecture, self.project_dir)
        if self.returncode == 0 and self.data is not None:
            artifact.parent.mkdir(parents=True, exist_ok=True)
            artifact.write_bytes(self.data)
        return BuildResult(architecture=architecture, returncode=self.returncode, artifact=artifact)


class FakeEmulator:
    """Records launch requests instead of starting QEMU."""

    def __init__(self, exit_code: int = 0):
        self.exit_code = exit_code
        self.commands = []

    def launch(self, command):
        self.commands.append(command)
        return self.exit_code


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def system_root(tmp_path: Path) -> Path:
    """An empty stand-in for / so installed firmware doesn't leak into tests."""
    path = tmp_path / "sysroot"
    path.mkdir()
    return path
