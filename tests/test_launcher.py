"""
Test the full build -> stage -> firmware -> launch sequence with fake
collaborators standing in for cargo and QEMU.
"""

import pytest
from conftest import KERNEL_BYTES, FakeBuilder, FakeEmulator

from aether_boot.arch import Architecture
from aether_boot.errors import BuildError, FirmwareNotFoundError, MissingArtifactError
from aether_boot.launcher import Launcher


def place_fallback_firmware(workdir, name):
    path = workdir / name
    path.write_bytes(b"\x00" * 1024)
    return path


class TestLauncherRun:
    def test_x86_64_with_fallback_firmware(self, workdir, system_root, capsys):
        firmware = place_fallback_firmware(workdir, "OVMF.fd")
        emulator = FakeEmulator()
        launcher = Launcher(workdir, FakeBuilder(workdir), emulator, system_root)

        assert launcher.run(Architecture.X86_64) == 0

        boot_file = workdir / "esp" / "EFI" / "BOOT" / "BOOTX64.EFI"
        assert boot_file.read_bytes() == KERNEL_BYTES

        assert len(emulator.commands) == 1
        command = emulator.commands[0]
        assert command[0] == "qemu-system-x86_64"
        assert command[command.index("-bios") + 1] == str(firmware)
        assert command[command.index("-drive") + 1] == f"format=raw,file=fat:rw:{workdir / 'esp'}"

        out = capsys.readouterr().out
        assert f"Using UEFI firmware: {firmware}" in out
        assert "x86_64-unknown-uefi" in out

    def test_aarch64(self, workdir, system_root):
        place_fallback_firmware(workdir, "QEMU_EFI.fd")
        emulator = FakeEmulator()
        launcher = Launcher(workdir, FakeBuilder(workdir), emulator, system_root)

        launcher.run(Architecture.AARCH64)

        assert (workdir / "esp" / "EFI" / "BOOT" / "BOOTAA64.EFI").read_bytes() == KERNEL_BYTES
        command = emulator.commands[0]
        assert command[:5] == ["qemu-system-aarch64", "-M", "virt", "-cpu", "cortex-a72"]
        assert "if=virtio," in command[command.index("-drive") + 1]

    def test_returns_emulator_exit_code(self, workdir, system_root):
        place_fallback_firmware(workdir, "OVMF.fd")
        launcher = Launcher(workdir, FakeBuilder(workdir), FakeEmulator(exit_code=7), system_root)

        assert launcher.run(Architecture.X86_64) == 7

    def test_rerun_overwrites_boot_file(self, workdir, system_root):
        place_fallback_firmware(workdir, "OVMF.fd")
        emulator = FakeEmulator()

        Launcher(workdir, FakeBuilder(workdir, data=b"first build" * 100), emulator, system_root).run(
            Architecture.X86_64
        )
        Launcher(workdir, FakeBuilder(workdir, data=b"second"), emulator, system_root).run(
            Architecture.X86_64
        )

        assert (workdir / "esp/EFI/BOOT/BOOTX64.EFI").read_bytes() == b"second"


class TestLauncherFailures:
    def test_no_firmware(self, workdir, system_root):
        emulator = FakeEmulator()
        launcher = Launcher(workdir, FakeBuilder(workdir), emulator, system_root)

        with pytest.raises(FirmwareNotFoundError) as exc_info:
            launcher.run(Architecture.AARCH64)

        error = exc_info.value
        assert error.architecture is Architecture.AARCH64
        assert error.tried == [
            system_root / "opt/homebrew/share/qemu/edk2-aarch64-code.fd",
            system_root / "usr/share/qemu-efi-aarch64/QEMU_EFI.fd",
            workdir / "QEMU_EFI.fd",
        ]
        assert emulator.commands == []

    def test_build_failure_stops_before_staging(self, workdir, system_root):
        place_fallback_firmware(workdir, "OVMF.fd")
        emulator = FakeEmulator()
        launcher = Launcher(workdir, FakeBuilder(workdir, returncode=101), emulator, system_root)

        with pytest.raises(BuildError) as exc_info:
            launcher.run(Architecture.X86_64)

        assert exc_info.value.returncode == 101
        assert exc_info.value.exit_code == 101
        assert not (workdir / "esp").exists()
        assert emulator.commands == []

    def test_missing_artifact(self, workdir, system_root):
        place_fallback_firmware(workdir, "OVMF.fd")
        emulator = FakeEmulator()
        launcher = Launcher(workdir, FakeBuilder(workdir, data=None), emulator, system_root)

        with pytest.raises(MissingArtifactError):
            launcher.run(Architecture.X86_64)

        assert emulator.commands == []

    def test_empty_artifact(self, workdir, system_root):
        place_fallback_firmware(workdir, "QEMU_EFI.fd")
        emulator = FakeEmulator()
        launcher = Launcher(workdir, FakeBuilder(workdir, data=b""), emulator, system_root)

        with pytest.raises(MissingArtifactError, match="empty"):
            launcher.run(Architecture.AARCH64)

        assert emulator.commands == []


class TestLauncherPrepare:
    def test_plan(self, workdir, system_root):
        firmware = place_fallback_firmware(workdir, "OVMF.fd")
        builder = FakeBuilder(workdir)
        launcher = Launcher(workdir, builder, FakeEmulator(), system_root)

        plan = launcher.prepare(Architecture.X86_64)

        assert builder.calls == [Architecture.X86_64]
        assert plan.firmware == firmware
        assert plan.environment.root == launcher.esp_root == workdir / "esp"
        assert plan.profile.machine == "pc"
        assert plan.command[0] == "qemu-system-x86_64"
