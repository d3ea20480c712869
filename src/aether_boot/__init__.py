"""
aether-boot - boot the Aether kernel under QEMU with UEFI firmware.
"""

__version__ = "0.1.0"
