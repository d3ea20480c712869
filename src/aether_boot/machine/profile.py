"""
Machine profiles.

A profile is the emulated hardware an architecture needs: machine type,
CPU, RAM, how the ESP drive is attached and where the console goes. The
values come straight from the architecture table.
"""

from aether_boot.arch import Architecture, MachineProfile, arch_info


def resolve_profile(architecture: Architecture) -> MachineProfile:
    """
    Get the machine profile for an architecture.

    Every supported architecture has one, so this never fails.
    """
    return arch_info(architecture).profile


__all__ = ["MachineProfile", "resolve_profile"]
