"""Mapping of the host operating system and CPU to a bundled runtime."""

from __future__ import annotations

import platform
from dataclasses import dataclass
from enum import Enum


class OperatingSystem(str, Enum):
    """Operating systems recognised by the runtime resolver."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    ANDROID = "android"
    UNSUPPORTED = "unsupported"


class Architecture(str, Enum):
    """CPU architectures recognised by the runtime resolver."""

    X86_64 = "x86_64"
    ARM64 = "arm64"
    OTHER = "other"


_OS_ALIASES: dict[str, OperatingSystem] = {
    "windows": OperatingSystem.WINDOWS,
    "win32": OperatingSystem.WINDOWS,
    "cygwin": OperatingSystem.WINDOWS,
    "darwin": OperatingSystem.MACOS,
    "macos": OperatingSystem.MACOS,
    "linux": OperatingSystem.LINUX,
    "android": OperatingSystem.ANDROID,
}

_ARCH_ALIASES: dict[str, Architecture] = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "x64": Architecture.X86_64,
    "arm64": Architecture.ARM64,
    "aarch64": Architecture.ARM64,
    "armv8": Architecture.ARM64,
}

_BUNDLE_IDS: dict[tuple[OperatingSystem, Architecture], str] = {
    (OperatingSystem.WINDOWS, Architecture.X86_64): "windows-x64",
    (OperatingSystem.MACOS, Architecture.X86_64): "macos-x64",
    (OperatingSystem.MACOS, Architecture.ARM64): "macos-aarch64",
    (OperatingSystem.LINUX, Architecture.X86_64): "linux-x64",
    (OperatingSystem.LINUX, Architecture.ARM64): "linux-aarch64",
}

RUNTIME_NAME = "java"


@dataclass(frozen=True)
class PlatformProfile:
    """Describes which runtime bundle serves the host platform.

    ``reported_os`` and ``reported_arch`` keep the literal strings the host
    supplied so unsupported combinations can be reported verbatim.
    """

    os: OperatingSystem
    arch: Architecture
    runtime_bundle_id: str | None
    executable_name: str
    reported_os: str = ""
    reported_arch: str = ""

    @property
    def is_supported(self) -> bool:
        return self.os is not OperatingSystem.UNSUPPORTED and self.runtime_bundle_id is not None

    def describe(self) -> str:
        os_name = self.reported_os or self.os.value
        arch = self.reported_arch or self.arch.value
        return f"{os_name}/{arch}"


def executable_name_for(os_name: OperatingSystem) -> str:
    if os_name is OperatingSystem.WINDOWS:
        return f"{RUNTIME_NAME}.exe"
    return RUNTIME_NAME


def resolve_profile(system: str, machine: str) -> PlatformProfile:
    """Resolve the raw *system* and *machine* strings into a profile.

    Performs no I/O. Any combination without a shipped runtime resolves to
    :attr:`OperatingSystem.UNSUPPORTED` with no ``runtime_bundle_id``.
    """

    detected = _OS_ALIASES.get(system.strip().lower(), OperatingSystem.UNSUPPORTED)
    arch = _ARCH_ALIASES.get(machine.strip().lower(), Architecture.OTHER)
    bundle_id = _BUNDLE_IDS.get((detected, arch))
    # android hosts and 32-bit CPUs have no bundle
    os_name = detected if bundle_id is not None else OperatingSystem.UNSUPPORTED
    return PlatformProfile(
        os=os_name,
        arch=arch,
        runtime_bundle_id=bundle_id,
        executable_name=executable_name_for(detected),
        reported_os=system,
        reported_arch=machine,
    )


def current_profile() -> PlatformProfile:
    """Return the profile of the running interpreter's host."""

    return resolve_profile(platform.system(), platform.machine())


def supported_combinations() -> list[tuple[OperatingSystem, Architecture]]:
    return list(_BUNDLE_IDS)


__all__ = [
    "OperatingSystem",
    "Architecture",
    "PlatformProfile",
    "RUNTIME_NAME",
    "resolve_profile",
    "current_profile",
    "executable_name_for",
    "supported_combinations",
]
