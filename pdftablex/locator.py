"""Discovery of the Java runtime used to launch the extraction tool."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence

from .exceptions import UnsupportedPlatformError
from .platforms import OperatingSystem, PlatformProfile
from .utils import which

_LOGGER = logging.getLogger("pdftablex.locator")

DEFAULT_RUNTIME_DIR = "jre"


class RuntimeOrigin(str, Enum):
    """Where the runtime executable used for a call came from."""

    BUNDLED = "bundled"
    SYSTEM_FALLBACK = "system_fallback"


@dataclass(frozen=True)
class RuntimeLocation:
    """Represents the runtime chosen for a single extraction call."""

    executable_path: str
    origin: RuntimeOrigin
    console_suppression_required: bool
    bundle_dir: Path | None = None
    probed: tuple[str, ...] = ()


CandidateStrategy = Callable[[Path, PlatformProfile], Path | None]


def _bin_candidate(bundle_dir: Path, profile: PlatformProfile) -> Path:
    return bundle_dir / "bin" / profile.executable_name


def _jdk_home_candidate(bundle_dir: Path, profile: PlatformProfile) -> Path | None:
    if profile.os is not OperatingSystem.MACOS:
        return None
    return bundle_dir / "Contents" / "Home" / "bin" / profile.executable_name


_STRATEGIES: Sequence[CandidateStrategy] = (_bin_candidate, _jdk_home_candidate)


def bundle_directory(
    profile: PlatformProfile,
    resource_root: str | os.PathLike[str],
    runtime_dir: str = DEFAULT_RUNTIME_DIR,
) -> Path:
    if profile.runtime_bundle_id is None:
        raise UnsupportedPlatformError(
            profile.reported_os or profile.os.value,
            profile.reported_arch or profile.arch.value,
        )
    return Path(resource_root) / runtime_dir / profile.runtime_bundle_id


def candidate_paths(profile: PlatformProfile, bundle_dir: Path) -> list[Path]:
    """Return the bundled executable locations for *profile* in probe order."""

    candidates: list[Path] = []
    for strategy in _STRATEGIES:
        candidate = strategy(bundle_dir, profile)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def locate_runtime(
    profile: PlatformProfile,
    resource_root: str | os.PathLike[str],
    *,
    runtime_dir: str = DEFAULT_RUNTIME_DIR,
) -> RuntimeLocation:
    """Find the Java executable for *profile* under *resource_root*.

    Bundled candidates are probed in order and the first existing file wins.
    When none exist the runtime is invoked by its bare name so the operating
    system's program search can find an installed copy.

    Raises
    ------
    UnsupportedPlatformError
        If *profile* has no runtime bundle. No path is probed in that case.
    """

    if not profile.is_supported:
        raise UnsupportedPlatformError(
            profile.reported_os or profile.os.value,
            profile.reported_arch or profile.arch.value,
        )

    bundle_dir = bundle_directory(profile, resource_root, runtime_dir)
    suppress_console = profile.os is OperatingSystem.WINDOWS
    probed: list[str] = []

    for candidate in candidate_paths(profile, bundle_dir):
        probed.append(str(candidate))
        if candidate.is_file():
            _LOGGER.debug("Using bundled runtime at %s", candidate)
            return RuntimeLocation(
                executable_path=str(candidate),
                origin=RuntimeOrigin.BUNDLED,
                console_suppression_required=suppress_console,
                bundle_dir=bundle_dir,
                probed=tuple(probed),
            )

    found = which([profile.executable_name])
    executable = found or profile.executable_name
    _LOGGER.warning(
        "Bundled runtime not found (tried %s); falling back to system '%s'",
        ", ".join(probed),
        executable,
    )
    return RuntimeLocation(
        executable_path=executable,
        origin=RuntimeOrigin.SYSTEM_FALLBACK,
        console_suppression_required=suppress_console,
        bundle_dir=bundle_dir,
        probed=tuple(probed),
    )


__all__ = [
    "DEFAULT_RUNTIME_DIR",
    "RuntimeOrigin",
    "RuntimeLocation",
    "bundle_directory",
    "candidate_paths",
    "locate_runtime",
]
