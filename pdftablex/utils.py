"""Utility helpers shared by :mod:`pdftablex` modules."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import MutableMapping, Sequence

_LOGGER = logging.getLogger("pdftablex")


def resolve_path(path: os.PathLike[str] | str) -> Path:
    """Resolve *path* into an absolute :class:`~pathlib.Path`."""

    resolved = Path(path).expanduser().resolve()
    _LOGGER.debug("Resolved path '%s' to '%s'", path, resolved)
    return resolved


def ensure_parent_dir(path: Path) -> None:
    """Create parent directory for *path* if it does not exist."""

    path.parent.mkdir(parents=True, exist_ok=True)


def which(executables: Sequence[str]) -> str | None:
    """Return the first executable from *executables* found on ``PATH``."""

    for candidate in executables:
        found = shutil.which(candidate)
        if found:
            _LOGGER.debug("Detected external tool: %s -> %s", candidate, found)
            return found
    return None


def run_subprocess(
    command: Sequence[str],
    *,
    env: MutableMapping[str, str] | None = None,
    check: bool = False,
    timeout: float | None = None,
    creationflags: int = 0,
    display_command: Sequence[str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run *command* capturing output.

    Output is decoded with the locale encoding; undecodable bytes are
    replaced rather than raising :class:`UnicodeDecodeError`.

    Parameters
    ----------
    command:
        Command and arguments to execute.
    env:
        Optional environment overrides.
    check:
        Whether to raise :class:`subprocess.CalledProcessError` on non-zero exit.
    timeout:
        Seconds to wait before the child is killed and
        :class:`subprocess.TimeoutExpired` is raised. ``None`` waits forever.
    creationflags:
        Windows process creation flags. Only forwarded when non-zero.
    display_command:
        Replacement used when logging the command, e.g. with secrets masked.
    """

    _LOGGER.debug("Executing command: %s", " ".join(display_command or command))
    extra: dict[str, int] = {}
    if creationflags:
        extra["creationflags"] = creationflags
    completed = subprocess.run(
        list(command),
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=check,
        text=True,
        errors="replace",
        timeout=timeout,
        **extra,
    )
    _LOGGER.debug(
        "Command finished with exit code %s\nstdout: %s\nstderr: %s",
        completed.returncode,
        completed.stdout,
        completed.stderr,
    )
    return completed


__all__ = ["resolve_path", "ensure_parent_dir", "which", "run_subprocess"]
