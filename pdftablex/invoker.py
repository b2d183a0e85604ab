"""Construction and execution of the Tabula subprocess."""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import Sequence

from .locator import RuntimeLocation
from .utils import run_subprocess

_LOGGER = logging.getLogger("pdftablex.invoker")

# subprocess only defines CREATE_NO_WINDOW on Windows
CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0x08000000)

PASSWORD_FLAG = "--password"
REDACTED = "******"


@dataclass(frozen=True)
class ProcessOutcome:
    """What happened when the extraction subprocess was launched.

    Exactly one of ``returncode``, ``spawn_error`` or ``timed_out`` describes
    the outcome: a process that could not be started has no return code, and
    a process killed after its timeout is reported as ``timed_out``.
    """

    command: tuple[str, ...]
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    spawn_error: OSError | None = None
    timed_out: bool = False
    timeout: float | None = None
    elapsed: float = 0.0

    @property
    def spawned(self) -> bool:
        return self.spawn_error is None


def build_command(
    runtime: str,
    artifact: str,
    document: str,
    output: str,
    *,
    password: str | None = None,
    pages: str = "all",
    output_format: str = "CSV",
) -> list[str]:
    """Construct the Tabula command line."""

    command = [
        runtime,
        "-jar",
        artifact,
        document,
        f"--format={output_format}",
        "--outfile",
        output,
        "--pages",
        pages,
    ]
    if password:
        command.extend([PASSWORD_FLAG, password])
    return command


def redact_command(command: Sequence[str]) -> tuple[str, ...]:
    """Return *command* with the value following ``--password`` masked."""

    redacted = list(command)
    for index, argument in enumerate(redacted[:-1]):
        if argument == PASSWORD_FLAG:
            redacted[index + 1] = REDACTED
    return tuple(redacted)


def creation_flags(location: RuntimeLocation) -> int:
    return CREATE_NO_WINDOW if location.console_suppression_required else 0


def run_extraction(
    command: Sequence[str],
    location: RuntimeLocation,
    *,
    timeout: float | None = None,
) -> ProcessOutcome:
    """Run *command* and wait for it to finish.

    Blocks the calling thread. Spawn failures and timeouts are reported on the
    returned :class:`ProcessOutcome` rather than raised.
    """

    display = redact_command(command)
    _LOGGER.info("Launching extraction with %s runtime", location.origin.value)
    started = time.monotonic()
    try:
        completed = run_subprocess(
            command,
            timeout=timeout,
            creationflags=creation_flags(location),
            display_command=display,
        )
    except subprocess.TimeoutExpired as exc:
        _LOGGER.warning("Extraction killed after %s seconds", timeout)
        return ProcessOutcome(
            command=display,
            stdout=_decode(exc.stdout),
            stderr=_decode(exc.stderr),
            timed_out=True,
            timeout=timeout,
            elapsed=time.monotonic() - started,
        )
    except OSError as exc:
        _LOGGER.warning("Unable to start %s: %s", location.executable_path, exc)
        return ProcessOutcome(
            command=display,
            spawn_error=exc,
            elapsed=time.monotonic() - started,
        )

    return ProcessOutcome(
        command=display,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        elapsed=time.monotonic() - started,
    )


def _decode(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


__all__ = [
    "CREATE_NO_WINDOW",
    "ProcessOutcome",
    "build_command",
    "redact_command",
    "creation_flags",
    "run_extraction",
]
