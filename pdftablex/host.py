"""Host shell commands: saving exports, opening files and folders."""

from __future__ import annotations

import logging
import os
import sys
from importlib import metadata
from pathlib import Path
from typing import Callable

from .exceptions import HostCommandError
from .utils import ensure_parent_dir, resolve_path, run_subprocess

_LOGGER = logging.getLogger("pdftablex.host")

SAVE_FILE_TYPES: dict[str, str] = {
    "csv": ".csv",
    "xlsx": ".xlsx",
}

Opener = Callable[[str], None]


def save_file(content: bytes | str, destination: str | os.PathLike[str], file_type: str) -> str:
    """Write an exported file chosen by the user and return a status message."""

    if file_type not in SAVE_FILE_TYPES:
        raise HostCommandError("Unsupported file type")

    path = resolve_path(destination)
    if path.suffix.lower() != SAVE_FILE_TYPES[file_type]:
        path = path.with_name(path.name + SAVE_FILE_TYPES[file_type])
    data = content.encode("utf-8") if isinstance(content, str) else content
    try:
        ensure_parent_dir(path)
        path.write_bytes(data)
    except OSError as exc:
        raise HostCommandError(f"Failed to write file: {exc}") from exc

    _LOGGER.info("Saved %s export to %s", file_type, path)
    return f"File saved successfully to: {path}"


def _system_open(target: str) -> None:
    if sys.platform == "win32":
        os.startfile(target)  # type: ignore[attr-defined]
        return
    command = ["open", target] if sys.platform == "darwin" else ["xdg-open", target]
    completed = run_subprocess(command)
    if completed.returncode != 0:
        raise OSError(completed.stderr.strip() or f"{command[0]} exited with {completed.returncode}")


def open_file(path: str | os.PathLike[str], *, opener: Opener | None = None) -> None:
    """Open *path* with the default application registered for it."""

    target = Path(path)
    if not target.exists():
        raise HostCommandError("File not found")
    try:
        (opener or _system_open)(str(target))
    except OSError as exc:
        raise HostCommandError(f"Failed to open file with default app: {exc}") from exc


def open_folder(path: str | os.PathLike[str], *, opener: Opener | None = None) -> Path:
    """Reveal *path* in the file manager, using its parent when it is a file."""

    target = Path(path)
    if target.is_file():
        target = target.parent
    if not target.exists():
        raise HostCommandError("Could not determine parent directory")
    try:
        (opener or _system_open)(str(target))
    except OSError as exc:
        raise HostCommandError(f"Failed to open folder: {exc}") from exc
    return target


def get_app_version() -> str:
    try:
        return metadata.version("pdftablex")
    except metadata.PackageNotFoundError:
        from . import __version__

        return __version__


__all__ = ["SAVE_FILE_TYPES", "save_file", "open_file", "open_folder", "get_app_version"]
