"""Path normalisation for arguments handed to the extraction subprocess."""

from __future__ import annotations

import os

from .platforms import OperatingSystem

_VERBATIM_UNC_PREFIXES = ("\\\\?\\UNC\\", "//?/UNC/")
_VERBATIM_PREFIXES = ("\\\\?\\", "//?/")


def _host_uses_verbatim_paths() -> bool:
    return os.name == "nt"


def strip_verbatim_prefix(value: str) -> str:
    """Remove every leading extended-length prefix from *value*.

    ``\\\\?\\C:\\data`` becomes ``C:\\data`` and ``\\\\?\\UNC\\server\\share``
    becomes ``\\\\server\\share``.
    """

    while True:
        for prefix in _VERBATIM_UNC_PREFIXES:
            if value.startswith(prefix):
                value = "\\\\" + value[len(prefix):]
                break
        else:
            for prefix in _VERBATIM_PREFIXES:
                if value.startswith(prefix):
                    value = value[len(prefix):]
                    break
            else:
                return value


def normalize_path(path: os.PathLike[str] | str, *, os_name: OperatingSystem | None = None) -> str:
    """Return *path* as a string the Java tool understands.

    On Windows the extended-length prefix is stripped; everywhere else the
    string form of *path* is returned unchanged. The transformation is
    idempotent. *os_name* overrides host detection.
    """

    value = os.fspath(path)
    if os_name is None:
        windows = _host_uses_verbatim_paths()
    else:
        windows = os_name is OperatingSystem.WINDOWS
    if not windows:
        return value
    return strip_verbatim_prefix(value)


def normalize_paths(*paths: os.PathLike[str] | str, os_name: OperatingSystem | None = None) -> tuple[str, ...]:
    return tuple(normalize_path(path, os_name=os_name) for path in paths)


__all__ = ["normalize_path", "normalize_paths", "strip_verbatim_prefix"]
