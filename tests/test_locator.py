from __future__ import annotations

from pathlib import Path

import pytest

from pdftablex import locator
from pdftablex.exceptions import UnsupportedPlatformError
from pdftablex.locator import RuntimeOrigin, candidate_paths, locate_runtime
from pdftablex.platforms import resolve_profile


def _install(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    return path


def _no_which(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    calls: list[str] = []

    def fake_which(executables):
        calls.extend(executables)
        return None

    monkeypatch.setattr(locator, "which", fake_which)
    return calls


def test_bundled_runtime_is_preferred(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _no_which(monkeypatch)
    java = _install(tmp_path / "jre" / "linux-x64" / "bin" / "java")

    location = locate_runtime(resolve_profile("Linux", "x86_64"), tmp_path)

    assert location.origin is RuntimeOrigin.BUNDLED
    assert location.executable_path == str(java)
    assert location.bundle_dir == tmp_path / "jre" / "linux-x64"
    assert not location.console_suppression_required
    assert calls == []


def test_missing_bundle_falls_back_to_bare_name(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _no_which(monkeypatch)

    location = locate_runtime(resolve_profile("Linux", "aarch64"), tmp_path)

    assert location.origin is RuntimeOrigin.SYSTEM_FALLBACK
    assert location.executable_path == "java"
    assert location.probed == (str(tmp_path / "jre" / "linux-aarch64" / "bin" / "java"),)


def test_fallback_records_system_path_when_found(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(locator, "which", lambda executables: "/usr/bin/java")

    location = locate_runtime(resolve_profile("Linux", "x86_64"), tmp_path)

    assert location.origin is RuntimeOrigin.SYSTEM_FALLBACK
    assert location.executable_path == "/usr/bin/java"


def test_macos_probes_jdk_layout_second(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _no_which(monkeypatch)
    java = _install(tmp_path / "jre" / "macos-aarch64" / "Contents" / "Home" / "bin" / "java")

    location = locate_runtime(resolve_profile("Darwin", "arm64"), tmp_path)

    assert location.origin is RuntimeOrigin.BUNDLED
    assert location.executable_path == str(java)
    assert location.probed == (
        str(tmp_path / "jre" / "macos-aarch64" / "bin" / "java"),
        str(java),
    )


def test_macos_prefers_plain_bin_layout(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _no_which(monkeypatch)
    plain = _install(tmp_path / "jre" / "macos-x64" / "bin" / "java")
    _install(tmp_path / "jre" / "macos-x64" / "Contents" / "Home" / "bin" / "java")

    location = locate_runtime(resolve_profile("Darwin", "x86_64"), tmp_path)

    assert location.executable_path == str(plain)
    assert len(location.probed) == 1


def test_candidates_only_include_jdk_layout_on_macos(tmp_path: Path) -> None:
    linux = candidate_paths(resolve_profile("Linux", "x86_64"), tmp_path)
    mac = candidate_paths(resolve_profile("Darwin", "arm64"), tmp_path)

    assert linux == [tmp_path / "bin" / "java"]
    assert mac == [tmp_path / "bin" / "java", tmp_path / "Contents" / "Home" / "bin" / "java"]


def test_windows_requires_console_suppression(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _no_which(monkeypatch)
    java = _install(tmp_path / "jre" / "windows-x64" / "bin" / "java.exe")

    location = locate_runtime(resolve_profile("Windows", "AMD64"), tmp_path)

    assert location.executable_path == str(java)
    assert location.console_suppression_required


def test_unsupported_platform_fails_before_probing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _no_which(monkeypatch)

    def forbidden(*_: object, **__: object) -> None:
        raise AssertionError("bundle must not be probed")

    monkeypatch.setattr(locator, "bundle_directory", forbidden)
    monkeypatch.setattr(locator, "candidate_paths", forbidden)

    with pytest.raises(UnsupportedPlatformError) as excinfo:
        locate_runtime(resolve_profile("SunOS", "sparc"), tmp_path)

    assert "SunOS" in str(excinfo.value)
    assert "sparc" in str(excinfo.value)
    assert calls == []
