from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pdftablex import host
from pdftablex.exceptions import HostCommandError


def test_save_file_writes_bytes(tmp_path: Path) -> None:
    target = tmp_path / "exports" / "statement.csv"

    message = host.save_file(b"a,b\n1,2\n", target, "csv")

    assert target.read_bytes() == b"a,b\n1,2\n"
    assert message == f"File saved successfully to: {target.resolve()}"


def test_save_file_adds_extension(tmp_path: Path) -> None:
    host.save_file("data", tmp_path / "report", "xlsx")

    assert (tmp_path / "report.xlsx").exists()


def test_save_file_rejects_unknown_type(tmp_path: Path) -> None:
    with pytest.raises(HostCommandError, match="Unsupported file type"):
        host.save_file(b"", tmp_path / "x.pdf", "pdf")


def test_save_file_reports_os_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory")

    with pytest.raises(HostCommandError, match="Failed to write file"):
        host.save_file(b"x", blocker / "out.csv", "csv")


def test_open_file_missing(tmp_path: Path) -> None:
    with pytest.raises(HostCommandError, match="File not found"):
        host.open_file(tmp_path / "missing.csv", opener=lambda target: None)


def test_open_file_uses_opener(tmp_path: Path) -> None:
    target = tmp_path / "out.csv"
    target.write_text("x")
    opened: list[str] = []

    host.open_file(target, opener=opened.append)

    assert opened == [str(target)]


def test_open_folder_uses_parent_for_files(tmp_path: Path) -> None:
    target = tmp_path / "out.csv"
    target.write_text("x")
    opened: list[str] = []

    folder = host.open_folder(target, opener=opened.append)

    assert folder == tmp_path
    assert opened == [str(tmp_path)]


def test_opener_failure_is_wrapped(tmp_path: Path) -> None:
    def broken(target: str) -> None:
        raise OSError("no handler")

    with pytest.raises(HostCommandError, match="no handler"):
        host.open_folder(tmp_path, opener=broken)


def test_system_open_on_linux(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(command, **_: object):
        calls.append(list(command))
        return SimpleNamespace(returncode=0, stdout="", stderr="")

    monkeypatch.setattr(host.sys, "platform", "linux")
    monkeypatch.setattr(host, "run_subprocess", fake_run)

    host._system_open("/tmp/out.csv")

    assert calls == [["xdg-open", "/tmp/out.csv"]]


def test_system_open_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(host.sys, "platform", "darwin")
    monkeypatch.setattr(
        host,
        "run_subprocess",
        lambda command, **_: SimpleNamespace(returncode=1, stdout="", stderr="cannot open"),
    )

    with pytest.raises(OSError, match="cannot open"):
        host._system_open("/tmp/out.csv")


def test_get_app_version() -> None:
    assert host.get_app_version()
