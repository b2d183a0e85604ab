from __future__ import annotations

import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from pdftablex import __version__
from pdftablex import cli as cli_module
from pdftablex import extractor as extractor_module
from pdftablex.cli import cli
from pdftablex.platforms import resolve_profile

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake runtime is a POSIX shell script")


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def on_linux(monkeypatch: pytest.MonkeyPatch) -> None:
    profile = resolve_profile("Linux", "x86_64")
    monkeypatch.setattr(extractor_module, "current_profile", lambda: profile)
    monkeypatch.setattr(cli_module, "current_profile", lambda: profile)


@posix_only
def test_extract_command(
    runner: CliRunner,
    on_linux: None,
    succeeding_java: Path,
    sample_pdf: Path,
    resource_root: Path,
    tmp_path: Path,
) -> None:
    output = tmp_path / "out.csv"

    result = runner.invoke(
        cli,
        ["extract", str(sample_pdf), "-o", str(output), "-r", str(resource_root)],
    )

    assert result.exit_code == 0, result.output
    assert "Tables written" in result.output
    assert output.exists()


@posix_only
def test_extract_command_failure(
    runner: CliRunner,
    on_linux: None,
    failing_java: Path,
    sample_pdf: Path,
    resource_root: Path,
    tmp_path: Path,
) -> None:
    result = runner.invoke(
        cli,
        ["extract", str(sample_pdf), "-o", str(tmp_path / "o.csv"), "-r", str(resource_root), "-p", "bad"],
    )

    assert result.exit_code == 1
    assert "Error" in result.output
    assert "bad" not in result.output.split()


def test_doctor_reports_fallback(
    runner: CliRunner,
    on_linux: None,
    monkeypatch: pytest.MonkeyPatch,
    resource_root: Path,
) -> None:
    monkeypatch.setattr("pdftablex.locator.which", lambda executables: None)

    result = runner.invoke(cli, ["doctor", "-r", str(resource_root)])

    assert result.exit_code == 0, result.output
    assert "system_fallback" in result.output
    assert "linux-x64" in result.output


def test_doctor_unsupported(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, resource_root: Path) -> None:
    monkeypatch.setattr(cli_module, "current_profile", lambda: resolve_profile("Haiku", "x86_64"))

    result = runner.invoke(cli, ["doctor", "-r", str(resource_root)])

    assert result.exit_code == 1
    assert "Unsupported platform" in result.output


def test_parse_command(runner: CliRunner, tmp_path: Path, statement_csv: str) -> None:
    csv_path = tmp_path / "statement.csv"
    csv_path.write_text(statement_csv)

    result = runner.invoke(cli, ["parse", str(csv_path)])

    assert result.exit_code == 0, result.output
    assert "QAB1" in result.output
    assert "Total charges" in result.output


def test_version_command(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
