from __future__ import annotations

import stat
import sys
from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdftablex.config import ExtractorConfig  # noqa: E402
from pdftablex.platforms import PlatformProfile, resolve_profile  # noqa: E402

STATEMENT_CSV = (
    "Receipt No.,Completion Time,Details,Transaction Status,Paid In,Withdrawn,Balance\n"
    "QAB2,2023-01-05 09:15:00,Customer Transfer Charge,Completed,,30.00,970.00\n"
    "QAB1,2023-01-04 18:00:00,Funds received from JOHN,Completed,\"1,000.00\",,\"1,000.00\"\n"
)

_FAKE_TABULA = """#!/bin/sh
printf '%s\\n' "$@" > "{args_file}"
out=""
while [ $# -gt 0 ]; do
  case "$1" in
    --outfile) out="$2"; shift 2 ;;
    *) shift ;;
  esac
done
{body}
"""


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "statement.pdf"
    writer = PdfWriter()
    for _ in range(2):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdftablex-tests", "/Title": "Statement"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def encrypted_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "protected.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.encrypt(user_password="123456", owner_password="owner")
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def linux_profile() -> PlatformProfile:
    return resolve_profile("Linux", "x86_64")


@pytest.fixture()
def resource_root(tmp_path: Path) -> Path:
    root = tmp_path / "resources"
    root.mkdir()
    (root / "tabula.jar").write_bytes(b"PK\x03\x04")
    return root


@pytest.fixture()
def config(resource_root: Path) -> ExtractorConfig:
    return ExtractorConfig(resource_root=resource_root, timeout=10)


@pytest.fixture()
def fake_java(resource_root: Path) -> Callable[[str], Path]:
    """Install a shell script posing as the bundled linux-x64 ``java``.

    The script records its arguments in ``args.txt`` next to itself and then
    runs *body*, which sees the ``--outfile`` value as ``$out``.
    """

    def _install(body: str) -> Path:
        bin_dir = resource_root / "jre" / "linux-x64" / "bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        script = bin_dir / "java"
        args_file = bin_dir / "args.txt"
        script.write_text(_FAKE_TABULA.format(args_file=args_file, body=body))
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _install


@pytest.fixture()
def succeeding_java(fake_java: Callable[[str], Path]) -> Path:
    body = "cat > \"$out\" <<'CSV'\n" + STATEMENT_CSV + "CSV\nexit 0"
    return fake_java(body)


@pytest.fixture()
def failing_java(fake_java: Callable[[str], Path]) -> Path:
    return fake_java('echo "Error: the password is incorrect" >&2\nexit 2')


@pytest.fixture()
def statement_csv() -> str:
    return STATEMENT_CSV


@pytest.fixture()
def recorded_args() -> Callable[[Path], list[str]]:
    def _read(script: Path) -> list[str]:
        return (script.parent / "args.txt").read_text().splitlines()

    return _read
