"""Pre-flight inspection of statement PDFs with :mod:`pypdf`."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .exceptions import IncorrectPasswordError, InvalidDocumentError, PasswordRequiredError
from .utils import resolve_path

_LOGGER = logging.getLogger("pdftablex.document")


@dataclass(frozen=True)
class DocumentInfo:
    """Basic facts about a statement PDF."""

    path: Path
    page_count: int
    encrypted: bool
    file_size: int


def inspect_document(path: str | os.PathLike[str], password: str | None = None) -> DocumentInfo:
    """Open *path* and report whether it can be extracted.

    Encrypted documents need a *password* that unlocks them; the password is
    only used to open the document and is not retained.

    Raises
    ------
    InvalidDocumentError
        If the file is missing or is not a readable PDF.
    PasswordRequiredError
        If the document is encrypted and no password was given.
    IncorrectPasswordError
        If the given password does not unlock the document.
    """

    pdf_path = resolve_path(path)
    if not pdf_path.is_file():
        raise InvalidDocumentError(f"PDF not found: {pdf_path}")

    try:
        reader = PdfReader(str(pdf_path))
    except (PdfReadError, ValueError, OSError) as exc:
        raise InvalidDocumentError(f"Unable to read PDF: {pdf_path}: {exc}") from exc

    encrypted = bool(reader.is_encrypted)
    if encrypted:
        if not password:
            raise PasswordRequiredError()
        try:
            status = reader.decrypt(password)
        except Exception as exc:  # pragma: no cover - pypdf decrypt errors vary
            raise InvalidDocumentError(f"Failed to decrypt PDF: {exc}") from exc
        if status == 0:
            raise IncorrectPasswordError()

    try:
        page_count = len(reader.pages)
    except PdfReadError as exc:
        raise InvalidDocumentError(f"Unable to read pages of {pdf_path}: {exc}") from exc

    _LOGGER.debug("Inspected %s: %d pages, encrypted=%s", pdf_path, page_count, encrypted)
    return DocumentInfo(
        path=pdf_path,
        page_count=page_count,
        encrypted=encrypted,
        file_size=pdf_path.stat().st_size,
    )


def is_pdf_encrypted(path: str | os.PathLike[str]) -> bool:
    """Return ``True`` when *path* points to an encrypted PDF document."""

    try:
        inspect_document(path)
    except PasswordRequiredError:
        return True
    return False


__all__ = ["DocumentInfo", "inspect_document", "is_pdf_encrypted"]
