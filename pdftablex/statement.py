"""Parsing of Tabula CSV output into M-Pesa statement transactions."""

from __future__ import annotations

import csv
import logging
import os
import re
import shutil
import tempfile
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import ExtractorConfig
from .document import inspect_document
from .exceptions import InvalidDocumentError, StatementParseError
from .extractor import ExtractionRequest, TableExtractor

_LOGGER = logging.getLogger("pdftablex.statement")

TEMP_INPUT_PREFIX = "mpesa_temp_"
TEMP_OUTPUT_PREFIX = "mpesa_output_"

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)")
_NON_NUMERIC = re.compile(r"[^\d.-]")
_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y",
)


@dataclass
class Transaction:
    """A single statement row.

    Attributes:
        receipt_no: M-Pesa receipt number
        completion_time: Completion timestamp as printed on the statement
        details: Transaction description
        transaction_status: Status column, ``Unknown`` when blank
        paid_in: Amount received, ``None`` when empty
        withdrawn: Amount sent, ``None`` when empty
        balance: Running balance, ``0`` when empty
        raw: The CSV line the row was parsed from
        transaction_type: Paybill statements only
        other_party: Paybill statements only
    """

    receipt_no: str
    completion_time: str
    details: str
    transaction_status: str
    paid_in: float | None
    withdrawn: float | None
    balance: float
    raw: str
    transaction_type: str | None = None
    other_party: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Statement:
    transactions: list[Transaction] = field(default_factory=list)
    total_charges: float = 0.0
    file_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "total_charges": self.total_charges,
            "transactions": [transaction.to_dict() for transaction in self.transactions],
        }


def parse_amount(value: str | None) -> float | None:
    """Parse a statement amount, returning its absolute value."""

    if value is None or value == "-" or not value.strip():
        return None
    match = _NUMBER.match(_NON_NUMERIC.sub("", value))
    if match is None:
        return None
    return abs(float(match.group(0)))


def parse_completion_time(value: str) -> datetime | None:
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _is_header(line: str) -> bool:
    lower = line.lower()
    return "receipt" in lower and "completion" in lower and ("details" in lower or "transaction" in lower)


def _clean(value: str | None) -> str:
    return (value or "").strip().replace("\r", " ")


def calculate_total_charges(transactions: list[Transaction]) -> float:
    """Sum the amounts of rows whose details mention a charge."""

    total = 0.0
    for transaction in transactions:
        if "charge" in transaction.details.lower():
            total += transaction.withdrawn or transaction.paid_in or 0
    return total


def _sort_key(indexed: tuple[int, Transaction]) -> tuple[int, datetime, int]:
    index, transaction = indexed
    parsed = parse_completion_time(transaction.completion_time)
    if parsed is None:
        return (1, datetime.min, index)
    return (0, parsed, index)


def parse_tabula_csv(content: str) -> Statement:
    """Parse the CSV Tabula produced for an M-Pesa statement.

    Lines before the column header are ignored, as are repeated headers
    (one per page), short rows and rows with neither a receipt number nor a
    completion time. Transactions are returned oldest first.
    """

    lines = [line for line in content.split("\n") if line.strip()]
    header_index = next((i for i, line in enumerate(lines) if _is_header(line)), None)
    if header_index is None:
        _LOGGER.debug("No statement header found in %d lines", len(lines))
        return Statement()

    header = lines[header_index].lower()
    is_paybill = "other party" in header or "transaction type" in header

    transactions: list[Transaction] = []
    for line in lines[header_index + 1:]:
        fields = next(csv.reader([line]), [])
        if len(fields) < 4:
            continue
        if "receipt" in fields[0].lower():
            continue

        padded = fields + [""] * (9 - len(fields))
        transaction = Transaction(
            receipt_no=_clean(padded[0]),
            completion_time=_clean(padded[1]),
            details=_clean(padded[2]),
            transaction_status=_clean(padded[3]) or "Unknown",
            paid_in=parse_amount(padded[4]),
            withdrawn=parse_amount(padded[5]),
            balance=parse_amount(padded[6]) or 0,
            raw=line,
        )
        if is_paybill and len(fields) >= 8:
            transaction.transaction_type = _clean(padded[7])
            transaction.other_party = _clean(padded[8])

        if not transaction.receipt_no and not transaction.completion_time:
            continue
        transactions.append(transaction)

    ordered = [transaction for _, transaction in sorted(enumerate(transactions), key=_sort_key)]
    return Statement(transactions=ordered, total_charges=calculate_total_charges(ordered))


def extract_statement(
    document: str | os.PathLike[str] | bytes,
    password: str | None = None,
    *,
    config: ExtractorConfig | None = None,
    extractor: TableExtractor | None = None,
) -> Statement:
    """Extract and parse a statement PDF given as a path or raw bytes.

    The document is staged in a private temporary directory which is removed
    afterwards whether or not extraction succeeds. It is opened with pypdf
    before Tabula is launched so protected statements fail early.

    Raises
    ------
    pdftablex.exceptions.InvalidDocumentError
        If the document cannot be read, including
        :class:`~pdftablex.exceptions.PasswordRequiredError` and
        :class:`~pdftablex.exceptions.IncorrectPasswordError`.
    pdftablex.exceptions.PDFTableXError
        The exception matching the failed extraction's kind.
    """

    extractor = extractor or TableExtractor(config)
    stamp = int(time.time() * 1000)
    temp_dir = Path(tempfile.mkdtemp(prefix="pdftablex-"))
    staged_input = temp_dir / f"{TEMP_INPUT_PREFIX}{stamp}.pdf"
    staged_output = temp_dir / f"{TEMP_OUTPUT_PREFIX}{stamp}.csv"
    try:
        try:
            if isinstance(document, bytes):
                staged_input.write_bytes(document)
                file_name = None
            else:
                shutil.copyfile(document, staged_input)
                file_name = Path(document).name
        except OSError as exc:
            raise InvalidDocumentError(f"Unable to read statement: {exc}") from exc

        inspect_document(staged_input, password)

        result = extractor.extract(ExtractionRequest(staged_input, staged_output, password))
        result.raise_for_failure()

        try:
            content = staged_output.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError as exc:
            raise StatementParseError("Tabula reported success but wrote no CSV output") from exc
        statement = parse_tabula_csv(content)
        statement.file_name = file_name
        _LOGGER.info("Parsed %d transactions", len(statement.transactions))
        return statement
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)


__all__ = [
    "TEMP_INPUT_PREFIX",
    "TEMP_OUTPUT_PREFIX",
    "Transaction",
    "Statement",
    "parse_amount",
    "parse_completion_time",
    "calculate_total_charges",
    "parse_tabula_csv",
    "extract_statement",
]
