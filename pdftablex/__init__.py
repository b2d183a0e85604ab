"""
pdftablex - table extraction backend for statement conversion.

Runs the Tabula jar through a Java runtime bundled with the application,
falling back to a system Java, and reports the outcome as a structured
result instead of raising.

Quick Start:
    >>> from pdftablex import extract_tables
    >>> result = extract_tables('statement.pdf', 'statement.csv')
    >>> result.ok
    True

For CLI usage, use the 'pdftablex' command after installation.
"""

from __future__ import annotations

__version__ = "1.0.0"

from .config import ExtractorConfig
from .document import DocumentInfo, inspect_document, is_pdf_encrypted
from .exceptions import (
    ConfigurationError,
    ExtractionTimeoutError,
    HostCommandError,
    IncorrectPasswordError,
    InvalidDocumentError,
    PasswordRequiredError,
    PDFTableXError,
    RuntimeUnavailableError,
    StatementParseError,
    ToolReportedError,
    UnsupportedPlatformError,
)
from .extractor import ExtractionRequest, TableExtractor, extract_tables
from .locator import RuntimeLocation, RuntimeOrigin, locate_runtime
from .paths import normalize_path
from .platforms import Architecture, OperatingSystem, PlatformProfile, current_profile, resolve_profile
from .results import ExtractionDiagnostics, ExtractionResult, FailureKind
from .statement import Statement, Transaction, extract_statement, parse_tabula_csv

__all__ = [
    "__version__",
    "extract_tables",
    "extract_statement",
    "parse_tabula_csv",
    "inspect_document",
    "is_pdf_encrypted",
    "locate_runtime",
    "normalize_path",
    "resolve_profile",
    "current_profile",
    "ExtractorConfig",
    "ExtractionRequest",
    "TableExtractor",
    "ExtractionResult",
    "ExtractionDiagnostics",
    "FailureKind",
    "RuntimeLocation",
    "RuntimeOrigin",
    "PlatformProfile",
    "OperatingSystem",
    "Architecture",
    "DocumentInfo",
    "Statement",
    "Transaction",
    "PDFTableXError",
    "ConfigurationError",
    "UnsupportedPlatformError",
    "RuntimeUnavailableError",
    "ToolReportedError",
    "ExtractionTimeoutError",
    "InvalidDocumentError",
    "PasswordRequiredError",
    "IncorrectPasswordError",
    "StatementParseError",
    "HostCommandError",
]
