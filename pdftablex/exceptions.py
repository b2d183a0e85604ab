"""Custom exception types for :mod:`pdftablex`."""

from __future__ import annotations

from typing import Any


class PDFTableXError(Exception):
    """Base exception for all pdftablex related errors."""

    def __init__(self, message: str = "", *, diagnostics: Any = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.diagnostics = diagnostics

    @property
    def default_message(self) -> str:
        return "An unknown table extraction error occurred."


class ConfigurationError(PDFTableXError):
    """Raised when the extractor is configured with unusable values."""

    @property
    def default_message(self) -> str:
        return "Invalid extractor configuration."


class UnsupportedPlatformError(ConfigurationError):
    """Raised when no runtime bundle exists for the host OS/architecture."""

    def __init__(self, os_name: str, arch: str) -> None:
        super().__init__(
            f"Unsupported platform: no bundled Java runtime for os={os_name!r} arch={arch!r}"
        )
        self.os_name = os_name
        self.arch = arch


class RuntimeUnavailableError(PDFTableXError):
    """Raised when the Java runtime could not be started."""

    @property
    def default_message(self) -> str:
        return "Java runtime is not available."


class ToolReportedError(PDFTableXError):
    """Raised when the extraction tool ran but exited with an error."""

    @property
    def default_message(self) -> str:
        return "The extraction tool reported an error."


class ExtractionTimeoutError(PDFTableXError):
    """Raised when the extraction tool did not finish before the configured timeout."""

    @property
    def default_message(self) -> str:
        return "The extraction tool did not finish in time."


class InvalidDocumentError(PDFTableXError):
    """Raised when a document cannot be read as a PDF."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class PasswordRequiredError(InvalidDocumentError):
    """Raised when a document is encrypted and no password was supplied."""

    @property
    def default_message(self) -> str:
        return "PDF is password protected."


class IncorrectPasswordError(InvalidDocumentError):
    """Raised when the supplied password does not unlock the document."""

    @property
    def default_message(self) -> str:
        return "Incorrect password. Please try again."


class StatementParseError(PDFTableXError):
    """Raised when extracted CSV content cannot be read as a statement."""

    @property
    def default_message(self) -> str:
        return "Unable to parse statement data."


class HostCommandError(PDFTableXError):
    """Raised when a host shell command (save, open) fails."""

    @property
    def default_message(self) -> str:
        return "Host command failed."


__all__ = [
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
