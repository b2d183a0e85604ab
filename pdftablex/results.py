"""Classification of extraction outcomes into structured results."""

from __future__ import annotations

import errno
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from .exceptions import (
    ConfigurationError,
    ExtractionTimeoutError,
    PDFTableXError,
    RuntimeUnavailableError,
    ToolReportedError,
)
from .invoker import ProcessOutcome
from .locator import RuntimeLocation


class FailureKind(str, Enum):
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    RUNTIME_UNAVAILABLE = "runtime_unavailable"
    TOOL_REPORTED_ERROR = "tool_reported_error"
    TIMED_OUT = "timed_out"
    IO_ERROR = "io_error"


_EXCEPTIONS: dict[FailureKind, type[PDFTableXError]] = {
    FailureKind.UNSUPPORTED_PLATFORM: ConfigurationError,
    FailureKind.RUNTIME_UNAVAILABLE: RuntimeUnavailableError,
    FailureKind.TOOL_REPORTED_ERROR: ToolReportedError,
    FailureKind.TIMED_OUT: ExtractionTimeoutError,
    FailureKind.IO_ERROR: PDFTableXError,
}


@dataclass(frozen=True)
class ExtractionDiagnostics:
    """Context attached to a failed extraction."""

    runtime_origin: str | None = None
    executable_path: str | None = None
    bundle_dir: str | None = None
    probed_paths: tuple[str, ...] = ()
    artifact_path: str | None = None
    document_path: str | None = None
    output_path: str | None = None
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    os_error: str | None = None

    @classmethod
    def for_location(cls, location: RuntimeLocation | None, **values: Any) -> "ExtractionDiagnostics":
        if location is None:
            return cls(**values)
        return cls(
            runtime_origin=location.origin.value,
            executable_path=location.executable_path,
            bundle_dir=str(location.bundle_dir) if location.bundle_dir else None,
            probed_paths=location.probed,
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["probed_paths"] = list(self.probed_paths)
        return data


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of :func:`pdftablex.extract_tables`.

    A result is either a success carrying ``output_path`` or a failure
    carrying ``kind``, ``message`` and ``diagnostics``.
    """

    output_path: str | None = None
    kind: FailureKind | None = None
    message: str = ""
    diagnostics: ExtractionDiagnostics = field(default_factory=ExtractionDiagnostics)

    @classmethod
    def success(cls, output_path: str) -> "ExtractionResult":
        return cls(output_path=output_path)

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        message: str,
        diagnostics: ExtractionDiagnostics | None = None,
    ) -> "ExtractionResult":
        return cls(kind=kind, message=message, diagnostics=diagnostics or ExtractionDiagnostics())

    @property
    def ok(self) -> bool:
        return self.kind is None

    def raise_for_failure(self) -> str:
        """Return the output path, raising the matching exception on failure."""

        if self.kind is not None:
            raise _EXCEPTIONS[self.kind](self.message, diagnostics=self.diagnostics)
        if self.output_path is None:
            raise PDFTableXError("Successful result is missing its output path")
        return self.output_path

    def to_dict(self) -> dict[str, Any]:
        if self.kind is None:
            return {"ok": True, "output_path": self.output_path}
        return {
            "ok": False,
            "kind": self.kind.value,
            "message": self.message,
            "diagnostics": self.diagnostics.to_dict(),
        }


def describe_spawn_error(error: OSError, executable: str) -> str:
    """Translate a spawn failure into an actionable message."""

    if isinstance(error, FileNotFoundError) or error.errno == errno.ENOENT:
        return (
            f"Java runtime not found at '{executable}'. The bundled runtime is missing "
            "and no Java installation was found on PATH. Please install Java."
        )
    if isinstance(error, PermissionError) or error.errno in (errno.EACCES, errno.EPERM):
        return f"Permission denied when starting Java runtime '{executable}': {error}"
    return f"Failed to execute Java runtime '{executable}': {error}"


def _timeout_message(outcome: ProcessOutcome) -> str:
    if outcome.timeout is None:
        return "Tabula was terminated before it finished"
    return f"Tabula did not finish within {outcome.timeout:g} seconds and was terminated"


def interpret(
    outcome: ProcessOutcome,
    *,
    location: RuntimeLocation,
    artifact: str,
    document: str,
    output: str,
) -> ExtractionResult:
    """Map *outcome* onto an :class:`ExtractionResult`."""

    paths = {"artifact_path": artifact, "document_path": document, "output_path": output}

    if outcome.spawn_error is not None:
        diagnostics = ExtractionDiagnostics.for_location(
            location,
            os_error=str(outcome.spawn_error),
            **paths,
        )
        return ExtractionResult.failure(
            FailureKind.RUNTIME_UNAVAILABLE,
            describe_spawn_error(outcome.spawn_error, location.executable_path),
            diagnostics,
        )

    if outcome.timed_out:
        diagnostics = ExtractionDiagnostics.for_location(
            location,
            stdout=outcome.stdout,
            stderr=outcome.stderr,
            **paths,
        )
        return ExtractionResult.failure(
            FailureKind.TIMED_OUT,
            _timeout_message(outcome),
            diagnostics,
        )

    if outcome.returncode == 0:
        return ExtractionResult.success(output)

    diagnostics = ExtractionDiagnostics.for_location(
        location,
        exit_code=outcome.returncode,
        stdout=outcome.stdout,
        stderr=outcome.stderr,
        **paths,
    )
    detail = outcome.stderr.strip() or outcome.stdout.strip() or "no output"
    return ExtractionResult.failure(
        FailureKind.TOOL_REPORTED_ERROR,
        f"Tabula failed with exit code {outcome.returncode}: {detail}",
        diagnostics,
    )


__all__ = [
    "FailureKind",
    "ExtractionDiagnostics",
    "ExtractionResult",
    "describe_spawn_error",
    "interpret",
]
