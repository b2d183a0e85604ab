"""Orchestration of a single Tabula table extraction."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .config import ExtractorConfig
from .exceptions import UnsupportedPlatformError
from .invoker import build_command, run_extraction
from .locator import locate_runtime
from .paths import normalize_path
from .platforms import PlatformProfile, current_profile
from .results import ExtractionDiagnostics, ExtractionResult, FailureKind, interpret
from .utils import ensure_parent_dir, resolve_path

_LOGGER = logging.getLogger("pdftablex.extractor")


@dataclass(frozen=True)
class ExtractionRequest:
    """Input of a table extraction call. The password is never shown in reprs."""

    document_path: str | os.PathLike[str]
    output_path: str | os.PathLike[str]
    password: str | None = field(default=None, repr=False)


class TableExtractor:
    """Runs Tabula through a bundled or system Java runtime.

    Instances hold only read-only configuration, so one extractor may serve
    concurrent calls from several worker threads. Each call blocks until the
    subprocess exits or the configured timeout kills it.
    """

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        *,
        profile: PlatformProfile | Callable[[], PlatformProfile] | None = None,
    ) -> None:
        self.config = config or ExtractorConfig.from_env()
        self._profile = profile

    def _resolve_profile(self) -> PlatformProfile:
        if self._profile is None:
            return current_profile()
        if isinstance(self._profile, PlatformProfile):
            return self._profile
        return self._profile()

    def extract(self, request: ExtractionRequest) -> ExtractionResult:
        config = self.config
        profile = self._resolve_profile()

        try:
            location = locate_runtime(profile, config.resource_root, runtime_dir=config.runtime_dir)
        except UnsupportedPlatformError as exc:
            _LOGGER.error("%s", exc)
            return ExtractionResult.failure(
                FailureKind.UNSUPPORTED_PLATFORM,
                str(exc),
                ExtractionDiagnostics(
                    artifact_path=os.fspath(config.artifact_path),
                    document_path=os.fspath(request.document_path),
                    output_path=os.fspath(request.output_path),
                ),
            )

        artifact = normalize_path(resolve_path(config.artifact_path), os_name=profile.os)
        document = normalize_path(resolve_path(request.document_path), os_name=profile.os)
        output = normalize_path(resolve_path(request.output_path), os_name=profile.os)
        paths = {"artifact_path": artifact, "document_path": document, "output_path": output}

        if not os.path.isfile(document):
            return ExtractionResult.failure(
                FailureKind.IO_ERROR,
                f"Input document not found: {document}",
                ExtractionDiagnostics.for_location(location, **paths),
            )
        try:
            ensure_parent_dir(Path(output))
        except OSError as exc:
            return ExtractionResult.failure(
                FailureKind.IO_ERROR,
                f"Unable to prepare output directory for {output}: {exc}",
                ExtractionDiagnostics.for_location(location, os_error=str(exc), **paths),
            )

        command = build_command(
            location.executable_path,
            artifact,
            document,
            output,
            password=request.password,
            pages=config.pages,
            output_format=config.output_format,
        )
        _LOGGER.debug(
            "Extracting tables from %s to %s (password %s)",
            document,
            output,
            "<provided>" if request.password else "<none>",
        )
        outcome = run_extraction(command, location, timeout=config.timeout)
        result = interpret(outcome, location=location, artifact=artifact, document=document, output=output)
        if result.ok:
            _LOGGER.info("Extracted tables to %s in %.1fs", output, outcome.elapsed)
        else:
            _LOGGER.warning("Extraction failed: %s", result.message)
        return result


def extract_tables(
    document_path: str | os.PathLike[str],
    output_path: str | os.PathLike[str],
    password: str | None = None,
    *,
    config: ExtractorConfig | None = None,
    profile: PlatformProfile | None = None,
) -> ExtractionResult:
    """Extract every table of *document_path* into the CSV *output_path*.

    Expected failures (unsupported platform, missing runtime, tool errors,
    timeouts) are returned as a failed :class:`ExtractionResult`; nothing is
    retried.
    """

    extractor = TableExtractor(config, profile=profile)
    return extractor.extract(ExtractionRequest(document_path, output_path, password))


__all__ = ["ExtractionRequest", "TableExtractor", "extract_tables"]
