"""Configuration for the table extractor."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

from .exceptions import ConfigurationError
from .locator import DEFAULT_RUNTIME_DIR

ENV_RESOURCE_ROOT = "PDFTABLEX_RESOURCE_ROOT"
ENV_ARTIFACT = "PDFTABLEX_ARTIFACT"
ENV_TIMEOUT = "PDFTABLEX_TIMEOUT"

DEFAULT_ARTIFACT = "tabula.jar"
DEFAULT_TIMEOUT = 60.0


def _default_resource_root() -> Path:
    return Path(__file__).resolve().parent / "resources"


@dataclass(frozen=True)
class ExtractorConfig:
    """Where bundled assets live and how the extraction tool is run.

    Attributes:
        resource_root: Directory holding the runtime bundles and the jar
        artifact_name: File name of the Tabula jar under ``resource_root``
        runtime_dir: Folder under ``resource_root`` holding one bundle per platform
        timeout: Seconds before the subprocess is killed, ``None`` to wait forever
        pages: Page selection passed to Tabula
        output_format: Output format passed to Tabula
    """

    resource_root: Path = field(default_factory=_default_resource_root)
    artifact_name: str = DEFAULT_ARTIFACT
    runtime_dir: str = DEFAULT_RUNTIME_DIR
    timeout: float | None = DEFAULT_TIMEOUT
    pages: str = "all"
    output_format: str = "CSV"

    def __post_init__(self) -> None:
        if not isinstance(self.resource_root, Path):
            object.__setattr__(self, "resource_root", Path(self.resource_root))
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")
        if not self.artifact_name:
            raise ConfigurationError("Artifact name must not be empty")

    @property
    def artifact_path(self) -> Path:
        return self.resource_root / self.artifact_name

    def with_updates(self, **changes: object) -> "ExtractorConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExtractorConfig":
        """Build a configuration from ``PDFTABLEX_*`` environment variables."""

        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        root = env.get(ENV_RESOURCE_ROOT)
        if root:
            values["resource_root"] = Path(root).expanduser()

        artifact = env.get(ENV_ARTIFACT)
        if artifact:
            values["artifact_name"] = artifact

        raw_timeout = env.get(ENV_TIMEOUT)
        if raw_timeout is not None:
            values["timeout"] = _parse_timeout(raw_timeout)

        return cls(**values)  # type: ignore[arg-type]


def _parse_timeout(raw: str) -> float | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_TIMEOUT} must be a number, got {raw!r}") from exc
    if value == 0:
        return None
    if value < 0:
        raise ConfigurationError(f"{ENV_TIMEOUT} must not be negative, got {raw!r}")
    return value


__all__ = [
    "ENV_RESOURCE_ROOT",
    "ENV_ARTIFACT",
    "ENV_TIMEOUT",
    "DEFAULT_ARTIFACT",
    "DEFAULT_TIMEOUT",
    "ExtractorConfig",
]
