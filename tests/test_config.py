from __future__ import annotations

from pathlib import Path

import pytest

from pdftablex.config import DEFAULT_TIMEOUT, ExtractorConfig
from pdftablex.exceptions import ConfigurationError


def test_defaults() -> None:
    config = ExtractorConfig()

    assert config.timeout == DEFAULT_TIMEOUT
    assert config.artifact_path.name == "tabula.jar"
    assert config.runtime_dir == "jre"
    assert config.pages == "all"
    assert config.output_format == "CSV"


def test_from_env(tmp_path: Path) -> None:
    config = ExtractorConfig.from_env(
        {
            "PDFTABLEX_RESOURCE_ROOT": str(tmp_path),
            "PDFTABLEX_ARTIFACT": "tabula-1.0.5.jar",
            "PDFTABLEX_TIMEOUT": "15",
        }
    )

    assert config.resource_root == tmp_path
    assert config.artifact_path == tmp_path / "tabula-1.0.5.jar"
    assert config.timeout == 15.0


@pytest.mark.parametrize("raw", ["0", ""])
def test_zero_or_empty_timeout_disables_bound(raw: str) -> None:
    assert ExtractorConfig.from_env({"PDFTABLEX_TIMEOUT": raw}).timeout is None


@pytest.mark.parametrize("raw", ["soon", "-3"])
def test_invalid_timeout(raw: str) -> None:
    with pytest.raises(ConfigurationError):
        ExtractorConfig.from_env({"PDFTABLEX_TIMEOUT": raw})


def test_string_resource_root_is_coerced(tmp_path: Path) -> None:
    config = ExtractorConfig(resource_root=str(tmp_path))  # type: ignore[arg-type]

    assert isinstance(config.resource_root, Path)


def test_with_updates_can_clear_timeout() -> None:
    assert ExtractorConfig().with_updates(timeout=None).timeout is None


def test_negative_timeout_rejected() -> None:
    with pytest.raises(ConfigurationError):
        ExtractorConfig(timeout=-1)
