"""Configuration loader tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from avro_fingerprint.configuration.batch_settings import BatchSettings
from avro_fingerprint.configuration.loader import ConfigurationError, load_batch_settings


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_batch_settings(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
batch:
  executor: Process
  max_workers: 8
""",
    )

    settings = load_batch_settings(config_path)

    assert settings == BatchSettings(executor="process", max_workers=8)
    assert settings.resolved_workers() == 8


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    settings = load_batch_settings(_write_file(tmp_path / "config.yaml", ""))

    assert settings == BatchSettings()
    assert settings.executor == "thread"
    assert settings.max_workers is None


def test_missing_batch_section_yields_defaults(tmp_path: Path) -> None:
    settings = load_batch_settings(_write_file(tmp_path / "config.yaml", "other: 1\n"))

    assert settings == BatchSettings()


def test_default_worker_count_follows_cpu_count(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "cpu_count", lambda: 6)
    assert BatchSettings().resolved_workers() == 6

    monkeypatch.setattr(os, "cpu_count", lambda: None)
    assert BatchSettings().resolved_workers() == 1


def test_missing_file_raises_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_batch_settings(tmp_path / "absent.yaml")


def test_invalid_yaml_raises_configuration_error(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "batch: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Failed to parse configuration file"):
        load_batch_settings(config_path)


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="root must be a mapping"):
        load_batch_settings(_write_file(tmp_path / "config.yaml", "- a\n- b\n"))


@pytest.mark.parametrize(
    "contents,message",
    [
        ("batch: thread\n", "'batch' must be a mapping"),
        ("batch:\n  executor: fibers\n", "batch.executor must be one of"),
        ("batch:\n  executor: ''\n", "batch.executor must not be empty"),
        ("batch:\n  executor: 3\n", "batch.executor must be a string"),
        ("batch:\n  max_workers: 0\n", "batch.max_workers must be greater than zero"),
        ("batch:\n  max_workers: true\n", "batch.max_workers must be an integer"),
        ("batch:\n  max_workers: '4'\n", "batch.max_workers must be an integer"),
    ],
)
def test_invalid_batch_values_are_rejected(tmp_path: Path, contents: str, message: str) -> None:
    config_path = _write_file(tmp_path / "config.yaml", contents)

    with pytest.raises(ConfigurationError, match=message):
        load_batch_settings(config_path)
