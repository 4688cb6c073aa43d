"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .batch_settings import EXECUTOR_KINDS, BatchSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_batch_settings(config_path: Path | str) -> BatchSettings:
    """Load and validate batch settings from a YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return _parse_batch_section(parsed.get("batch"))


def _parse_batch_section(value: Any) -> BatchSettings:
    if value is None:
        return BatchSettings()
    if not isinstance(value, Mapping):
        raise ConfigurationError("Configuration section 'batch' must be a mapping.")

    executor = _require_non_empty_string(value.get("executor", "thread"), "batch.executor").lower()
    if executor not in EXECUTOR_KINDS:
        raise ConfigurationError(
            f"batch.executor must be one of {', '.join(EXECUTOR_KINDS)}, got '{executor}'."
        )
    max_workers_raw = value.get("max_workers")
    max_workers = (
        None
        if max_workers_raw is None
        else _require_positive_int(max_workers_raw, "batch.max_workers")
    )
    return BatchSettings(executor=executor, max_workers=max_workers)


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
