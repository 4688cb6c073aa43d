"""Configuration domain exports."""

from .batch_settings import EXECUTOR_KINDS, BatchSettings
from .loader import ConfigurationError, load_batch_settings

__all__ = [
    "EXECUTOR_KINDS",
    "BatchSettings",
    "ConfigurationError",
    "load_batch_settings",
]
