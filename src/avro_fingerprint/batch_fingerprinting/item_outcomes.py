"""Batch fingerprinting entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OutcomeStatus(str, Enum):
    """Per-item processing status."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ItemOutcome:
    """Result of processing one batch item."""

    index: int
    status: OutcomeStatus
    value: Any
    error_message: str | None

    @property
    def succeeded(self) -> bool:
        return self.status == OutcomeStatus.SUCCEEDED

    @staticmethod
    def success(index: int, value: Any) -> ItemOutcome:
        return ItemOutcome(
            index=index,
            status=OutcomeStatus.SUCCEEDED,
            value=value,
            error_message=None,
        )

    @staticmethod
    def failure(index: int, error: BaseException) -> ItemOutcome:
        return ItemOutcome(
            index=index,
            status=OutcomeStatus.FAILED,
            value=None,
            error_message=str(error),
        )
