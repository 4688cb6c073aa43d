"""Batch fingerprinting exports."""

from .batch_orchestrator import (
    fingerprint_many,
    fingerprint_outcomes,
    split_fingerprints,
    translate_many,
    translate_outcomes,
)
from .item_outcomes import ItemOutcome, OutcomeStatus

__all__ = [
    "ItemOutcome",
    "OutcomeStatus",
    "fingerprint_many",
    "fingerprint_outcomes",
    "split_fingerprints",
    "translate_many",
    "translate_outcomes",
]
