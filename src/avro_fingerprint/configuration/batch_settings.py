"""Configuration domain entities."""

from __future__ import annotations

import os
from dataclasses import dataclass

EXECUTOR_KINDS = ("thread", "process", "sequential")


@dataclass(frozen=True)
class BatchSettings:
    """Worker pool settings for batch fingerprinting."""

    executor: str = "thread"
    max_workers: int | None = None

    def resolved_workers(self) -> int:
        if self.max_workers is not None:
            return max(1, self.max_workers)
        return max(1, os.cpu_count() or 1)
