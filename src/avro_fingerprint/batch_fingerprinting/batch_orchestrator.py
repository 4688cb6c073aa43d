"""Fault-isolated batch fingerprinting service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import (
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    wait,
)
from typing import Any

from avro_fingerprint.canonical_form.fingerprint_models import SchemaFingerprint
from avro_fingerprint.canonical_form.schema_fingerprint import fingerprint_schema
from avro_fingerprint.configuration.batch_settings import EXECUTOR_KINDS, BatchSettings
from avro_fingerprint.schema_model.schema_models import NULL_SCHEMA, AvroSchema
from avro_fingerprint.schema_parsing.schema_parser import round_trip

from .item_outcomes import ItemOutcome

_LOGGER = logging.getLogger("avro_fingerprint.batch")

_Worker = Callable[[int, Any], ItemOutcome]


def fingerprint_many(
    raw_texts: Iterable[str], settings: BatchSettings | None = None
) -> list[SchemaFingerprint]:
    """Fingerprint every schema text; failed items become ``(NULL_SCHEMA, raw bytes)``."""
    items = list(raw_texts)
    return [
        outcome.value
        if outcome.succeeded
        else SchemaFingerprint(schema=NULL_SCHEMA, canonical=_raw_bytes(items[outcome.index]))
        for outcome in fingerprint_outcomes(items, settings)
    ]


def translate_many(
    byte_sequences: Iterable[bytes], settings: BatchSettings | None = None
) -> list[AvroSchema]:
    """Re-parse every canonical form; failed items become ``NULL_SCHEMA``."""
    return [
        outcome.value if outcome.succeeded else NULL_SCHEMA
        for outcome in translate_outcomes(byte_sequences, settings)
    ]


def fingerprint_outcomes(
    raw_texts: Iterable[str], settings: BatchSettings | None = None
) -> list[ItemOutcome]:
    """Per-item outcomes of ``fingerprint_schema``, in input order."""
    return _run_batch(_fingerprint_item, list(raw_texts), settings)


def translate_outcomes(
    byte_sequences: Iterable[bytes], settings: BatchSettings | None = None
) -> list[ItemOutcome]:
    """Per-item outcomes of ``round_trip``, in input order."""
    return _run_batch(_translate_item, list(byte_sequences), settings)


def split_fingerprints(
    pairs: Iterable[SchemaFingerprint],
) -> tuple[list[AvroSchema], list[bytes]]:
    """Unzip batch results into parallel schema and canonical-bytes lists."""
    schemas: list[AvroSchema] = []
    canonical_forms: list[bytes] = []
    for schema, canonical in pairs:
        schemas.append(schema)
        canonical_forms.append(canonical)
    return schemas, canonical_forms


def _run_batch(
    worker: _Worker, items: Sequence[Any], settings: BatchSettings | None
) -> list[ItemOutcome]:
    resolved = settings or BatchSettings()
    if resolved.executor not in EXECUTOR_KINDS:
        raise ValueError(f"Unsupported batch executor: {resolved.executor}")
    if not items:
        return []
    max_workers = min(resolved.resolved_workers(), len(items))
    _LOGGER.debug(
        "Processing %d batch items (executor=%s, workers=%d)",
        len(items),
        resolved.executor,
        max_workers,
    )

    if resolved.executor == "sequential" or max_workers == 1:
        outcomes = [worker(index, item) for index, item in enumerate(items)]
    else:
        outcomes = _run_pooled(worker, items, resolved.executor, max_workers)

    for outcome in outcomes:
        if not outcome.succeeded:
            _LOGGER.warning(
                "Batch item %d could not be processed: %s", outcome.index, outcome.error_message
            )
    return outcomes


def _run_pooled(
    worker: _Worker, items: Sequence[Any], executor_kind: str, max_workers: int
) -> list[ItemOutcome]:
    futures = {}
    with _create_executor(executor_kind, max_workers) as executor:
        for index, item in enumerate(items):
            future = executor.submit(worker, index, item)
            futures[future] = index
        wait(futures.keys())

    result_map = {index: _collect(future, index) for future, index in futures.items()}
    return [result_map[index] for index in range(len(items))]


def _collect(future: Future[ItemOutcome], index: int) -> ItemOutcome:
    # Pool-level failures (result pickling, broken worker) stay scoped to their item.
    exc = future.exception()
    if exc is not None:
        return ItemOutcome.failure(index, exc)
    return future.result()


def _create_executor(executor_kind: str, max_workers: int) -> Executor:
    if executor_kind == "thread":
        return ThreadPoolExecutor(max_workers=max_workers)
    if executor_kind == "process":
        return ProcessPoolExecutor(max_workers=max_workers)
    raise ValueError(f"Unsupported batch executor: {executor_kind}")


def _fingerprint_item(index: int, raw_text: Any) -> ItemOutcome:
    try:
        return ItemOutcome.success(index, fingerprint_schema(raw_text))
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return ItemOutcome.failure(index, exc)


def _translate_item(index: int, data: Any) -> ItemOutcome:
    try:
        return ItemOutcome.success(index, round_trip(data))
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return ItemOutcome.failure(index, exc)


def _raw_bytes(raw_text: Any) -> bytes:
    if isinstance(raw_text, bytes | bytearray | memoryview):
        return bytes(raw_text)
    return str(raw_text).encode("utf-8", errors="surrogatepass")
