"""Batch fingerprinting tests."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from typing import Any

import pytest
from avro_fingerprint.batch_fingerprinting import batch_orchestrator
from avro_fingerprint.batch_fingerprinting.batch_orchestrator import (
    fingerprint_many,
    fingerprint_outcomes,
    split_fingerprints,
    translate_many,
    translate_outcomes,
)
from avro_fingerprint.batch_fingerprinting.item_outcomes import OutcomeStatus
from avro_fingerprint.canonical_form.schema_fingerprint import fingerprint_schema
from avro_fingerprint.configuration.batch_settings import BatchSettings
from avro_fingerprint.schema_model.schema_models import NULL_SCHEMA, is_null_schema

VALID_SCHEMAS = (
    '{"type":"record","name":"User","fields":[{"name":"name","type":"string"}]}',
    '{"type":"enum","name":"Color","symbols":["RED","GREEN"]}',
    '["null","long"]',
    '{"type":"array","items":"bytes"}',
)


@pytest.mark.parametrize("executor", ["thread", "sequential"])
def test_fingerprint_many_isolates_malformed_item(executor: str) -> None:
    items = [VALID_SCHEMAS[0], "not json at all", VALID_SCHEMAS[1], VALID_SCHEMAS[2]]

    results = fingerprint_many(items, BatchSettings(executor=executor, max_workers=3))

    assert len(results) == 4
    assert results[1] == (NULL_SCHEMA, b"not json at all")
    assert results[1].schema is NULL_SCHEMA
    for index in (0, 2, 3):
        assert results[index] == fingerprint_schema(items[index])
        assert not is_null_schema(results[index].schema)


def test_fingerprint_many_accepts_any_iterable() -> None:
    results = fingerprint_many(iter(VALID_SCHEMAS), BatchSettings(max_workers=2))

    assert [result.canonical for result in results] == [
        fingerprint_schema(text).canonical for text in VALID_SCHEMAS
    ]


def test_fingerprint_many_of_empty_input_is_empty() -> None:
    assert fingerprint_many([]) == []
    assert translate_many([]) == []


def test_fingerprint_many_keeps_input_order_regardless_of_completion_order(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    completion_order: list[str] = []
    lock = threading.Lock()

    def slow_first(raw_text: str):
        if raw_text == VALID_SCHEMAS[0]:
            time.sleep(0.2)
        result = fingerprint_schema(raw_text)
        with lock:
            completion_order.append(raw_text)
        return result

    monkeypatch.setattr(batch_orchestrator, "fingerprint_schema", slow_first)

    results = fingerprint_many(VALID_SCHEMAS, BatchSettings(executor="thread", max_workers=4))

    assert completion_order[-1] == VALID_SCHEMAS[0]
    assert [result.canonical for result in results] == [
        fingerprint_schema(text).canonical for text in VALID_SCHEMAS
    ]


def test_fingerprint_many_placeholder_carries_original_text_bytes() -> None:
    raw = '{"type": "record", "name": "Café", "fields": []}'

    (result,) = fingerprint_many([raw], BatchSettings(executor="sequential"))

    assert result.schema is NULL_SCHEMA
    assert result.canonical == raw.encode("utf-8")
    assert result.is_placeholder


def test_fingerprint_many_survives_non_text_items() -> None:
    items: list[Any] = [None, b'"int"']
    results = fingerprint_many(items, BatchSettings(executor="sequential"))

    assert results[0] == (NULL_SCHEMA, b"None")
    assert results[1].canonical == b'"int"'


def test_fingerprint_outcomes_expose_failure_reasons() -> None:
    outcomes = fingerprint_outcomes(['["int","int"]', '"int"'], BatchSettings(max_workers=2))

    assert [outcome.index for outcome in outcomes] == [0, 1]
    assert outcomes[0].status == OutcomeStatus.FAILED
    assert outcomes[0].value is None
    assert "duplicate union branch 'int'" in (outcomes[0].error_message or "")
    assert outcomes[1].succeeded
    assert outcomes[1].error_message is None


def test_failed_items_are_logged_with_their_index(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="avro_fingerprint.batch")

    fingerprint_many(['"int"', "{broken"], BatchSettings(executor="sequential"))

    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 1
    assert messages[0].startswith("Batch item 1 could not be processed: Invalid avro schema")


def test_translate_many_replaces_failures_with_null_schema() -> None:
    canonical_forms = [fingerprint_schema(text).canonical for text in VALID_SCHEMAS[:2]]
    items = [canonical_forms[0], b"\xff\xfe", b"garbage", canonical_forms[1]]

    schemas = translate_many(items, BatchSettings(max_workers=2))

    assert len(schemas) == 4
    assert schemas[1] is NULL_SCHEMA
    assert schemas[2] is NULL_SCHEMA
    assert schemas[0] == fingerprint_schema(VALID_SCHEMAS[0]).schema
    assert schemas[3] == fingerprint_schema(VALID_SCHEMAS[1]).schema


def test_translate_outcomes_report_non_utf8_input() -> None:
    (outcome,) = translate_outcomes([b"\xff"], BatchSettings(executor="sequential"))

    assert outcome.status == OutcomeStatus.FAILED
    assert "not valid UTF-8" in (outcome.error_message or "")


def test_split_fingerprints_returns_parallel_lists() -> None:
    results = fingerprint_many(['"int"', "nope"], BatchSettings(executor="sequential"))

    schemas, canonical_forms = split_fingerprints(results)

    assert schemas == [results[0].schema, NULL_SCHEMA]
    assert canonical_forms == [b'"int"', b"nope"]


def test_unknown_executor_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported batch executor"):
        fingerprint_many(['"int"'], BatchSettings(executor="fibers"))


def _deep(depth: int) -> str:
    text = '"int"'
    for _ in range(depth):
        text = f'{{"type":"array","items":{text}}}'
    return text


def test_process_pool_keeps_result_transfer_failures_scoped_to_their_item() -> None:
    items = [_deep(400), '"int"']

    results = fingerprint_many(items, BatchSettings(executor="process", max_workers=2))

    assert len(results) == 2
    assert results[1] == fingerprint_schema('"int"')
    if results[0].is_placeholder:
        assert results[0].canonical == items[0].encode("utf-8")
    else:
        assert results[0].canonical == fingerprint_schema(items[0]).canonical


def test_pool_level_future_errors_become_failed_outcomes() -> None:
    future: Future[Any] = Future()
    future.set_exception(RecursionError("maximum recursion depth exceeded while pickling"))

    outcome = batch_orchestrator._collect(future, 3)  # pylint: disable=protected-access

    assert outcome.index == 3
    assert outcome.status == OutcomeStatus.FAILED
    assert "while pickling" in (outcome.error_message or "")
