"""Avro schema parsing, Parsing Canonical Form and batch fingerprinting."""

import logging

from .batch_fingerprinting import (
    ItemOutcome,
    OutcomeStatus,
    fingerprint_many,
    fingerprint_outcomes,
    split_fingerprints,
    translate_many,
    translate_outcomes,
)
from .canonical_form import SchemaFingerprint, canonical_text, canonicalize, fingerprint_schema
from .configuration import BatchSettings, ConfigurationError, load_batch_settings
from .schema_model import (
    NULL_SCHEMA,
    AvroError,
    AvroSchema,
    InvalidRecords,
    InvalidSchema,
    SchemaKind,
    is_null_schema,
)
from .schema_parsing import parse, round_trip

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NULL_SCHEMA",
    "AvroError",
    "AvroSchema",
    "BatchSettings",
    "ConfigurationError",
    "InvalidRecords",
    "InvalidSchema",
    "ItemOutcome",
    "OutcomeStatus",
    "SchemaFingerprint",
    "SchemaKind",
    "canonical_text",
    "canonicalize",
    "fingerprint_many",
    "fingerprint_outcomes",
    "fingerprint_schema",
    "is_null_schema",
    "load_batch_settings",
    "parse",
    "round_trip",
    "split_fingerprints",
    "translate_many",
    "translate_outcomes",
]
