"""Single-item fingerprinting service."""

from __future__ import annotations

from avro_fingerprint.schema_parsing.schema_parser import parse

from .canonical_writer import canonicalize
from .fingerprint_models import SchemaFingerprint


def fingerprint_schema(raw_text: str) -> SchemaFingerprint:
    """Parse ``raw_text`` and pair the schema with its canonical bytes.

    Raises ``InvalidSchema`` unchanged from the parser.
    """
    schema = parse(raw_text)
    return SchemaFingerprint(schema=schema, canonical=canonicalize(schema))
