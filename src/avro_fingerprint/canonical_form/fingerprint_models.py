"""Canonical form entities."""

from __future__ import annotations

from typing import NamedTuple

from avro_fingerprint.schema_model.schema_models import AvroSchema, is_null_schema


class SchemaFingerprint(NamedTuple):
    """A parsed schema paired with its canonical bytes."""

    schema: AvroSchema
    canonical: bytes

    @property
    def is_placeholder(self) -> bool:
        """True when this pair stands in for an item that failed to parse."""
        return is_null_schema(self.schema)
