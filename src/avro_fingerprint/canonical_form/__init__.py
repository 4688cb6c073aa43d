"""Canonical form exports."""

from .canonical_writer import canonical_text, canonicalize
from .fingerprint_models import SchemaFingerprint
from .schema_fingerprint import fingerprint_schema

__all__ = [
    "SchemaFingerprint",
    "canonical_text",
    "canonicalize",
    "fingerprint_schema",
]
