"""Avro schema error taxonomy."""

from __future__ import annotations


class AvroError(Exception):
    """Base class for errors raised by the avro fingerprint library."""


class InvalidSchema(AvroError):
    """Raised when schema text cannot be parsed into a valid Avro schema."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"Invalid avro schema: {self.reason}"


class InvalidRecords(AvroError):
    """Reserved for record-level validation against a schema."""

    def __str__(self) -> str:
        return "Invalid avro records"
