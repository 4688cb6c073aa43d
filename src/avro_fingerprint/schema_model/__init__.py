"""Schema model exports."""

from .schema_errors import AvroError, InvalidRecords, InvalidSchema
from .schema_models import (
    NO_DEFAULT,
    NULL_SCHEMA,
    PRIMITIVE_KINDS,
    PRIMITIVE_TYPE_NAMES,
    ArraySchema,
    AvroSchema,
    EnumSchema,
    FixedSchema,
    MapSchema,
    NamedReference,
    NamedSchema,
    PrimitiveSchema,
    RecordField,
    RecordSchema,
    SchemaKind,
    SchemaName,
    SchemaNode,
    UnionSchema,
    is_null_schema,
)

__all__ = [
    "AvroError",
    "InvalidRecords",
    "InvalidSchema",
    "NO_DEFAULT",
    "NULL_SCHEMA",
    "PRIMITIVE_KINDS",
    "PRIMITIVE_TYPE_NAMES",
    "ArraySchema",
    "AvroSchema",
    "EnumSchema",
    "FixedSchema",
    "MapSchema",
    "NamedReference",
    "NamedSchema",
    "PrimitiveSchema",
    "RecordField",
    "RecordSchema",
    "SchemaKind",
    "SchemaName",
    "SchemaNode",
    "UnionSchema",
    "is_null_schema",
]
