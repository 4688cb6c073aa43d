"""Avro schema entities.

A parsed schema is a tree of frozen variant nodes plus a flat table of named
type definitions. The first occurrence of a named type in a document owns its
definition; every later occurrence is a ``NamedReference`` keyed into the table,
so no node graph ever holds a pointer cycle.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar


class SchemaKind(str, Enum):
    """Closed set of Avro type kinds."""

    NULL = "null"
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BYTES = "bytes"
    STRING = "string"
    RECORD = "record"
    ENUM = "enum"
    ARRAY = "array"
    MAP = "map"
    UNION = "union"
    FIXED = "fixed"
    REFERENCE = "reference"


PRIMITIVE_KINDS = frozenset(
    {
        SchemaKind.NULL,
        SchemaKind.BOOLEAN,
        SchemaKind.INT,
        SchemaKind.LONG,
        SchemaKind.FLOAT,
        SchemaKind.DOUBLE,
        SchemaKind.BYTES,
        SchemaKind.STRING,
    }
)
PRIMITIVE_TYPE_NAMES = frozenset(kind.value for kind in PRIMITIVE_KINDS)


class _Missing(Enum):
    NO_DEFAULT = "no-default"

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT = _Missing.NO_DEFAULT


@dataclass(frozen=True)
class SchemaName:
    """Identity of a named type."""

    name: str
    namespace: str | None = None

    @property
    def fullname(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name


@dataclass(frozen=True)
class PrimitiveSchema:
    """One of the eight primitive types."""

    kind: SchemaKind
    logical_type: str | None = None


@dataclass(frozen=True)
class RecordField:
    """A record field; everything but name and type is decorative."""

    name: str
    type: SchemaNode
    default: Any = NO_DEFAULT
    doc: str | None = None
    aliases: tuple[str, ...] = ()
    order: str = "ascending"

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class RecordSchema:
    """Named record with ordered fields."""

    kind: ClassVar[SchemaKind] = SchemaKind.RECORD

    name: SchemaName
    fields: tuple[RecordField, ...]
    doc: str | None = None
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class EnumSchema:
    """Named enumeration with ordered symbols."""

    kind: ClassVar[SchemaKind] = SchemaKind.ENUM

    name: SchemaName
    symbols: tuple[str, ...]
    doc: str | None = None
    aliases: tuple[str, ...] = ()
    default: str | None = None


@dataclass(frozen=True)
class FixedSchema:
    """Named fixed-size byte sequence."""

    kind: ClassVar[SchemaKind] = SchemaKind.FIXED

    name: SchemaName
    size: int
    aliases: tuple[str, ...] = ()
    logical_type: str | None = None


@dataclass(frozen=True)
class ArraySchema:
    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY

    items: SchemaNode


@dataclass(frozen=True)
class MapSchema:
    kind: ClassVar[SchemaKind] = SchemaKind.MAP

    values: SchemaNode


@dataclass(frozen=True)
class UnionSchema:
    kind: ClassVar[SchemaKind] = SchemaKind.UNION

    branches: tuple[SchemaNode, ...]


@dataclass(frozen=True)
class NamedReference:
    """Back-reference to a named type defined earlier in the same document."""

    kind: ClassVar[SchemaKind] = SchemaKind.REFERENCE

    fullname: str


NamedSchema = RecordSchema | EnumSchema | FixedSchema
SchemaNode = (
    PrimitiveSchema
    | RecordSchema
    | EnumSchema
    | FixedSchema
    | ArraySchema
    | MapSchema
    | UnionSchema
    | NamedReference
)


@dataclass(frozen=True)
class AvroSchema:
    """Fully resolved schema: root node plus the named-type table."""

    root: SchemaNode
    named_types: Mapping[str, NamedSchema] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "named_types", MappingProxyType(dict(self.named_types)))

    def __hash__(self) -> int:
        # Field defaults may hold unhashable JSON values; kind and names are enough.
        return hash((self.root.kind, tuple(self.named_types)))

    def __reduce__(self) -> tuple[Any, ...]:
        return (AvroSchema, (self.root, dict(self.named_types)))

    @property
    def kind(self) -> SchemaKind:
        return self.root.kind

    def named(self, fullname: str) -> NamedSchema:
        """Return the definition registered under ``fullname``."""
        try:
            return self.named_types[fullname]
        except KeyError as exc:
            raise LookupError(f"Named type is not defined in this schema: {fullname}") from exc

    def resolve(self, node: SchemaNode) -> SchemaNode:
        """Follow a back-reference to its definition; other nodes are returned as-is."""
        if isinstance(node, NamedReference):
            return self.named(node.fullname)
        return node


NULL_SCHEMA = AvroSchema(root=PrimitiveSchema(SchemaKind.NULL))


def is_null_schema(schema: object) -> bool:
    """Return True when ``schema`` is the placeholder for an unprocessable batch item."""
    return schema is NULL_SCHEMA
