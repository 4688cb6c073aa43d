"""Parsing Canonical Form writer.

See https://avro.apache.org/docs/current/specification/#parsing-canonical-form-for-schemas
"""

from __future__ import annotations

import json
from io import StringIO

from avro_fingerprint.schema_model.schema_models import (
    ArraySchema,
    AvroSchema,
    EnumSchema,
    FixedSchema,
    MapSchema,
    NamedReference,
    PrimitiveSchema,
    RecordSchema,
    SchemaNode,
    UnionSchema,
)


def canonicalize(schema: AvroSchema) -> bytes:
    """Return the Parsing Canonical Form of ``schema`` as UTF-8 bytes."""
    return canonical_text(schema).encode("utf-8")


def canonical_text(schema: AvroSchema) -> str:
    """Return the Parsing Canonical Form of ``schema`` as text."""
    writer = _CanonicalWriter(schema)
    writer.write(schema.root)
    return writer.getvalue()


class _CanonicalWriter:
    def __init__(self, schema: AvroSchema) -> None:
        self._schema = schema
        self._written: set[str] = set()
        self._out = StringIO()

    def getvalue(self) -> str:
        return self._out.getvalue()

    def write(self, node: SchemaNode) -> None:
        fo = self._out
        if isinstance(node, PrimitiveSchema):
            fo.write(_quote(node.kind.value))

        elif isinstance(node, NamedReference):
            if node.fullname in self._written:
                fo.write(_quote(node.fullname))
            else:
                # Only reachable for hand-built schemas whose root refers into the table.
                self.write(self._schema.named(node.fullname))

        elif isinstance(node, UnionSchema):
            fo.write("[")
            for idx, branch in enumerate(node.branches):
                if idx != 0:
                    fo.write(",")
                self.write(branch)
            fo.write("]")

        elif isinstance(node, ArraySchema):
            fo.write('{"type":"array","items":')
            self.write(node.items)
            fo.write("}")

        elif isinstance(node, MapSchema):
            fo.write('{"type":"map","values":')
            self.write(node.values)
            fo.write("}")

        elif isinstance(node, RecordSchema | EnumSchema | FixedSchema):
            fullname = node.name.fullname
            if fullname in self._written:
                fo.write(_quote(fullname))
                return
            self._written.add(fullname)
            self._write_named(node)

        else:
            raise TypeError(f"Unsupported schema node: {node!r}")

    def _write_named(self, node: RecordSchema | EnumSchema | FixedSchema) -> None:
        fo = self._out
        fo.write(f'{{"name":{_quote(node.name.fullname)},"type":"{node.kind.value}"')
        if isinstance(node, RecordSchema):
            fo.write(',"fields":[')
            for idx, field in enumerate(node.fields):
                if idx != 0:
                    fo.write(",")
                fo.write(f'{{"name":{_quote(field.name)},"type":')
                self.write(field.type)
                fo.write("}")
            fo.write("]")
        elif isinstance(node, EnumSchema):
            fo.write(',"symbols":[')
            fo.write(",".join(_quote(symbol) for symbol in node.symbols))
            fo.write("]")
        else:
            fo.write(f',"size":{node.size:d}')
        fo.write("}")


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)
