"""Schema text parsing and validation service."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any

from avro_fingerprint.schema_model.schema_errors import InvalidSchema
from avro_fingerprint.schema_model.schema_models import (
    NO_DEFAULT,
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
)

NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
FIELD_ORDERS = ("ascending", "descending", "ignore")


def parse(raw_text: str | bytes) -> AvroSchema:
    """Parse schema text into a fully resolved schema."""
    return _parse_document(raw_text, full_names=False)


def round_trip(data: bytes | bytearray | memoryview) -> AvroSchema:
    """Re-parse canonical bytes produced by ``canonicalize``."""
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidSchema(f"canonical bytes are not valid UTF-8: {exc}") from exc
    except TypeError as exc:
        raise InvalidSchema(f"canonical form must be a byte sequence: {exc}") from exc
    # Canonical text carries every name fully qualified and no namespace attribute.
    return _parse_document(text, full_names=True)


def _parse_document(raw_text: Any, *, full_names: bool) -> AvroSchema:
    if not isinstance(raw_text, str | bytes | bytearray):
        raise InvalidSchema(
            f"malformed schema syntax: expected text, got {type(raw_text).__name__}"
        )
    try:
        document = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise InvalidSchema(f"malformed schema syntax: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidSchema(f"malformed schema syntax: {exc}") from exc
    except RecursionError as exc:
        raise InvalidSchema("malformed schema syntax: document is nested too deeply") from exc

    parser = _SchemaParser(full_names=full_names)
    try:
        root = parser.parse_node(document, namespace=None)
    except RecursionError as exc:
        raise InvalidSchema("schema is nested too deeply") from exc
    return AvroSchema(root=root, named_types=parser.named_types())


class _SchemaParser:
    """Single-use parser holding the named-type table for one document.

    With ``full_names`` set, every name is taken as already fully qualified:
    no namespace is inherited and references are looked up verbatim.
    """

    def __init__(self, *, full_names: bool = False) -> None:
        self._full_names = full_names
        self._declared: list[str] = []
        self._definitions: dict[str, NamedSchema] = {}

    def named_types(self) -> dict[str, NamedSchema]:
        return {fullname: self._definitions[fullname] for fullname in self._declared}

    def parse_node(self, node: Any, *, namespace: str | None) -> SchemaNode:
        if isinstance(node, list):
            return self._parse_union(node, namespace)
        if isinstance(node, str):
            return self._parse_type_name(node, namespace)
        if not isinstance(node, Mapping):
            raise InvalidSchema(f"schema node must be a string, array or object, got {node!r}")

        node_type = node.get("type")
        if node_type is None:
            raise InvalidSchema("schema object is missing a 'type' attribute")
        if isinstance(node_type, list | Mapping):
            return self.parse_node(node_type, namespace=namespace)
        if not isinstance(node_type, str):
            raise InvalidSchema(f"schema 'type' must be a string, got {node_type!r}")

        if node_type in PRIMITIVE_TYPE_NAMES:
            return PrimitiveSchema(
                SchemaKind(node_type),
                logical_type=_optional_text(node, "logicalType"),
            )
        if node_type == "record":
            return self._parse_record(node, namespace)
        if node_type == "enum":
            return self._parse_enum(node, namespace)
        if node_type == "fixed":
            return self._parse_fixed(node, namespace)
        if node_type == "array":
            if "items" not in node:
                raise InvalidSchema("array schema requires an 'items' attribute")
            return ArraySchema(items=self.parse_node(node["items"], namespace=namespace))
        if node_type == "map":
            if "values" not in node:
                raise InvalidSchema("map schema requires a 'values' attribute")
            return MapSchema(values=self.parse_node(node["values"], namespace=namespace))
        return self._reference(node_type, namespace)

    def _parse_type_name(self, type_name: str, namespace: str | None) -> SchemaNode:
        if type_name in PRIMITIVE_TYPE_NAMES:
            return PrimitiveSchema(SchemaKind(type_name))
        return self._reference(type_name, namespace)

    def _reference(self, type_name: str, namespace: str | None) -> NamedReference:
        candidates = [type_name]
        if "." not in type_name and namespace and not self._full_names:
            candidates.insert(0, f"{namespace}.{type_name}")
        for fullname in candidates:
            if fullname in self._declared:
                return NamedReference(fullname)
        raise InvalidSchema(f"unknown type reference '{type_name}'")

    def _parse_union(self, branches: Sequence[Any], namespace: str | None) -> UnionSchema:
        parsed: list[SchemaNode] = []
        tags: set[tuple[str, str]] = set()
        for branch in branches:
            node = self.parse_node(branch, namespace=namespace)
            if isinstance(node, UnionSchema):
                raise InvalidSchema("nested union: a union may not directly contain a union")
            tag = _branch_tag(node)
            if tag in tags:
                raise InvalidSchema(f"duplicate union branch '{tag[1]}'")
            tags.add(tag)
            parsed.append(node)
        return UnionSchema(branches=tuple(parsed))

    def _parse_record(self, node: Mapping[str, Any], namespace: str | None) -> RecordSchema:
        name = self._declare(node, namespace)
        raw_fields = node.get("fields")
        if not isinstance(raw_fields, list):
            raise InvalidSchema(f"record '{name.fullname}' requires a 'fields' array")

        fields: list[RecordField] = []
        seen_names: set[str] = set()
        for raw_field in raw_fields:
            record_field = self._parse_field(raw_field, name)
            if record_field.name in seen_names:
                raise InvalidSchema(
                    f"duplicate field '{record_field.name}' in record '{name.fullname}'"
                )
            seen_names.add(record_field.name)
            fields.append(record_field)

        record = RecordSchema(
            name=name,
            fields=tuple(fields),
            doc=_optional_text(node, "doc"),
            aliases=_aliases(node, name.fullname),
        )
        self._definitions[name.fullname] = record
        return record

    def _parse_field(self, raw_field: Any, owner: SchemaName) -> RecordField:
        if not isinstance(raw_field, Mapping):
            raise InvalidSchema(f"record '{owner.fullname}' has a field that is not an object")
        field_name = raw_field.get("name")
        if not isinstance(field_name, str) or not NAME_PATTERN.fullmatch(field_name):
            raise InvalidSchema(f"invalid field name {field_name!r} in record '{owner.fullname}'")
        if "type" not in raw_field:
            raise InvalidSchema(f"field '{field_name}' in record '{owner.fullname}' has no type")
        order = raw_field.get("order", "ascending")
        if order not in FIELD_ORDERS:
            raise InvalidSchema(f"field '{field_name}' has invalid order {order!r}")
        return RecordField(
            name=field_name,
            type=self.parse_node(raw_field["type"], namespace=owner.namespace),
            default=raw_field.get("default", NO_DEFAULT),
            doc=_optional_text(raw_field, "doc"),
            aliases=_aliases(raw_field, field_name),
            order=order,
        )

    def _parse_enum(self, node: Mapping[str, Any], namespace: str | None) -> EnumSchema:
        name = self._declare(node, namespace)
        raw_symbols = node.get("symbols")
        if not isinstance(raw_symbols, list):
            raise InvalidSchema(f"enum '{name.fullname}' requires a 'symbols' array")
        seen: set[str] = set()
        for symbol in raw_symbols:
            if not isinstance(symbol, str) or not NAME_PATTERN.fullmatch(symbol):
                raise InvalidSchema(f"invalid symbol {symbol!r} in enum '{name.fullname}'")
            if symbol in seen:
                raise InvalidSchema(f"duplicate symbol '{symbol}' in enum '{name.fullname}'")
            seen.add(symbol)
        default = node.get("default")
        if default is not None and default not in seen:
            raise InvalidSchema(
                f"default {default!r} of enum '{name.fullname}' is not one of its symbols"
            )
        enum = EnumSchema(
            name=name,
            symbols=tuple(raw_symbols),
            doc=_optional_text(node, "doc"),
            aliases=_aliases(node, name.fullname),
            default=default,
        )
        self._definitions[name.fullname] = enum
        return enum

    def _parse_fixed(self, node: Mapping[str, Any], namespace: str | None) -> FixedSchema:
        name = self._declare(node, namespace)
        size = node.get("size")
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise InvalidSchema(
                f"fixed '{name.fullname}' requires a non-negative integer 'size', got {size!r}"
            )
        fixed = FixedSchema(
            name=name,
            size=size,
            aliases=_aliases(node, name.fullname),
            logical_type=_optional_text(node, "logicalType"),
        )
        self._definitions[name.fullname] = fixed
        return fixed

    def _declare(self, node: Mapping[str, Any], namespace: str | None) -> SchemaName:
        name = _schema_name(node, namespace, full_names=self._full_names)
        if name.fullname in self._declared:
            raise InvalidSchema(f"duplicate name definition '{name.fullname}'")
        # Registered before children so recursive references resolve.
        self._declared.append(name.fullname)
        return name


def _schema_name(
    node: Mapping[str, Any], enclosing_namespace: str | None, *, full_names: bool = False
) -> SchemaName:
    raw_name = node.get("name")
    if not isinstance(raw_name, str) or not raw_name:
        raise InvalidSchema(f"named type '{node.get('type')}' requires a non-empty 'name'")
    raw_namespace = node.get("namespace")
    if raw_namespace is not None and not isinstance(raw_namespace, str):
        raise InvalidSchema(f"namespace of '{raw_name}' must be a string")

    if "." in raw_name or full_names:
        namespace, _, short_name = raw_name.rpartition(".")
    elif raw_namespace is not None:
        namespace, short_name = raw_namespace, raw_name
    else:
        namespace, short_name = enclosing_namespace or "", raw_name

    if not NAME_PATTERN.fullmatch(short_name):
        raise InvalidSchema(f"invalid name '{raw_name}'")
    if namespace and not all(NAME_PATTERN.fullmatch(part) for part in namespace.split(".")):
        raise InvalidSchema(f"invalid namespace '{namespace}' for '{short_name}'")
    if short_name in PRIMITIVE_TYPE_NAMES:
        raise InvalidSchema(f"named type may not redefine primitive type '{short_name}'")
    return SchemaName(name=short_name, namespace=namespace or None)


def _branch_tag(node: SchemaNode) -> tuple[str, str]:
    # Named and unnamed tags live apart: a record named "map" is not a map.
    if isinstance(node, NamedReference):
        return ("named", node.fullname)
    if isinstance(node, RecordSchema | EnumSchema | FixedSchema):
        return ("named", node.name.fullname)
    return ("kind", node.kind.value)


def _optional_text(node: Mapping[str, Any], key: str) -> str | None:
    value = node.get(key)
    return value if isinstance(value, str) else None


def _aliases(node: Mapping[str, Any], owner: str) -> tuple[str, ...]:
    aliases = node.get("aliases")
    if aliases is None:
        return ()
    if not isinstance(aliases, list) or not all(isinstance(alias, str) for alias in aliases):
        raise InvalidSchema(f"aliases of '{owner}' must be a list of strings")
    return tuple(aliases)
