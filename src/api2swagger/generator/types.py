"""Mapping from declared type names to Swagger types.

See https://swagger.io/specification/v2/#data-types
"""

from enum import Enum

from api2swagger.generator.swagger import SchemaObject

DEFINITIONS_PREFIX = "#/definitions/"


class Kind(Enum):
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    BOOL = "bool"
    STRING = "string"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    SLICE = "slice"  # slice of a primitive kind


TYPE_KINDS: dict[str, Kind] = {
    "int": Kind.INT,
    "int8": Kind.INT8,
    "int16": Kind.INT16,
    "int32": Kind.INT32,
    "rune": Kind.INT32,
    "int64": Kind.INT64,
    "uint": Kind.UINT,
    "uint8": Kind.UINT8,
    "byte": Kind.UINT8,
    "uint16": Kind.UINT16,
    "uint32": Kind.UINT32,
    "uint64": Kind.UINT64,
    "bool": Kind.BOOL,
    "string": Kind.STRING,
    "float32": Kind.FLOAT32,
    "float64": Kind.FLOAT64,
}

SCHEMA_TYPES: dict[Kind, tuple[str, str]] = {
    Kind.INT: ("integer", "int32"),
    Kind.INT8: ("integer", "int8"),
    Kind.INT16: ("integer", "int16"),
    Kind.INT32: ("integer", "int32"),
    Kind.INT64: ("integer", "int64"),
    Kind.UINT: ("integer", "uint32"),
    Kind.UINT8: ("integer", "uint8"),
    Kind.UINT16: ("integer", "uint16"),
    Kind.UINT32: ("integer", "uint32"),
    Kind.UINT64: ("integer", "uint64"),
    Kind.BOOL: ("boolean", "boolean"),
    Kind.STRING: ("string", ""),
    Kind.FLOAT32: ("number", "float"),
    Kind.FLOAT64: ("number", "double"),
    Kind.SLICE: ("array", ""),
}

OBJECT_TYPES = ("interface{}", "any")


def definition_ref(name: str) -> str:
    return DEFINITIONS_PREFIX + name


def kind_of(type_name: str) -> Kind | None:
    """Return the primitive kind of a type name, or None for structs, maps and the like."""
    type_name = type_name.removeprefix("*")
    if type_name.startswith("[]"):
        return Kind.SLICE if kind_of(type_name[2:]) is not None else None
    return TYPE_KINDS.get(type_name)


def primitive_schema(type_name: str) -> tuple[str, str] | None:
    """Return the (type, format) pair of a primitive type name."""
    kind = kind_of(type_name)
    if kind is None:
        return None
    return SCHEMA_TYPES[kind]


def element_type(type_name: str) -> str:
    """Strip array and pointer markers: `[]*UserInfo` -> `UserInfo`."""
    while type_name.startswith(("[]", "*")):
        type_name = type_name.removeprefix("[]").removeprefix("*")
    return type_name


def schema_for_type(type_name: str) -> SchemaObject:
    """Resolve a declared type name into a schema.

    Arrays resolve their element type recursively, maps become objects with
    `additionalProperties`, and any other non-primitive name is a reference
    to the definition of the same name.
    """
    type_name = type_name.strip().removeprefix("*")

    if type_name.startswith("[]"):
        return SchemaObject(type="array", items=schema_for_type(type_name[2:]))

    if type_name.startswith("map[") and "]" in type_name:
        value_type = type_name[type_name.index("]") + 1:]
        if not value_type or value_type in OBJECT_TYPES:
            return SchemaObject(type="object")
        return SchemaObject(type="object", additional_properties=schema_for_type(value_type))

    if type_name in OBJECT_TYPES:
        return SchemaObject(type="object")

    primitive = primitive_schema(type_name)
    if primitive is not None:
        ftype, fmt = primitive
        return SchemaObject(type=ftype, format=fmt or None)

    return SchemaObject(ref=definition_ref(type_name))
