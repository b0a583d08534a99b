"""Renders declared struct types as Swagger definitions.

Swagger 2.0 has no inline object syntax, so an embedded struct without a body
of its own is recorded as an inline reference and its properties are copied
into the host definition once every type has been rendered.
"""

import logging

from api2swagger.generator.members import location_tag, property_name, schema_of_field
from api2swagger.generator.swagger import SchemaObject
from api2swagger.generator.tags import TAG_FORM, TAG_HEADER, TAG_JSON, TAG_PATH, is_required
from api2swagger.generator.types import element_type
from api2swagger.parser.base import DefineStruct

logger = logging.getLogger(__name__)


def render_definitions(definitions: dict[str, SchemaObject], types: list[DefineStruct]) -> None:
    """Add one object definition per declared struct to `definitions`."""
    inline_refs: dict[str, list[str]] = {}
    for struct in types:
        schema, inlines = render_definition(struct)
        definitions[struct.name] = schema
        if inlines:
            inline_refs[struct.name] = inlines

    _inherit_inline_properties(definitions, inline_refs)


def render_definition(struct: DefineStruct) -> tuple[SchemaObject, list[str]]:
    """Render one struct. Returns the schema and the names of its pending inline structs."""
    json_fields: dict[str, SchemaObject] = {}
    form_fields: dict[str, SchemaObject] = {}
    untagged_fields: dict[str, SchemaObject] = {}
    required: list[str] = []
    inlines: list[str] = []

    stack = list(reversed(struct.members))
    while stack:
        member = stack.pop()
        tag = location_tag(member)
        if tag is not None and tag.key in (TAG_HEADER, TAG_PATH):
            continue

        name = property_name(member)
        if not name:
            if member.struct is not None and member.struct.members:
                stack.extend(reversed(member.struct.members))
            else:
                inlines.append(element_type(member.type))
            continue
        if name == "-":
            continue

        if tag is None:
            untagged_fields[name] = schema_of_field(member)
            continue
        if tag.key == TAG_JSON:
            json_fields[name] = schema_of_field(member)
        elif tag.key == TAG_FORM:
            form_fields[name] = schema_of_field(member)
        if is_required(tag) and name not in required:
            required.append(name)

    # With any json field present, form fields are query parameters, not body.
    properties = json_fields
    if not properties and form_fields:
        properties = form_fields
    properties.update(untagged_fields)

    required = [name for name in required if name in properties]
    schema = SchemaObject(
        type="object",
        title=struct.name,
        properties=properties,
        required=required or None,
    )
    return schema, inlines


def _inherit_inline_properties(definitions: dict[str, SchemaObject], inline_refs: dict[str, list[str]]) -> None:
    resolved: set[str] = set()

    def resolve(name: str, visiting: set[str]) -> None:
        if name in resolved or name in visiting or name not in definitions:
            return
        visiting.add(name)

        inherited: dict[str, SchemaObject] = {}
        inherited_required: list[str] = []
        for target in inline_refs.get(name, []):
            resolve(target, visiting)
            target_schema = definitions.get(target)
            if target_schema is None:
                logger.warning("inline struct %s of %s is not declared", target, name)
                continue
            inherited.update(target_schema.properties or {})
            inherited_required.extend(target_schema.required or [])

        schema = definitions[name]
        if inherited:
            schema.properties = {**inherited, **(schema.properties or {})}
            merged = list(dict.fromkeys(inherited_required + (schema.required or [])))
            schema.required = merged or None
        resolved.add(name)

    for host in inline_refs:
        resolve(host, set())
