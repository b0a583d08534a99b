"""Renders struct members as Swagger parameters or schema properties."""

import logging
from collections.abc import Iterator

from pydantic import BaseModel

from api2swagger.generator.swagger import Parameter, SchemaObject
from api2swagger.generator.tags import (
    LOCATION_TAGS,
    TAG_EXAMPLE,
    TAG_FORM,
    TAG_HEADER,
    TAG_JSON,
    TAG_PATH,
    TAG_VALIDATE,
    fill_example,
    fill_options,
    fill_validate,
    is_required,
)
from api2swagger.generator.types import element_type, schema_for_type
from api2swagger.parser.base import DefineStruct, Member, Tag

logger = logging.getLogger(__name__)

PARAMETER_LOCATIONS = {
    TAG_HEADER: "header",
    TAG_PATH: "path",
    TAG_FORM: "query",  # turned into formData for form-only body routes
    TAG_JSON: "body",
}


class RouteParameters(BaseModel):
    """Accumulates the parameters of one route while its request struct is walked."""

    method: str
    path_params: dict[str, Parameter] = {}  # placeholders not yet claimed by a struct field
    parameters: list[Parameter] = []
    contain_form: bool = False
    contain_json: bool = False


def location_tag(member: Member) -> Tag | None:
    """The first location tag of a member decides where the field lives."""
    for tag in member.tags:
        if tag.key in LOCATION_TAGS:
            return tag
    return None


def property_name(member: Member) -> str:
    tag = location_tag(member)
    if tag is not None and tag.name:
        return tag.name
    return member.name


def member_description(comment: str) -> str | None:
    text = comment.strip().lstrip("/").replace("\\n", "\n").strip()
    return text or None


def embedded_struct(member: Member, types: dict[str, DefineStruct]) -> DefineStruct | None:
    if member.struct is not None:
        return member.struct
    return types.get(element_type(member.type))


def walk_members(struct: DefineStruct, types: dict[str, DefineStruct]) -> Iterator[Member]:
    """Yield the concrete members of a struct in declaration order, flattening embedded structs."""
    stack = list(reversed(struct.members))
    expanded = {struct.name}
    while stack:
        member = stack.pop()
        if not member.is_inline:
            yield member
            continue

        struct = embedded_struct(member, types)
        if struct is None:
            logger.debug("skipping unresolved embedded struct %s", member.type)
            continue
        if struct.name and struct.name in expanded:
            continue
        expanded.add(struct.name)
        stack.extend(reversed(struct.members))


def render_parameter(member: Member) -> Parameter:
    """Render a member as a parameter; the location stays empty when no location tag is set."""
    tag = location_tag(member)
    param = Parameter(
        name=property_name(member),
        location=PARAMETER_LOCATIONS[tag.key] if tag is not None else "",
        description=member_description(member.comment),
    )
    _apply_parameter_type(param, member.type)

    if tag is not None:
        param.required = is_required(tag)
        fill_options(param, tag)
    for t in member.tags:
        fill_validate(param, t)
        fill_example(param, t)

    return param


def _apply_parameter_type(param: Parameter, type_name: str) -> None:
    # Non-body parameters cannot carry objects in Swagger 2.0.
    schema = schema_for_type(type_name)
    if schema.type == "array":
        items = schema.items
        if items is None or items.type in (None, "object", "array"):
            items = SchemaObject(type="string")
        param.type = "array"
        param.items = SchemaObject(type=items.type, format=items.format)
    elif schema.type is not None and schema.type != "object":
        param.type = schema.type
        param.format = schema.format
    else:
        param.type = "string"


def render_member(acc: RouteParameters, member: Member) -> None:
    """Route one concrete member into the accumulator."""
    param = render_parameter(member)
    if not param.location:
        param.location = "query" if acc.method == "GET" else "body"

    if param.location == "body":
        # represented by the single body parameter of the route
        acc.contain_json = True
        return
    if param.location == "query":
        acc.contain_form = True

    if param.location == "path":
        param.required = True
        placeholder = acc.path_params.pop(param.name, None)
        if placeholder is not None and not param.description:
            param.description = placeholder.description

    acc.parameters.append(param)


def render_members(acc: RouteParameters, struct: DefineStruct, types: dict[str, DefineStruct]) -> None:
    for member in walk_members(struct, types):
        render_member(acc, member)


def schema_of_field(member: Member) -> SchemaObject:
    """Render a member as a schema property of its struct's definition."""
    schema = schema_for_type(member.type)
    schema.description = member_description(member.comment)

    for tag in member.tags:
        if tag.key == TAG_VALIDATE:
            fill_validate(schema, tag)
        elif tag.key == TAG_EXAMPLE:
            fill_example(schema, tag)
        elif tag.key in (TAG_FORM, TAG_JSON):
            fill_options(schema, tag)

    return schema
