from api2swagger.generator.members import (
    RouteParameters,
    render_member,
    render_members,
    render_parameter,
    schema_of_field,
    walk_members,
)
from api2swagger.generator.swagger import Parameter
from api2swagger.parser.base import DefineStruct, Member


def _member(name: str, type_name: str, tag: str = "", comment: str = "") -> Member:
    return Member(name=name, type=type_name, tag=tag, comment=comment)


class TestRenderParameter:
    def test_header_parameter(self):
        p = render_parameter(_member("Token", "string", 'header:"Authorization"'))
        assert p.name == "Authorization"
        assert p.location == "header"
        assert p.required is True
        assert p.type == "string"

    def test_form_is_query(self):
        p = render_parameter(_member("Page", "int", 'form:"page,optional,default=1"'))
        assert p.location == "query"
        assert p.required is False
        assert p.type == "integer"
        assert p.format == "int32"
        assert p.default == 1

    def test_untagged_keeps_member_name(self):
        p = render_parameter(_member("Keyword", "string"))
        assert p.name == "Keyword"
        assert p.location == ""
        assert p.required is False

    def test_array_parameter(self):
        p = render_parameter(_member("Ids", "[]int64", 'form:"ids"'))
        assert p.type == "array"
        assert p.items.type == "integer"
        assert p.items.format == "int64"

    def test_struct_typed_parameter_falls_back_to_string(self):
        p = render_parameter(_member("Filter", "Filter", 'form:"filter"'))
        assert p.type == "string"

    def test_comment_becomes_description(self):
        p = render_parameter(_member("Id", "int64", 'path:"id"', comment="// user id\\nprimary key"))
        assert p.description == "user id\nprimary key"

    def test_validate_and_example(self):
        p = render_parameter(_member("Size", "int", 'form:"size" validate:"max=100" example:"20"'))
        assert p.maximum == 100
        assert p.example == 20

    def test_first_location_tag_wins(self):
        p = render_parameter(_member("Id", "int", 'path:"id" json:"id"'))
        assert p.location == "path"


class TestRenderMember:
    def test_untagged_get_field_goes_to_query(self):
        acc = RouteParameters(method="GET")
        render_member(acc, _member("Keyword", "string"))
        assert acc.parameters[0].location == "query"
        assert acc.contain_form is True
        assert acc.contain_json is False

    def test_untagged_post_field_goes_to_body(self):
        acc = RouteParameters(method="POST")
        render_member(acc, _member("Keyword", "string"))
        assert acc.parameters == []
        assert acc.contain_json is True

    def test_json_field_is_not_a_parameter(self):
        acc = RouteParameters(method="PUT")
        render_member(acc, _member("Name", "string", 'json:"name"'))
        assert acc.parameters == []
        assert acc.contain_json is True

    def test_path_field_claims_placeholder(self):
        placeholder = Parameter(name="id", location="path", required=True, type="string", description="user id")
        acc = RouteParameters(method="GET", path_params={"id": placeholder})
        render_member(acc, _member("Id", "int64", 'path:"id"'))
        assert acc.path_params == {}
        p = acc.parameters[0]
        assert p.type == "integer"
        assert p.description == "user id"
        assert p.required is True

    def test_path_field_keeps_own_description(self):
        placeholder = Parameter(name="id", location="path", required=True, type="string", description="from doc")
        acc = RouteParameters(method="GET", path_params={"id": placeholder})
        render_member(acc, _member("Id", "int64", 'path:"id"', comment="// from struct"))
        assert acc.parameters[0].description == "from struct"

    def test_optional_path_field_stays_required(self):
        acc = RouteParameters(method="GET")
        render_member(acc, _member("Id", "int64", 'path:"id,optional"'))
        assert acc.parameters[0].required is True


class TestWalkMembers:
    def test_embedded_struct_is_flattened_in_order(self):
        base = DefineStruct(name="Base", members=[_member("A", "int", 'form:"a"'), _member("B", "int", 'form:"b"')])
        req = DefineStruct(
            name="Req",
            members=[_member("First", "int", 'form:"first"'), Member(type="Base"), _member("Last", "int", 'form:"last"')],
        )
        names = [m.name for m in walk_members(req, {"Base": base})]
        assert names == ["First", "A", "B", "Last"]

    def test_inline_body_is_used(self):
        req = DefineStruct(
            name="Req",
            members=[Member(type="Page", struct={"name": "Page", "members": [{"name": "Size", "type": "int"}]})],
        )
        assert [m.name for m in walk_members(req, {})] == ["Size"]

    def test_unresolved_embedded_struct_is_skipped(self):
        req = DefineStruct(name="Req", members=[Member(type="Missing")])
        assert list(walk_members(req, {})) == []

    def test_self_embedding_terminates(self):
        loop = DefineStruct(name="Loop", members=[Member(type="Loop"), _member("X", "int")])
        assert [m.name for m in walk_members(loop, {"Loop": loop})] == ["X"]

    def test_render_members_propagates_flags(self):
        base = DefineStruct(name="Base", members=[_member("Name", "string", 'json:"name"')])
        req = DefineStruct(name="Req", members=[Member(type="Base"), _member("Q", "string", 'form:"q"')])
        acc = RouteParameters(method="POST")
        render_members(acc, req, {"Base": base})
        assert acc.contain_json is True
        assert acc.contain_form is True
        assert [p.name for p in acc.parameters] == ["q"]


class TestSchemaOfField:
    def test_primitive_with_constraints(self):
        schema = schema_of_field(_member("Name", "string", 'json:"name,default=bob" validate:"min=1"', "// the name"))
        dumped = schema.model_dump(by_alias=True, exclude_none=True)
        assert dumped == {"type": "string", "description": "the name", "default": "bob", "minLength": 1}

    def test_struct_reference(self):
        schema = schema_of_field(_member("Owner", "*User", 'json:"owner"'))
        assert schema.ref == "#/definitions/User"

    def test_array_validate_uses_items_bounds(self):
        schema = schema_of_field(_member("Tags", "[]string", 'json:"tags" validate:"max=3"'))
        assert schema.type == "array"
        assert schema.max_items == 3

    def test_header_options_are_not_applied(self):
        schema = schema_of_field(_member("Token", "string", 'header:"token,default=x"'))
        assert schema.default is None
