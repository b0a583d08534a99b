"""Renders service routes as Swagger path items and operations."""

import logging
import posixpath

from api2swagger.generator.members import RouteParameters, render_members
from api2swagger.generator.naming import DEFAULT_STYLE, format_name
from api2swagger.generator.swagger import Operation, Parameter, PathItem, Response, SchemaObject
from api2swagger.generator.tags import parse_bool
from api2swagger.generator.types import definition_ref, schema_for_type
from api2swagger.parser.base import ApiSpec, DefineStruct, Group, Route, unquote

logger = logging.getLogger(__name__)

OPERATION_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
BODY_METHODS = ("POST", "PUT", "PATCH", "DELETE")
FORM_CONSUMES = ["multipart/form-data", "application/x-www-form-urlencoded"]

SUCCESS_DESCRIPTION = "A successful response."
SECURITY_SCHEME = "apiKey"

RESPDOC_MARKER = "@respdoc-"
FILE_PREFIX = "file_"
FILE_ARRAY_PREFIX = "file_array_"


class RouteRenderer:
    """Renders every route of every group into Swagger path items."""

    def __init__(self, api: ApiSpec, pack: str = "", data_key: str = "data", style: str = DEFAULT_STYLE):
        self.api = api
        self.pack = pack
        self.data_key = data_key
        self.style = style
        self.types = api.type_index()

    def render(self, paths: dict[str, PathItem]) -> None:
        """Render routes in group order, then route order, into `paths`."""
        for group in self.api.service.groups:
            for route in group.routes:
                self._render_route(paths, group, route)

    def _render_route(self, paths: dict[str, PathItem], group: Group, route: Route) -> None:
        method = route.method.upper()
        if method not in OPERATION_METHODS:
            logger.warning("skipping %s %s: unsupported method", method, route.path)
            return
        has_body = method in BODY_METHODS

        path, path_params = self._path_parameters(group, route)
        acc = RouteParameters(method=method, path_params=path_params)

        file_params = self._file_parameters(route)
        if file_params:
            acc.parameters.extend(file_params)
            acc.contain_form = True

        request = self._request_struct(route)
        if request is not None:
            render_members(acc, request, self.types)
        acc.parameters.extend(acc.path_params.values())
        if has_body and acc.contain_json and request is not None and request.name:
            acc.parameters.append(self._body_parameter(request))

        operation = Operation(
            summary=route.joined_doc().replace('"', "") or None,
            description=self._description(route),
            operation_id=route.handler,
            responses={
                "200": Response(description=SUCCESS_DESCRIPTION, response_schema=self._response_schema(route)),
            },
            parameters=acc.parameters or None,
            tags=[self._tag(group)],
        )

        # A form tag means query for GET but multipart/urlencoded body otherwise;
        # with no json field in the request, treat the form fields as the body.
        if has_body and acc.contain_form and not acc.contain_json and method != "DELETE":
            operation.consumes = list(FORM_CONSUMES)
            for param in operation.parameters or []:
                if param.location == "query":
                    param.location = "formData"

        operation.responses.update(self._doc_responses(route))

        if self._requires_auth(group):
            operation.security = [{SECURITY_SCHEME: []}]

        item = paths.setdefault(path, PathItem())
        setattr(item, method.lower(), operation)

    def _path_parameters(self, group: Group, route: Route) -> tuple[str, dict[str, Parameter]]:
        """Turn `:name` segments into `{name}` and one required path parameter each."""
        path = group.get_annotation("prefix") + route.path
        if not path.startswith("/"):
            path = "/" + path

        params: dict[str, Parameter] = {}
        segments = path.split("/")
        for i, segment in enumerate(segments):
            if not segment.startswith(":"):
                continue
            key = segment[1:]
            segments[i] = "{" + key + "}"
            # @doc(customerId: "customer id") documents the :customerId segment
            description = route.at_doc.properties.get(key, "").strip('"')
            params[key] = Parameter(
                name=key,
                location="path",
                required=True,
                type="string",
                description=description or None,
            )
        return "/".join(segments), params

    def _file_parameters(self, route: Route) -> list[Parameter]:
        """Upload fields from @doc keys: file_avatar: "true, user avatar"."""
        params = []
        for key in sorted(route.at_doc.properties):
            if not key.startswith(FILE_PREFIX):
                continue
            if key.startswith(FILE_ARRAY_PREFIX):
                name = key.removeprefix(FILE_ARRAY_PREFIX) + "[]"
            else:
                name = key.removeprefix(FILE_PREFIX)

            flag, _, description = route.at_doc.properties[key].strip('"').partition(",")
            try:
                required = parse_bool(flag)
            except ValueError:
                required = False
            params.append(Parameter(
                name=name,
                location="formData",
                type="file",
                required=required,
                description=description.strip() or None,
            ))
        return params

    def _request_struct(self, route: Route) -> DefineStruct | None:
        if not route.request_type:
            return None
        return self.types.get(route.request_type.removeprefix("*"))

    def _body_parameter(self, request: DefineStruct) -> Parameter:
        doc = ",".join(request.docs).replace("//", "").strip()
        return Parameter(
            name="body",
            location="body",
            required=True,
            description=doc or None,
            param_schema=SchemaObject(ref=definition_ref(request.name)),
        )

    def _response_schema(self, route: Route) -> SchemaObject:
        schema = SchemaObject()
        if route.response_type:
            schema = schema_for_type(route.response_type)
        if not self.pack:
            return schema

        return SchemaObject(all_of=[
            SchemaObject(ref=definition_ref(self.pack.removeprefix("/"))),
            SchemaObject(type="object", properties={self.data_key: schema}),
        ])

    def _tag(self, group: Group) -> str:
        tag = self.api.service.name
        value = group.get_annotation("swtags") or group.get_annotation("group")
        if not value:
            return tag

        try:
            formatted = format_name(self.style, tag)
        except ValueError as e:
            logger.warning("keeping tag %r: %s", tag, e)
            return tag
        return posixpath.normpath("/".join(p for p in (formatted, value) if p))

    def _description(self, route: Route) -> str | None:
        if not route.at_doc.properties:
            return None
        description = unquote(route.at_doc.properties.get("description", ""))
        return description.replace('"', "") or None

    def _doc_responses(self, route: Route) -> dict[str, Response]:
        """Per-status responses from doc lines.

        `@respdoc-400 (ErrorResp) // bad request` references a type; content
        made of `key: value` lines becomes an example object instead.
        """
        responses = {}
        for doc in route.docs:
            marker = doc.find(RESPDOC_MARKER)
            if marker < 0:
                continue
            left = doc.find("(", marker)
            right = doc.find(")", left + 1) if left >= 0 else -1
            if right < 0:
                logger.debug("skipping unterminated respdoc %r", doc)
                continue
            code = doc[marker + len(RESPDOC_MARKER):left].strip()
            if not code:
                continue

            comment = ""
            comment_at = doc.find("//", right)
            if comment_at >= 0:
                comment = doc[comment_at + 2:].strip().strip("*/").strip()

            content = doc[left + 1:right].strip()
            if ":" in content:
                example = {}
                for line in content.splitlines():
                    key, sep, value = line.partition(":")
                    if sep and key.strip():
                        example[key.strip()] = value.strip()
                schema = SchemaObject(example=dict(sorted(example.items())))
            elif content:
                schema = schema_for_type(content)
            else:
                continue
            responses[code] = Response(description=comment, response_schema=schema)
        return responses

    def _requires_auth(self, group: Group) -> bool:
        return bool(group.get_annotation("jwt")) or "jwt" in group.get_annotation("middleware").lower()
