"""Builds the complete Swagger 2.0 document for a parsed API."""

import json
import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from api2swagger.errors import ConfigurationError, MalformedWrapperError
from api2swagger.generator.definitions import render_definitions
from api2swagger.generator.naming import DEFAULT_STYLE
from api2swagger.generator.routes import SECURITY_SCHEME, RouteRenderer
from api2swagger.generator.swagger import Document, Info, SchemaObject, SecurityScheme
from api2swagger.parser.base import ApiSpec, unquote

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https", "ws", "wss")
DEFAULT_SCHEMES = ["http", "https"]
DEFAULT_DATA_KEY = "data"

DEFAULT_RESPONSE_JSON = (
    '[{"name":"trace_id","type":"string","description":"trace id","example":"a1b2c3d4e5f6g7h8"},'
    '{"name":"code","type":"integer","description":"status code","example":0},'
    '{"name":"msg","type":"string","description":"message","example":"ok"},'
    '{"name":"data","type":"object","description":"payload","is_data":true}]'
)


class ResponseField(BaseModel):
    """One field of the outer response wrapper."""

    name: str = ""
    type: str = ""  # used verbatim as the schema type
    description: str = ""
    example: Any = None
    is_data: bool = False


RESPONSE_FIELDS = TypeAdapter(list[ResponseField])


def parse_response(response: str) -> tuple[SchemaObject, str]:
    """Parse a JSON array of wrapper fields into (wrapper schema, data key).

    When several fields are marked is_data, the last one wins.
    """
    try:
        fields = RESPONSE_FIELDS.validate_json(response)
    except ValidationError as e:
        raise MalformedWrapperError(f"invalid response wrapper: {e}") from e

    data_key = ""
    for field in fields:
        if not field.name or not field.type:
            raise MalformedWrapperError("every response wrapper field needs a name and a type")
        if field.is_data:
            data_key = field.name
    if not data_key:
        raise MalformedWrapperError("no response wrapper field is marked is_data")

    properties = {
        field.name: SchemaObject(
            type=field.type,
            description=field.description or None,
            example=field.example,
        )
        for field in fields
    }
    return SchemaObject(type="object", properties=properties), data_key


def parse_schemes(schemes: str | None) -> list[str]:
    """Split a comma-separated scheme list, rejecting anything but http/https/ws/wss."""
    if not schemes:
        return list(DEFAULT_SCHEMES)

    result = []
    for scheme in schemes.split(","):
        scheme = scheme.strip()
        if scheme not in SUPPORTED_SCHEMES:
            raise ConfigurationError(
                f"unsupported scheme: [{scheme}], only support [{', '.join(SUPPORTED_SCHEMES)}]"
            )
        result.append(scheme)
    return result


class SwaggerGenerator:
    """Generates Swagger 2.0 documents from parsed API specifications."""

    def __init__(
        self,
        host: str | None = None,
        base_path: str | None = None,
        schemes: str | None = None,
        pack: str | None = None,
        response: str | None = None,
        style: str | None = None,
    ):
        self.host = host or None
        self.base_path = base_path or None
        self.schemes = parse_schemes(schemes)
        self.pack = (pack or "").removeprefix("/")
        self.response = response or ""
        self.style = style or DEFAULT_STYLE
        if self.response and not self.pack:
            logger.warning("response wrapper ignored: no pack name given")

    def generate(self, api: ApiSpec) -> Document:
        """Build the document. Raises MalformedWrapperError for a bad response wrapper."""
        document = Document(
            info=self._info(api),
            host=self.host,
            base_path=self.base_path,
            schemes=list(self.schemes),
            security_definitions={
                SECURITY_SCHEME: SecurityScheme(
                    type="apiKey",
                    description="Enter JWT Bearer token **_only_**",
                    name="Authorization",
                    location="header",
                ),
            },
        )

        data_key = DEFAULT_DATA_KEY
        if self.pack:
            wrapper, data_key = parse_response(self.response or DEFAULT_RESPONSE_JSON)
            document.definitions[self.pack] = wrapper

        RouteRenderer(api, pack=self.pack, data_key=data_key, style=self.style).render(document.paths)
        render_definitions(document.definitions, api.types)

        logger.debug(
            "rendered %d paths and %d definitions for %s",
            len(document.paths), len(document.definitions), api.service.name,
        )
        return document

    def _info(self, api: ApiSpec) -> Info:
        properties = api.info.properties
        return Info(
            title=unquote(properties.get("title", "")),
            version=unquote(properties.get("version", "")),
            description=unquote(properties.get("desc", "")) or None,
        )


def to_json(document: Document) -> str:
    """Serialize a document as 2-space indented JSON with a trailing newline."""
    data = document.model_dump(by_alias=True, exclude_none=True, mode="json")
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
