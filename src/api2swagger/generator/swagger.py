"""Swagger 2.0 object model.

Every model dumps with its Swagger field names (aliases) and drops unset
fields, so `document.model_dump(by_alias=True, exclude_none=True)` is the
JSON document as published.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SwaggerModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Constraints(SwaggerModel):
    """Validation keywords shared by schemas and non-body parameters."""

    enum: list[Any] | None = None
    default: Any = None
    example: Any = None
    minimum: int | float | None = None
    exclusive_minimum: bool | None = Field(default=None, alias="exclusiveMinimum")
    maximum: int | float | None = None
    exclusive_maximum: bool | None = Field(default=None, alias="exclusiveMaximum")
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    min_items: int | None = Field(default=None, alias="minItems")
    max_items: int | None = Field(default=None, alias="maxItems")


class SchemaObject(Constraints):
    ref: str | None = Field(default=None, alias="$ref")
    title: str | None = None
    type: str | None = None
    format: str | None = None
    description: str | None = None
    items: "SchemaObject | None" = None
    properties: "dict[str, SchemaObject] | None" = None
    additional_properties: "SchemaObject | None" = Field(default=None, alias="additionalProperties")
    required: list[str] | None = None
    all_of: "list[SchemaObject] | None" = Field(default=None, alias="allOf")


class Parameter(Constraints):
    name: str
    description: str | None = None
    location: str = Field(alias="in")  # header / path / query / formData / body
    required: bool = False
    type: str | None = None
    format: str | None = None
    items: SchemaObject | None = None
    param_schema: SchemaObject | None = Field(default=None, alias="schema")


class Response(SwaggerModel):
    description: str = ""
    response_schema: SchemaObject | None = Field(default=None, alias="schema")


class Operation(SwaggerModel):
    summary: str | None = None
    description: str | None = None
    operation_id: str = Field(default="", alias="operationId")
    responses: dict[str, Response] = {}
    parameters: list[Parameter] | None = None
    tags: list[str] | None = None
    consumes: list[str] | None = None
    security: list[dict[str, list[str]]] | None = None


class PathItem(SwaggerModel):
    get: Operation | None = None
    delete: Operation | None = None
    post: Operation | None = None
    put: Operation | None = None
    patch: Operation | None = None


class Info(SwaggerModel):
    title: str = ""
    version: str = ""
    description: str | None = None


class SecurityScheme(SwaggerModel):
    type: str
    description: str | None = None
    name: str | None = None
    location: str | None = Field(default=None, alias="in")


class Document(SwaggerModel):
    swagger: str = "2.0"
    info: Info = Info()
    host: str | None = None
    base_path: str | None = Field(default=None, alias="basePath")
    schemes: list[str] = ["http", "https"]
    consumes: list[str] = ["application/json"]
    produces: list[str] = ["application/json"]
    paths: dict[str, PathItem] = {}
    definitions: dict[str, SchemaObject] = {}
    security_definitions: dict[str, SecurityScheme] = Field(default={}, alias="securityDefinitions")
