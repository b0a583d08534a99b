"""Data models for a parsed API specification.

The loader converts an already-parsed API definition (service, route groups
and struct declarations) into these models for the swagger generator.
"""

import json

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .structtag import parse_struct_tag


def unquote(value: str) -> str:
    """Unquote a "double-quoted" or `back-quoted` literal. Anything else yields ""."""
    if len(value) < 2 or value[0] != value[-1]:
        return ""
    if value[0] == "`":
        inner = value[1:-1]
        return "" if "`" in inner else inner
    if value[0] == '"':
        try:
            result = json.loads(value)
        except ValueError:
            return ""
        return result if isinstance(result, str) else ""
    return ""


class Tag(BaseModel):
    """A single field annotation, e.g. json:"name,optional"."""

    key: str  # header / path / form / json / validate / example
    name: str = ""
    options: list[str] = []


class Member(BaseModel):
    """A field of a struct declaration. Embedded (anonymous) members have no name."""

    name: str = ""
    type: str  # int64 / []string / *User / map[string]string / User
    tags: list[Tag] = Field(default=[], validation_alias=AliasChoices("tags", "tag"))
    comment: str = ""
    struct: "DefineStruct | None" = None  # body of an embedded struct, when known

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_raw_tag(cls, value):
        if isinstance(value, str):
            return parse_struct_tag(value)
        return value

    @property
    def is_inline(self) -> bool:
        return not self.name

    def get_tag(self, key: str) -> Tag | None:
        for tag in self.tags:
            if tag.key == key:
                return tag
        return None


class DefineStruct(BaseModel):
    """A named struct declaration."""

    name: str
    members: list[Member] = []
    docs: list[str] = []


Member.model_rebuild()


class AtDoc(BaseModel):
    """The @doc(...) block of a route: free text plus key/value properties."""

    text: str = ""
    properties: dict[str, str] = {}


class Route(BaseModel):
    """A single route: HTTP method, path template and its types."""

    method: str
    path: str  # /users/:id
    request_type: str | None = None
    response_type: str | None = None  # UserInfo / []UserInfo
    handler: str = ""
    docs: list[str] = []
    at_doc: AtDoc = AtDoc()

    def joined_doc(self) -> str:
        doc = self.at_doc.text + self.at_doc.properties.get("summary", "")
        doc += " ".join(self.docs)
        return doc.strip()


class Group(BaseModel):
    """Routes sharing the same @server annotations."""

    annotations: dict[str, str] = {}  # prefix / group / swtags / jwt / middleware
    routes: list[Route] = []

    def get_annotation(self, key: str) -> str:
        return self.annotations.get(key, "")


class Service(BaseModel):
    name: str
    groups: list[Group] = []


class Info(BaseModel):
    properties: dict[str, str] = {}  # values stay quoted, as written in the source


class ApiSpec(BaseModel):
    """The whole parsed API definition."""

    info: Info = Info()
    service: Service
    types: list[DefineStruct] = []

    def type_index(self) -> dict[str, DefineStruct]:
        return {t.name: t for t in self.types}
