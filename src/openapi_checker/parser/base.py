"""Resolved data models for parsed API descriptions.

The parser converts OpenAPI 3.x and Swagger 2.0 documents into these models.
All `$ref`s are resolved before a model is handed to the checker, so a
Schema may point back to one of its ancestors.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

JSON_MEDIA_TYPE = "application/json"


class Verb(str, Enum):
    """HTTP verbs usable as operation keys."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"

    @property
    def display(self) -> str:
        return self.value.upper()


class Schema(BaseModel):
    """A JSON schema node. Empty `type` means a combinator or unspecified schema."""

    type: str = ""
    items: "Schema | None" = None
    properties: dict[str, "Schema"] = {}
    title: str | None = None
    reference_id: str | None = None  # name of the $ref target, if any

    @property
    def display_name(self) -> str | None:
        return self.title or self.reference_id


class MediaType(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_: Schema = Field(default_factory=Schema, alias="schema")


class Content(BaseModel):
    """Request body or response: media type -> MediaType."""

    content: dict[str, MediaType] = {}

    @property
    def json_media(self) -> MediaType | None:
        return self.content.get(JSON_MEDIA_TYPE)


class Parameter(BaseModel):
    name: str
    location: str = "query"  # query / path / header / cookie


class Operation(BaseModel):
    parameters: list[Parameter] = []
    request_body: Content | None = None
    responses: dict[str, Content] | None = None


class PathItem(BaseModel):
    parameters: list[Parameter] = []
    operations: dict[Verb, Operation] = {}


class ApiDocument(BaseModel):
    """A whole API description, keyed by path template."""

    paths: dict[str, PathItem] = {}
