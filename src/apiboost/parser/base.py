"""Normalized data models for API descriptions.

The OpenAPI adapter and the normalized (JSONC) loader both produce these
models; the generator only ever reads them. Field aliases accept the keys
used by the normalized document format (``type``, ``controllerName``,
``services``, ...).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceFormatError(ValueError):
    """The supplied source does not match the expected document structure."""


class FieldDescriptor(BaseModel):
    """One parameter or one response/object property."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    kind: str | None = Field(default=None, alias="type")  # string / number / boolean / object / array
    required: bool = False
    description: str = ""
    items: "FieldDescriptor | list[FieldDescriptor] | None" = None
    default: Any = None

    @field_validator("required", mode="before")
    @classmethod
    def _none_is_optional(cls, v):
        return bool(v)

    @field_validator("description", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return v or ""


class RequestBody(BaseModel):
    """Body of a request; ``items`` lists its object fields."""

    model_config = ConfigDict(populate_by_name=True)

    kind: str | None = Field(default=None, alias="type")
    items: list[FieldDescriptor] = []

    @field_validator("items", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return v or []


class OperationParameters(BaseModel):
    """Parameters of one operation grouped by location."""

    query: list[FieldDescriptor] = []
    path: list[FieldDescriptor] = []
    header: list[FieldDescriptor] = []
    body: RequestBody | None = None

    @field_validator("query", "path", "header", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return v or []

    @property
    def body_fields(self) -> list[FieldDescriptor]:
        return self.body.items if self.body else []


class ResponseDescriptor(BaseModel):
    """Top-level fields of a response envelope (code, msg, data, ...)."""

    model_config = ConfigDict(populate_by_name=True)

    kind: str | None = Field(default=None, alias="type")
    items: list[FieldDescriptor] | None = None


class Operation(BaseModel):
    """A single HTTP endpoint.

    ``suggested_name`` is advisory; names are made unique per module by the
    generator.
    """

    model_config = ConfigDict(populate_by_name=True)

    path: str
    method: str  # get / post / put / delete / patch
    summary: str = ""
    description: str = ""
    tag: str | None = None
    suggested_name: str = Field(alias="controllerName")
    requires_auth: bool = Field(default=False, alias="auth")
    content_type: str | None = Field(default=None, alias="contentType")
    parameters: OperationParameters | None = Field(default=None, alias="request")
    response: ResponseDescriptor | None = None

    @field_validator("method", mode="before")
    @classmethod
    def _lower_method(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("summary", "description", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return v or ""

    @field_validator("requires_auth", mode="before")
    @classmethod
    def _none_is_false(cls, v):
        return bool(v)


class Module(BaseModel):
    """A named group of operations, rendered into one output file."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    suggested_namespace_name: str | None = Field(default=None, alias="controllerName")
    operations: list[Operation] = Field(default=[], alias="services")

    @field_validator("operations", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return v or []

    @field_validator("description", mode="before")
    @classmethod
    def _none_is_empty_text(cls, v):
        return v or ""
