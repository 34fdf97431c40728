"""Intermediate representation of a parsed OpenAPI document.

The parser builds these models once per run; nothing downstream mutates
them. Schema variants live in ``openapi_scaffold.parser.schema``.
"""

from typing import Iterator, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from openapi_scaffold.parser.schema import SchemaNode

# Methods a PathItem can carry, in emission order.
HTTP_METHODS = ("get", "post", "put", "delete")


class IrModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)


class Info(IrModel):
    title: str
    version: str  # YAML `version: 1.0` arrives as a float


class Parameter(IrModel):
    """A single operation parameter."""

    name: str
    location: Literal["path", "query", "header", "cookie"] = Field(alias="in")
    required: bool = False
    schema_: Optional[SchemaNode] = Field(default=None, alias="schema")


class MediaType(IrModel):
    schema_: Optional[SchemaNode] = Field(default=None, alias="schema")


class RequestBody(IrModel):
    content: dict[str, MediaType]


class Response(IrModel):
    description: str = ""
    content: Optional[dict[str, MediaType]] = None


class Operation(IrModel):
    """One HTTP operation on a path."""

    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    parameters: Optional[list[Parameter]] = None
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: dict[str, Response]

    @field_validator("responses", mode="before")
    @classmethod
    def status_codes_as_strings(cls, value):
        # YAML reads unquoted status codes (200:) as integers
        if isinstance(value, dict):
            return {str(code): resp for code, resp in value.items()}
        return value

    @field_validator("responses")
    @classmethod
    def responses_not_empty(cls, value):
        if not value:
            raise ValueError("operation must declare at least one response")
        return value


class PathItem(IrModel):
    get: Optional[Operation] = None
    post: Optional[Operation] = None
    put: Optional[Operation] = None
    delete: Optional[Operation] = None

    def operations(self) -> Iterator[tuple[str, Operation]]:
        """Yield (method, operation) for every method present, GET first."""
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation


class Components(IrModel):
    schemas: dict[str, SchemaNode] = {}


class Document(IrModel):
    """Root of the IR."""

    openapi: Optional[str] = None
    info: Info
    paths: dict[str, PathItem]
    components: Optional[Components] = None

    @property
    def schemas(self) -> dict[str, SchemaNode]:
        """Component schemas, empty when the document has no components."""
        if self.components is None:
            return {}
        return self.components.schemas
