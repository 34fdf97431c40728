"""Schema variants of the intermediate representation.

A raw OpenAPI schema node is an untagged union. ``parse_schema`` decides the
variant by walking ``SCHEMA_VARIANTS`` in order and taking the first shape
that matches:

    $ref -> allOf -> oneOf -> anyOf -> not -> array with items
         -> object (properties, type: object, or no type) -> simple type

A node that fits more than one shape (e.g. ``$ref`` next to ``properties``)
therefore always lands on the earliest entry.
"""

from __future__ import annotations

from typing import Annotated, Any, Callable, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from openapi_scaffold.errors import ParseError


def _coerce_schema(value: Any) -> Any:
    if isinstance(value, SchemaBase):
        return value
    return parse_schema(value)


class SchemaBase(BaseModel):
    """Common behaviour shared by every schema variant."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def get_type(self) -> str | None:
        return None

    def is_reference(self) -> bool:
        return False

    def get_reference(self) -> str | None:
        return None

    def is_composition(self) -> bool:
        return False


class Discriminator(BaseModel):
    """oneOf discriminator. Kept for documentation only."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    property_name: str = Field(alias="propertyName")
    mapping: Optional[dict[str, str]] = None


class ReferenceSchema(SchemaBase):
    ref: str = Field(alias="$ref")

    def get_type(self) -> str | None:
        return "reference"

    def is_reference(self) -> bool:
        return True

    def get_reference(self) -> str | None:
        return self.ref

    @property
    def target_name(self) -> str:
        """Final path segment of the pointer, e.g. ``Task`` for ``#/components/schemas/Task``."""
        return self.ref.rsplit("/", 1)[-1]


class CompositionSchema(SchemaBase):
    """Structural combination of other schemas. Parsed, never lowered."""

    keyword: ClassVar[str] = ""

    def get_type(self) -> str | None:
        return self.keyword

    def is_composition(self) -> bool:
        return True


class AllOfSchema(CompositionSchema):
    keyword: ClassVar[str] = "allOf"

    all_of: list[SchemaNode] = Field(alias="allOf")


class OneOfSchema(CompositionSchema):
    keyword: ClassVar[str] = "oneOf"

    one_of: list[SchemaNode] = Field(alias="oneOf")
    discriminator: Optional[Discriminator] = None


class AnyOfSchema(CompositionSchema):
    keyword: ClassVar[str] = "anyOf"

    any_of: list[SchemaNode] = Field(alias="anyOf")


class NotSchema(CompositionSchema):
    keyword: ClassVar[str] = "not"

    not_: SchemaNode = Field(alias="not")


class ArraySchema(SchemaBase):
    """Explicit ``type: array`` with a mandatory item schema."""

    type: Literal["array"] = "array"
    items: SchemaNode

    def get_type(self) -> str | None:
        return self.type


class ObjectSchema(SchemaBase):
    """Object-shaped node. Every field is optional."""

    type: Optional[str] = None
    properties: Optional[dict[str, SchemaNode]] = None
    required: Optional[list[str]] = None
    items: Optional[SchemaNode] = None
    format: Optional[str] = None
    enum_values: Optional[list[Any]] = Field(default=None, alias="enum")

    def get_type(self) -> str | None:
        return self.type

    def is_required(self, name: str) -> bool:
        return name in (self.required or [])


class SimpleSchema(SchemaBase):
    """Primitive type tag (string, integer, number, boolean, ...)."""

    type: str
    format: Optional[str] = None
    enum_values: Optional[list[Any]] = Field(default=None, alias="enum")

    def get_type(self) -> str | None:
        return self.type


Schema = Union[
    ReferenceSchema,
    AllOfSchema,
    OneOfSchema,
    AnyOfSchema,
    NotSchema,
    ArraySchema,
    ObjectSchema,
    SimpleSchema,
]

# Schema-typed field: raw nodes go through parse_schema before validation.
SchemaNode = Annotated[Schema, BeforeValidator(_coerce_schema)]


# -- variant disambiguation ---------------------------------------------------

def _is_reference(node: dict) -> bool:
    return "$ref" in node


def _is_all_of(node: dict) -> bool:
    return "allOf" in node


def _is_one_of(node: dict) -> bool:
    return "oneOf" in node


def _is_any_of(node: dict) -> bool:
    return "anyOf" in node


def _is_not(node: dict) -> bool:
    return "not" in node


def _is_array(node: dict) -> bool:
    return "items" in node and node.get("type") == "array"


def _is_object(node: dict) -> bool:
    return "properties" in node or node.get("type") == "object" or "type" not in node


def _is_simple(node: dict) -> bool:
    return isinstance(node.get("type"), str)


# Order is part of the contract; see module docstring.
SCHEMA_VARIANTS: list[tuple[Callable[[dict], bool], type[SchemaBase]]] = [
    (_is_reference, ReferenceSchema),
    (_is_all_of, AllOfSchema),
    (_is_one_of, OneOfSchema),
    (_is_any_of, AnyOfSchema),
    (_is_not, NotSchema),
    (_is_array, ArraySchema),
    (_is_object, ObjectSchema),
    (_is_simple, SimpleSchema),
]


def parse_schema(node: Any) -> Schema:
    """Build the schema variant for a raw node.

    Raises ParseError when the node is not a mapping, matches no variant,
    or does not fit the structure of the variant it matched.
    """
    if not isinstance(node, dict):
        raise ParseError(f"schema must be a mapping, got {type(node).__name__}")

    for matches, variant in SCHEMA_VARIANTS:
        if matches(node):
            try:
                return variant.model_validate(node)
            except ValidationError as e:
                raise ParseError(f"invalid {variant.__name__}: {e}") from e

    raise ParseError(f"schema 'type' must be a string, got {node.get('type')!r}")


for _model in (AllOfSchema, OneOfSchema, AnyOfSchema, NotSchema, ArraySchema, ObjectSchema):
    _model.model_rebuild()
