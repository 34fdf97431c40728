"""Map IR schema nodes to Python type expressions.

``resolve`` is a pure function of the schema node and, for references, the
component dictionary passed in by the caller.
"""

from enum import Enum
from typing import Iterator, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from openapi_scaffold.errors import UnresolvedReferenceError, UnsupportedConstructError
from openapi_scaffold.generator.naming import sanitize
from openapi_scaffold.parser.schema import (
    ArraySchema,
    CompositionSchema,
    ObjectSchema,
    ReferenceSchema,
    Schema,
    SimpleSchema,
)


class TypeKind(str, Enum):
    NAMED = "named"
    SEQUENCE = "sequence"
    OPTIONAL = "optional"
    UUID = "uuid"
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    ANY = "any"


# Rendered form of the leaf kinds. Int32/Int64 are aliases emitted in the
# generated module's prelude.
_LEAF_NAMES = {
    TypeKind.UUID: "UUID",
    TypeKind.STRING: "str",
    TypeKind.INT32: "Int32",
    TypeKind.INT64: "Int64",
    TypeKind.FLOAT64: "float",
    TypeKind.BOOLEAN: "bool",
    TypeKind.ANY: "Any",
}


class TypeExpr(BaseModel):
    """A target type: a leaf, a DTO name, or a wrapper around another TypeExpr."""

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    name: Optional[str] = None
    item: Optional["TypeExpr"] = None

    @classmethod
    def leaf(cls, kind: TypeKind) -> "TypeExpr":
        return cls(kind=kind)

    @classmethod
    def named(cls, name: str) -> "TypeExpr":
        return cls(kind=TypeKind.NAMED, name=name)

    @classmethod
    def sequence(cls, item: "TypeExpr") -> "TypeExpr":
        return cls(kind=TypeKind.SEQUENCE, item=item)

    def optional(self) -> "TypeExpr":
        if self.kind is TypeKind.OPTIONAL:
            return self
        return TypeExpr(kind=TypeKind.OPTIONAL, item=self)

    def render(self) -> str:
        if self.kind is TypeKind.NAMED:
            return self.name
        if self.kind is TypeKind.SEQUENCE:
            return f"list[{self.item.render()}]"
        if self.kind is TypeKind.OPTIONAL:
            return f"Optional[{self.item.render()}]"
        return _LEAF_NAMES[self.kind]

    def names(self) -> Iterator[str]:
        """DTO names this type refers to."""
        if self.kind is TypeKind.NAMED:
            yield self.name
        elif self.item is not None:
            yield from self.item.names()

    def __str__(self):
        return self.render()


ANY = TypeExpr.leaf(TypeKind.ANY)


def resolve(schema: Schema, components: Mapping[str, Schema]) -> TypeExpr:
    """Return the Python type for a schema node.

    Raises UnresolvedReferenceError for a $ref whose target is not in
    components and UnsupportedConstructError for allOf/oneOf/anyOf/not.
    """
    if isinstance(schema, ReferenceSchema):
        return _resolve_reference(schema, components)

    if isinstance(schema, CompositionSchema):
        raise UnsupportedConstructError(schema.keyword)

    if isinstance(schema, ArraySchema):
        return TypeExpr.sequence(resolve(schema.items, components))

    if isinstance(schema, ObjectSchema):
        if schema.type == "array":
            if schema.items is None:
                return TypeExpr.sequence(ANY)
            return TypeExpr.sequence(resolve(schema.items, components))
        return ANY

    if isinstance(schema, SimpleSchema):
        return _resolve_simple(schema)

    raise TypeError(f"not a schema node: {schema!r}")


def _resolve_reference(schema: ReferenceSchema, components: Mapping[str, Schema]) -> TypeExpr:
    name = schema.target_name
    if name not in components:
        raise UnresolvedReferenceError(schema.ref, name)
    return TypeExpr.named(sanitize(name))


def _resolve_simple(schema: SimpleSchema) -> TypeExpr:
    if schema.type == "string":
        if schema.format == "uuid":
            return TypeExpr.leaf(TypeKind.UUID)
        return TypeExpr.leaf(TypeKind.STRING)
    if schema.type == "integer":
        if schema.format == "int32":
            return TypeExpr.leaf(TypeKind.INT32)
        return TypeExpr.leaf(TypeKind.INT64)
    if schema.type == "number":
        return TypeExpr.leaf(TypeKind.FLOAT64)
    if schema.type == "boolean":
        return TypeExpr.leaf(TypeKind.BOOLEAN)
    if schema.type == "array":
        # `type: array` without items parses as a simple type
        return TypeExpr.sequence(ANY)
    return ANY
