"""Lower component schemas into pydantic model definitions."""

from typing import Collection, Mapping, Optional

from pydantic import BaseModel

from openapi_scaffold.errors import UnsupportedConstructError
from openapi_scaffold.generator.naming import Namespace, sanitize
from openapi_scaffold.generator.types import TypeExpr, resolve
from openapi_scaffold.parser.schema import ObjectSchema, Schema, SimpleSchema

# Names the generated module uses in annotations; a field with one of these
# names would shadow it inside the class body.
_ANNOTATION_NAMES = frozenset(
    {"Any", "BaseModel", "ConfigDict", "Field", "Int32", "Int64", "Optional", "UUID", "bool", "float", "int", "list", "str"}
)

# Attributes pydantic owns on every model. A field may not reuse them.
_MODEL_MEMBERS = frozenset(name for name in dir(BaseModel) if not name.startswith("_"))


class DtoField(BaseModel):
    name: str
    alias: Optional[str] = None  # wire name, when it differs from `name`
    type: TypeExpr
    required: bool

    def render(self) -> str:
        annotation = self.type.render() if self.required else self.type.optional().render()
        if self.alias is not None:
            default = "" if self.required else "default=None, "
            return f"{self.name}: {annotation} = Field({default}alias={self.alias!r})"
        if self.required:
            return f"{self.name}: {annotation}"
        return f"{self.name}: {annotation} = None"


class DtoDefinition(BaseModel):
    """One generated data type."""

    name: str
    schema_name: str
    fields: list[DtoField] = []
    docstring: Optional[str] = None

    @property
    def has_aliases(self) -> bool:
        return any(f.alias is not None for f in self.fields)

    def render(self) -> str:
        lines = [f"class {self.name}(BaseModel):"]
        body = []
        if self.docstring:
            body.append(docstring_literal(self.docstring))
        if self.has_aliases:
            if body:
                body.append("")
            body.append("model_config = ConfigDict(populate_by_name=True)")
        if self.fields:
            if body:
                body.append("")
            body.extend(f.render() for f in self.fields)
        if not body:
            body.append("pass")
        lines.extend(f"    {line}" if line else "" for line in body)
        return "\n".join(lines) + "\n"


def emit_dtos(components: Mapping[str, Schema], namespace: Namespace | None = None) -> list[DtoDefinition]:
    """Build a DtoDefinition for every component schema, sorted by name.

    Class names are claimed in ``namespace`` so that two schema names that
    sanitize alike are reported instead of one overwriting the other.
    """
    namespace = namespace or Namespace("schema names")
    class_names = {
        schema_name: namespace.claim(sanitize(schema_name), f"schema {schema_name!r}")
        for schema_name in sorted(components)
    }
    shadowed = frozenset(class_names.values())
    return [
        emit_dto(class_name, schema_name, components[schema_name], components, shadowed)
        for schema_name, class_name in class_names.items()
    ]


def emit_dto(
    class_name: str,
    schema_name: str,
    schema: Schema,
    components: Mapping[str, Schema],
    class_names: Collection[str] = (),
) -> DtoDefinition:
    """Lower one component schema. Field names never shadow a name in ``class_names``."""
    if isinstance(schema, ObjectSchema):
        return DtoDefinition(
            name=class_name,
            schema_name=schema_name,
            fields=_object_fields(schema_name, schema, components, class_names),
            docstring=_describe(schema_name, class_name, schema),
        )

    try:
        value_type = resolve(schema, components)
    except UnsupportedConstructError as e:
        raise UnsupportedConstructError(e.construct, f"schema {schema_name!r}") from e

    return DtoDefinition(
        name=class_name,
        schema_name=schema_name,
        fields=[DtoField(name="value", type=value_type, required=True)],
        docstring=_describe(schema_name, class_name, schema),
    )


def _object_fields(
    schema_name: str, schema: ObjectSchema, components: Mapping[str, Schema], class_names: Collection[str]
) -> list[DtoField]:
    fields = []
    namespace = Namespace(f"fields of schema {schema_name!r}", reserved=("model_config",))
    for prop_name in sorted(schema.properties or {}):
        field_name = namespace.claim(_field_identifier(prop_name, class_names), prop_name)
        try:
            field_type = resolve(schema.properties[prop_name], components)
        except UnsupportedConstructError as e:
            raise UnsupportedConstructError(
                e.construct, f"schema {schema_name!r} property {prop_name!r}"
            ) from e
        fields.append(
            DtoField(
                name=field_name,
                alias=prop_name if field_name != prop_name else None,
                type=field_type,
                required=schema.is_required(prop_name),
            )
        )
    return fields


def _field_identifier(prop_name: str, class_names: Collection[str] = ()) -> str:
    name = sanitize(prop_name)
    # pydantic treats leading-underscore attributes as private, not fields
    if name.startswith("_"):
        name = "field" + name
    elif name.startswith("model_") or name in _MODEL_MEMBERS:
        name = "field_" + name
    while name in _ANNOTATION_NAMES or name in class_names:
        name += "_"
    return name


def _describe(schema_name: str, class_name: str, schema: Schema) -> Optional[str]:
    parts = []
    if class_name != schema_name:
        parts.append(f"Schema {schema_name!r}.")
    if isinstance(schema, (ObjectSchema, SimpleSchema)):
        if schema.format:
            parts.append(f"Format: {schema.format}.")
        if schema.enum_values:
            parts.append("Allowed values: " + ", ".join(repr(v) for v in schema.enum_values) + ".")
    return " ".join(parts) or None


def docstring_literal(text: str) -> str:
    """Quote text as a one-line triple-quoted docstring."""
    text = " ".join(text.split())
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"""{text}"""'
