"""OpenAPI document parser.

Decodes JSON or YAML text into the Document IR. Only the structural shape is
checked here; whether references resolve is decided later, at lowering time.
"""

import json
import re
from enum import Enum

import yaml
from pydantic import ValidationError

from openapi_scaffold.errors import ParseError, UnsupportedVersionError
from openapi_scaffold.parser.base import Document


class Syntax(str, Enum):
    JSON = "json"
    YAML = "yaml"


class _Loader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 booleans: only true/false, so keys like `on` or `no` stay strings."""


_BOOL_TAG = "tag:yaml.org,2002:bool"
_Loader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_Loader.add_implicit_resolver(
    _BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)


def parse_document(text: str, syntax: Syntax | str) -> Document:
    """Parse raw spec text written in the given syntax into a Document."""
    syntax = Syntax(syntax)
    data = _decode(text, syntax)

    if not isinstance(data, dict):
        raise ParseError(f"document root must be a mapping, got {type(data).__name__}")
    _check_version(data)

    try:
        return Document.model_validate(data)
    except ValidationError as e:
        raise ParseError(str(e)) from e


def parse_json(text: str) -> Document:
    return parse_document(text, Syntax.JSON)


def parse_yaml(text: str) -> Document:
    return parse_document(text, Syntax.YAML)


def _decode(text: str, syntax: Syntax):
    if syntax is Syntax.JSON:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(str(e)) from e
    try:
        return yaml.load(text, Loader=_Loader)
    except yaml.YAMLError as e:
        raise ParseError(str(e)) from e


def _check_version(data: dict) -> None:
    if "swagger" in data:
        raise UnsupportedVersionError(str(data["swagger"]))
    version = data.get("openapi")
    if version is not None and not str(version).startswith("3."):
        raise UnsupportedVersionError(str(version))
