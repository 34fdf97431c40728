"""Module assembler: joins DTOs, stub handlers and create_app() into one unit.

Output order is fixed: header, imports, prelude, DTOs sorted by schema name,
handlers sorted by path (GET before POST), then create_app(). Running the
assembler twice on the same document yields byte-identical text.
"""

from pydantic import BaseModel

from openapi_scaffold.generator.dto import DtoDefinition, emit_dtos
from openapi_scaffold.generator.naming import Namespace
from openapi_scaffold.generator.routes import RouteEntry, UnhandledOperation, emit_routes
from openapi_scaffold.parser.base import Document
from openapi_scaffold.parser.openapi import Syntax, parse_document

MODULE_FILENAME = "generated.py"
EXAMPLE_FILENAME = "main.py"

# Globals of the generated module that DTO and handler names must not take.
RESERVED_NAMES = (
    "Annotated",
    "Any",
    "BaseModel",
    "ConfigDict",
    "FastAPI",
    "Field",
    "HTTPException",
    "Int32",
    "Int64",
    "Optional",
    "UUID",
    "annotations",
    "bool",
    "create_app",
    "float",
    "int",
    "list",
    "str",
)

_IMPORTS = """from __future__ import annotations

from typing import Annotated, Any, Optional
from uuid import UUID

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field
"""

_PRELUDE = """Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]
"""


class GeneratedModule(BaseModel):
    source: str
    dtos: list[DtoDefinition] = []
    routes: list[RouteEntry] = []
    unhandled: list[UnhandledOperation] = []

    def files(self, example: bool = False) -> dict[str, str]:
        """Output files as {filename: content}; ``main.py`` only with ``example``."""
        files = {MODULE_FILENAME: self.source}
        if example:
            files[EXAMPLE_FILENAME] = _render_example(MODULE_FILENAME.removesuffix(".py"))
        return files


def assemble_module(document: Document) -> GeneratedModule:
    """Lower a whole document into a single Python source unit."""
    namespace = Namespace("module globals", reserved=RESERVED_NAMES)
    dtos = emit_dtos(document.schemas, namespace)
    route_set = emit_routes(document.paths, namespace)

    sections = [_render_header(document), _IMPORTS, _PRELUDE]
    if dtos:
        sections.extend(dto.render() for dto in dtos)
        sections.append("".join(f"{dto.name}.model_rebuild()\n" for dto in dtos))
    sections.extend(route.render_handler() for route in route_set.routes)
    sections.append(_render_create_app(document, route_set.routes))

    return GeneratedModule(
        source="\n\n\n".join(s.rstrip("\n") for s in sections) + "\n",
        dtos=dtos,
        routes=route_set.routes,
        unhandled=route_set.unhandled,
    )


def _render_header(document: Document) -> str:
    title = " ".join(document.info.title.split())
    return f"# Generated by openapi-scaffold from {title} {document.info.version}. Do not edit.\n"


def _render_create_app(document: Document, routes: list[RouteEntry]) -> str:
    lines = [
        "def create_app() -> FastAPI:",
        f"    app = FastAPI(title={document.info.title!r}, version={document.info.version!r})",
    ]
    lines.extend(f"    {route.render_registration()}" for route in routes)
    lines.append("    return app")
    return "\n".join(lines) + "\n"


def _render_example(module_name: str) -> str:
    return f'''import uvicorn

from {module_name} import create_app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000)
'''


class ServerGenerator:
    """Generates FastAPI server scaffolding from OpenAPI documents."""

    def generate(self, document: Document) -> GeneratedModule:
        return assemble_module(document)

    def generate_from_text(self, text: str, syntax: Syntax | str) -> GeneratedModule:
        return self.generate(parse_document(text, syntax))

    def generate_files(self, document: Document, example: bool = False) -> dict[str, str]:
        return self.generate(document).files(example=example)
