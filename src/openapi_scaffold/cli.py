"""CLI entry point for openapi-scaffold."""

from pathlib import Path

import click

from openapi_scaffold.errors import GeneratorError
from openapi_scaffold.generator.module import MODULE_FILENAME, ServerGenerator
from openapi_scaffold.generator.validator import validate_python
from openapi_scaffold.parser.base import Document
from openapi_scaffold.parser.detect import detect_syntax
from openapi_scaffold.parser.openapi import parse_document


def _parse_doc(file_path: Path, fmt: str) -> Document:
    """Parse the spec file based on format."""
    text = file_path.read_text(encoding="utf-8")
    if fmt == "auto":
        fmt = detect_syntax(file_path, text).value
    return parse_document(text, fmt)


@click.group()
def main():
    """OpenAPI Scaffold: generate FastAPI server scaffolding from OpenAPI specs."""
    pass


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(file_okay=False, path_type=Path), help="Output directory for generated code. Prints to stdout when omitted.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Spec syntax.")
@click.option("--example", is_flag=True, help="Also write a main.py that serves the app with uvicorn.")
@click.option("--check/--no-check", default=True, help="Syntax-check generated code before writing it.")
def generate(spec_path: Path, output: Path | None, fmt: str, example: bool, check: bool):
    """Generate data models and route stubs from an OpenAPI spec."""
    click.echo(f"Parsing {spec_path} (format: {fmt})...", err=True)
    try:
        document = _parse_doc(spec_path, fmt)
        module = ServerGenerator().generate(document)
        files = module.files(example=example and output is not None)
    except GeneratorError as e:
        raise click.ClickException(str(e)) from e

    if example and output is None:
        click.echo("  Warning: --example needs -o/--output; main.py is not written", err=True)

    click.echo(f"Found {len(module.dtos)} schemas and {len(module.routes)} routes.", err=True)
    for op in module.unhandled:
        click.echo(f"  Warning: {op} is not lowered (only GET and POST are supported)", err=True)

    if check:
        errors = validate_python(files)
        if errors:
            details = "; ".join(f"{name}: {err}" for name, err in errors.items())
            raise click.ClickException(f"Generated code failed validation: {details}")

    if output is None:
        click.echo(files[MODULE_FILENAME], nl=False)
        return

    output.mkdir(parents=True, exist_ok=True)
    for filename, content in files.items():
        file_path = output / filename
        file_path.write_text(content, encoding="utf-8")
        click.echo(f"  Created {file_path}", err=True)

    click.echo(f"Generated code written to {output}", err=True)
