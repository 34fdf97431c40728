"""Auto-detect the surface syntax of an OpenAPI document."""

import json
from pathlib import Path

from openapi_scaffold.parser.openapi import Syntax


def detect_syntax(file_path: Path, text: str | None = None) -> Syntax:
    """Pick JSON or YAML for a spec file.

    The extension decides when it is known. Otherwise the text is tried as
    JSON and anything that is not JSON is treated as YAML.
    """
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return Syntax.JSON
    if suffix in (".yaml", ".yml"):
        return Syntax.YAML

    if text is None:
        text = file_path.read_text(encoding="utf-8")
    try:
        json.loads(text)
        return Syntax.JSON
    except (json.JSONDecodeError, ValueError):
        return Syntax.YAML
