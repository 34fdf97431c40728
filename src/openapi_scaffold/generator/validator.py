"""Validates generated files before they are written."""

import ast


def validate_python(files: dict[str, str]) -> dict[str, str]:
    """Parse and compile each Python file without running it.

    Compiling catches what parsing alone lets through, e.g. ``return`` at
    module level. Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if not filename.endswith(".py") or not content.strip():
            continue
        try:
            compile(ast.parse(content, filename=filename), filename, "exec")
        except SyntaxError as e:
            errors[filename] = f"SyntaxError: {e.msg} (line {e.lineno})"
    return errors
