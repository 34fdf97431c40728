from openapi_scaffold.generator.validator import validate_python


class TestValidatePython:
    def test_valid_code(self):
        errors = validate_python({"generated.py": "import os\nx = 1\n"})
        assert errors == {}

    def test_syntax_error(self):
        errors = validate_python({"generated.py": "def foo(\n"})
        assert "generated.py" in errors
        assert "SyntaxError" in errors["generated.py"]

    def test_skips_non_python(self):
        errors = validate_python({"notes.txt": "def foo(", "main.py": "x = 1"})
        assert errors == {}

    def test_skips_empty_file(self):
        errors = validate_python({"__init__.py": ""})
        assert errors == {}

    def test_reports_each_bad_file(self):
        errors = validate_python({"a.py": "class\n", "b.py": "x = (\n", "c.py": "y = 2\n"})
        assert set(errors) == {"a.py", "b.py"}

    def test_compile_time_error(self):
        errors = validate_python({"generated.py": "x = 1\nreturn x\n"})
        assert errors == {"generated.py": "SyntaxError: 'return' outside function (line 2)"}
