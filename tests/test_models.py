import pytest
from pydantic import ValidationError

from openapi_scaffold.parser.base import Document, Operation, Parameter, PathItem
from openapi_scaffold.parser.schema import (
    AllOfSchema,
    ObjectSchema,
    ReferenceSchema,
    SimpleSchema,
)


def _op(**kwargs):
    return Operation(responses={"200": {"description": "OK"}}, **kwargs)


class TestOperation:
    def test_wire_names_are_aliases(self):
        op = Operation.model_validate({
            "operationId": "listTasks",
            "requestBody": {"content": {"application/json": {"schema": {"type": "string"}}}},
            "responses": {"200": {"description": "OK"}},
        })
        assert op.operation_id == "listTasks"
        assert isinstance(op.request_body.content["application/json"].schema_, SimpleSchema)

    def test_integer_status_codes_become_strings(self):
        op = Operation.model_validate({"responses": {200: {"description": "OK"}}})
        assert list(op.responses) == ["200"]

    def test_empty_responses_rejected(self):
        with pytest.raises(ValidationError):
            Operation.model_validate({"responses": {}})

    def test_missing_responses_rejected(self):
        with pytest.raises(ValidationError):
            Operation.model_validate({"operationId": "x"})

    def test_is_frozen(self):
        op = _op(operation_id="a")
        with pytest.raises(ValidationError):
            op.operation_id = "b"


class TestParameter:
    def test_required_defaults_to_false(self):
        p = Parameter.model_validate({"name": "limit", "in": "query"})
        assert p.location == "query"
        assert p.required is False
        assert p.schema_ is None

    def test_unknown_location_rejected(self):
        with pytest.raises(ValidationError):
            Parameter.model_validate({"name": "x", "in": "body"})


class TestPathItem:
    def test_operations_in_method_order(self):
        item = PathItem(delete=_op(), get=_op(), post=_op())
        assert [m for m, _ in item.operations()] == ["get", "post", "delete"]

    def test_empty_path_item_has_no_operations(self):
        assert list(PathItem().operations()) == []


class TestDocument:
    def test_schemas_empty_without_components(self):
        doc = Document.model_validate({"info": {"title": "T", "version": "1"}, "paths": {}})
        assert doc.schemas == {}

    def test_numeric_version_coerced_to_string(self):
        doc = Document.model_validate({"info": {"title": "T", "version": 1.0}, "paths": {}})
        assert doc.info.version == "1.0"

    def test_component_schemas_are_parsed(self):
        doc = Document.model_validate({
            "info": {"title": "T", "version": "1"},
            "paths": {},
            "components": {"schemas": {
                "Task": {"type": "object", "properties": {"owner": {"$ref": "#/components/schemas/User"}}},
                "Both": {"allOf": [{"$ref": "#/components/schemas/Task"}]},
            }},
        })
        task = doc.schemas["Task"]
        assert isinstance(task, ObjectSchema)
        assert isinstance(task.properties["owner"], ReferenceSchema)
        assert isinstance(doc.schemas["Both"], AllOfSchema)


class TestSchemaHelpers:
    def test_reference_helpers(self):
        schema = ReferenceSchema(ref="#/components/schemas/Task")
        assert schema.is_reference()
        assert schema.get_reference() == "#/components/schemas/Task"
        assert schema.target_name == "Task"
        assert schema.get_type() == "reference"

    def test_composition_helpers(self):
        schema = AllOfSchema(all_of=[])
        assert schema.is_composition()
        assert not schema.is_reference()
        assert schema.get_type() == "allOf"

    def test_simple_type(self):
        schema = SimpleSchema(type="string", format="uuid")
        assert schema.get_type() == "string"
        assert schema.get_reference() is None
