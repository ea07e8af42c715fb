import json

import pytest

from curl2openapi.inference.schema import (
    SchemaInferenceError,
    infer_schema,
    merge_schemas,
    schema_from_value,
)

SAMPLES = [
    {"id": 1, "name": "a", "tags": ["x", "y"], "owner": {"id": 2, "email": None}},
    [1, 2.5, "three", None, {"k": True}],
    [],
    {},
    "text",
    None,
    [[1], [2, 3], []],
]


class TestSchemaFromValue:
    def test_primitives(self):
        assert schema_from_value(True) == {"type": "boolean"}
        assert schema_from_value(3) == {"type": "integer"}
        assert schema_from_value(3.0) == {"type": "number"}
        assert schema_from_value("s") == {"type": "string"}
        assert schema_from_value(None) == {"nullable": True}

    def test_object(self):
        schema = schema_from_value({"name": "a", "age": 5})
        assert schema == {
            "type": "object",
            "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
            "required": ["name", "age"],
        }

    def test_empty_object_has_no_required(self):
        assert schema_from_value({}) == {"type": "object", "properties": {}}

    def test_empty_array(self):
        assert schema_from_value([]) == {"type": "array", "items": {}}

    def test_array_items_are_merged(self):
        assert schema_from_value([1, 2.5]) == {"type": "array", "items": {"type": "number"}}

    def test_unsupported_value(self):
        with pytest.raises(SchemaInferenceError):
            schema_from_value(object())


class TestMergeSchemas:
    def test_empty_schema_is_identity(self):
        assert merge_schemas({}, {"type": "string"}) == {"type": "string"}
        assert merge_schemas({"type": "string"}, {}) == {"type": "string"}

    def test_integer_and_number(self):
        assert merge_schemas({"type": "integer"}, {"type": "number"}) == {"type": "number"}

    def test_null_makes_nullable(self):
        merged = merge_schemas(schema_from_value(None), schema_from_value("a"))
        assert merged == {"type": "string", "nullable": True}

    def test_mismatched_types_become_any_of(self):
        merged = merge_schemas({"type": "string"}, {"type": "integer"})
        assert merged == {"anyOf": [{"type": "string"}, {"type": "integer"}]}

    def test_any_of_variants_merge_by_kind(self):
        union = merge_schemas({"type": "string"}, {"type": "integer"})
        merged = merge_schemas(union, {"type": "number"})
        assert merged == {"anyOf": [{"type": "string"}, {"type": "number"}]}

    def test_object_properties_union_and_required_intersection(self):
        merged = merge_schemas(
            schema_from_value({"a": 1, "b": "x"}),
            schema_from_value({"b": "y", "c": True}),
        )
        assert list(merged["properties"]) == ["a", "b", "c"]
        assert merged["required"] == ["b"]

    def test_arrays_merge_items(self):
        merged = merge_schemas(schema_from_value([]), schema_from_value(["a"]))
        assert merged == {"type": "array", "items": {"type": "string"}}

    def test_inputs_are_not_mutated(self):
        first = schema_from_value({"a": 1})
        second = schema_from_value(None)
        snapshot = json.dumps(first)
        merge_schemas(first, second)
        assert json.dumps(first) == snapshot
        assert second == {"nullable": True}

    @pytest.mark.parametrize("sample", SAMPLES)
    def test_merging_with_same_sample_is_stable(self, sample):
        schema = schema_from_value(sample)
        assert merge_schemas(schema, schema_from_value(sample)) == schema
        assert merge_schemas(schema, schema) == schema


class TestInferSchema:
    def test_optional_property(self):
        schema = infer_schema(['{"name":"a"}', '{"name":"b","age":5}'], role="request")
        assert schema["type"] == "object"
        assert schema["properties"]["name"] == {"type": "string"}
        assert schema["properties"]["age"] == {"type": "integer"}
        assert schema["required"] == ["name"]

    def test_invalid_samples_are_dropped(self):
        schema = infer_schema(["not json", '{"ok": true}'], role="request")
        assert schema == {"type": "object", "properties": {"ok": {"type": "boolean"}}, "required": ["ok"]}

    def test_request_fallback(self):
        assert infer_schema(["a=1&b=2"], role="request") == {"type": "object", "description": "Request body"}

    def test_response_fallback(self):
        assert infer_schema(["<html>"], role="response") == {"type": "string", "description": "Response content"}

    def test_no_samples(self):
        assert infer_schema([], role="response")["type"] == "string"

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            infer_schema(["{}"], role="header")

    def test_nullable_property(self):
        schema = infer_schema(['{"email": null}', '{"email": "a@b.c"}'])
        assert schema["properties"]["email"] == {"type": "string", "nullable": True}
        assert schema["required"] == ["email"]

    def test_deterministic(self):
        samples = [json.dumps(s) for s in SAMPLES]
        assert infer_schema(samples) == infer_schema(samples)

