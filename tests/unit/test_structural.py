"""Unit tests for schema_tracker.structural module."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from schema_tracker.errors import StructuralAnalysisError
from schema_tracker.structural import (
    EMPTY_ARRAY_ITEMS,
    JSON_SCHEMA_DRAFT_07,
    analyze_field,
    analyze_structure,
    generate_structural_schema,
    json_type_name,
)


class TestJsonTypeName:
    """Tests for json_type_name function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "boolean"),
            (False, "boolean"),
            (0, "integer"),
            (-7, "integer"),
            (1.5, "number"),
            (1.0, "number"),
            ("x", "string"),
            ([], "array"),
            ({}, "object"),
        ],
    )
    def test_type_names(self, value: Any, expected: str) -> None:
        """Test each JSON value maps to its JSON Schema type name."""
        assert json_type_name(value) == expected


class TestAnalyzeField:
    """Tests for analyze_field function."""

    def test_string_field(self) -> None:
        """Test string values yield a string fragment."""
        assert analyze_field("x", "name") == {
            "type": "string",
            "description": "String field: name",
        }

    def test_integer_field(self) -> None:
        """Test integral numbers yield an integer fragment."""
        fragment = analyze_field(42, "count")
        assert fragment["type"] == "integer"
        assert fragment["description"] == "Integer field: count"

    def test_float_field(self) -> None:
        """Test non-integral numbers yield a number fragment."""
        assert analyze_field(0.25, "ratio")["type"] == "number"

    def test_boolean_is_not_integer(self) -> None:
        """Test booleans are not mistaken for integers."""
        assert analyze_field(True, "flag")["type"] == "boolean"

    def test_null_field(self) -> None:
        """Test null values yield an anyOf with a null branch."""
        fragment = analyze_field(None, "model")

        assert {"type": "null"} in fragment["anyOf"]
        assert {"description": "type undetermined"} in fragment["anyOf"]
        assert fragment["description"] == "Optional field: model"

    def test_array_uses_first_element_only(self) -> None:
        """Test array items come from the first element alone."""
        fragment = analyze_field([1, "two", None], "mixed")

        assert fragment["type"] == "array"
        assert fragment["items"] == analyze_field(1, "array_item")

    def test_empty_array_placeholder(self) -> None:
        """Test empty arrays yield the unknown-item placeholder."""
        fragment = analyze_field([], "history")

        assert fragment["type"] == "array"
        assert fragment["items"] == EMPTY_ARRAY_ITEMS

    def test_nested_object_recurses(self) -> None:
        """Test nested objects get their own properties and required lists."""
        fragment = analyze_field({"id": "m1", "meta": None}, "model_info")

        assert fragment["type"] == "object"
        assert set(fragment["properties"]) == {"id", "meta"}
        assert fragment["required"] == ["id"]
        assert fragment["description"] == "Object field: model_info"

    def test_array_of_objects(self) -> None:
        """Test array items describe the first object's fields."""
        fragment = analyze_field([{"role": "user", "content": "hi"}], "transcript")

        items = fragment["items"]
        assert items["type"] == "object"
        assert items["properties"]["role"]["type"] == "string"
        assert items["required"] == ["role", "content"]

    def test_non_json_value_rejected(self) -> None:
        """Test values that are not JSON raise StructuralAnalysisError."""
        with pytest.raises(StructuralAnalysisError) as exc_info:
            analyze_field(object(), "weird")

        assert exc_info.value.field_name == "weird"
        assert "root level" not in str(exc_info.value)

    def test_nested_non_json_value_names_field(self) -> None:
        """Test a non-JSON value deep in an example names its field."""
        with pytest.raises(StructuralAnalysisError) as exc_info:
            analyze_structure({"outer": {"inner": {1, 2}}})

        assert exc_info.value.field_name == "inner"
        assert exc_info.value.value_type == "non-JSON set"


class TestAnalyzeStructure:
    """Tests for analyze_structure function."""

    def test_end_to_end_example(self) -> None:
        """Test the documented example input."""
        schema = analyze_structure({"a": "x", "b": None, "c": [1, 2]})

        assert schema["type"] == "object"
        assert schema["properties"]["a"]["type"] == "string"
        assert {"type": "null"} in schema["properties"]["b"]["anyOf"]
        assert schema["properties"]["c"]["type"] == "array"
        assert schema["properties"]["c"]["items"]["type"] == "integer"
        assert schema["required"] == ["a", "c"]

    def test_properties_match_input_keys(self) -> None:
        """Test properties contain every input key and nothing else."""
        example = {"z": 1, "y": [], "x": {}, "w": None, "v": False}
        schema = analyze_structure(example)

        assert set(schema["properties"]) == set(example)

    def test_root_metadata(self) -> None:
        """Test root schema carries $schema, title and description."""
        schema = analyze_structure({"a": 1}, title="Thing", description="A thing")

        assert schema["$schema"] == JSON_SCHEMA_DRAFT_07
        assert schema["title"] == "Thing"
        assert schema["description"] == "A thing"

    def test_empty_object(self) -> None:
        """Test an empty object yields no properties and nothing required."""
        schema = analyze_structure({})

        assert schema["properties"] == {}
        assert schema["required"] == []

    @pytest.mark.parametrize("root", [[1, 2], "text", 3, None, True])
    def test_non_object_root_rejected(self, root: Any) -> None:
        """Test non-object roots raise StructuralAnalysisError."""
        with pytest.raises(StructuralAnalysisError) as exc_info:
            analyze_structure(root)

        assert "Expected object at root level" in str(exc_info.value)
        assert exc_info.value.value_type == json_type_name(root)
        assert exc_info.value.field_name is None

    def test_pure_function(self) -> None:
        """Test the input is not modified and results are repeatable."""
        example = {"a": [{"b": None}]}
        first = analyze_structure(example)
        second = analyze_structure(example)

        assert first == second
        assert example == {"a": [{"b": None}]}


class TestGenerateStructuralSchema:
    """Tests for generate_structural_schema function."""

    def test_adds_generation_metadata(self) -> None:
        """Test generation metadata keys are added to the root."""
        generated_at = datetime(2025, 8, 20, 10, 30, tzinfo=timezone.utc)
        schema = generate_structural_schema({"a": 1}, generated_at=generated_at)

        assert schema["_generation_method"] == "type_introspection"
        assert schema["_generation_timestamp"] == "2025-08-20T10:30:00+00:00"
        assert "_note" in schema
        assert len(schema["_heuristics"]) == 2

    def test_metadata_not_in_properties(self) -> None:
        """Test metadata keys do not leak into properties."""
        schema = generate_structural_schema({"a": 1})

        assert set(schema["properties"]) == {"a"}
