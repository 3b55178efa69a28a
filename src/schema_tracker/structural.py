"""Structural schema inference from an example JSON value.

The analyzer walks a single example instance and describes the shape it
observes. Two approximations apply and are recorded in the generated schema:

- Array items are described from the first element only. Empty arrays get a
  placeholder item schema.
- An object field is listed as required when its example value is non-null.
  True optionality cannot be recovered from one example.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog

from schema_tracker.errors import StructuralAnalysisError

logger = structlog.get_logger(__name__)

JSON_SCHEMA_DRAFT_07 = "http://json-schema.org/draft-07/schema#"
GENERATION_METHOD = "type_introspection"

EMPTY_ARRAY_ITEMS: dict[str, Any] = {
    "description": "Array type - items unknown from empty array",
}
UNDETERMINED_TYPE: dict[str, Any] = {
    "description": "type undetermined",
}

HEURISTICS = (
    "Array item schemas are inferred from the first element only",
    "Fields are marked required when their example value is non-null",
)


def json_type_name(value: Any) -> str:
    """Return the JSON Schema type name for a decoded JSON value.

    Args:
        value: Value produced by json.loads (or an equivalent dump).

    Returns:
        One of "null", "boolean", "integer", "number", "string", "array", "object",
        or "non-JSON <type>" for values json cannot produce.
    """
    if value is None:
        return "null"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return f"non-JSON {type(value).__name__}"


def analyze_field(value: Any, field_name: str) -> dict[str, Any]:
    """Infer a JSON Schema fragment for one observed value.

    Args:
        value: Observed value of the field.
        field_name: Field name used in the fragment description.

    Returns:
        JSON Schema fragment.

    Raises:
        StructuralAnalysisError: If the value is not a JSON value.
    """
    type_name = json_type_name(value)

    if type_name in ("string", "integer", "number", "boolean"):
        return {
            "type": type_name,
            "description": f"{type_name.capitalize()} field: {field_name}",
        }

    if type_name == "array":
        if value:
            items = analyze_field(value[0], "array_item")
        else:
            items = dict(EMPTY_ARRAY_ITEMS)
        return {
            "type": "array",
            "items": items,
            "description": f"Array field: {field_name}",
        }

    if type_name == "object":
        properties, required = _analyze_properties(value)
        return {
            "type": "object",
            "properties": properties,
            "required": required,
            "description": f"Object field: {field_name}",
        }

    if type_name == "null":
        return {
            "anyOf": [{"type": "null"}, dict(UNDETERMINED_TYPE)],
            "description": f"Optional field: {field_name}",
        }

    raise StructuralAnalysisError(type_name, field_name=field_name)


def _analyze_properties(obj: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """Analyze each field of an object.

    Returns:
        Tuple of (properties, required field names in input order).
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for field_name, field_value in obj.items():
        properties[field_name] = analyze_field(field_value, field_name)
        if field_value is not None:
            required.append(field_name)

    return properties, required


def analyze_structure(
    value: Any,
    *,
    title: str = "ConversationState",
    description: str = "Chat application conversation state structure",
) -> dict[str, Any]:
    """Infer a root JSON Schema from an example record.

    Args:
        value: Example value. Must be a JSON object.
        title: Schema title.
        description: Schema description.

    Returns:
        Draft-07 JSON Schema describing the example.

    Raises:
        StructuralAnalysisError: If the root value is not an object.

    Example:
        >>> schema = analyze_structure({"a": "x", "b": None, "c": [1, 2]})
        >>> schema["required"]
        ['a', 'c']
    """
    if not isinstance(value, dict):
        raise StructuralAnalysisError(json_type_name(value))

    properties, required = _analyze_properties(value)

    return {
        "$schema": JSON_SCHEMA_DRAFT_07,
        "title": title,
        "type": "object",
        "description": description,
        "properties": properties,
        "required": required,
    }


def generate_structural_schema(
    example: Any,
    *,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    """Generate the structural schema with generation metadata.

    Args:
        example: Serialized example instance.
        generated_at: Generation timestamp (default: now, UTC).

    Returns:
        Root schema with `_generation_method`, `_generation_timestamp`,
        `_note` and `_heuristics` keys added.

    Raises:
        StructuralAnalysisError: If the example root is not an object.
    """
    generated_at = generated_at or datetime.now(timezone.utc)

    schema = analyze_structure(example)
    logger.info(
        "structure_analyzed",
        top_level_fields=len(schema["properties"]),
        required_fields=len(schema["required"]),
    )

    schema["_generation_method"] = GENERATION_METHOD
    schema["_generation_timestamp"] = generated_at.isoformat()
    schema["_note"] = "Generated through type introspection without upstream modifications"
    schema["_heuristics"] = list(HEURISTICS)
    return schema
