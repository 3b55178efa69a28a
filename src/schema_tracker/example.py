"""Example ConversationState payloads for structural analysis."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from schema_tracker.errors import ExampleError
from schema_tracker.models import ConversationState

logger = structlog.get_logger(__name__)

# Serialized form of a freshly created conversation
CANNED_CONVERSATION_STATE: dict[str, Any] = {
    "conversation_id": "schema_analysis_test",
    "next_message": None,
    "history": [],
    "valid_history_range": [0, 0],
    "transcript": [],
    "tools": {},
    "context_manager": None,
    "context_message_length": None,
    "latest_summary": None,
    "model": None,
    "model_info": None,
    "file_line_tracker": {},
}


def format_validation_error(err: PydanticValidationError) -> str:
    """Format a pydantic validation error as one line per failing field."""
    lines = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"]) or "<root>"
        lines.append(f"{loc}: {e['msg']}")
    return "; ".join(lines)


def build_canned_example() -> dict[str, Any]:
    """Build the canned example instance and return its serialized form.

    The literal is validated through the mirror model so that the example
    stays a real ConversationState, then dumped back to JSON-compatible data.

    Returns:
        Serialized ConversationState.

    Raises:
        ExampleError: If the literal no longer validates against the mirror.
    """
    try:
        instance = ConversationState.model_validate(CANNED_CONVERSATION_STATE)
    except PydanticValidationError as e:
        raise ExampleError(
            "Canned ConversationState example does not match the mirror types",
            internal_details=format_validation_error(e),
        ) from e

    serialized = instance.model_dump(mode="json", by_alias=True)
    logger.debug("canned_example_built", top_level_fields=len(serialized))
    return serialized


def load_example_file(path: Path | str) -> Any:
    """Load a serialized example from a JSON file.

    The payload is not validated against the mirror; a real payload that has
    drifted from the mirror is exactly what the structural strategy reports.

    Args:
        path: Path to a JSON document.

    Returns:
        Decoded JSON value.

    Raises:
        ExampleError: If the file cannot be read, is not UTF-8, or is not valid JSON.
    """
    example_path = Path(path)
    try:
        text = example_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ExampleError(
            f"Cannot read example file: {example_path}",
            internal_details=str(e),
        ) from e

    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExampleError(
            f"Invalid JSON in {example_path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e

    logger.debug("example_file_loaded", path=str(example_path))
    return value
