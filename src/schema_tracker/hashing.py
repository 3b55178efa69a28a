"""Deterministic content hashing for schema fragments."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from schema_tracker.errors import SerializationError

# Keys that vary per run and must not affect the content hash
VOLATILE_KEYS = frozenset({"_generation_timestamp"})


def canonical_json(schema: dict[str, Any]) -> str:
    """Serialize a schema fragment canonically.

    Keys are sorted and separators are compact so that equal content always
    produces the same text. Top-level volatile keys are dropped.

    Args:
        schema: JSON Schema fragment.

    Returns:
        Canonical JSON text.

    Raises:
        SerializationError: If the fragment holds non-JSON values.
    """
    stable = {key: value for key, value in schema.items() if key not in VOLATILE_KEYS}
    try:
        return json.dumps(stable, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(
            "Schema could not be serialized for hashing",
            internal_details=str(e),
        ) from e


def compute_schema_hash(schema: dict[str, Any]) -> str:
    """Compute SHA-256 hash of a schema fragment.

    Args:
        schema: JSON Schema fragment.

    Returns:
        Hex-encoded SHA-256 hash.

    Example:
        >>> len(compute_schema_hash({"type": "object"}))
        64
    """
    return hashlib.sha256(canonical_json(schema).encode("utf-8")).hexdigest()
