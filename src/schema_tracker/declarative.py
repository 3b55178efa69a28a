"""Declarative schema generation from the ConversationState mirror models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import BaseModel

from schema_tracker.models import (
    MIRROR_LAST_UPDATED,
    MIRROR_UPSTREAM_COMMIT,
    ConversationState,
)

logger = structlog.get_logger(__name__)

JSON_SCHEMA_DRAFT_2020_12 = "https://json-schema.org/draft/2020-12/schema"
GENERATION_METHOD = "pydantic_complete_introspection"


def generate_declarative_schema(
    model: type[BaseModel] = ConversationState,
    *,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    """Generate a complete JSON Schema from a mirror model.

    Enum variants, nullable fields, nested records and collection element
    types come straight from the model declaration. Nested records are
    emitted under `$defs`.

    Args:
        model: Pydantic model to describe (default: ConversationState).
        generated_at: Generation timestamp (default: now, UTC).

    Returns:
        JSON Schema Draft 2020-12 with generation metadata keys added.

    Example:
        >>> schema = generate_declarative_schema()
        >>> schema["title"]
        'ConversationState'
    """
    generated_at = generated_at or datetime.now(timezone.utc)

    schema = model.model_json_schema(by_alias=True)
    schema["$schema"] = JSON_SCHEMA_DRAFT_2020_12

    logger.info(
        "declarative_schema_generated",
        model=model.__name__,
        definitions=len(schema.get("$defs", {})),
    )

    schema["_generation_method"] = GENERATION_METHOD
    schema["_generation_timestamp"] = generated_at.isoformat()
    schema["_note"] = "Generated from mirror pydantic models of the upstream types"
    schema["_mirror"] = {
        "upstream_commit": MIRROR_UPSTREAM_COMMIT,
        "last_updated": MIRROR_LAST_UPDATED,
    }
    return schema
