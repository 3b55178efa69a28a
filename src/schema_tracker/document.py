"""Schema document model written to the archive."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Strategy(str, Enum):
    """Schema generation strategy.

    Attributes:
        STRUCTURAL: Inference from a serialized example instance
        DECLARATIVE: Derivation from the mirror model declarations
    """

    STRUCTURAL = "structural"
    DECLARATIVE = "declarative"

    @property
    def filename_suffix(self) -> str:
        """Suffix appended to the capture filename (empty for structural)."""
        return "" if self is Strategy.STRUCTURAL else f"_{self.value}"

    @property
    def label(self) -> str:
        """Human-readable description used in reports."""
        if self is Strategy.DECLARATIVE:
            return "declarative (complete types)"
        return "structural (example introspection)"

    @classmethod
    def from_suffix(cls, suffix: str | None) -> Strategy:
        """Resolve a filename suffix to a strategy.

        Captures written by the earlier Rust tool use the `schemars` suffix
        for the declarative strategy.

        Args:
            suffix: Suffix without the leading underscore, or None.

        Returns:
            Matching strategy.

        Raises:
            ValueError: If the suffix is unknown.
        """
        if not suffix:
            return cls.STRUCTURAL
        if suffix in (cls.DECLARATIVE.value, "schemars"):
            return cls.DECLARATIVE
        msg = f"Unknown strategy suffix: {suffix!r}"
        raise ValueError(msg)


class SchemaDocument(BaseModel):
    """A captured schema with provenance metadata.

    Attributes:
        timestamp: Capture time as ISO-8601 string (UTC).
        git_commit: Commit checked out at capture time, None if unavailable.
        schema_hash: SHA-256 hex digest of the canonical schema.
        note: Free-text note.
        json_schema: The captured JSON Schema (serialized as "schema").

    Example:
        >>> doc = SchemaDocument(
        ...     timestamp="2025-08-20T10:30:00+00:00",
        ...     git_commit=None,
        ...     schema_hash="e3b0c44...",
        ...     note="Schema capture",
        ...     schema={"type": "object"},
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    timestamp: str = Field(..., min_length=1, description="Capture time (ISO-8601, UTC)")
    git_commit: str | None = Field(
        default=None, description="Commit at capture time (null if unavailable)"
    )
    schema_hash: str = Field(
        ...,
        pattern=r"^[0-9a-f]{64}$",
        description="SHA-256 hex digest of the canonical schema",
    )
    note: str = Field(..., description="Free-text note")
    json_schema: dict[str, Any] = Field(..., alias="schema", description="Captured JSON Schema")

    @property
    def generation_method(self) -> str | None:
        """Generation method recorded inside the schema, if any."""
        method = self.json_schema.get("_generation_method")
        return method if isinstance(method, str) else None

    def to_json(self) -> str:
        """Serialize as pretty-printed JSON with the archive key names."""
        return self.model_dump_json(indent=2, by_alias=True)
