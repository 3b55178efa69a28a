"""Comparison of captured schemas and drift detection across the archive.

Schemas are flattened into a mapping of property paths to type signatures:

- ``$.conversation_id`` for a root property
- ``$.history[]`` for array items
- ``#/$defs/UserMessage.timestamp`` for properties of a named definition

Generation metadata (keys starting with ``_``) never takes part in a diff.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schema_tracker.archive import ArchiveEntry
from schema_tracker.document import SchemaDocument, Strategy

OPTIONAL_MARKER = " (optional)"


class ChangedPath(BaseModel):
    """A property whose type signature differs between two schemas."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., description="Property path")
    old: str = Field(..., description="Signature in the old schema")
    new: str = Field(..., description="Signature in the new schema")


class SchemaDiff(BaseModel):
    """Differences between two schema documents.

    Attributes:
        old_hash: Hash of the old document.
        new_hash: Hash of the new document.
        added: Paths only present in the new schema.
        removed: Paths only present in the old schema.
        changed: Paths present in both with different signatures.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    old_hash: str = Field(..., description="Hash of the old document")
    new_hash: str = Field(..., description="Hash of the new document")
    added: list[str] = Field(default_factory=list, description="Added paths")
    removed: list[str] = Field(default_factory=list, description="Removed paths")
    changed: list[ChangedPath] = Field(default_factory=list, description="Changed paths")

    @property
    def hash_changed(self) -> bool:
        """Whether the documents' schema hashes differ."""
        return self.old_hash != self.new_hash

    @property
    def is_empty(self) -> bool:
        """Whether no path was added, removed or changed."""
        return not (self.added or self.removed or self.changed)


class DriftPoint(BaseModel):
    """A capture whose schema hash differs from the previous capture of its strategy."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy: Strategy = Field(..., description="Strategy of both captures")
    previous: ArchiveEntry = Field(..., description="Earlier capture")
    current: ArchiveEntry = Field(..., description="Later capture")
    diff: SchemaDiff = Field(..., description="Differences between the captures")


def type_signature(fragment: Any) -> str:
    """Describe the type of a schema fragment as a short string.

    Example:
        >>> type_signature({"anyOf": [{"type": "string"}, {"type": "null"}]})
        'null|string'
    """
    if not isinstance(fragment, dict):
        return "any"
    if "$ref" in fragment:
        return f"ref {str(fragment['$ref']).rsplit('/', 1)[-1]}"
    if "const" in fragment:
        return f"const {json.dumps(fragment['const'], sort_keys=True)}"
    if "enum" in fragment:
        return "enum " + ",".join(sorted(json.dumps(v, sort_keys=True) for v in fragment["enum"]))
    for key in ("anyOf", "oneOf"):
        if key in fragment:
            branches = sorted({type_signature(branch) for branch in fragment[key]})
            return "|".join(branches)
    type_value = fragment.get("type")
    if isinstance(type_value, list):
        return "|".join(sorted(str(t) for t in type_value))
    if isinstance(type_value, str):
        return type_value
    return "any"


def _walk(fragment: Any, path: str) -> Iterator[tuple[str, str]]:
    """Yield (path, signature) for every nested property and item of a fragment."""
    if not isinstance(fragment, dict):
        return

    required = set(fragment.get("required", []))
    for name, child in fragment.get("properties", {}).items():
        child_path = f"{path}.{name}"
        signature = type_signature(child)
        if name not in required:
            signature += OPTIONAL_MARKER
        yield child_path, signature
        yield from _walk(child, child_path)

    items = fragment.get("items")
    if isinstance(items, dict):
        item_path = f"{path}[]"
        yield item_path, type_signature(items)
        yield from _walk(items, item_path)

    for prefix_index, prefix_item in enumerate(fragment.get("prefixItems", [])):
        item_path = f"{path}[{prefix_index}]"
        yield item_path, type_signature(prefix_item)
        yield from _walk(prefix_item, item_path)

    for key in ("anyOf", "oneOf"):
        for branch in fragment.get(key, []):
            yield from _walk(branch, path)

    additional = fragment.get("additionalProperties")
    if isinstance(additional, dict):
        value_path = f"{path}{{}}"
        yield value_path, type_signature(additional)
        yield from _walk(additional, value_path)


def flatten_schema(schema: dict[str, Any]) -> dict[str, str]:
    """Flatten a root schema into {path: signature}.

    Args:
        schema: Root JSON Schema (structural or declarative).

    Returns:
        Mapping of property paths to type signatures.
    """
    flat = dict(_walk(schema, "$"))
    for keyword in ("$defs", "definitions"):
        for name, definition in schema.get(keyword, {}).items():
            def_path = f"#/{keyword}/{name}"
            flat[def_path] = type_signature(definition)
            flat.update(_walk(definition, def_path))
    return flat


def diff_documents(old: SchemaDocument, new: SchemaDocument) -> SchemaDiff:
    """Compare the schemas of two captured documents.

    Args:
        old: Earlier document.
        new: Later document.

    Returns:
        SchemaDiff listing added, removed and changed paths.
    """
    old_flat = flatten_schema(old.json_schema)
    new_flat = flatten_schema(new.json_schema)

    changed = [
        ChangedPath(path=path, old=old_flat[path], new=new_flat[path])
        for path in sorted(old_flat.keys() & new_flat.keys())
        if old_flat[path] != new_flat[path]
    ]

    return SchemaDiff(
        old_hash=old.schema_hash,
        new_hash=new.schema_hash,
        added=sorted(new_flat.keys() - old_flat.keys()),
        removed=sorted(old_flat.keys() - new_flat.keys()),
        changed=changed,
    )


def find_drift(entries: list[ArchiveEntry]) -> list[DriftPoint]:
    """Find every capture whose hash changed from the previous one of its strategy.

    Args:
        entries: Archive entries ordered oldest first.

    Returns:
        Drift points in chronological order.
    """
    drift: list[DriftPoint] = []
    previous_by_strategy: dict[Strategy, ArchiveEntry] = {}

    for entry in entries:
        previous = previous_by_strategy.get(entry.strategy)
        if previous is not None and previous.document.schema_hash != entry.document.schema_hash:
            drift.append(
                DriftPoint(
                    strategy=entry.strategy,
                    previous=previous,
                    current=entry,
                    diff=diff_documents(previous.document, entry.document),
                )
            )
        previous_by_strategy[entry.strategy] = entry

    return drift
