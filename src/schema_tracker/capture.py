"""Schema capture orchestration.

A capture runs one linear pass:

1. Generate the schema with the structural or declarative strategy
2. Hash the schema
3. Look up the current commit (best effort)
4. Assemble the SchemaDocument
5. Write it to the archive

There are no retries and no partial state: the capture file is written once,
fully formed, at the end.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from schema_tracker.archive import capture_filename, write_document
from schema_tracker.config import TrackerSettings
from schema_tracker.declarative import generate_declarative_schema
from schema_tracker.document import SchemaDocument, Strategy
from schema_tracker.example import build_canned_example, load_example_file
from schema_tracker.hashing import compute_schema_hash
from schema_tracker.revision import get_git_commit
from schema_tracker.structural import generate_structural_schema

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CaptureResult(BaseModel):
    """Outcome of a successful capture.

    Attributes:
        path: Written capture file.
        strategy: Strategy used to generate the schema.
        document: The written document.
        note_given: Whether the caller supplied a note.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Path = Field(..., description="Written capture file")
    strategy: Strategy = Field(..., description="Generation strategy")
    document: SchemaDocument = Field(..., description="Written document")
    note_given: bool = Field(default=False, description="Whether a note was supplied")


class SchemaCapture:
    """Capture ConversationState schemas into the archive.

    Attributes:
        settings: Tracker settings (archive location, git executable, defaults).

    Example:
        >>> capture = SchemaCapture(TrackerSettings())
        >>> result = capture.run(note="Before release 1.4", use_declarative=True)
        >>> result.path.name
        'conversation_schema_20250820_103000_declarative.json'
    """

    def __init__(
        self,
        settings: TrackerSettings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the capture.

        Args:
            settings: Tracker settings (default: loaded from the environment).
            clock: Source of the capture timestamp (default: current UTC time).
        """
        self.settings = settings or TrackerSettings()
        self._clock = clock or _utc_now
        self._log = logger.bind(component="schema_capture")

    def run(
        self,
        note: str | None = None,
        use_declarative: bool = False,
        *,
        example_path: Path | str | None = None,
    ) -> CaptureResult:
        """Generate, hash, annotate and write one schema capture.

        Args:
            note: Optional note (default: settings.default_note).
            use_declarative: Use the declarative strategy instead of the structural one.
            example_path: JSON example file replacing the canned example
                (structural strategy only).

        Returns:
            CaptureResult describing the written file.

        Raises:
            ExampleError: If the example cannot be loaded or validated.
            StructuralAnalysisError: If the example root is not an object.
            SerializationError: If the schema or document cannot be serialized.
            ArchiveWriteError: If the capture cannot be written.
        """
        strategy = Strategy.DECLARATIVE if use_declarative else Strategy.STRUCTURAL
        timestamp = self._clock()

        self._log.info("capture_started", strategy=strategy.value)

        schema = self.generate_schema(strategy, timestamp, example_path=example_path)
        schema_hash = compute_schema_hash(schema)
        git_commit = get_git_commit(self.settings.git_executable)

        document = SchemaDocument(
            timestamp=timestamp.isoformat(),
            git_commit=git_commit,
            schema_hash=schema_hash,
            note=note if note is not None else self.settings.default_note,
            schema=schema,
        )

        path = self.settings.archive_dir / capture_filename(timestamp, strategy)
        write_document(document, path)

        self._log.info(
            "capture_completed",
            path=str(path),
            strategy=strategy.value,
            schema_hash=schema_hash,
            git_commit=git_commit,
        )

        return CaptureResult(
            path=path,
            strategy=strategy,
            document=document,
            note_given=note is not None,
        )

    def generate_schema(
        self,
        strategy: Strategy,
        generated_at: datetime,
        *,
        example_path: Path | str | None = None,
    ) -> dict[str, Any]:
        """Generate the schema fragment for a strategy.

        Args:
            strategy: Strategy to use.
            generated_at: Timestamp embedded in the generation metadata.
            example_path: Optional example file for the structural strategy.

        Returns:
            JSON Schema with generation metadata.
        """
        if strategy is Strategy.DECLARATIVE:
            if example_path is not None:
                self._log.warning("example_ignored", reason="declarative_strategy")
            return generate_declarative_schema(generated_at=generated_at)

        if example_path is not None:
            example = load_example_file(example_path)
        else:
            example = build_canned_example()
        return generate_structural_schema(example, generated_at=generated_at)


def capture(
    note: str | None = None,
    use_declarative: bool = False,
    *,
    example_path: Path | str | None = None,
    settings: TrackerSettings | None = None,
) -> CaptureResult:
    """Capture the current ConversationState schema into the archive.

    Convenience wrapper around SchemaCapture.run().

    Args:
        note: Optional note recorded in the document.
        use_declarative: Use the declarative strategy.
        example_path: Optional example file for the structural strategy.
        settings: Tracker settings (default: loaded from the environment).

    Returns:
        CaptureResult describing the written file.
    """
    return SchemaCapture(settings).run(note, use_declarative, example_path=example_path)
