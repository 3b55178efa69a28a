"""Reading and writing the schema capture archive.

Capture files are named ``conversation_schema_<YYYYMMDD_HHMMSS>[_<strategy>].json``.
The archive only grows: nothing here modifies or deletes an existing capture,
except that a capture in the same second with the same strategy overwrites
the earlier one.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from schema_tracker.document import SchemaDocument, Strategy
from schema_tracker.errors import ArchiveReadError, ArchiveWriteError, SerializationError

logger = structlog.get_logger(__name__)

FILENAME_PREFIX = "conversation_schema_"
FILENAME_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
FILENAME_PATTERN = re.compile(r"^conversation_schema_(\d{8}_\d{6})(?:_([a-z]+))?\.json$")


class ArchiveEntry(BaseModel):
    """A capture file read back from the archive.

    Attributes:
        path: Location of the capture file.
        strategy: Strategy recorded in the filename.
        document: Parsed schema document.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Path = Field(..., description="Capture file path")
    strategy: Strategy = Field(..., description="Generation strategy")
    document: SchemaDocument = Field(..., description="Parsed schema document")


def capture_filename(timestamp: datetime, strategy: Strategy) -> str:
    """Build the capture filename for a timestamp and strategy.

    Example:
        >>> capture_filename(datetime(2025, 8, 20, 10, 30, 0), Strategy.DECLARATIVE)
        'conversation_schema_20250820_103000_declarative.json'
    """
    stamp = timestamp.strftime(FILENAME_TIMESTAMP_FORMAT)
    return f"{FILENAME_PREFIX}{stamp}{strategy.filename_suffix}.json"


def strategy_from_filename(name: str) -> Strategy | None:
    """Return the strategy encoded in a capture filename, or None if it is not one."""
    match = FILENAME_PATTERN.match(name)
    if match is None:
        return None
    try:
        return Strategy.from_suffix(match.group(2))
    except ValueError:
        return None


def write_document(document: SchemaDocument, path: Path) -> Path:
    """Write a schema document, creating the archive directory if needed.

    Args:
        document: Document to write.
        path: Destination file path.

    Returns:
        The written path.

    Raises:
        SerializationError: If the document cannot be serialized.
        ArchiveWriteError: If the directory or file cannot be written.
    """
    try:
        content = document.to_json()
    except ValueError as e:
        raise SerializationError(
            "Schema document could not be serialized",
            internal_details=str(e),
        ) from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ArchiveWriteError(str(path.parent), internal_details=str(e)) from e

    if path.exists():
        logger.warning("capture_overwritten", path=str(path))

    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ArchiveWriteError(str(path), internal_details=str(e)) from e

    logger.info("capture_written", path=str(path), bytes=len(content))
    return path


def load_document(path: Path | str) -> SchemaDocument:
    """Read a schema document from disk.

    Args:
        path: Path to a capture file.

    Returns:
        Parsed schema document.

    Raises:
        ArchiveReadError: If the file is unreadable, not UTF-8 JSON, or not a schema document.
    """
    doc_path = Path(path)
    try:
        raw = json.loads(doc_path.read_text(encoding="utf-8"))
        return SchemaDocument.model_validate(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, PydanticValidationError) as e:
        raise ArchiveReadError(str(doc_path), internal_details=str(e)) from e


def list_captures(archive_dir: Path, pattern: str = "*.json") -> list[ArchiveEntry]:
    """Load every capture in the archive matching a glob pattern.

    Files whose names do not follow the capture naming scheme are skipped.

    Args:
        archive_dir: Archive directory.
        pattern: Glob pattern relative to the archive directory.

    Returns:
        Entries ordered oldest first (by filename timestamp, then name).

    Raises:
        ArchiveReadError: If a matching capture cannot be parsed.
    """
    if not archive_dir.is_dir():
        logger.info("archive_missing", archive_dir=str(archive_dir))
        return []

    entries: list[ArchiveEntry] = []
    for path in archive_dir.glob(pattern):
        if not path.is_file():
            continue
        strategy = strategy_from_filename(path.name)
        if strategy is None:
            logger.debug("archive_file_skipped", path=str(path))
            continue
        entries.append(
            ArchiveEntry(path=path, strategy=strategy, document=load_document(path))
        )

    # Names embed the timestamp, so name order is chronological
    entries.sort(key=lambda entry: entry.path.name)
    return entries
