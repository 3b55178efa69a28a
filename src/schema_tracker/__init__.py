"""schema-tracker: ConversationState schema snapshots for drift auditing.

This package provides:
- Structural schema inference from an example instance
- Declarative schema derivation from mirror pydantic models
- Capture of hashed, timestamped schema documents into an archive
- Archive listing, diffing and drift analysis
"""

from __future__ import annotations

__version__ = "0.1.0"

from schema_tracker.archive import ArchiveEntry, list_captures, load_document
from schema_tracker.capture import CaptureResult, SchemaCapture, capture
from schema_tracker.config import TrackerSettings
from schema_tracker.declarative import generate_declarative_schema
from schema_tracker.diff import SchemaDiff, diff_documents, find_drift
from schema_tracker.document import SchemaDocument, Strategy
from schema_tracker.errors import (
    ArchiveReadError,
    ArchiveWriteError,
    ExampleError,
    SchemaTrackerError,
    SerializationError,
    StructuralAnalysisError,
)
from schema_tracker.hashing import compute_schema_hash
from schema_tracker.structural import analyze_structure, generate_structural_schema

__all__ = [
    "__version__",
    # Capture
    "capture",
    "SchemaCapture",
    "CaptureResult",
    "TrackerSettings",
    # Strategies
    "analyze_structure",
    "generate_structural_schema",
    "generate_declarative_schema",
    "compute_schema_hash",
    # Documents and archive
    "SchemaDocument",
    "Strategy",
    "ArchiveEntry",
    "list_captures",
    "load_document",
    "SchemaDiff",
    "diff_documents",
    "find_drift",
    # Errors
    "SchemaTrackerError",
    "ExampleError",
    "StructuralAnalysisError",
    "SerializationError",
    "ArchiveWriteError",
    "ArchiveReadError",
]
