"""Custom exception hierarchy for schema-tracker.

This module defines the exception classes raised by the capture pipeline:
- SchemaTrackerError: Base exception for all schema-tracker errors
- ExampleError: Raised when an example payload cannot be loaded or validated
- StructuralAnalysisError: Raised when an example has a non-object root or a non-JSON value
- SerializationError: Raised when a schema document cannot be serialized
- ArchiveWriteError: Raised when the archive directory or file cannot be written
- ArchiveReadError: Raised when a captured document cannot be read back

User-facing messages are safe to display. Technical details are logged
internally via structlog and never shown to the user.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class SchemaTrackerError(Exception):
    """Base exception for schema-tracker.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging only.

    Example:
        >>> raise SchemaTrackerError(
        ...     "Capture failed",
        ...     internal_details="json.dumps raised TypeError on field 'tools'"
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize SchemaTrackerError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "schema_tracker_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ExampleError(SchemaTrackerError):
    """Raised when an example payload cannot be loaded.

    Use this exception when:
    - The canned ConversationState literal no longer validates against the mirror
    - A user-supplied example file is missing or is not valid JSON
    """

    pass


class StructuralAnalysisError(SchemaTrackerError):
    """Raised when the structural analyzer cannot describe an example.

    Either the root is not an object, or a nested field holds a value that
    json cannot produce.

    Attributes:
        value_type: Type name of the rejected value.
        field_name: Field holding the rejected value, None for the root.
    """

    def __init__(self, value_type: str, *, field_name: str | None = None) -> None:
        """Initialize StructuralAnalysisError.

        Args:
            value_type: Type name of the rejected value.
            field_name: Field holding the rejected value (default: the root).
        """
        if field_name is None:
            message = f"Expected object at root level, got {value_type}"
        else:
            message = f"Unsupported value in field {field_name!r}: {value_type}"
        super().__init__(message)
        self.value_type = value_type
        self.field_name = field_name


class SerializationError(SchemaTrackerError):
    """Raised when a schema or schema document cannot be serialized to JSON."""

    pass


class ArchiveWriteError(SchemaTrackerError):
    """Raised when the archive directory or a capture file cannot be written.

    Attributes:
        path: Path that could not be written.
    """

    def __init__(self, path: str, *, internal_details: str | None = None) -> None:
        """Initialize ArchiveWriteError.

        Args:
            path: Path that could not be written.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(f"Cannot write to: {path}", internal_details=internal_details)
        self.path = path


class ArchiveReadError(SchemaTrackerError):
    """Raised when a captured schema document cannot be read or parsed.

    Attributes:
        path: Path of the unreadable document.
    """

    def __init__(self, path: str, *, internal_details: str | None = None) -> None:
        """Initialize ArchiveReadError.

        Args:
            path: Path of the unreadable document.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(f"Cannot read schema document: {path}", internal_details=internal_details)
        self.path = path
