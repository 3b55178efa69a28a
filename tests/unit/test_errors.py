"""Unit tests for schema-tracker error types and CLI error mapping."""

from __future__ import annotations

import pytest

from schema_tracker.cli.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    CLIError,
    exit_code_for,
    handle_tracker_error,
)
from schema_tracker.errors import (
    ArchiveReadError,
    ArchiveWriteError,
    ExampleError,
    SchemaTrackerError,
    SerializationError,
    StructuralAnalysisError,
)


class TestSchemaTrackerErrors:
    """Tests for the library exception hierarchy."""

    @pytest.mark.parametrize(
        "error_cls",
        [ExampleError, SerializationError],
    )
    def test_subclasses(self, error_cls: type[SchemaTrackerError]) -> None:
        """Test errors share the base class and expose user_message."""
        err = error_cls("Something failed", internal_details="trace")

        assert isinstance(err, SchemaTrackerError)
        assert err.user_message == "Something failed"
        assert str(err) == "Something failed"

    def test_structural_analysis_error(self) -> None:
        """Test the root type is part of the message."""
        err = StructuralAnalysisError("array")

        assert err.value_type == "array"
        assert err.field_name is None
        assert err.user_message == "Expected object at root level, got array"

    def test_structural_analysis_error_nested_field(self) -> None:
        """Test a nested failure names the field instead of the root."""
        err = StructuralAnalysisError("non-JSON object", field_name="weird")

        assert err.field_name == "weird"
        assert err.user_message == "Unsupported value in field 'weird': non-JSON object"
        assert "root level" not in err.user_message

    def test_archive_write_error(self) -> None:
        """Test the failing path is part of the message."""
        err = ArchiveWriteError("/readonly/schemas", internal_details="EACCES")

        assert err.path == "/readonly/schemas"
        assert err.user_message == "Cannot write to: /readonly/schemas"

    def test_archive_read_error(self) -> None:
        """Test the unreadable path is part of the message."""
        err = ArchiveReadError("old.json")

        assert err.user_message == "Cannot read schema document: old.json"

    def test_internal_details_not_in_message(self) -> None:
        """Test internal details never leak into the user message."""
        err = SerializationError("Cannot serialize", internal_details="secret stack")
        assert "secret" not in str(err)


class TestCLIErrorMapping:
    """Tests for CLI exit code mapping."""

    def test_cli_error_default_exit_code(self) -> None:
        """Test CLIError defaults to the user error exit code."""
        assert CLIError("bad").exit_code == EXIT_USER_ERROR

    @pytest.mark.parametrize(
        ("err", "expected"),
        [
            (ArchiveWriteError("schemas"), EXIT_SYSTEM_ERROR),
            (StructuralAnalysisError("array"), EXIT_USER_ERROR),
            (ExampleError("bad example"), EXIT_USER_ERROR),
            (ArchiveReadError("old.json"), EXIT_USER_ERROR),
        ],
    )
    def test_exit_code_for(self, err: SchemaTrackerError, expected: int) -> None:
        """Test write failures are system errors and the rest user errors."""
        assert exit_code_for(err) == expected

    def test_handle_tracker_error(self) -> None:
        """Test library errors become CLIError with the action prefix."""
        err = ArchiveWriteError("schemas")

        with pytest.raises(CLIError) as exc_info:
            handle_tracker_error(err, "Schema capture")

        assert exc_info.value.message == "Schema capture failed: Cannot write to: schemas"
        assert exc_info.value.exit_code == EXIT_SYSTEM_ERROR
        assert exc_info.value.__cause__ is err
