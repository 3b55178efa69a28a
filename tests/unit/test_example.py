"""Unit tests for schema_tracker.example module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from schema_tracker.errors import ExampleError
from schema_tracker.example import (
    CANNED_CONVERSATION_STATE,
    build_canned_example,
    load_example_file,
)


class TestBuildCannedExample:
    """Tests for build_canned_example function."""

    def test_round_trips_through_mirror(self) -> None:
        """Test the canned literal validates and serializes back unchanged."""
        assert build_canned_example() == CANNED_CONVERSATION_STATE

    def test_validation_failure_raises_example_error(self) -> None:
        """Test a literal that no longer matches the mirror raises ExampleError."""
        broken = {**CANNED_CONVERSATION_STATE, "valid_history_range": "not-a-range"}

        with patch("schema_tracker.example.CANNED_CONVERSATION_STATE", broken):
            with pytest.raises(ExampleError) as exc_info:
                build_canned_example()

        assert "does not match the mirror types" in str(exc_info.value)

    def test_unknown_field_raises_example_error(self) -> None:
        """Test upstream fields missing from the mirror are rejected."""
        broken = {**CANNED_CONVERSATION_STATE, "agent_profile": "default"}

        with patch("schema_tracker.example.CANNED_CONVERSATION_STATE", broken):
            with pytest.raises(ExampleError):
                build_canned_example()


class TestLoadExampleFile:
    """Tests for load_example_file function."""

    def test_loads_json(self, tmp_path: Path) -> None:
        """Test a JSON file is decoded."""
        path = tmp_path / "example.json"
        path.write_text('{"a": "x", "b": null}')

        assert load_example_file(path) == {"a": "x", "b": None}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ExampleError."""
        with pytest.raises(ExampleError) as exc_info:
            load_example_file(tmp_path / "missing.json")

        assert "Cannot read example file" in str(exc_info.value)

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        """Test a file that is not UTF-8 raises ExampleError."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"a": "\xff"}')

        with pytest.raises(ExampleError) as exc_info:
            load_example_file(path)

        assert "Cannot read example file" in str(exc_info.value)

    def test_invalid_json_reports_position(self, tmp_path: Path) -> None:
        """Test invalid JSON raises ExampleError with line information."""
        path = tmp_path / "broken.json"
        path.write_text('{\n  "a": ,\n}')

        with pytest.raises(ExampleError) as exc_info:
            load_example_file(path)

        assert "line 2" in str(exc_info.value)

    def test_non_object_payload_allowed(self, tmp_path: Path) -> None:
        """Test non-object payloads load; rejecting them is the analyzer's job."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")

        assert load_example_file(path) == [1, 2, 3]
