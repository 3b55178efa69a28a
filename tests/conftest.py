"""Shared test fixtures for schema-tracker tests.

Provides CliRunner fixtures, an isolated archive directory, a fixed clock
and stubs for the git revision lookup.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

from click.testing import CliRunner
import pytest
from rich.console import Console
import structlog

from schema_tracker.cli import output
from schema_tracker.config import TrackerSettings
from schema_tracker.document import SchemaDocument
from schema_tracker.hashing import compute_schema_hash

FIXED_TIME = datetime(2025, 8, 20, 10, 30, 0, tzinfo=timezone.utc)
FAKE_COMMIT = "71c00814247c3c2d6e134c3cbd0f23f6745b1466"


@pytest.fixture(autouse=True)
def wide_console() -> Generator[Console, None, None]:
    """Replace the CLI console with a wide, colorless one.

    Rich tables wrap at the default 80 columns, which splits file names
    across lines in captured output.
    """
    original = output.console
    output.console = Console(width=200, no_color=True, highlight=False)
    yield output.console
    output.console = original


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop logging handlers installed by CLI invocations after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove SCHEMA_TRACKER_* variables so tests see default settings."""
    import os

    for key in list(os.environ):
        if key.startswith("SCHEMA_TRACKER_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created archive directory under tmp_path."""
    return tmp_path / "schemas"


@pytest.fixture
def settings(archive_dir: Path) -> TrackerSettings:
    """Return settings pointing at the temporary archive directory."""
    return TrackerSettings(archive_dir=archive_dir)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Return a clock that always reports FIXED_TIME."""
    return lambda: FIXED_TIME


@pytest.fixture
def git_available() -> Generator[MagicMock, None, None]:
    """Stub `git rev-parse HEAD` to report FAKE_COMMIT."""
    with patch("schema_tracker.revision.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess(
            args=["git", "rev-parse", "HEAD"],
            returncode=0,
            stdout=f"{FAKE_COMMIT}\n".encode(),
            stderr=b"",
        )
        yield mock_run


@pytest.fixture
def git_unavailable() -> Generator[MagicMock, None, None]:
    """Stub the git executable as missing."""
    with patch(
        "schema_tracker.revision.subprocess.run",
        side_effect=FileNotFoundError("No such file or directory: 'git'"),
    ) as mock_run:
        yield mock_run


@pytest.fixture
def make_document() -> Callable[..., SchemaDocument]:
    """Factory fixture building a SchemaDocument around a schema."""

    def _make(
        schema: dict[str, Any],
        *,
        timestamp: str = "2025-08-20T10:30:00+00:00",
        git_commit: str | None = FAKE_COMMIT,
        note: str = "Schema capture",
    ) -> SchemaDocument:
        return SchemaDocument(
            timestamp=timestamp,
            git_commit=git_commit,
            schema_hash=compute_schema_hash(schema),
            note=note,
            schema=schema,
        )

    return _make


@pytest.fixture
def write_capture(
    archive_dir: Path, make_document: Callable[..., SchemaDocument]
) -> Callable[..., Path]:
    """Factory fixture writing a capture file into the archive directory."""

    def _write(name: str, schema: dict[str, Any], **kwargs: Any) -> Path:
        archive_dir.mkdir(parents=True, exist_ok=True)
        path = archive_dir / name
        path.write_text(make_document(schema, **kwargs).to_json())
        return path

    return _write
