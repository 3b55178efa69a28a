"""CLI error handling for schema-tracker.

Wraps library exceptions into user-friendly messages with exit codes.
"""

from __future__ import annotations

from typing import NoReturn

import click
from rich.markup import escape

from schema_tracker.cli.output import error
from schema_tracker.errors import ArchiveWriteError, SchemaTrackerError

# Exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Bad example, bad root shape, unreadable capture
EXIT_SYSTEM_ERROR = 2  # Write failure, permissions


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(escape(self.format_message()))


def exit_code_for(err: SchemaTrackerError) -> int:
    """Map a library error to a CLI exit code."""
    if isinstance(err, ArchiveWriteError):
        return EXIT_SYSTEM_ERROR
    return EXIT_USER_ERROR


def handle_tracker_error(err: SchemaTrackerError, action: str) -> NoReturn:
    """Raise a CLIError for a library error.

    Args:
        err: Library error.
        action: What failed, e.g. "Schema capture".

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(f"{action} failed: {err.user_message}", exit_code=exit_code_for(err)) from err
