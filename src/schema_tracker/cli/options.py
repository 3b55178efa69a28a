"""Options shared by several schema-tracker commands."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError as PydanticValidationError

from schema_tracker.cli.errors import CLIError
from schema_tracker.config import TrackerSettings

archive_dir_option = click.option(
    "-d",
    "--archive-dir",
    "archive_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Archive directory [default: tools/schema-tracker/schemas, or SCHEMA_TRACKER_ARCHIVE_DIR]",
)


def load_settings(archive_dir: Path | None = None) -> TrackerSettings:
    """Load settings from the environment, applying CLI overrides.

    Args:
        archive_dir: Archive directory given on the command line, if any.

    Returns:
        Effective settings.

    Raises:
        CLIError: If an environment variable holds an invalid value.
    """
    try:
        settings = TrackerSettings()
    except PydanticValidationError as e:
        lines = [
            f"  - {'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise CLIError("Invalid SCHEMA_TRACKER_* settings:\n" + "\n".join(lines)) from None

    if archive_dir is not None:
        settings = settings.model_copy(update={"archive_dir": archive_dir})
    return settings
