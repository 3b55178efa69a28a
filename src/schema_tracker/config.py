"""Settings for schema-tracker.

Settings load from environment variables with the SCHEMA_TRACKER_ prefix
(and from a local .env file). CLI options override them per invocation.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ARCHIVE_DIR = Path("tools/schema-tracker/schemas")
DEFAULT_NOTE = "Schema capture"


class TrackerSettings(BaseSettings):
    """Configuration for schema capture and archive inspection.

    Example:
        >>> # From environment
        >>> settings = TrackerSettings()
        >>>
        >>> # Explicit
        >>> settings = TrackerSettings(archive_dir=Path("/tmp/schemas"))
        >>> settings.archive_dir
        PosixPath('/tmp/schemas')
    """

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_TRACKER_",
        env_file=".env",
        extra="ignore",
    )

    archive_dir: Path = Field(
        default=DEFAULT_ARCHIVE_DIR,
        description="Directory that captured schema documents are written to",
    )
    default_note: str = Field(
        default=DEFAULT_NOTE,
        description="Note recorded when no --note is given",
    )
    git_executable: str = Field(
        default="git",
        min_length=1,
        description="Revision-control executable used to read the current commit",
    )
    hash_prefix_length: int = Field(
        default=12,
        ge=4,
        le=64,
        description="Number of hash characters shown in reports",
    )
    commit_prefix_length: int = Field(
        default=8,
        ge=4,
        le=40,
        description="Number of commit characters shown in reports",
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON instead of console output",
    )
