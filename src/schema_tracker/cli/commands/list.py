"""schema-tracker list command - List captured schemas."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from schema_tracker.cli.options import archive_dir_option, load_settings
from schema_tracker.cli.output import info, print_table


@click.command("list")
@click.option(
    "-p",
    "--pattern",
    "pattern",
    type=str,
    default="*.json",
    help="Glob pattern within the archive [default: *.json]",
)
@archive_dir_option
def list_cmd(pattern: str, archive_dir: Path | None) -> None:
    """List captured schemas, oldest first.

    Examples:

        schema-tracker list

        schema-tracker list --pattern "*_declarative.json"
    """
    settings = load_settings(archive_dir)

    from schema_tracker.archive import list_captures
    from schema_tracker.cli.errors import handle_tracker_error
    from schema_tracker.errors import SchemaTrackerError

    try:
        entries = list_captures(settings.archive_dir, pattern)
    except SchemaTrackerError as e:
        handle_tracker_error(e, "Listing captures")

    if not entries:
        info(f"No captures found in {escape(str(settings.archive_dir))}")
        return

    rows = [
        [
            entry.path.name,
            entry.document.timestamp,
            entry.strategy.value,
            entry.document.schema_hash[: settings.hash_prefix_length],
            (entry.document.git_commit or "-")[: settings.commit_prefix_length],
            entry.document.note,
        ]
        for entry in entries
    ]
    print_table(
        ["File", "Timestamp", "Strategy", "Hash", "Commit", "Note"],
        [[escape(cell) for cell in row] for row in rows],
        title=f"{len(entries)} capture(s) in {escape(str(settings.archive_dir))}",
    )
