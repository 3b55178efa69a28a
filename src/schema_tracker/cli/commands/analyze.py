"""schema-tracker analyze command - Report schema drift across the archive."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from schema_tracker.cli.commands.diff import print_diff
from schema_tracker.cli.options import archive_dir_option, load_settings
from schema_tracker.cli.output import info, print_table, success


@click.command("analyze")
@click.option(
    "-p",
    "--pattern",
    "pattern",
    type=str,
    default="*.json",
    help="Glob pattern within the archive [default: *.json]",
)
@archive_dir_option
def analyze_cmd(pattern: str, archive_dir: Path | None) -> None:
    """Report where the schema changed across captures.

    Captures are grouped by strategy and compared with the previous capture
    of the same strategy.

    Examples:

        schema-tracker analyze

        schema-tracker analyze --pattern "conversation_schema_2025*.json"
    """
    settings = load_settings(archive_dir)

    from schema_tracker.archive import list_captures
    from schema_tracker.cli.errors import handle_tracker_error
    from schema_tracker.diff import find_drift
    from schema_tracker.errors import SchemaTrackerError

    try:
        entries = list_captures(settings.archive_dir, pattern)
    except SchemaTrackerError as e:
        handle_tracker_error(e, "Analysis")

    if not entries:
        info(f"No captures found in {escape(str(settings.archive_dir))}")
        return

    summary_rows = []
    for strategy in sorted({entry.strategy for entry in entries}, key=lambda s: s.value):
        captures = [entry for entry in entries if entry.strategy is strategy]
        summary_rows.append(
            [
                strategy.value,
                str(len(captures)),
                str(len({entry.document.schema_hash for entry in captures})),
                captures[-1].document.schema_hash[: settings.hash_prefix_length],
            ]
        )
    print_table(["Strategy", "Captures", "Distinct schemas", "Latest hash"], summary_rows)

    drift = find_drift(entries)
    if not drift:
        success("No schema drift detected")
        return

    for point in drift:
        commit = point.current.document.git_commit
        commit_text = f" @ {commit[: settings.commit_prefix_length]}" if commit else ""
        info(
            f"\n[bold]{point.strategy.value}[/bold]: "
            f"{escape(point.previous.path.name)} -> {escape(point.current.path.name)}"
            f"{commit_text}"
        )
        print_diff(point.diff, settings.hash_prefix_length)

    info(f"\n{len(drift)} schema change(s) detected")
