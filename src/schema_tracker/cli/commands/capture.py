"""schema-tracker capture command - Capture the current schema with metadata."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from schema_tracker.cli.options import archive_dir_option, load_settings
from schema_tracker.cli.output import detail, info, success


@click.command("capture")
@click.option(
    "-n",
    "--note",
    "note",
    type=str,
    default=None,
    help="Optional note to include with the schema",
)
@click.option(
    "--declarative",
    "--schemars",
    "use_declarative",
    is_flag=True,
    default=False,
    help="Derive the schema from the mirror type declarations (complete types)",
)
@click.option(
    "-e",
    "--example",
    "example_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON example to analyze instead of the canned ConversationState",
)
@archive_dir_option
def capture_cmd(
    note: str | None,
    use_declarative: bool,
    example_path: Path | None,
    archive_dir: Path | None,
) -> None:
    """Capture the current ConversationState schema and save it with metadata.

    By default the schema is inferred from a canned example instance. With
    `--declarative` it is derived from the mirror type declarations instead.

    Examples:

        schema-tracker capture

        schema-tracker capture --note "Before 1.4 release"

        schema-tracker capture --declarative
    """
    settings = load_settings(archive_dir)

    # Import here to avoid heavy imports at CLI startup
    from schema_tracker.capture import SchemaCapture
    from schema_tracker.cli.errors import handle_tracker_error
    from schema_tracker.errors import SchemaTrackerError

    if use_declarative:
        info("Generating schema from the declared ConversationState types...")
    else:
        info("Generating schema from a ConversationState example...")

    try:
        result = SchemaCapture(settings).run(note, use_declarative, example_path=example_path)
    except SchemaTrackerError as e:
        handle_tracker_error(e, "Schema capture")

    document = result.document
    success(f"Schema captured: {escape(str(result.path))}")
    detail("Hash", document.schema_hash[: settings.hash_prefix_length])
    detail("Method", result.strategy.label)
    if document.git_commit:
        detail("Commit", document.git_commit[: settings.commit_prefix_length])
    if result.note_given:
        detail("Note", escape(document.note))
