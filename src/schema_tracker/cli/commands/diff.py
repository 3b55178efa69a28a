"""schema-tracker diff command - Compare two captured schemas."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.markup import escape

from schema_tracker.cli.options import load_settings
from schema_tracker.cli.output import info, success, warning

if TYPE_CHECKING:
    from schema_tracker.diff import SchemaDiff


def print_diff(diff: SchemaDiff, hash_prefix_length: int = 12) -> None:
    """Print added, removed and changed paths of a schema diff."""
    old_hash = diff.old_hash[:hash_prefix_length]
    new_hash = diff.new_hash[:hash_prefix_length]

    if diff.is_empty:
        if diff.hash_changed:
            warning(
                f"Hashes differ ({old_hash} -> {new_hash}) "
                "but no property paths changed"
            )
        else:
            success(f"Schemas are identical ({old_hash})")
        return

    info(f"Hash: {old_hash} -> {new_hash}")
    for path in diff.added:
        info(f"  [green]+[/green] {escape(path)}")
    for path in diff.removed:
        info(f"  [red]-[/red] {escape(path)}")
    for change in diff.changed:
        info(
            f"  [yellow]~[/yellow] {escape(change.path)}: "
            f"{escape(change.old)} -> {escape(change.new)}"
        )
    info(
        f"{len(diff.added)} added, {len(diff.removed)} removed, "
        f"{len(diff.changed)} changed"
    )


@click.command("diff")
@click.argument("old_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("new_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--exit-code",
    "exit_code",
    is_flag=True,
    default=False,
    help="Exit with status 1 when the schemas differ",
)
def diff_cmd(old_path: Path, new_path: Path, exit_code: bool) -> None:
    """Compare two captured schema documents.

    Reports property paths that were added, removed, or changed type.

    Examples:

        schema-tracker diff old.json new.json

        schema-tracker diff old.json new.json --exit-code
    """
    settings = load_settings()

    from schema_tracker.archive import load_document
    from schema_tracker.cli.errors import handle_tracker_error
    from schema_tracker.diff import diff_documents
    from schema_tracker.errors import SchemaTrackerError

    try:
        old = load_document(old_path)
        new = load_document(new_path)
    except SchemaTrackerError as e:
        handle_tracker_error(e, "Diff")

    diff = diff_documents(old, new)
    print_diff(diff, settings.hash_prefix_length)

    if exit_code and not diff.is_empty:
        raise SystemExit(1)
