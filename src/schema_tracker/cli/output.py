"""Rich console output utilities for the schema-tracker CLI.

Colored success/error/warning messages and tables, respecting the
NO_COLOR environment variable and the --no-color flag.
"""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console
from rich.table import Table

# Rich respects NO_COLOR itself, but --no-color must also force it
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(
        force_terminal=force_terminal,
        no_color=no_color or _force_no_color,
        highlight=False,
    )


# Default console instance
console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Args:
        message: The message to display.
        **kwargs: Additional arguments passed to console.print().

    Example:
        >>> success("Schema captured: schemas/conversation_schema_20250820_103000.json")
        ✓ Schema captured: schemas/conversation_schema_20250820_103000.json
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Args:
        message: The error message to display.
        **kwargs: Additional arguments passed to console.print().

    Example:
        >>> error("Cannot write to: schemas")
        ✗ Cannot write to: schemas
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle.

    Args:
        message: The warning message to display.
        **kwargs: Additional arguments passed to console.print().

    Example:
        >>> warning("Hashes differ (3a9e8f2b0c8b -> 91c04d7e5a12) but no property paths changed")
        ⚠ Hashes differ (3a9e8f2b0c8b -> 91c04d7e5a12) but no property paths changed
    """
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message.

    Args:
        message: The message to display.
        **kwargs: Additional arguments passed to console.print().

    Example:
        >>> info("Generating schema from a ConversationState example...")
        Generating schema from a ConversationState example...
    """
    console.print(message, **kwargs)


def detail(label: str, value: str, **kwargs: Any) -> None:
    """Print an indented ``label: value`` line under a result message.

    Args:
        label: Field label.
        value: Field value.
        **kwargs: Additional arguments passed to console.print().

    Example:
        >>> detail("Hash", "3a9e8f2b0c8b")
           Hash: 3a9e8f2b0c8b
    """
    console.print(f"   {label}: {value}", **kwargs)


def print_table(
    columns: list[str],
    rows: list[list[str]],
    *,
    title: str | None = None,
) -> None:
    """Print rows as a Rich table.

    Args:
        columns: Column headers.
        rows: Cell values, one list per row.
        title: Optional table title.
    """
    table = Table(title=title, show_header=True, header_style="bold")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Args:
        no_color: If True, disable colored output.

    Note:
        This updates the module-level console instance.
    """
    global console
    console = create_console(no_color=no_color)
