"""CLI entry point for schema-tracker.

Commands are registered lazily; each command module is imported only when
that command is looked up.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from schema_tracker import __version__
from schema_tracker.cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Attributes:
        lazy_subcommands: Mapping of command names to module paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"capture": "schema_tracker.cli.commands.capture.capture_cmd"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return sorted names of registered and lazy commands."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing it on first use.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "capture": "schema_tracker.cli.commands.capture.capture_cmd",
    "list": "schema_tracker.cli.commands.list.list_cmd",
    "diff": "schema_tracker.cli.commands.diff.diff_cmd",
    "analyze": "schema_tracker.cli.commands.analyze.analyze_cmd",
}


def _configure_logging(verbose: bool) -> None:
    from schema_tracker.cli.options import load_settings
    from schema_tracker.observability import configure_logging

    settings = load_settings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
    )


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="schema-tracker")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable debug logging on stderr.",
)
def cli(verbose: bool) -> None:
    """Schema Tracker - Track ConversationState schema evolution across git releases.

    Captures timestamped, content-hashed JSON Schema snapshots of the chat
    application's conversation state so schema drift can be audited.

    **Getting Started:**

    - `schema-tracker capture` - Capture the schema from a canned example
    - `schema-tracker capture --declarative` - Capture from the mirror type declarations
    - `schema-tracker list` - List captured schemas
    - `schema-tracker diff OLD NEW` - Compare two captures
    - `schema-tracker analyze` - Report schema drift across the archive
    """
    _configure_logging(verbose)


if __name__ == "__main__":
    cli()
