"""Main CLI entry point for DayRank.

Defines the root click group, logging setup and the table of
lazily imported subcommands.
"""

import importlib
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from dayrank.config import load_config


class LazyGroup(click.Group):
    """Click group whose subcommands are imported on first use.

    Each lazy subcommand is registered as ``"package.module:attribute"``;
    the module is imported only when that command is looked up.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._targets = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._targets))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self._targets:
            command = self._resolve(cmd_name)
            self.add_command(command, cmd_name)
        return command

    def _resolve(self, cmd_name: str) -> click.Command:
        """Import the target registered for ``cmd_name``."""
        module_path, _, attribute = self._targets[cmd_name].partition(":")
        command = getattr(importlib.import_module(module_path), attribute, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(
                f"{self._targets[cmd_name]!r} is not a click command"
            )
        return command


LAZY_SUBCOMMANDS = {
    "add": "dayrank.cli.entries:add",
    "edit": "dayrank.cli.entries:edit",
    "delete": "dayrank.cli.entries:delete",
    "list": "dayrank.cli.entries:list_entries",
    "stats": "dayrank.cli.stats:stats",
    "top": "dayrank.cli.stats:top",
    "trend": "dayrank.cli.stats:trend",
    "export": "dayrank.cli.transfer:export",
    "import": "dayrank.cli.transfer:import_entries",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(level: str) -> None:
    """Route log records to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="dayrank")
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="SQLite database file (overrides config).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, db_path: Optional[Path], verbose: bool) -> None:
    """DayRank - rate every day from 0 to 100 and watch the trend.

    Entries are stored locally; every command recomputes the statistics
    from the full journal.

    \b
    Quick Start:
      dayrank add --score 80 --notes "good run"   # Log today
      dayrank list --sort date                    # Browse entries
      dayrank stats                               # Averages, streak, distribution
      dayrank trend --range 90                    # Rolling-average chart
    """
    config = load_config()
    setup_logging("DEBUG" if verbose else config.log_level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["db_path"] = db_path.expanduser() if db_path else None


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
