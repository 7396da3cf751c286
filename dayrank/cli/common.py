"""Helpers shared by the DayRank CLI commands."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()


def get_journal(ctx: click.Context, **view_changes):
    """Open the journal configured for this invocation.

    Args:
        ctx: Click context carrying ``config`` and ``db_path``.
        **view_changes: Display option overrides (sort, query, trend_range).
    """
    from dayrank.config import load_config
    from dayrank.core import Journal
    from dayrank.db.store import DataStore
    from dayrank.models import ViewOptions

    obj = ctx.find_root().obj or {}
    config = obj.get("config") or load_config()
    db_path: Optional[Path] = obj.get("db_path") or config.resolve_db_path()

    view = {"sort": config.sort, "trend_range": config.trend_range}
    view.update({k: v for k, v in view_changes.items() if v is not None})

    return Journal(DataStore(db_path), view=ViewOptions(**view))


def fail(message: str, detail: str = "") -> None:
    """Print an error panel and exit with status 1."""
    body = f"[red]{message}[/red]"
    if detail:
        body += f"\n\n{escape(detail)}"
    console.print(Panel(
        body,
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)
