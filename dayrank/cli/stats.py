"""Statistics commands for DayRank CLI.

Handles the stats overview, the top-10 ranking and the trend chart.
"""

from typing import Optional

import click
from rich.panel import Panel

from dayrank.cli.common import console, get_journal
from dayrank.cli.render import distribution_table, entries_table, stats_panel, trend_panel


@click.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show averages, best and worst day, streak and score distribution.

    \b
    Examples:
      dayrank stats
    """
    dashboard = get_journal(ctx).dashboard

    console.print(stats_panel(dashboard))
    if dashboard.header.count:
        console.print(distribution_table(dashboard.buckets))


@click.command()
@click.pass_context
def top(ctx: click.Context) -> None:
    """Show the ten best days.

    Ties on score go to the more recent day.

    \b
    Examples:
      dayrank top
    """
    dashboard = get_journal(ctx).dashboard

    if not dashboard.top:
        console.print(Panel(
            "[dim]No data[/dim]",
            title="[bold]Top 10[/bold]",
            border_style="dim",
        ))
        return

    console.print(entries_table(dashboard.top, title="Top 10", show_id=False))
    console.print(f"\n[dim]{dashboard.top_label}[/dim]")


@click.command()
@click.option(
    "--range", "trend_range",
    type=click.Choice(["30", "90", "all"]),
    default=None,
    help="How many of the most recent logged dates to chart.",
)
@click.option("--tail", type=int, default=10, help="Number of recent points to list (default: 10).")
@click.pass_context
def trend(ctx: click.Context, trend_range: Optional[str], tail: int) -> None:
    """Chart scores with a 7-point rolling average.

    When a date has several entries, the most recently edited one is used.

    \b
    Examples:
      dayrank trend
      dayrank trend --range 90
      dayrank trend --range all --tail 20
    """
    dashboard = get_journal(ctx, trend_range=trend_range).dashboard

    if dashboard.trend.is_empty:
        console.print(Panel(
            "[dim]No data yet. Log a few days to see a trend.[/dim]",
            title="[bold]Trend[/bold]",
            border_style="dim",
        ))
        return

    console.print(trend_panel(dashboard.trend, tail=max(0, tail)))
