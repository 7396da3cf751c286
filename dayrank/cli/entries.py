"""Entry commands for DayRank CLI.

Handles creating, editing, deleting and listing journal entries.
"""

from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel

from dayrank.cli.common import console, fail, get_journal
from dayrank.cli.render import entries_table, format_date_pretty, header_line, score_markup
from dayrank.core import InvalidSubmissionError
from dayrank.stats import label_for_score


@click.command()
@click.option(
    "--date", "entry_date",
    default=None,
    help="Date to rate (YYYY-MM-DD). Defaults to today.",
)
@click.option("--score", "-s", required=True, help="Score from 0 to 100.")
@click.option("--notes", "-n", default="", help="Optional notes for the day.")
@click.pass_context
def add(ctx: click.Context, entry_date: Optional[str], score: str, notes: str) -> None:
    """Log a score for a day.

    Scores outside 0-100 are clamped.

    \b
    Examples:
      dayrank add --score 82
      dayrank add --date 2026-01-05 --score 64 --notes "long meetings"
    """
    journal = get_journal(ctx)
    entry_date = entry_date or journal.today().isoformat()

    try:
        entry = journal.add(entry_date, score, notes)
    except InvalidSubmissionError as e:
        fail("Entry not saved:", str(e))

    console.print(
        f"[green]✓ Logged {score_markup(entry.score)} ({label_for_score(entry.score)}) "
        f"for {format_date_pretty(entry.date)}[/green]"
    )
    console.print(f"[dim]{escape(entry.id)} • {header_line(journal.dashboard.header)}[/dim]")


@click.command()
@click.argument("entry_id")
@click.option("--date", "entry_date", default=None, help="New date (YYYY-MM-DD).")
@click.option("--score", "-s", default=None, help="New score from 0 to 100.")
@click.option("--notes", "-n", default=None, help="New notes.")
@click.pass_context
def edit(
    ctx: click.Context,
    entry_id: str,
    entry_date: Optional[str],
    score: Optional[str],
    notes: Optional[str],
) -> None:
    """Edit an existing entry.

    ENTRY_ID is the id shown by 'dayrank list'. Options that are not
    given keep their current value.

    \b
    Examples:
      dayrank edit 3f2c... --score 90
      dayrank edit 3f2c... --notes "actually a great day"
    """
    journal = get_journal(ctx)
    current = journal.find(entry_id)
    if current is None:
        console.print(f"[yellow]No entry with id {escape(entry_id)}[/yellow]")
        return

    try:
        updated = journal.edit(
            entry_id,
            entry_date if entry_date is not None else current.date,
            score if score is not None else current.score,
            notes if notes is not None else current.notes,
        )
    except InvalidSubmissionError as e:
        fail("Entry not saved:", str(e))

    console.print(
        f"[green]✓ Updated {format_date_pretty(updated.date)}: "
        f"{score_markup(updated.score)} ({label_for_score(updated.score)})[/green]"
    )


@click.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation.")
@click.pass_context
def delete(ctx: click.Context, entry_id: str, yes: bool) -> None:
    """Delete an entry.

    \b
    Examples:
      dayrank delete 3f2c...
      dayrank delete 3f2c... --yes
    """
    journal = get_journal(ctx)
    entry = journal.find(entry_id)
    if entry is None:
        console.print(f"[yellow]No entry with id {escape(entry_id)}[/yellow]")
        return

    if not yes and not click.confirm(
        f"Delete {entry.score} on {format_date_pretty(entry.date)}?", default=False
    ):
        console.print("[dim]Cancelled[/dim]")
        return

    journal.delete(entry_id)
    console.print(f"[green]✓ Deleted entry for {format_date_pretty(entry.date)}[/green]")
    console.print(f"[dim]{header_line(journal.dashboard.header)}[/dim]")


@click.command("list")
@click.option(
    "--sort",
    type=click.Choice(["score", "date"]),
    default=None,
    help="Sort by score (default) or by date.",
)
@click.option("--search", "-q", default=None, help="Only show entries whose notes contain this text.")
@click.pass_context
def list_entries(ctx: click.Context, sort: Optional[str], search: Optional[str]) -> None:
    """Display logged days.

    \b
    Examples:
      dayrank list
      dayrank list --sort date
      dayrank list --search gym
    """
    journal = get_journal(ctx, sort=sort, query=search)
    dashboard = journal.dashboard

    if not dashboard.entries:
        message = "No matching entries" if dashboard.header.count else "No days logged yet"
        console.print(Panel(
            f"[dim]{message}[/dim]",
            title="[bold]Days[/bold]",
            border_style="dim",
        ))
        return

    title = f"Days (by {dashboard.view.sort})"
    console.print(entries_table(dashboard.entries, title=title))
    console.print(f"\n[dim]{header_line(dashboard.header)}[/dim]")
