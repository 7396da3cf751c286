"""Import/export commands for DayRank CLI.

Exports write the whole journal to a JSON document; imports replace the
whole journal with the entries of such a document.
"""

from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel

from dayrank.cli.common import console, fail, get_journal
from dayrank.cli.render import header_line
from dayrank.transfer import ImportFormatError, export_filename


@click.command()
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File to write. Defaults to dayrank-export-<today>.json.",
)
@click.pass_context
def export(ctx: click.Context, output: Optional[Path]) -> None:
    """Export all entries to a JSON file.

    \b
    Examples:
      dayrank export
      dayrank export -o backup.json
    """
    journal = get_journal(ctx)
    target = output or Path(export_filename(journal.today()))

    try:
        target.write_text(journal.export_text() + "\n", encoding="utf-8")
    except OSError as e:
        fail("Failed to write export:", str(e))

    console.print(f"[green]✓ Exported {len(journal.entries)} entries to {escape(str(target))}[/green]")


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation.")
@click.pass_context
def import_entries(ctx: click.Context, file: Path, yes: bool) -> None:
    """Replace all entries with those from an export file.

    FILE is a JSON document written by 'dayrank export'. Records without
    an id, a date or a numeric score are skipped.

    \b
    Examples:
      dayrank import dayrank-export-2026-01-05.json
    """
    journal = get_journal(ctx)

    if journal.entries and not yes and not click.confirm(
        f"Replace all {len(journal.entries)} existing entries?", default=False
    ):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        text = file.read_text(encoding="utf-8")
        count = journal.import_text(text)
    except (ImportFormatError, OSError, UnicodeDecodeError) as e:
        fail("Import failed - file format not recognized.", str(e))

    console.print(Panel(
        f"[bold green]Import Complete[/bold green]\n\n"
        f"Imported: {count} entries\n"
        f"{header_line(journal.dashboard.header)}",
        title=f"[bold]Imported: {escape(file.name)}[/bold]",
        border_style="green",
    ))
