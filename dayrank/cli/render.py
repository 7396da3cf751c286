"""Rich renderables for DayRank view-models.

Nothing here computes statistics; it only paints what the dashboard holds.
"""

from collections.abc import Sequence
from typing import Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dayrank.models import (
    Bucket,
    Dashboard,
    Entry,
    HeaderSummary,
    TrendSeries,
    WindowAverages,
    parse_iso_date,
)
from dayrank.stats import fmt1, label_for_score

NO_DATA = "—"

BAND_STYLES = {
    "Elite": "bold green",
    "Good": "green",
    "Solid": "yellow",
    "Rough": "dark_orange",
    "Bad": "red",
}

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"


def format_date_pretty(iso_date: str) -> str:
    """Render an ISO date like 'Mon, Jan 5, 2026'."""
    d = parse_iso_date(iso_date)
    return f"{d:%a}, {d:%b} {d.day}, {d.year}"


def score_markup(score: int) -> str:
    style = BAND_STYLES[label_for_score(score)]
    return f"[{style}]{score}[/{style}]"


def notes_or_placeholder(notes: str) -> str:
    return escape(notes) if notes.strip() else "[dim]No notes[/dim]"


def fmt_optional(value: Optional[float]) -> str:
    return fmt1(value) if value is not None else NO_DATA


def sparkline(values: Sequence[float], vmin: float = 0.0, vmax: float = 100.0) -> str:
    """Map values onto block characters between vmin and vmax."""
    if not values:
        return ""
    span = max(1e-9, vmax - vmin)
    out = []
    for v in values:
        idx = int(round((v - vmin) / span * (len(SPARK_BLOCKS) - 1)))
        idx = max(0, min(len(SPARK_BLOCKS) - 1, idx))
        out.append(SPARK_BLOCKS[idx])
    return "".join(out)


def header_line(header: HeaderSummary) -> str:
    """One-line summary shown above every listing."""
    if header.count == 0:
        return "0 days logged"
    return f"{header.count} days • Avg {fmt1(header.average)} • Best {header.best}"


def entries_table(entries: Sequence[Entry], title: str, show_id: bool = True) -> Table:
    """Table of entries in the given order."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Date", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Label")
    table.add_column("Notes", max_width=40)
    if show_id:
        table.add_column("ID", style="dim")

    for i, entry in enumerate(entries, 1):
        row = [
            str(i),
            format_date_pretty(entry.date),
            score_markup(entry.score),
            label_for_score(entry.score),
            notes_or_placeholder(entry.notes),
        ]
        if show_id:
            row.append(escape(entry.id))
        table.add_row(*row)

    return table


def averages_text(averages: WindowAverages) -> str:
    return (
        f"All time:    {fmt_optional(averages.all_time)}\n"
        f"This week:   {fmt_optional(averages.week)}\n"
        f"This month:  {fmt_optional(averages.month)}\n"
        f"This year:   {fmt_optional(averages.year)}"
    )


def distribution_table(buckets: Sequence[Bucket], width: int = 30) -> Table:
    """Horizontal bar chart of the score distribution."""
    table = Table(
        title="Score Distribution",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Range", style="bold")
    table.add_column("Label")
    table.add_column("Bar")
    table.add_column("Count", justify="right")

    for bucket in buckets:
        style = BAND_STYLES[bucket.band.label]
        filled = round(bucket.percent / 100 * width)
        table.add_row(
            bucket.band.range_label,
            bucket.band.label,
            f"[{style}]{'█' * filled}[/{style}]",
            str(bucket.count),
        )

    return table


def stats_panel(dashboard: Dashboard) -> Panel:
    """Summary panel: count, windowed averages, best/worst day and streak."""
    header = dashboard.header
    lines = [
        f"[bold]Days logged:[/bold] {header.count if header.count else NO_DATA}",
        "",
        "[bold]Averages[/bold]",
        averages_text(dashboard.averages),
        "",
    ]

    if dashboard.best and dashboard.worst:
        lines.append(
            f"[bold]Best day:[/bold]  {score_markup(dashboard.best.score)} • "
            f"{format_date_pretty(dashboard.best.date)}"
        )
        lines.append(
            f"[bold]Worst day:[/bold] {score_markup(dashboard.worst.score)} • "
            f"{format_date_pretty(dashboard.worst.date)}"
        )
    else:
        lines.append(f"[bold]Best day:[/bold]  {NO_DATA}")
        lines.append(f"[bold]Worst day:[/bold] {NO_DATA}")

    streak = str(dashboard.streak) if header.count else NO_DATA
    lines.append(f"[bold]Streak:[/bold]    {streak}")

    return Panel(
        "\n".join(lines),
        title="[bold cyan]Stats[/bold cyan]",
        subtitle=header_line(header),
        border_style="cyan",
    )


def trend_panel(trend: TrendSeries, tail: int = 10) -> Panel:
    """Sparklines of raw and smoothed scores plus the most recent points."""
    range_label = "all dates" if trend.range == "all" else f"last {trend.range} dates"
    raw = [float(p.raw_score) for p in trend.points]
    smoothed = [p.rolling_avg for p in trend.points]

    lines = [
        f"[bold]{trend.first_date} → {trend.last_date}[/bold] "
        f"[dim]({trend.count} points, {range_label})[/dim]",
        "",
        f"Score    {sparkline(raw)}",
        f"7-day    [cyan]{sparkline(smoothed)}[/cyan]",
        "",
    ]
    for point in (trend.points[-tail:] if tail > 0 else []):
        lines.append(
            f"  {point.date}  {score_markup(point.raw_score)}  "
            f"[dim]avg[/dim] {fmt1(point.rolling_avg)}"
        )

    return Panel(
        "\n".join(lines),
        title="[bold cyan]Trend[/bold cyan]",
        border_style="cyan",
    )
