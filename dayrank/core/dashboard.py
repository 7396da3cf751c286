"""Assembly of the full derived-view bundle handed to the presentation layer."""

from collections.abc import Sequence
from datetime import date

from dayrank.models import Dashboard, Entry, SortMode, ViewOptions
from dayrank.stats import (
    best_and_worst,
    build_trend,
    calc_streak,
    distribution,
    header_summary,
    top_entries,
    top_label,
    windowed_averages,
)


def filter_entries(entries: Sequence[Entry], query: str) -> list[Entry]:
    """Keep entries whose notes contain ``query`` (case-insensitive).

    A blank query keeps everything.
    """
    needle = query.strip().lower()
    if not needle:
        return list(entries)
    return [e for e in entries if needle in e.notes.lower()]


def sort_entries(entries: Sequence[Entry], mode: SortMode = "score") -> list[Entry]:
    """Order entries for the list view.

    "score" sorts by score, then date, then last edit; "date" sorts by date,
    then score, then last edit. All keys descending.
    """
    if mode == "date":
        key = lambda e: (e.date, e.score, e.updated_at)  # noqa: E731
    elif mode == "score":
        key = lambda e: (e.score, e.date, e.updated_at)  # noqa: E731
    else:
        raise ValueError(f"Unknown sort mode: {mode!r}")
    return sorted(entries, key=key, reverse=True)


def build_dashboard(
    entries: Sequence[Entry],
    today: date,
    view: ViewOptions = ViewOptions(),
) -> Dashboard:
    """Recompute every derived view from the full collection.

    Args:
        entries: The whole journal.
        today: Local date anchoring the week/month/year windows.
        view: Sort, search and trend-range display options.

    Returns:
        Dashboard with header, list, top-10, distribution, streak,
        windowed averages and trend series.
    """
    top = top_entries(entries)
    extremes = best_and_worst(entries)
    best, worst = extremes if extremes else (None, None)

    return Dashboard(
        header=header_summary(entries),
        entries=sort_entries(filter_entries(entries, view.query), view.sort),
        top=top,
        top_label=top_label(top),
        best=best,
        worst=worst,
        buckets=distribution(entries),
        streak=calc_streak(entries),
        averages=windowed_averages(entries, today),
        trend=build_trend(entries, view.trend_range),
        view=view,
    )
