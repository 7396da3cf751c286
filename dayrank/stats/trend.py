"""Trend series construction for the score chart."""

from collections.abc import Sequence
from typing import Optional

from dayrank.models import Entry, TrendPoint, TrendRange, TrendSeries

ROLLING_WINDOW = 7

# Number of most recent distinct dates shown per range; None shows everything
RANGE_LIMITS: dict[str, Optional[int]] = {
    "30": 30,
    "90": 90,
    "all": None,
}


def latest_score_by_date(entries: Sequence[Entry]) -> dict[str, int]:
    """Collapse entries to one score per date.

    Entries are replayed in ascending ``updated_at`` order, so the most
    recently edited entry for a date wins.

    Returns:
        Mapping of ISO date to score, in chronological order.
    """
    by_date: dict[str, int] = {}
    for entry in sorted(entries, key=lambda e: e.updated_at):
        by_date[entry.date] = entry.score
    return {d: by_date[d] for d in sorted(by_date)}


def select_range(dates: list[str], trend_range: TrendRange = "30") -> list[str]:
    """Keep the last N distinct dates for the given range.

    Args:
        dates: Distinct ISO dates in ascending order.
        trend_range: "30", "90" or "all".

    Returns:
        A suffix of ``dates``; the whole list when it is shorter than N.
    """
    if trend_range not in RANGE_LIMITS:
        raise ValueError(f"Unknown trend range: {trend_range!r}")
    limit = RANGE_LIMITS[trend_range]
    if limit is None or len(dates) <= limit:
        return list(dates)
    return dates[-limit:]


def rolling_average(values: list[float], window: int = ROLLING_WINDOW) -> list[float]:
    """Calculate a trailing rolling average.

    Unlike a simple moving average, the first ``window - 1`` points use the
    shorter window that is available instead of producing NaN.

    Args:
        values: Values in chronological order.
        window: Maximum number of points per average.

    Returns:
        List of averages, same length as ``values``.
    """
    if window < 1:
        raise ValueError("window must be at least 1")

    result = []
    for i in range(len(values)):
        chunk = values[max(0, i - window + 1):i + 1]
        result.append(sum(chunk) / len(chunk))
    return result


def build_trend(entries: Sequence[Entry], trend_range: TrendRange = "30") -> TrendSeries:
    """Build the chart series for a display range.

    Args:
        entries: All journal entries.
        trend_range: "30", "90" or "all" most recent distinct dates.

    Returns:
        TrendSeries; empty when there are no entries.
    """
    scores = latest_score_by_date(entries)
    dates = select_range(list(scores), trend_range)
    raw = [scores[d] for d in dates]
    smoothed = rolling_average([float(s) for s in raw])

    return TrendSeries(
        points=[
            TrendPoint(date=d, raw_score=s, rolling_avg=avg)
            for d, s, avg in zip(dates, raw, smoothed)
        ],
        range=trend_range,
    )
