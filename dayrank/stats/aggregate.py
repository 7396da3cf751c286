"""Aggregate statistics over journal entries.

Every function here is pure: it takes a sequence of entries (in any order)
and returns a value without touching the input.
"""

import calendar
from collections.abc import Sequence
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from dayrank.models import Band, Bucket, Entry, HeaderSummary, WindowAverages, parse_iso_date

TOP_LIMIT = 10

# Ordered high to low; the first band whose lower bound is met wins
BANDS: tuple[Band, ...] = (
    Band(label="Elite", low=90, high=100),
    Band(label="Good", low=75, high=89),
    Band(label="Solid", low=60, high=74),
    Band(label="Rough", low=40, high=59),
    Band(label="Bad", low=0, high=39),
)


def average(scores: Sequence[float]) -> float:
    """Arithmetic mean of scores.

    Args:
        scores: Score values.

    Returns:
        The mean, or 0.0 for an empty sequence.
    """
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def fmt1(n: float) -> str:
    """Format a number with exactly one decimal place.

    Rounds half up on the number's shortest decimal representation, so
    83.05 gives "83.1" and 83.04 gives "83.0".
    """
    return str(Decimal(repr(float(n))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def band_for_score(score: int) -> Band:
    """Get the band a score falls into."""
    for band in BANDS:
        if score >= band.low:
            return band
    return BANDS[-1]


def label_for_score(score: int) -> str:
    """Get the qualitative label for a score (Elite, Good, Solid, Rough, Bad)."""
    return band_for_score(score).label


def header_summary(entries: Sequence[Entry]) -> HeaderSummary:
    """Count, average and best score over all entries."""
    scores = [e.score for e in entries]
    return HeaderSummary(
        count=len(scores),
        average=average(scores),
        best=max(scores) if scores else None,
    )


# ==================== Calendar windows ====================


def week_bounds(today: date) -> tuple[date, date]:
    """Monday-start week containing ``today``."""
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    """Calendar month containing ``today``."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def year_bounds(today: date) -> tuple[date, date]:
    """Calendar year containing ``today``."""
    return date(today.year, 1, 1), date(today.year, 12, 31)


def scores_in_range(entries: Sequence[Entry], start: date, end: date) -> list[int]:
    """Scores of entries dated within [start, end] inclusive.

    ISO date strings sort chronologically, so the comparison is done on
    the stored strings directly.
    """
    start_iso = start.isoformat()
    end_iso = end.isoformat()
    return [e.score for e in entries if start_iso <= e.date <= end_iso]


def window_average(entries: Sequence[Entry], start: date, end: date) -> Optional[float]:
    """Average score within a date window.

    Returns:
        The mean, or None when no entry falls inside the window.
    """
    scores = scores_in_range(entries, start, end)
    if not scores:
        return None
    return average(scores)


def windowed_averages(entries: Sequence[Entry], today: date) -> WindowAverages:
    """All-time, week, month and year averages relative to ``today``."""
    return WindowAverages(
        all_time=average([e.score for e in entries]) if entries else None,
        week=window_average(entries, *week_bounds(today)),
        month=window_average(entries, *month_bounds(today)),
        year=window_average(entries, *year_bounds(today)),
    )


# ==================== Ranking ====================


def rank_entries(entries: Sequence[Entry]) -> list[Entry]:
    """Sort by score descending, ties broken by the more recent date.

    Entries equal on both keys keep their input order.
    """
    by_date = sorted(entries, key=lambda e: e.date, reverse=True)
    return sorted(by_date, key=lambda e: e.score, reverse=True)


def best_and_worst(entries: Sequence[Entry]) -> Optional[tuple[Entry, Entry]]:
    """First and last entries of the ranking, or None when empty."""
    ranked = rank_entries(entries)
    if not ranked:
        return None
    return ranked[0], ranked[-1]


def top_entries(entries: Sequence[Entry], limit: int = TOP_LIMIT) -> list[Entry]:
    """Highest-ranked entries, at most ``limit`` of them."""
    return rank_entries(entries)[:limit]


def top_label(top: Sequence[Entry]) -> str:
    return f"{len(top)} shown" if top else "No data"


# ==================== Distribution ====================


def distribution(entries: Sequence[Entry]) -> list[Bucket]:
    """Histogram of entries over the five score bands.

    Each entry lands in exactly one bucket. Ratios are relative to the
    largest bucket, with a denominator of at least 1.

    Returns:
        One bucket per band, ordered high to low.
    """
    counts = {band.label: 0 for band in BANDS}
    for entry in entries:
        counts[band_for_score(entry.score).label] += 1

    peak = max(1, *counts.values())
    return [
        Bucket(band=band, count=counts[band.label], ratio=counts[band.label] / peak)
        for band in BANDS
    ]


# ==================== Streak ====================


def calc_streak(entries: Sequence[Entry]) -> int:
    """Count consecutive logged days ending at the most recent logged date.

    Walks backward one calendar day at a time from the latest distinct
    date and stops at the first day without an entry.
    """
    if not entries:
        return 0

    logged = {e.date for e in entries}
    cursor = parse_iso_date(max(logged))
    streak = 0
    while cursor.isoformat() in logged:
        streak += 1
        if cursor == date.min:
            break
        cursor -= timedelta(days=1)
    return streak
