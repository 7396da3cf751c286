"""Derived statistics for DayRank."""

from dayrank.stats.aggregate import (
    BANDS,
    TOP_LIMIT,
    average,
    band_for_score,
    best_and_worst,
    calc_streak,
    distribution,
    fmt1,
    header_summary,
    label_for_score,
    month_bounds,
    rank_entries,
    scores_in_range,
    top_entries,
    top_label,
    week_bounds,
    window_average,
    windowed_averages,
    year_bounds,
)
from dayrank.stats.trend import (
    RANGE_LIMITS,
    ROLLING_WINDOW,
    build_trend,
    latest_score_by_date,
    rolling_average,
    select_range,
)

__all__ = [
    "BANDS",
    "TOP_LIMIT",
    "average",
    "band_for_score",
    "best_and_worst",
    "calc_streak",
    "distribution",
    "fmt1",
    "header_summary",
    "label_for_score",
    "month_bounds",
    "rank_entries",
    "scores_in_range",
    "top_entries",
    "top_label",
    "week_bounds",
    "window_average",
    "windowed_averages",
    "year_bounds",
    "RANGE_LIMITS",
    "ROLLING_WINDOW",
    "build_trend",
    "latest_score_by_date",
    "rolling_average",
    "select_range",
]
