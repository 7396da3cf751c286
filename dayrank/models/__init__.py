"""Data models for DayRank."""

from dayrank.models.entry import (
    SCORE_MAX,
    SCORE_MIN,
    Entry,
    clamp_score,
    coerce_iso_date,
    is_admissible,
    new_entry_id,
    normalize_entry,
    now_ms,
    parse_iso_date,
    parse_score_int,
)
from dayrank.models.stats import (
    Band,
    Bucket,
    Dashboard,
    HeaderSummary,
    SortMode,
    TrendPoint,
    TrendRange,
    TrendSeries,
    ViewOptions,
    WindowAverages,
)

__all__ = [
    "SCORE_MAX",
    "SCORE_MIN",
    "Entry",
    "clamp_score",
    "coerce_iso_date",
    "is_admissible",
    "new_entry_id",
    "normalize_entry",
    "now_ms",
    "parse_iso_date",
    "parse_score_int",
    "Band",
    "Bucket",
    "Dashboard",
    "HeaderSummary",
    "SortMode",
    "TrendPoint",
    "TrendRange",
    "TrendSeries",
    "ViewOptions",
    "WindowAverages",
]
