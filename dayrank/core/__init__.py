"""Journal state and dashboard assembly."""

from dayrank.core.dashboard import build_dashboard, filter_entries, sort_entries
from dayrank.core.journal import InvalidSubmissionError, Journal, parse_submission

__all__ = [
    "build_dashboard",
    "filter_entries",
    "sort_entries",
    "InvalidSubmissionError",
    "Journal",
    "parse_submission",
]
