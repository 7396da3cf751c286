"""DayRank - a local daily self-rating journal with derived statistics."""

__version__ = "0.1.0"
