"""Persistence for DayRank."""

from dayrank.db.store import STORAGE_KEY, DataStore

__all__ = ["STORAGE_KEY", "DataStore"]
