"""CLI commands for DayRank.

This package provides the command-line interface for DayRank:
logging entries, browsing them, statistics and import/export.
"""

from dayrank.cli.main import cli, main

__all__ = ["cli", "main"]
