"""The journal: sole owner of the in-memory entry collection.

Every mutation persists the whole collection and then recomputes the
dashboard in one step, so readers never observe a stale derived view.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

from dayrank.core.dashboard import build_dashboard
from dayrank.db.store import DataStore
from dayrank.models import (
    Dashboard,
    Entry,
    ViewOptions,
    clamp_score,
    new_entry_id,
    parse_iso_date,
    parse_score_int,
)
from dayrank.transfer import dumps_export, parse_import

logger = logging.getLogger(__name__)


class InvalidSubmissionError(ValueError):
    """Raised when a create/edit submission lacks a date or a readable score."""


def parse_submission(
    entry_date: Optional[str], score: Any, notes: Optional[str] = ""
) -> tuple[str, int, str]:
    """Validate user-entered fields.

    Args:
        entry_date: ISO date string.
        score: Score as typed; must start with an integer.
        notes: Optional free text.

    Returns:
        Tuple of (date, clamped score, stripped notes).

    Raises:
        InvalidSubmissionError: If the date is missing/invalid or the score
            has no leading integer.
    """
    entry_date = (entry_date or "").strip()
    if not entry_date:
        raise InvalidSubmissionError("A date is required")
    try:
        parse_iso_date(entry_date)
    except ValueError as e:
        raise InvalidSubmissionError(f"Invalid date {entry_date!r}, use YYYY-MM-DD") from e

    if parse_score_int(score) is None:
        raise InvalidSubmissionError(f"Score {score!r} is not a number")

    return entry_date, clamp_score(score), (notes or "").strip()


class Journal:
    """Single-writer state holder for the entry collection."""

    def __init__(
        self,
        store: DataStore,
        view: Optional[ViewOptions] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Load the journal from the store.

        Args:
            store: Durable blob store.
            view: Initial display options.
            clock: Returns the current local time. Defaults to ``datetime.now``.
        """
        self._store = store
        self._clock = clock or datetime.now
        self._view = view or ViewOptions()
        self._entries: list[Entry] = store.load_entries()
        self._dashboard = self._recompute()
        logger.debug("Loaded %d entries", len(self._entries))

    # ==================== Read side ====================

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def dashboard(self) -> Dashboard:
        """Derived views as of the last mutation or view change."""
        return self._dashboard

    @property
    def view(self) -> ViewOptions:
        return self._view

    def today(self) -> date:
        return self._clock().date()

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def find(self, entry_id: str) -> Optional[Entry]:
        """First entry with the given id, or None."""
        return next((e for e in self._entries if e.id == entry_id), None)

    def _index_of(self, entry_id: str) -> Optional[int]:
        for i, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return i
        return None

    # ==================== Mutations ====================

    def _recompute(self) -> Dashboard:
        return build_dashboard(self._entries, self.today(), self._view)

    def _commit(self, entries: list[Entry], keep_unreadable: bool = True) -> Dashboard:
        """Replace the collection, persist it, and recompute derived views."""
        self._entries = entries
        self._store.save_entries(self._entries, keep_unreadable=keep_unreadable)
        self._dashboard = self._recompute()
        return self._dashboard

    def add(self, entry_date: Optional[str], score: Any, notes: Optional[str] = "") -> Entry:
        """Create a new entry.

        Raises:
            InvalidSubmissionError: If the date or score is unusable.
        """
        entry_date, score, notes = parse_submission(entry_date, score, notes)
        stamp = self._now_ms()
        entry = Entry(
            id=new_entry_id(),
            date=entry_date,
            score=score,
            notes=notes,
            created_at=stamp,
            updated_at=stamp,
        )
        self._commit(self._entries + [entry])
        logger.info("Added entry %s for %s", entry.id, entry.date)
        return entry

    def edit(
        self, entry_id: str, entry_date: Optional[str], score: Any, notes: Optional[str] = ""
    ) -> Optional[Entry]:
        """Replace date, score and notes of the first entry with ``entry_id``.

        Returns:
            The updated entry, or None when no entry has that id.

        Raises:
            InvalidSubmissionError: If the date or score is unusable.
        """
        entry_date, score, notes = parse_submission(entry_date, score, notes)
        idx = self._index_of(entry_id)
        if idx is None:
            return None

        updated = self._entries[idx].model_copy(
            update={
                "date": entry_date,
                "score": score,
                "notes": notes,
                "updated_at": self._now_ms(),
            }
        )
        entries = list(self._entries)
        entries[idx] = updated
        self._commit(entries)
        logger.info("Edited entry %s", entry_id)
        return updated

    def delete(self, entry_id: str) -> bool:
        """Delete the first entry with ``entry_id``.

        Returns:
            True if an entry was removed.
        """
        idx = self._index_of(entry_id)
        if idx is None:
            return False
        self._commit(self._entries[:idx] + self._entries[idx + 1:])
        logger.info("Deleted entry %s", entry_id)
        return True

    def replace_all(self, entries: list[Entry]) -> Dashboard:
        """Swap in a whole new collection.

        Stored records that could not be read on load are dropped as well.
        """
        return self._commit(list(entries), keep_unreadable=False)

    def import_text(self, text: str) -> int:
        """Replace the collection with the entries of an export document.

        Returns:
            Number of entries imported.

        Raises:
            ImportFormatError: If the document is not recognized. The current
                collection is left untouched.
        """
        entries = parse_import(text, now=self._now_ms())
        self.replace_all(entries)
        logger.info("Imported %d entries", len(entries))
        return len(entries)

    def export_text(self) -> str:
        """Serialize the collection as an export document."""
        return dumps_export(self._entries)

    # ==================== View ====================

    def set_view(self, **changes: Any) -> Dashboard:
        """Change display options and recompute without persisting."""
        self._view = ViewOptions(**{**self._view.model_dump(), **changes})
        self._dashboard = self._recompute()
        return self._dashboard
