"""SQLite data store for DayRank."""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from dayrank.models import Entry, normalize_entry

logger = logging.getLogger(__name__)

# Fixed key under which the journal's entry array is stored
STORAGE_KEY = "dayrank_entries_v1"


class DataStore:
    """SQLite-backed key/value blob store holding the journal."""

    REQUIRED_TABLES = [
        "kv_store",
    ]

    def __init__(self, db_path: Path, storage_key: str = STORAGE_KEY):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
            storage_key: Key of the blob holding the entry array.
        """
        self.db_path = Path(db_path)
        self.storage_key = storage_key
        self._unreadable: list = []
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Blobs ====================

    def get_blob(self, key: str) -> Optional[str]:
        """Read a stored blob.

        Args:
            key: Blob key.

        Returns:
            The stored text, or None if the key is absent.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set_blob(self, key: str, value: str) -> None:
        """Write a blob, replacing any previous value.

        Args:
            key: Blob key.
            value: Text to store.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def delete_blob(self, key: str) -> None:
        """Remove a blob if present.

        Args:
            key: Blob key.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    # ==================== Entries ====================

    @property
    def unreadable_records(self) -> tuple:
        """Stored records from the last load that could not be normalized."""
        return tuple(self._unreadable)

    def load_entries(self) -> list[Entry]:
        """Load the journal, falling back to an empty list on bad data.

        A missing key, unparsable JSON or a non-array payload all yield an
        empty list. Records that cannot be normalized are set aside and
        written back untouched by ``save_entries``.

        Returns:
            List of normalized entries in stored order.
        """
        self._unreadable = []
        raw = self.get_blob(self.storage_key)
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning("Stored journal is not valid JSON, starting empty: %s", e)
            return []

        if not isinstance(data, list):
            logger.warning(
                "Stored journal is a %s, not an array; starting empty", type(data).__name__
            )
            return []

        entries = []
        for record in data:
            try:
                entries.append(normalize_entry(record))
            except ValueError as e:
                logger.warning("Keeping unreadable stored entry aside: %s", e)
                self._unreadable.append(record)
        return entries

    def save_entries(self, entries: Iterable[Entry], keep_unreadable: bool = True) -> None:
        """Persist the full entry collection.

        Args:
            entries: Every entry currently in memory.
            keep_unreadable: Write back records set aside by the last load.
                When False they are discarded.
        """
        records = [entry.to_record() for entry in entries]
        if keep_unreadable:
            records.extend(self._unreadable)
        else:
            self._unreadable = []
        self.set_blob(self.storage_key, json.dumps(records, ensure_ascii=False))
        logger.debug("Saved journal to %s", self.db_path)

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with blob and stored entry counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) as count FROM kv_store")
            blobs = cursor.fetchone()["count"]
        finally:
            conn.close()
        return {
            "blobs": blobs,
            "entries": len(self.load_entries()),
        }
