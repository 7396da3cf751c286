"""Export and import of the journal as a JSON document."""

import json
import logging
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Optional

from dayrank.models import Entry, is_admissible, normalize_entry, now_ms

logger = logging.getLogger(__name__)

EXPORT_VERSION = 1


class ImportFormatError(ValueError):
    """Raised when an import document is not a recognized export."""


def export_document(entries: Iterable[Entry], exported_at: Optional[datetime] = None) -> dict:
    """Wrap entries in a versioned export document.

    Args:
        entries: Entries to export.
        exported_at: Export timestamp. Defaults to now (UTC).

    Returns:
        Dictionary with version, exportedAt and entries.
    """
    stamp = exported_at or datetime.now(timezone.utc)
    return {
        "version": EXPORT_VERSION,
        "exportedAt": stamp.isoformat(timespec="milliseconds"),
        "entries": [entry.to_record() for entry in entries],
    }


def dumps_export(entries: Iterable[Entry], exported_at: Optional[datetime] = None) -> str:
    """Serialize an export document as indented JSON text."""
    return json.dumps(export_document(entries, exported_at), indent=2, ensure_ascii=False)


def export_filename(today: Optional[date] = None) -> str:
    """Default export file name for a local date."""
    return f"dayrank-export-{(today or date.today()).isoformat()}.json"


def parse_import(text: str, now: Optional[int] = None) -> list[Entry]:
    """Parse an export document into normalized entries.

    Only ``entries`` is read; ``version`` and ``exportedAt`` are ignored.
    Records without a truthy id and date and a numeric score are dropped,
    as are records whose date cannot be read.

    Args:
        text: JSON document text.
        now: Epoch ms used for missing timestamps.

    Returns:
        The admitted entries in document order.

    Raises:
        ImportFormatError: If the text is not JSON or has no ``entries`` array.
    """
    try:
        parsed = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        raise ImportFormatError("File format not recognized: not valid JSON") from e

    if not isinstance(parsed, dict) or not isinstance(parsed.get("entries"), list):
        raise ImportFormatError("File format not recognized: missing 'entries' array")

    stamp = now if now is not None else now_ms()
    entries = []
    dropped = 0
    for record in parsed["entries"]:
        if not is_admissible(record):
            dropped += 1
            continue
        try:
            entries.append(normalize_entry(record, now=stamp))
        except ValueError:
            dropped += 1

    logger.debug("Parsed import: %d admitted, %d dropped", len(entries), dropped)
    return entries
