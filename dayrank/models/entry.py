"""Entry data model and the normalization rule applied at every ingestion boundary."""

import math
import re
import time
import uuid
from collections.abc import Mapping
from datetime import date as date_type
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

SCORE_MIN = 0
SCORE_MAX = 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
# Year, month, day with any of - / . between them, optionally followed by a time
_LOOSE_DATE = re.compile(r"^\s*(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})(?:$|[T\s])", re.ASCII)


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def new_entry_id() -> str:
    """Generate an opaque unique entry identifier."""
    return str(uuid.uuid4())


def _is_real_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_score_int(value: Any) -> Optional[int]:
    """Read an integer out of a raw score value.

    Strings are read up to their leading integer ("83.7" -> 83, "12abc" -> 12),
    floats are truncated toward zero.

    Returns:
        The integer, or None when the value holds no usable integer
        (e.g. "abc", None, NaN, booleans).
    """
    if _is_real_number(value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return None
        sign = "-" if match.group(1).startswith("-") else ""
        magnitude = match.group(1).lstrip("+-").lstrip("0") or "0"
        # int() refuses very long digit strings
        if len(magnitude) > 9:
            magnitude = "999999999"
        return int(sign + magnitude)
    return None


def clamp_score(value: Any, lo: int = SCORE_MIN, hi: int = SCORE_MAX) -> int:
    """Coerce any value to an integer score within [lo, hi].

    Args:
        value: Raw score value.
        lo: Lower bound, also used when the value is unreadable.
        hi: Upper bound.

    Returns:
        Integer score in [lo, hi].
    """
    n = parse_score_int(value)
    if n is None:
        return lo
    return max(lo, min(hi, n))


def parse_iso_date(value: str) -> date_type:
    """Parse a strict ``YYYY-MM-DD`` string.

    Raises:
        ValueError: If the value is not a 10-character ISO calendar date.
    """
    if not _ISO_DATE.match(value):
        raise ValueError(f"Date must be YYYY-MM-DD, got {value!r}")
    return date_type.fromisoformat(value)


def coerce_iso_date(value: Any) -> str:
    """Recover a ``YYYY-MM-DD`` string from a loosely written date.

    Accepts "2026-01-05", "2026/1/5", "2026.01.05" and any of those
    followed by a time ("2026-01-05T08:00").

    Raises:
        ValueError: If no real calendar date can be read.
    """
    match = _LOOSE_DATE.match(str(value))
    if not match:
        raise ValueError(f"Unreadable date {value!r}")
    year, month, day = match.groups()
    iso = f"{year}-{int(month):02d}-{int(day):02d}"
    parse_iso_date(iso)
    return iso


class Entry(BaseModel):
    """One dated self-rating record."""

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    date: str = Field(..., description="Calendar date as YYYY-MM-DD")
    score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX, description="Self-rating 0-100")
    notes: str = Field(default="", description="Free-text notes")
    created_at: int = Field(
        default_factory=now_ms, alias="createdAt", description="Creation time (epoch ms)"
    )
    updated_at: int = Field(
        default_factory=now_ms, alias="updatedAt", description="Last edit time (epoch ms)"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        parse_iso_date(value)
        return value

    def to_record(self) -> dict:
        """Serialize to the persisted/exported JSON shape."""
        return self.model_dump(by_alias=True)


def _timestamp_or(value: Any, fallback: int) -> int:
    if _is_real_number(value) and math.isfinite(value):
        return int(value)
    return fallback


def normalize_entry(raw: Any, now: Optional[int] = None) -> Entry:
    """Build a valid Entry from a loosely-shaped raw record.

    Args:
        raw: A mapping with Entry-like keys (camelCase timestamps).
        now: Epoch ms used for missing timestamps. Defaults to the current time.

    Returns:
        A normalized Entry.

    Raises:
        ValueError: If ``raw`` is not a mapping or has no usable date.
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"Entry record must be an object, got {type(raw).__name__}")

    stamp = now if now is not None else now_ms()

    raw_id = raw.get("id")
    entry_id = str(raw_id) if raw_id not in (None, "") else new_entry_id()

    raw_date = raw.get("date")
    if not raw_date:
        raise ValueError("Entry record has no date")

    return Entry(
        id=entry_id,
        date=coerce_iso_date(raw_date),
        score=clamp_score(raw.get("score")),
        notes=str(raw.get("notes") or ""),
        created_at=_timestamp_or(raw.get("createdAt"), stamp),
        updated_at=_timestamp_or(raw.get("updatedAt"), stamp),
    )


def is_admissible(raw: Any) -> bool:
    """Check whether an imported record may be admitted.

    A record is admitted when it has a truthy ``id``, a truthy ``date``
    and a numeric ``score``.
    """
    if not isinstance(raw, Mapping):
        return False
    return bool(raw.get("id")) and bool(raw.get("date")) and _is_real_number(raw.get("score"))
