"""Property-based tests for the import/export codec.

**Feature: dayrank**
"""

import json
from datetime import date, datetime, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dayrank.models import Entry
from dayrank.transfer import (
    EXPORT_VERSION,
    ImportFormatError,
    dumps_export,
    export_document,
    export_filename,
    parse_import,
)

NOW = 1_700_000_000_000


def entry_strategy():
    """Generate valid Entry objects."""
    return st.builds(
        Entry,
        id=st.uuids().map(str),
        date=st.dates(min_value=date(2000, 1, 1), max_value=date(2030, 12, 31)).map(
            lambda d: d.isoformat()
        ),
        score=st.integers(min_value=0, max_value=100),
        notes=st.text(max_size=80),
        created_at=st.integers(min_value=0, max_value=2**42),
        updated_at=st.integers(min_value=0, max_value=2**42),
    )


class TestExport:

    def test_document_shape(self):
        entry = Entry(id="a", date="2026-01-05", score=70, created_at=1, updated_at=2)
        doc = export_document([entry], exported_at=datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc))
        assert doc["version"] == EXPORT_VERSION == 1
        assert doc["exportedAt"] == "2026-01-05T12:00:00.000+00:00"
        assert doc["entries"] == [{
            "id": "a",
            "date": "2026-01-05",
            "score": 70,
            "notes": "",
            "createdAt": 1,
            "updatedAt": 2,
        }]

    def test_dumps_is_indented_json(self):
        text = dumps_export([])
        assert json.loads(text)["entries"] == []
        assert "\n  " in text

    def test_filename_pattern(self):
        assert export_filename(date(2026, 1, 5)) == "dayrank-export-2026-01-05.json"


class TestRoundTrip:
    """
    **Feature: dayrank, Property 12: Export/Import Round Trip**

    *For any* collection, exporting then importing yields the same entries.
    """

    @given(entries=st.lists(entry_strategy(), max_size=25))
    @settings(max_examples=100)
    def test_round_trip_preserves_entries(self, entries: list[Entry]):
        restored = parse_import(dumps_export(entries), now=NOW)
        assert restored == entries


class TestImportValidation:
    """
    **Feature: dayrank, Property 13: Import Shape Validation**

    Documents without an ``entries`` array are refused outright.
    """

    @pytest.mark.parametrize("text", [
        "not json at all",
        "",
        "[]",
        "42",
        "null",
        json.dumps({"version": 1}),
        json.dumps({"entries": {"id": "a"}}),
        json.dumps({"entries": "nope"}),
    ])
    def test_unrecognized_documents_raise(self, text: str):
        with pytest.raises(ImportFormatError):
            parse_import(text, now=NOW)

    def test_format_error_is_value_error(self):
        assert issubclass(ImportFormatError, ValueError)

    def test_version_and_timestamp_ignored(self):
        text = json.dumps({
            "version": 99,
            "exportedAt": "garbage",
            "entries": [{"id": "a", "date": "2026-01-05", "score": 5}],
        })
        assert len(parse_import(text, now=NOW)) == 1

    def test_inadmissible_records_dropped_silently(self):
        text = json.dumps({"entries": [
            {"id": "ok", "date": "2026-01-05", "score": 50},
            {"id": "", "date": "2026-01-05", "score": 50},
            {"id": "no-date", "score": 50},
            {"id": "text-score", "date": "2026-01-05", "score": "50"},
            {"id": "bad-date", "date": "someday", "score": 50},
            "junk",
            None,
        ]})
        entries = parse_import(text, now=NOW)
        assert [e.id for e in entries] == ["ok"]

    def test_admitted_records_normalized(self):
        text = json.dumps({"entries": [
            {"id": 7, "date": "2026-01-05T22:10:00", "score": 140.6, "notes": None},
        ]})
        (entry,) = parse_import(text, now=NOW)
        assert entry.id == "7"
        assert entry.date == "2026-01-05"
        assert entry.score == 100
        assert entry.notes == ""
        assert entry.created_at == NOW
        assert entry.updated_at == NOW

    def test_duplicate_ids_tolerated(self):
        text = json.dumps({"entries": [
            {"id": "dup", "date": "2026-01-05", "score": 10},
            {"id": "dup", "date": "2026-01-06", "score": 20},
        ]})
        assert [e.score for e in parse_import(text, now=NOW)] == [10, 20]

    @pytest.mark.parametrize("text", [
        '{"entries": [{"id": "a", "date": "2026-01-05", "score": ' + "1" * 5000 + "}]}",
        "[" * 100_000,
        '{"entries": ' + "[" * 100_000 + "]" * 100_000 + "}",
    ])
    def test_undecodable_documents_raise_format_error(self, text: str):
        with pytest.raises(ImportFormatError):
            parse_import(text, now=NOW)
