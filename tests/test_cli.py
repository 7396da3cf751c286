"""Tests for the DayRank command line interface."""

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from dayrank.cli.main import LazyGroup, cli
from dayrank.db.store import DataStore


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("DAYRANK_HOME", str(tmp_path / "home"))
    return tmp_path / "dayrank.db"


def invoke(runner: CliRunner, db_path: Path, *args: str, **kwargs):
    return runner.invoke(cli, ["--db", str(db_path), *args], **kwargs)


def add_days(runner: CliRunner, db_path: Path, *days: tuple[str, str]) -> None:
    for day, score in days:
        result = invoke(runner, db_path, "add", "--date", day, "--score", score)
        assert result.exit_code == 0, result.output


class TestCliGroup:

    def test_help_lists_lazy_commands(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("add", "edit", "delete", "list", "stats", "top", "trend", "export", "import"):
            assert name in result.output

    def test_unknown_command(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "frobnicate")
        assert result.exit_code != 0


class TestEntryCommands:

    def test_add_then_list(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "add", "--date", "2026-01-05", "--score", "82", "-n", "gym")
        assert result.exit_code == 0, result.output
        assert "Logged" in result.output
        assert "Jan 5, 2026" in result.output

        result = invoke(runner, db_path, "list")
        assert result.exit_code == 0
        assert "gym" in result.output
        assert "1 days" in result.output

    def test_add_clamps_score(self, runner: CliRunner, db_path: Path):
        invoke(runner, db_path, "add", "--date", "2026-01-05", "--score", "150")
        (entry,) = DataStore(db_path).load_entries()
        assert entry.score == 100

    @pytest.mark.parametrize("args", [
        ["--date", "05/01/2026", "--score", "50"],
        ["--date", "2026-01-05", "--score", "abc"],
    ])
    def test_add_rejects_bad_input(self, runner: CliRunner, db_path: Path, args: list[str]):
        result = invoke(runner, db_path, "add", *args)
        assert result.exit_code == 1
        assert "Entry not saved" in result.output
        assert DataStore(db_path).load_entries() == []

    def test_list_empty(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "list")
        assert result.exit_code == 0
        assert "No days logged yet" in result.output

    def test_list_search_without_matches(self, runner: CliRunner, db_path: Path):
        invoke(runner, db_path, "add", "--date", "2026-01-05", "--score", "50", "-n", "rest")
        result = invoke(runner, db_path, "list", "--search", "gym")
        assert result.exit_code == 0
        assert "No matching entries" in result.output

    def test_edit_keeps_unspecified_fields(self, runner: CliRunner, db_path: Path):
        invoke(runner, db_path, "add", "--date", "2026-01-05", "--score", "50", "-n", "rest")
        (entry,) = DataStore(db_path).load_entries()

        result = invoke(runner, db_path, "edit", entry.id, "--score", "90")
        assert result.exit_code == 0, result.output
        (updated,) = DataStore(db_path).load_entries()
        assert (updated.date, updated.score, updated.notes) == ("2026-01-05", 90, "rest")

    def test_edit_unknown_id(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "edit", "missing", "--score", "90")
        assert result.exit_code == 0
        assert "No entry with id missing" in result.output

    def test_delete_with_confirmation(self, runner: CliRunner, db_path: Path):
        invoke(runner, db_path, "add", "--date", "2026-01-05", "--score", "50")
        (entry,) = DataStore(db_path).load_entries()

        result = invoke(runner, db_path, "delete", entry.id, input="n\n")
        assert "Cancelled" in result.output
        assert len(DataStore(db_path).load_entries()) == 1

        result = invoke(runner, db_path, "delete", entry.id, "--yes")
        assert result.exit_code == 0
        assert DataStore(db_path).load_entries() == []

    def test_delete_unknown_id(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "delete", "missing", "--yes")
        assert result.exit_code == 0
        assert "No entry with id missing" in result.output


class TestStatsCommands:

    def test_stats_empty(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "stats")
        assert result.exit_code == 0
        assert "Stats" in result.output
        assert "0 days logged" in result.output

    def test_stats_with_data(self, runner: CliRunner, db_path: Path):
        add_days(runner, db_path, ("2026-01-05", "90"), ("2026-01-06", "30"))
        result = invoke(runner, db_path, "stats")
        assert result.exit_code == 0
        assert "Score Distribution" in result.output
        assert "Elite" in result.output
        assert "60.0" in result.output

    def test_top_empty(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "top")
        assert result.exit_code == 0
        assert "No data" in result.output

    def test_top_with_data(self, runner: CliRunner, db_path: Path):
        add_days(runner, db_path, ("2026-01-05", "90"), ("2026-01-06", "30"))
        result = invoke(runner, db_path, "top")
        assert result.exit_code == 0
        assert "2 shown" in result.output

    def test_trend_empty(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "trend")
        assert result.exit_code == 0
        assert "No data yet" in result.output

    def test_trend_with_data(self, runner: CliRunner, db_path: Path):
        add_days(runner, db_path, ("2026-01-05", "90"), ("2026-01-06", "30"), ("2026-01-07", "60"))
        result = invoke(runner, db_path, "trend", "--range", "all")
        assert result.exit_code == 0
        assert "3 points" in result.output
        assert "2026-01-07" in result.output


class TestTransferCommands:

    def test_export_then_import(self, runner: CliRunner, db_path: Path, tmp_path: Path):
        add_days(runner, db_path, ("2026-01-05", "90"), ("2026-01-06", "30"))
        target = tmp_path / "backup.json"

        result = invoke(runner, db_path, "export", "-o", str(target))
        assert result.exit_code == 0, result.output
        document = json.loads(target.read_text(encoding="utf-8"))
        assert document["version"] == 1
        assert len(document["entries"]) == 2

        other_db = tmp_path / "other.db"
        result = invoke(runner, other_db, "import", str(target))
        assert result.exit_code == 0, result.output
        assert "Imported: 2 entries" in result.output
        assert DataStore(other_db).load_entries() == DataStore(db_path).load_entries()

    def test_import_asks_before_replacing(self, runner: CliRunner, db_path: Path, tmp_path: Path):
        add_days(runner, db_path, ("2026-01-05", "90"))
        source = tmp_path / "in.json"
        source.write_text(json.dumps({"entries": []}), encoding="utf-8")

        result = invoke(runner, db_path, "import", str(source), input="n\n")
        assert "Cancelled" in result.output
        assert len(DataStore(db_path).load_entries()) == 1

        result = invoke(runner, db_path, "import", str(source), "--yes")
        assert result.exit_code == 0
        assert DataStore(db_path).load_entries() == []

    def test_bad_import_leaves_journal(self, runner: CliRunner, db_path: Path, tmp_path: Path):
        add_days(runner, db_path, ("2026-01-05", "90"))
        source = tmp_path / "bad.json"
        source.write_text('{"items": []}', encoding="utf-8")

        result = invoke(runner, db_path, "import", str(source), "--yes")
        assert result.exit_code == 1
        assert "file format not recognized" in result.output
        assert len(DataStore(db_path).load_entries()) == 1


class TestMarkupInUserText:
    """Ids, notes and paths containing rich markup are printed literally."""

    def test_list_with_markup_id(self, runner: CliRunner, db_path: Path, tmp_path: Path):
        source = tmp_path / "in.json"
        source.write_text(json.dumps({"entries": [
            {"id": "[/red]", "date": "2026-01-01", "score": 50, "notes": "[bold]x"},
        ]}), encoding="utf-8")
        assert invoke(runner, db_path, "import", str(source), "--yes").exit_code == 0

        result = invoke(runner, db_path, "list")
        assert result.exit_code == 0, result.output
        assert "[/red]" in result.output
        assert "[bold]x" in result.output

    def test_unknown_markup_id(self, runner: CliRunner, db_path: Path):
        for args in (["edit", "[/red]", "--score", "5"], ["delete", "[/red]", "--yes"]):
            result = invoke(runner, db_path, *args)
            assert result.exit_code == 0, result.output
            assert "No entry with id [/red]" in result.output

    def test_bad_date_with_markup(self, runner: CliRunner, db_path: Path):
        result = invoke(runner, db_path, "add", "--date", "[/x]", "--score", "50")
        assert result.exit_code == 1
        assert "[/x]" in result.output


class TestTrendTail:

    def test_tail_zero_lists_no_points(self, runner: CliRunner, db_path: Path):
        add_days(runner, db_path, ("2026-01-05", "90"), ("2026-01-06", "30"))
        result = invoke(runner, db_path, "trend", "--range", "all", "--tail", "0")
        assert result.exit_code == 0
        assert "2 points" in result.output
        assert "avg" not in result.output

    def test_tail_limits_points(self, runner: CliRunner, db_path: Path):
        add_days(runner, db_path, ("2026-01-05", "90"), ("2026-01-06", "30"))
        result = invoke(runner, db_path, "trend", "--range", "all", "--tail", "1")
        assert result.output.count("avg") == 1


class TestLazyLoading:

    def test_commands_resolve_to_registered_targets(self):
        ctx = click.Context(cli)
        assert cli.get_command(ctx, "list").name == "list"
        assert cli.get_command(ctx, "import").name == "import"
        assert cli.get_command(ctx, "nope") is None

    def test_bad_target_reported(self):
        group = LazyGroup(lazy_subcommands={"broken": "dayrank.cli.stats:NO_SUCH_COMMAND"})
        with pytest.raises(click.ClickException):
            group.get_command(click.Context(group), "broken")
