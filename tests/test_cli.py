"""Tests for the rankmedian CLI.

Covers --help output, every command against a small dataset file,
invalid arguments and exit codes via CliRunner.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rankmedian import __version__
from rankmedian.cli import app

# NO_COLOR=1 keeps ANSI codes out of substring matches.
# COLUMNS=200 prevents wrapping that could split a flag across lines.
runner = CliRunner(env={"NO_COLOR": "1", "COLUMNS": "200"})


# ── Factories ──────────────────────────────────────────────────────


def _make_dataset() -> dict:
    return {
        "items": [
            {"id": "A", "title": "Alpha", "artist": "Ann", "genre": "rock"},
            {"id": "B", "title": "Bravo", "artist": "Ben", "genre": "pop"},
            {"id": "C", "title": "Charlie", "artist": "Cal", "genre": "jazz"},
        ],
        "votes": [
            {"voter_id": "E1", "item_id": "A", "rank": 1},
            {"voter_id": "E1", "item_id": "B", "rank": 2},
            {"voter_id": "E1", "item_id": "C", "rank": 3},
            {"voter_id": "E2", "item_id": "A", "rank": 2},
            {"voter_id": "E2", "item_id": "B", "rank": 1},
            {"voter_id": "E2", "item_id": "C", "rank": 3},
            {"voter_id": "E3", "item_id": "A", "rank": 1},
            {"voter_id": "E3", "item_id": "B", "rank": 3},
            {"voter_id": "E3", "item_id": "C", "rank": 2},
        ],
        "experts": [{"id": "E1"}, {"id": "E2"}, {"id": "E3"}],
    }


@pytest.fixture
def dataset(tmp_path: Path) -> Path:
    path = tmp_path / "panel.json"
    path.write_text(json.dumps(_make_dataset()), encoding="utf-8")
    return path


@pytest.fixture
def top3_dataset(tmp_path: Path) -> Path:
    """Four items, each expert ranks three, so no row is complete."""
    data = _make_dataset()
    data["items"].append({"id": "D", "title": "Delta", "artist": "Dee", "genre": "folk"})
    data["votes"] = [
        {"voter_id": "E1", "item_id": "A", "rank": 1},
        {"voter_id": "E1", "item_id": "B", "rank": 2},
        {"voter_id": "E1", "item_id": "C", "rank": 3},
        {"voter_id": "E2", "item_id": "A", "rank": 1},
        {"voter_id": "E2", "item_id": "B", "rank": 2},
        {"voter_id": "E2", "item_id": "D", "rank": 3},
    ]
    data["experts"] = [{"id": "E1"}, {"id": "E2"}]
    path = tmp_path / "top3.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ── Help and version ───────────────────────────────────────────────


class TestHelp:
    def test_main_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("heuristics", "tally", "consensus", "export", "config"):
            assert command in result.output

    def test_consensus_help(self):
        result = runner.invoke(app, ["consensus", "--help"])
        assert result.exit_code == 0
        assert "--max-items" in result.output
        assert "--partial" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ── Commands ───────────────────────────────────────────────────────


class TestHeuristicsCommand:
    def test_lists_all(self):
        result = runner.invoke(app, ["heuristics"])
        assert result.exit_code == 0
        for name in ("standard", "h1", "h4", "h7"):
            assert name in result.output


class TestTallyCommand:
    def test_standard(self, dataset):
        result = runner.invoke(app, ["tally", str(dataset)])
        assert result.exit_code == 0
        assert "Alpha" in result.output
        assert "Charlie" in result.output

    def test_empty_selection(self, dataset):
        result = runner.invoke(app, ["tally", str(dataset), "-H", "h7"])
        assert result.exit_code == 0
        assert "No items match heuristic h7" in result.output

    def test_unknown_heuristic(self, dataset):
        result = runner.invoke(app, ["tally", str(dataset), "-H", "h9"])
        assert result.exit_code == 1
        assert "Unknown heuristic" in result.output


class TestConsensusCommand:
    def test_tables(self, dataset):
        result = runner.invoke(app, ["consensus", str(dataset), "--seed", "3"])
        assert result.exit_code == 0
        assert "Ranking Matrix" in result.output
        assert "Kemeny-Snell" in result.output
        assert "Consensus Statistics" in result.output

    def test_json(self, dataset):
        result = runner.invoke(app, ["consensus", str(dataset), "--seed", "3", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["heuristic"] == "standard"
        assert data["medians"]["cook_sayford"] == {"rankings": [[1, 2, 3]], "distance": 4}
        assert len(data["distances"]) == 3

    def test_missing_dataset(self, tmp_path):
        result = runner.invoke(app, ["consensus", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "Error loading dataset" in result.output

    def test_max_items_out_of_range(self, dataset):
        result = runner.invoke(app, ["consensus", str(dataset), "--max-items", "9"])
        assert result.exit_code == 1
        assert "Invalid option" in result.output

    def test_insufficient_data(self, dataset):
        result = runner.invoke(app, ["consensus", str(dataset), "-H", "h7"])
        assert result.exit_code == 0
        assert "Not enough data" in result.output

    def test_partial_rows(self, top3_dataset):
        result = runner.invoke(app, ["consensus", str(top3_dataset), "--partial", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["usable_rows"] == [[1, 2, 3, 0], [1, 2, 0, 3]]
        assert data["medians"]["cook_sayford"]["rankings"][0] == [1, 2, 3, 4]

    def test_max_items(self, dataset):
        result = runner.invoke(app, ["consensus", str(dataset), "--max-items", "2", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ranking_matrix"]["truncated"] is True
        assert [i["id"] for i in data["ranking_matrix"]["items"]] == ["A", "B"]
        assert data["medians"] is not None


class TestExportCommand:
    def test_csv_to_file(self, dataset, tmp_path):
        out = tmp_path / "out" / "medians.csv"
        result = runner.invoke(app, ["export", str(dataset), "-o", str(out)])
        assert result.exit_code == 0
        assert "Exported csv" in result.output
        lines = out.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Method,Position,Title,Artist,Genre"
        assert lines[1] == "cook_sayford,1,Alpha,Ann,rock"

    def test_unrankable_panel_reports_notice(self, top3_dataset, tmp_path):
        out = tmp_path / "medians.csv"
        result = runner.invoke(app, ["export", str(top3_dataset), "-o", str(out)])
        assert result.exit_code == 0
        assert "Not enough data" in result.output
        assert out.read_text(encoding="utf-8") == "Method,Position,Title,Artist,Genre\n"

    def test_partial_rows(self, top3_dataset, tmp_path):
        out = tmp_path / "medians.csv"
        result = runner.invoke(app, ["export", str(top3_dataset), "--partial", "-o", str(out)])
        assert result.exit_code == 0
        assert "Not enough data" not in result.output
        lines = out.read_text(encoding="utf-8").splitlines()
        # four methods, four items each
        assert len(lines) == 1 + 16
        assert lines[1] == "cook_sayford,1,Alpha,Ann,rock"

    def test_max_items(self, dataset, tmp_path):
        out = tmp_path / "medians.csv"
        result = runner.invoke(app, ["export", str(dataset), "--max-items", "2", "-o", str(out)])
        assert result.exit_code == 0
        assert len(out.read_text(encoding="utf-8").splitlines()) == 1 + 8

    def test_markdown_to_stdout(self, dataset):
        result = runner.invoke(app, ["export", str(dataset), "-f", "markdown"])
        assert result.exit_code == 0
        assert "# Consensus Report: standard" in result.output

    def test_unknown_format(self, dataset):
        result = runner.invoke(app, ["export", str(dataset), "-f", "xml"])
        assert result.exit_code == 1
        assert "Unknown format" in result.output


class TestConfigCommand:
    def test_show_defaults(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Max Items" in result.output
        assert "random" in result.output

    def test_show_custom(self, tmp_path):
        path = tmp_path / "engine.toml"
        path.write_text("[engine]\nmax_items = 4\nreference_seed = 9\n", encoding="utf-8")
        result = runner.invoke(app, ["config", "show", "--config", str(path)])
        assert result.exit_code == 0
        assert "4" in result.output
        assert "9" in result.output

    def test_bad_config(self, tmp_path):
        result = runner.invoke(app, ["config", "show", "--config", str(tmp_path / "x.toml")])
        assert result.exit_code == 1
        assert "Error loading config" in result.output
