"""Tests for the stageview CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stageview.cli import app

runner = CliRunner()

IN_PROGRESS_RUN = {
    "id": "42",
    "start_time_millis": 1000,
    "execution": {
        "complete": False,
        "nodes": [
            {"id": "2", "kind": "start", "start_time_millis": 1000},
            {"id": "3", "kind": "stage", "name": "Build", "parents": ["2"], "start_time_millis": 1500},
            {"id": "4", "parents": ["3"], "start_time_millis": 1600, "active": True},
        ],
    },
}


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    path = tmp_path / "run.json"
    path.write_text(json.dumps(IN_PROGRESS_RUN), encoding="utf-8")
    return path


class TestCLIBasics:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "stageview" in result.stdout.lower()

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "summarize" in result.stdout
        assert "validate" in result.stdout


class TestSummarizeCommand:
    def test_json_output(self, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "summarize", str(snapshot_file), "--json", "--now", "9000"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["status"] == "IN_PROGRESS"
        assert data["end_time_millis"] == 9000
        assert data["queue_duration_millis"] == 500
        assert data["duration_millis"] == 7500
        assert [s["name"] for s in data["stages"]] == ["Build"]

    def test_text_output(self, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "summarize", str(snapshot_file), "--now", "9000"])

        assert result.exit_code == 0, result.output
        assert "IN_PROGRESS" in result.stdout
        assert "Build" in result.stdout

    def test_missing_snapshot(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "summarize", str(tmp_path / "nope.json"), "--json"])

        assert result.exit_code == 1
        assert "not found" in json.loads(result.stdout)["error"]

    def test_unknown_failure_cause_exits_1(self, tmp_path: Path) -> None:
        doc = {**IN_PROGRESS_RUN, "execution": {**IN_PROGRESS_RUN["execution"], "failure_cause": "KABOOM"}}
        path = tmp_path / "run.json"
        path.write_text(json.dumps(doc), encoding="utf-8")

        result = runner.invoke(app, ["--no-dotenv", "summarize", str(path), "--json"])

        assert result.exit_code == 1
        assert "KABOOM" in json.loads(result.stdout)["error"]

    def test_settings_extend_failure_causes(self, tmp_path: Path) -> None:
        doc = {**IN_PROGRESS_RUN, "execution": {**IN_PROGRESS_RUN["execution"], "failure_cause": "TIMEOUT"}}
        path = tmp_path / "run.json"
        path.write_text(json.dumps(doc), encoding="utf-8")
        settings = tmp_path / "settings.yaml"
        settings.write_text("failure_causes:\n  TIMEOUT: ABORTED\n", encoding="utf-8")

        result = runner.invoke(app, ["--no-dotenv", "summarize", str(path), "--json", "--settings", str(settings)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["status"] == "ABORTED"

    def test_invalid_graph(self, tmp_path: Path) -> None:
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"id": "1", "execution": {"nodes": [{"id": "a", "parents": ["b"]}]}}), encoding="utf-8")

        result = runner.invoke(app, ["--no-dotenv", "summarize", str(path), "--json"])

        assert result.exit_code == 1
        assert "Invalid execution graph" in json.loads(result.stdout)["error"]


class TestValidateCommand:
    def test_valid(self, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "validate", str(snapshot_file)])

        assert result.exit_code == 0
        assert "3 node(s)" in result.stdout

    def test_invalid_document(self, tmp_path: Path) -> None:
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"name": "no id"}), encoding="utf-8")

        result = runner.invoke(app, ["--no-dotenv", "validate", str(path)])

        assert result.exit_code == 1
