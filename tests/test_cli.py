"""Tests for the click CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from bruh.cli import main
from bruh.config import Config


@pytest.fixture
def tasks_file(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            {
                "tasks": [
                    {
                        "id": "1",
                        "title": "Pay rent",
                        "priority": "urgent",
                        "due_date": "2024-05-31",
                        "created_at": "2024-05-01T09:00:00",
                    },
                    {
                        "id": "2",
                        "title": "Plan trip",
                        "priority": "high",
                        "due_date": "2024-06-20",
                        "created_at": "2024-05-02T09:00:00",
                    },
                    {
                        "id": "3",
                        "title": "Old chore",
                        "status": "completed",
                        "due_date": "2024-05-01",
                        "created_at": "2024-04-01T09:00:00",
                    },
                ],
                "filters": [
                    {
                        "name": "Trips",
                        "filter_config": {
                            "conditions": [{"field": "priority", "operator": "eq", "value": "high"}],
                            "logic": "and",
                        },
                    },
                    {
                        "name": "Broken",
                        "filter_config": {"conditions": [{"operator": "eq", "value": "low"}]},
                    },
                ],
            }
        )
    )
    return path


@pytest.fixture
def runner(tasks_file):
    config = Config(tasks_file=str(tasks_file))
    with patch("bruh.cli.load_config", return_value=config):
        yield CliRunner()


class TestFilterCommand:
    def test_preset(self, runner):
        result = runner.invoke(main, ["filter", "overdue", "--date", "2024-06-01"])
        assert result.exit_code == 0
        assert "Pay rent" in result.output
        assert "OVERDUE by 1d" in result.output
        assert "Old chore" not in result.output

    def test_saved_filter(self, runner):
        result = runner.invoke(main, ["filter", "trips", "--date", "2024-06-01", "--json"])
        assert result.exit_code == 0
        assert [t["id"] for t in json.loads(result.output)] == ["2"]

    def test_no_name_lists_everything_newest_first(self, runner):
        result = runner.invoke(main, ["filter", "--json"])
        assert [t["id"] for t in json.loads(result.output)] == ["2", "1", "3"]

    def test_filter_file(self, runner, tmp_path):
        path = tmp_path / "filter.json"
        path.write_text(
            json.dumps(
                {
                    "conditions": [{"field": "status", "operator": "eq", "value": "completed"}],
                    "logic": "and",
                }
            )
        )
        result = runner.invoke(main, ["filter", "--file", str(path), "--json"])
        assert [t["id"] for t in json.loads(result.output)] == ["3"]

    def test_invalid_filter_file(self, runner, tmp_path):
        path = tmp_path / "filter.json"
        path.write_text(json.dumps({"conditions": [{"field": "mood", "operator": "eq", "value": "x"}]}))
        result = runner.invoke(main, ["filter", "--file", str(path)])
        assert result.exit_code == 1
        assert "Invalid filter" in result.output

    def test_filter_file_missing_field(self, runner, tmp_path):
        path = tmp_path / "filter.json"
        path.write_text(json.dumps({"conditions": [{"operator": "eq", "value": "low"}]}))
        result = runner.invoke(main, ["filter", "--file", str(path)])
        assert result.exit_code == 1
        assert "Invalid filter: Missing field" in result.output

    def test_filter_file_not_json(self, runner, tmp_path):
        path = tmp_path / "filter.json"
        path.write_text("priority = high")
        result = runner.invoke(main, ["filter", "--file", str(path)])
        assert result.exit_code == 1
        assert "Invalid filter" in result.output

    def test_corrupt_saved_filter(self, runner):
        result = runner.invoke(main, ["filter", "broken"])
        assert result.exit_code == 1
        assert "Invalid filter" in result.output

    def test_unknown_filter(self, runner):
        result = runner.invoke(main, ["filter", "nope"])
        assert result.exit_code == 1
        assert "Unknown filter: nope" in result.output

    def test_no_matches(self, runner):
        result = runner.invoke(main, ["filter", "no-due-date"])
        assert result.exit_code == 0
        assert "No matching tasks." in result.output


class TestPresetsCommand:
    def test_lists_presets_and_saved(self, runner):
        result = runner.invoke(main, ["presets"])
        assert result.exit_code == 0
        assert "quick-wins" in result.output
        assert "Trips" in result.output
        assert "Broken" not in result.output


class TestMatrixCommand:
    def test_text(self, runner):
        result = runner.invoke(main, ["matrix", "--date", "2024-06-01"])
        assert result.exit_code == 0
        assert "Do First - Urgent & Important (1)" in result.output
        assert "Schedule - Important, Not Urgent (1)" in result.output
        assert "Old chore" not in result.output

    def test_json_with_closed(self, runner):
        result = runner.invoke(main, ["matrix", "--date", "2024-06-01", "--all", "--json"])
        data = json.loads(result.output)
        assert [t["id"] for t in data["do"]] == ["1"]
        assert [t["id"] for t in data["schedule"]] == ["2"]
        assert [t["id"] for t in data["delegate"]] == ["3"]
        assert data["eliminate"] == []

    def test_urgent_days_option(self, runner):
        result = runner.invoke(main, ["matrix", "--date", "2024-06-18", "--urgent-days", "1", "--json"])
        data = json.loads(result.output)
        assert [t["id"] for t in data["schedule"]] == ["2"]


class TestSuggestCommand:
    def test_json(self, runner):
        result = runner.invoke(main, ["suggest", "--json", "--limit", "10"])
        assert result.exit_code == 0
        ids = [s["id"] for s in json.loads(result.output)]
        assert "overdue-tasks" in ids


class TestFocusCommand:
    @patch("bruh.cli.time.sleep")
    def test_runs_to_completion(self, mock_sleep, runner):
        result = runner.invoke(main, ["focus", "--minutes", "1"])
        assert result.exit_code == 0
        assert mock_sleep.call_count == 60
        assert "Focus session complete!" in result.output

    @patch("bruh.cli.time.sleep")
    def test_break(self, mock_sleep, runner):
        result = runner.invoke(main, ["focus", "--break", "short", "-m", "1"])
        assert "Break over." in result.output

    @patch("bruh.cli.time.sleep")
    def test_focus_on_task(self, mock_sleep, runner):
        result = runner.invoke(main, ["focus", "-m", "1", "--task", "rent"])
        assert "focus: Pay rent" in result.output

    def test_unknown_task(self, runner):
        result = runner.invoke(main, ["focus", "--task", "nothing like this"])
        assert result.exit_code == 1
        assert "No open task matching" in result.output

    @patch("bruh.cli.time.sleep", side_effect=KeyboardInterrupt)
    def test_ctrl_c_stops(self, mock_sleep, runner):
        result = runner.invoke(main, ["focus", "-m", "1"])
        assert result.exit_code == 0
        assert "Timer stopped." in result.output
