"""JSON export task store adapter."""

import json
import logging
from datetime import date
from pathlib import Path

from bruh.core.suggestions import DailyStats, Habit
from bruh.core.tasks import Task, filter_open
from bruh.ports.filter_repo import SavedFilter, find_filter, parse_filters

logger = logging.getLogger(__name__)


class FileTaskStore:
    """
    Reads tasks, saved filters and habit activity from a JSON export.

    Implements TaskRepository, FilterRepository and ActivityRepository. The
    file is either a list of task rows or an object with "tasks" and
    optionally "filters", "habits", "habit_logs" and "daily_stats" keys.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self._data: dict | None = None

    def _load(self) -> dict:
        if self._data is None:
            if not self.path.exists():
                logger.warning(f"Task file not found: {self.path}")
                self._data = {}
            else:
                raw = json.loads(self.path.read_text())
                self._data = {"tasks": raw} if isinstance(raw, list) else raw
        return self._data

    def _rows(self, key: str) -> list[dict]:
        return self._load().get(key) or []

    def fetch_all(self) -> list[Task]:
        """Fetch all top-level tasks (subtask rows are skipped)."""
        return [Task.from_api(row) for row in self._rows("tasks") if not row.get("parent_id")]

    def fetch_open(self) -> list[Task]:
        return filter_open(self.fetch_all())

    def list_filters(self) -> list[SavedFilter]:
        filters = parse_filters(self._rows("filters"))
        return sorted(filters, key=lambda f: (not f.is_pinned, f.position))

    def get_filter(self, name: str) -> SavedFilter | None:
        return find_filter(self._rows("filters"), name)

    def fetch_habits(self) -> list[Habit]:
        return [Habit.from_api(row) for row in self._rows("habits") if not row.get("is_archived")]

    def fetch_completed_habit_ids(self, day: date) -> set[str]:
        return {
            str(row["habit_id"])
            for row in self._rows("habit_logs")
            if row.get("date") == day.isoformat()
        }

    def fetch_daily_stats(self, day: date) -> DailyStats:
        for row in self._rows("daily_stats"):
            if row.get("date") == day.isoformat():
                return DailyStats.from_api(row)
        return DailyStats()
