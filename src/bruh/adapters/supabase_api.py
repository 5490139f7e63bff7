"""Supabase REST adapter - read-only HTTP client for tasks, filters and habits."""

import logging
from datetime import date

import requests

from bruh.config import Config, load_config
from bruh.core.suggestions import DailyStats, Habit
from bruh.core.tasks import Task
from bruh.ports.filter_repo import SavedFilter, find_filter, parse_filters

logger = logging.getLogger(__name__)

TASKS_TABLE = "zeroed_tasks"
FILTERS_TABLE = "zeroed_smart_filters"
HABITS_TABLE = "zeroed_habits"
HABIT_LOGS_TABLE = "zeroed_habit_logs"
DAILY_STATS_TABLE = "zeroed_daily_stats"
TASK_LIMIT = 1000
REQUEST_TIMEOUT = 30


class SupabaseError(Exception):
    """Raised when the REST API cannot serve a request."""

    pass


class AuthenticationError(SupabaseError):
    """Raised when the API key is missing or rejected."""

    pass


class SupabaseAdapter:
    """
    Supabase (PostgREST) adapter.

    Implements TaskRepository, FilterRepository and ActivityRepository. No
    business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        if not self.config.supabase_key:
            raise AuthenticationError("No API key. Set SUPABASE_KEY in bruh.conf.")
        return {
            "apikey": self.config.supabase_key,
            "Authorization": f"Bearer {self.config.supabase_key}",
            "Accept": "application/json",
        }

    def _api_request(self, table: str, params: dict[str, str]) -> list[dict]:
        """Make an authenticated GET against a table endpoint."""
        url = f"{self.config.supabase_url}/rest/v1/{table}"
        try:
            resp = self._session.get(url, params=params, headers=self._headers(), timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            logger.error(f"Request to {table} failed: {e}")
            raise SupabaseError(f"Could not reach Supabase: {e}") from e

        if resp.status_code in (401, 403):
            raise AuthenticationError(f"API key rejected ({resp.status_code})")
        if resp.status_code != 200:
            logger.error(f"{table} query failed ({resp.status_code}): {resp.text}")
            raise SupabaseError(f"{table} query failed ({resp.status_code})")
        return resp.json()

    def _user_params(self) -> dict[str, str]:
        if self.config.supabase_user_id:
            return {"user_id": f"eq.{self.config.supabase_user_id}"}
        return {}

    def _fetch_tasks(self, extra: dict[str, str]) -> list[Task]:
        params = {
            "select": f"*,subtasks:{TASKS_TABLE}!parent_id(id)",
            "parent_id": "is.null",
            "order": "created_at.desc",
            "limit": str(TASK_LIMIT),
            **self._user_params(),
            **extra,
        }
        return [Task.from_api(row) for row in self._api_request(TASKS_TABLE, params)]

    def fetch_all(self) -> list[Task]:
        """Fetch all top-level tasks."""
        return self._fetch_tasks({})

    def fetch_open(self) -> list[Task]:
        """Fetch top-level tasks that are not completed or cancelled."""
        return self._fetch_tasks({"status": "not.in.(completed,cancelled)"})

    def _filter_rows(self) -> list[dict]:
        params = {
            "select": "id,name,filter_config,is_pinned,position",
            "order": "is_pinned.desc,position.asc",
            **self._user_params(),
        }
        return self._api_request(FILTERS_TABLE, params)

    def list_filters(self) -> list[SavedFilter]:
        return parse_filters(self._filter_rows())

    def get_filter(self, name: str) -> SavedFilter | None:
        return find_filter(self._filter_rows(), name)

    def fetch_habits(self) -> list[Habit]:
        """Fetch habits that are not archived."""
        params = {
            "select": "id,name",
            "is_archived": "eq.false",
            "order": "position.asc",
            **self._user_params(),
        }
        return [Habit.from_api(row) for row in self._api_request(HABITS_TABLE, params)]

    def fetch_completed_habit_ids(self, day: date) -> set[str]:
        params = {"select": "habit_id", "date": f"eq.{day.isoformat()}", **self._user_params()}
        return {str(row["habit_id"]) for row in self._api_request(HABIT_LOGS_TABLE, params)}

    def fetch_daily_stats(self, day: date) -> DailyStats:
        params = {
            "select": "tasks_completed,focus_minutes",
            "date": f"eq.{day.isoformat()}",
            **self._user_params(),
        }
        rows = self._api_request(DAILY_STATS_TABLE, params)
        return DailyStats.from_api(rows[0]) if rows else DailyStats()
