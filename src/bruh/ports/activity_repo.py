"""Habit and daily activity interface."""

from datetime import date
from typing import Protocol

from bruh.core.suggestions import DailyStats, Habit


class ActivityRepository(Protocol):
    """Interface for reading habits and per-day activity totals."""

    def fetch_habits(self) -> list[Habit]:
        """Fetch habits that are not archived."""
        ...

    def fetch_completed_habit_ids(self, day: date) -> set[str]:
        """IDs of habits logged as done on the given day."""
        ...

    def fetch_daily_stats(self, day: date) -> DailyStats:
        """Totals for the given day (zeros when nothing was recorded)."""
        ...
