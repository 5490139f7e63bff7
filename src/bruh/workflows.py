"""Shared workflow layer between the CLI and the core engines.

Each function loads what it needs through the configured repository and
hands plain data to the pure core.
"""

import json
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from pathlib import Path

from .adapters.file_store import FileTaskStore
from .adapters.supabase_api import SupabaseAdapter
from .config import Config
from .core.errors import InvalidValueError
from .core.filters import PRESET_FILTERS, SmartFilterConfig, evaluate
from .core.matrix import Quadrant, classify_all
from .core.suggestions import DailyStats, Suggestion, generate_suggestions
from .core.tasks import Status, Task

logger = logging.getLogger(__name__)

HISTORY_DAYS = 30


class UnknownFilterError(LookupError):
    """Raised when a filter name matches neither a preset nor a saved filter."""

    pass


def get_repository(config: Config) -> FileTaskStore | SupabaseAdapter:
    """Pick the task source from config."""
    if config.use_supabase:
        return SupabaseAdapter(config)
    return FileTaskStore(config.tasks_path)


def resolve_filter(
    repo: FileTaskStore | SupabaseAdapter,
    name: str | None = None,
    filter_file: Path | None = None,
) -> SmartFilterConfig:
    """Find a filter by file, preset name or saved filter name (in that order)."""
    if filter_file is not None:
        try:
            data = json.loads(Path(filter_file).read_text())
        except json.JSONDecodeError as e:
            raise InvalidValueError(f"{filter_file} is not valid JSON: {e}") from e
        return SmartFilterConfig.from_dict(data)
    if name is None:
        return SmartFilterConfig()
    if name in PRESET_FILTERS:
        return PRESET_FILTERS[name]
    saved = repo.get_filter(name)
    if saved is None:
        raise UnknownFilterError(name)
    return saved.config


def list_filter_names(repo: FileTaskStore | SupabaseAdapter) -> tuple[list[str], list[str]]:
    """Returns: (preset names, saved filter names)."""
    return list(PRESET_FILTERS), [f.name for f in repo.list_filters()]


def run_filter(
    config: Config,
    name: str | None = None,
    filter_file: Path | None = None,
    as_of: date | None = None,
) -> list[Task]:
    """Load tasks and evaluate a filter against them."""
    repo = get_repository(config)
    filter_config = resolve_filter(repo, name, filter_file)
    # Validate before fetching so a broken filter never costs a round trip
    filter_config.validate()
    return evaluate(repo.fetch_all(), filter_config, as_of)


def build_matrix(
    config: Config,
    as_of: date | None = None,
    urgent_days: int | None = None,
    include_closed: bool = False,
) -> dict[Quadrant, list[Task]]:
    """Load tasks and group them into Eisenhower quadrants."""
    repo = get_repository(config)
    tasks = repo.fetch_all() if include_closed else repo.fetch_open()
    days = config.urgent_days if urgent_days is None else urgent_days
    return classify_all(tasks, as_of, days, include_closed=include_closed)


def _local(task: Task) -> Task:
    """Express completed_at in local time so hours and days match the user's clock."""
    if task.completed_at is None:
        return task
    return replace(task, completed_at=task.completed_at.astimezone().replace(tzinfo=None))


def build_suggestions(
    config: Config,
    now: datetime | None = None,
    limit: int | None = None,
) -> list[Suggestion]:
    """Load task history, habits and today's totals, then derive suggestions."""
    now = now or datetime.now()
    today = now.date()
    repo = get_repository(config)
    tasks = repo.fetch_all()
    since = today - timedelta(days=HISTORY_DAYS)

    completed = [
        _local(t)
        for t in tasks
        if t.status == Status.COMPLETED and t.completed_at is not None
    ]
    completed = [t for t in completed if t.completed_at.date() >= since]
    pending = [t for t in tasks if t.status == Status.PENDING]
    done_today = sum(1 for t in completed if t.completed_at.date() == today)

    habits = repo.fetch_habits()
    completed_habit_ids = repo.fetch_completed_habit_ids(today)
    stored = repo.fetch_daily_stats(today)
    # Stored totals can lag behind the task list
    today_stats = DailyStats(
        tasks_completed=max(done_today, stored.tasks_completed),
        focus_minutes=stored.focus_minutes,
    )
    logger.debug(
        f"Suggestions from {len(completed)} completed and {len(pending)} pending tasks, "
        f"{len(habits)} habits"
    )

    return generate_suggestions(
        completed,
        pending,
        now,
        habits=habits,
        completed_habit_ids=completed_habit_ids,
        today_stats=today_stats,
        limit=limit or config.suggestion_limit,
    )


def find_task(config: Config, title: str) -> Task | None:
    """First open task whose title contains the given text (case-insensitive)."""
    needle = title.lower()
    for task in get_repository(config).fetch_open():
        if needle in task.title.lower():
            return task
    return None
