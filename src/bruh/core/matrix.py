"""Eisenhower matrix classification - pure, no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from .dates import as_date
from .tasks import Priority, Task

# Due within this many days (or overdue) counts as urgent.
URGENT_DAYS = 3


class Quadrant(str, Enum):
    """
    Eisenhower quadrant.

    DO: Urgent + Important
    SCHEDULE: Not Urgent + Important
    DELEGATE: Urgent + Not Important
    ELIMINATE: Neither
    """

    DO = "do"
    SCHEDULE = "schedule"
    DELEGATE = "delegate"
    ELIMINATE = "eliminate"

    @property
    def label(self) -> str:
        return QUADRANT_LABELS[self].title

    @property
    def subtitle(self) -> str:
        return QUADRANT_LABELS[self].subtitle


@dataclass(frozen=True)
class QuadrantLabel:
    title: str
    subtitle: str


QUADRANT_LABELS: dict[Quadrant, QuadrantLabel] = {
    Quadrant.DO: QuadrantLabel("Do First", "Urgent & Important"),
    Quadrant.SCHEDULE: QuadrantLabel("Schedule", "Important, Not Urgent"),
    Quadrant.DELEGATE: QuadrantLabel("Delegate", "Urgent, Not Important"),
    Quadrant.ELIMINATE: QuadrantLabel("Eliminate", "Neither"),
}


def is_urgent(task: Task, today: date, urgent_days: int = URGENT_DAYS) -> bool:
    """Due within urgent_days, overdue, or flagged urgent priority."""
    if task.priority == Priority.URGENT:
        return True
    days = task.days_until_due(today)
    return days is not None and days <= urgent_days


def classify(
    task: Task,
    now: date | datetime | None = None,
    urgent_days: int = URGENT_DAYS,
) -> Quadrant:
    """Map a task to exactly one quadrant, relative to now."""
    today = as_date(now)
    important = task.is_important
    urgent = is_urgent(task, today, urgent_days)

    if urgent and important:
        return Quadrant.DO
    elif not urgent and important:
        return Quadrant.SCHEDULE
    elif urgent and not important:
        return Quadrant.DELEGATE
    else:
        return Quadrant.ELIMINATE


def classify_all(
    tasks: list[Task],
    now: date | datetime | None = None,
    urgent_days: int = URGENT_DAYS,
    include_closed: bool = True,
) -> dict[Quadrant, list[Task]]:
    """
    Group tasks by quadrant.

    Every quadrant is present in the result. Within a quadrant, tasks are
    ordered by due date (earliest first) with undated tasks last; ties keep
    input order.
    """
    today = as_date(now)
    grouped: dict[Quadrant, list[Task]] = {q: [] for q in Quadrant}

    for task in tasks:
        if not include_closed and not task.is_open:
            continue
        grouped[classify(task, today, urgent_days)].append(task)

    def sort_key(t: Task) -> tuple:
        if t.due_date is None:
            return (1,)
        return (0, t.due_date)

    for quadrant in grouped:
        grouped[quadrant].sort(key=sort_key)

    return grouped
