"""Functional core - pure business logic with no I/O."""

from .tasks import Task, Priority, Status, filter_open, filter_overdue
from .errors import FilterError, InvalidFieldError, InvalidOperatorError, InvalidValueError
from .filters import (
    FilterCondition,
    SmartFilterConfig,
    SortSpec,
    PRESET_FILTERS,
    evaluate,
    evaluate_condition,
    sort_tasks,
)
from .matrix import Quadrant, URGENT_DAYS, classify, classify_all
from .suggestions import Suggestion, Habit, DailyStats, generate_suggestions
from .timer import FocusTimer, TimerState, SessionType, TimerStateError

__all__ = [
    # Tasks
    "Task",
    "Priority",
    "Status",
    "filter_open",
    "filter_overdue",
    # Filters
    "FilterError",
    "InvalidFieldError",
    "InvalidOperatorError",
    "InvalidValueError",
    "FilterCondition",
    "SmartFilterConfig",
    "SortSpec",
    "PRESET_FILTERS",
    "evaluate",
    "evaluate_condition",
    "sort_tasks",
    # Matrix
    "Quadrant",
    "URGENT_DAYS",
    "classify",
    "classify_all",
    # Suggestions
    "Suggestion",
    "Habit",
    "DailyStats",
    "generate_suggestions",
    # Timer
    "FocusTimer",
    "TimerState",
    "SessionType",
    "TimerStateError",
]
