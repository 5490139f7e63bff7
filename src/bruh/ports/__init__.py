"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository
from .filter_repo import FilterRepository, SavedFilter, find_filter, parse_filters
from .activity_repo import ActivityRepository

__all__ = [
    "TaskRepository",
    "FilterRepository",
    "SavedFilter",
    "find_filter",
    "parse_filters",
    "ActivityRepository",
]
