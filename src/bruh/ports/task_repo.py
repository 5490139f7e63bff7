"""Task repository interface."""

from typing import Protocol

from bruh.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for reading tasks from any backend."""

    def fetch_all(self) -> list[Task]:
        """Fetch all top-level tasks."""
        ...

    def fetch_open(self) -> list[Task]:
        """Fetch tasks that are not completed or cancelled."""
        ...
