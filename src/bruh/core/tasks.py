"""Pure task domain model - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum


class Priority(str, Enum):
    """Task priority, ordered from least to most important."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_ORDER.index(self)


class Status(str, Enum):
    """Task workflow status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    WAITING = "waiting"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)


_PRIORITY_ORDER = list(Priority)
_STATUS_ORDER = list(Status)

CLOSED_STATUSES = frozenset({Status.COMPLETED, Status.CANCELLED})


@dataclass(frozen=True)
class Task:
    """A task record as read from the task store."""

    id: str
    title: str = ""
    priority: Priority = Priority.NORMAL
    status: Status = Status.PENDING
    due_date: date | None = None
    start_date: date | None = None
    estimated_minutes: int | None = None
    list_id: str | None = None
    has_subtasks: bool = False
    is_recurring: bool = False
    created_at: datetime | None = None
    completed_at: datetime | None = None
    tags: tuple[str, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.status not in CLOSED_STATUSES

    @property
    def is_important(self) -> bool:
        """High and urgent priorities count as important."""
        return self.priority in (Priority.HIGH, Priority.URGENT)

    def days_until_due(self, as_of: date) -> int | None:
        """Days until due date (negative if overdue)."""
        if not self.due_date:
            return None
        return (self.due_date - as_of).days

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from a task row as returned by the REST API or a JSON export."""
        subtasks = data.get("subtasks")
        if subtasks is not None:
            has_subtasks = len(subtasks) > 0
        else:
            has_subtasks = bool(data.get("has_subtasks", False))

        estimate = data.get("estimated_minutes")
        return cls(
            id=str(data["id"]),
            title=data.get("title", "") or "",
            priority=Priority(data.get("priority") or "normal"),
            status=Status(data.get("status") or "pending"),
            due_date=_parse_date(data.get("due_date")),
            start_date=_parse_date(data.get("start_date")),
            estimated_minutes=int(estimate) if estimate is not None else None,
            list_id=data.get("list_id"),
            has_subtasks=has_subtasks,
            is_recurring=bool(data.get("is_recurring", False)),
            created_at=_parse_timestamp(data.get("created_at")),
            completed_at=_parse_timestamp(data.get("completed_at")),
            tags=tuple(data.get("tags") or ()),
        )

    def to_dict(self) -> dict:
        """Serialize to the same row shape accepted by from_api."""
        return {
            "id": self.id,
            "title": self.title,
            "priority": self.priority.value,
            "status": self.status.value,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "estimated_minutes": self.estimated_minutes,
            "list_id": self.list_id,
            "has_subtasks": self.has_subtasks,
            "is_recurring": self.is_recurring,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "tags": list(self.tags),
        }


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    return date.fromisoformat(value.split("T")[0])


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    # Postgres emits "+00:00" offsets; older exports use a trailing "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    # Stored timestamps are UTC; keep every parsed value aware so they compare
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_open(tasks: list[Task]) -> list[Task]:
    """Drop completed and cancelled tasks."""
    return [t for t in tasks if t.is_open]


def filter_overdue(tasks: list[Task], as_of: date) -> list[Task]:
    """Filter to open tasks due before as_of."""
    return [t for t in tasks if t.is_open and t.due_date and t.due_date < as_of]
