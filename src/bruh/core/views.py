"""Pure text formatting for tasks, quadrants and suggestions - no I/O."""

from datetime import date

from .matrix import Quadrant, classify
from .suggestions import Suggestion
from .tasks import Task
from .timer import FocusTimer, TimerState

PRIORITY_MARKERS = {"low": "", "normal": "!", "high": "!!", "urgent": "!!!"}


def format_due(task: Task, as_of: date) -> str:
    """Relative due description, empty when undated."""
    days = task.days_until_due(as_of)
    if days is None:
        return ""
    if days < 0:
        return f"OVERDUE by {-days}d"
    if days == 0:
        return "due TODAY"
    if days == 1:
        return "due tomorrow"
    return f"due in {days}d"


def format_task_line(task: Task, as_of: date, show_quadrant: bool = True) -> str:
    """
    Format a single task for display.

    Pure function - no I/O.
    """
    marker = PRIORITY_MARKERS[task.priority.value]
    parts = [f"[{marker:3}]", task.title or task.id]

    details = [d for d in (format_due(task, as_of), task.status.value.replace("_", " ")) if d]
    if task.estimated_minutes is not None:
        details.append(f"{task.estimated_minutes}m")
    parts.append(f"({', '.join(details)})")

    if show_quadrant:
        parts.insert(0, f"[{classify(task, as_of).label}]")
    return " ".join(parts)


def format_matrix(
    grouped: dict[Quadrant, list[Task]],
    as_of: date,
    per_quadrant: int | None = 5,
) -> str:
    """Render quadrants as markdown sections, earliest due first."""
    sections = []
    for quadrant, tasks in grouped.items():
        header = f"### {quadrant.label} - {quadrant.subtitle} ({len(tasks)})"
        shown = tasks if per_quadrant is None else tasks[:per_quadrant]
        lines = [f"- {format_task_line(t, as_of, show_quadrant=False)}" for t in shown] or ["No tasks"]
        if per_quadrant is not None and len(tasks) > per_quadrant:
            lines.append(f"+{len(tasks) - per_quadrant} more")
        sections.append("\n".join([header, *lines]))
    return "\n\n".join(sections)


def format_suggestion(suggestion: Suggestion) -> str:
    return f"- {suggestion.title}: {suggestion.description} ({suggestion.confidence:.0%})"


def format_timer(timer: FocusTimer) -> str:
    """mm:ss remaining plus the session label."""
    minutes, seconds = divmod(timer.time_remaining, 60)
    label = timer.session_type.value.replace("_", " ")
    if timer.task is not None:
        label = f"{label}: {timer.task.title}"
    if timer.state == TimerState.PAUSED:
        label = f"{label} (paused)"
    return f"{minutes:02d}:{seconds:02d} {label}"
