"""Smart suggestions from task history - pure, no I/O dependencies.

Callers supply completed and pending tasks, habits and today's stats;
everything is evaluated against an explicit 'now'.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from .tasks import Task

DEFAULT_LIMIT = 5
FOCUS_MINUTES = 25

_CATEGORY_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("meetings", ("meet", "call", "sync")),
    ("communication", ("email", "reply", "respond")),
    ("review", ("review", "check", "read")),
    ("creative", ("write", "draft", "create")),
    ("debugging", ("fix", "bug", "debug")),
    ("planning", ("plan", "prepare", "organize")),
]


@dataclass(frozen=True)
class Suggestion:
    id: str
    type: str  # time | task | habit | insight
    title: str
    description: str
    confidence: float
    action: dict | None = None


@dataclass
class TaskPattern:
    weekday: int
    hour: int
    task_type: str
    count: int = 0


@dataclass(frozen=True)
class CompletionStats:
    avg_completion_hour: float
    most_productive_day: int
    avg_tasks_per_day: float
    streak_days: int


@dataclass(frozen=True)
class Habit:
    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict) -> "Habit":
        return cls(id=str(data["id"]), name=data.get("name") or "")


@dataclass(frozen=True)
class DailyStats:
    tasks_completed: int = 0
    focus_minutes: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "DailyStats":
        """Build from a daily stats row (missing counters are zero)."""
        return cls(
            tasks_completed=int(data.get("tasks_completed") or 0),
            focus_minutes=int(data.get("focus_minutes") or 0),
        )


@dataclass
class _Context:
    now: datetime
    pending: list[Task]
    habits: list[Habit] = field(default_factory=list)
    completed_habit_ids: set[str] = field(default_factory=set)
    today_stats: DailyStats = field(default_factory=DailyStats)

    @property
    def today(self) -> date:
        return self.now.date()


def categorize_task(title: str) -> str:
    """Bucket a task title by keyword."""
    lower = title.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(k in lower for k in keywords):
            return category
    return "general"


def analyze_patterns(completed: list[Task]) -> list[TaskPattern]:
    """Count completions by (weekday, hour, task type)."""
    patterns: dict[tuple[int, int, str], TaskPattern] = {}
    for task in completed:
        if not task.completed_at:
            continue
        key = (task.completed_at.weekday(), task.completed_at.hour, categorize_task(task.title))
        if key not in patterns:
            patterns[key] = TaskPattern(*key)
        patterns[key].count += 1
    return list(patterns.values())


def calculate_stats(completed: list[Task], now: datetime) -> CompletionStats:
    """
    Summarize completion history.

    The streak counts consecutive days with at least one completion, ending
    today; an empty today does not break a streak that ran through yesterday.
    """
    hours: list[int] = []
    per_day: dict[date, int] = {}
    weekday_counts = [0] * 7

    for task in completed:
        if not task.completed_at:
            continue
        hours.append(task.completed_at.hour)
        day = task.completed_at.date()
        per_day[day] = per_day.get(day, 0) + 1
        weekday_counts[day.weekday()] += 1

    streak = 0
    today = now.date()
    for offset in range(30):
        if today - timedelta(days=offset) in per_day:
            streak += 1
        elif offset > 0:
            break

    return CompletionStats(
        avg_completion_hour=sum(hours) / len(hours) if hours else 12.0,
        most_productive_day=weekday_counts.index(max(weekday_counts)),
        avg_tasks_per_day=sum(per_day.values()) / len(per_day) if per_day else 0.0,
        streak_days=streak,
    )


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _time_suggestions(ctx: _Context, stats: CompletionStats) -> list[Suggestion]:
    hour = ctx.now.hour
    out = []
    if 9 <= hour <= 11 and 9 <= stats.avg_completion_hour <= 12:
        out.append(
            Suggestion(
                id="morning-peak",
                type="insight",
                title="Your peak productivity time",
                description="You complete most tasks in the morning. Consider tackling your hardest task now.",
                confidence=0.85,
            )
        )
    if 14 <= hour <= 15:
        out.append(
            Suggestion(
                id="afternoon-focus",
                type="time",
                title="Post-lunch focus session",
                description=f"A {FOCUS_MINUTES}-minute focus session can help beat the afternoon slump.",
                confidence=0.7,
                action={"type": "start_focus", "payload": {"minutes": FOCUS_MINUTES}},
            )
        )
    return out


def _pattern_suggestions(ctx: _Context, patterns: list[TaskPattern]) -> list[Suggestion]:
    weekday = ctx.now.weekday()
    todays = [p for p in patterns if p.weekday == weekday]
    if not todays:
        return []
    top = max(todays, key=lambda p: p.count)
    if top.count < 3:
        return []
    day_name = ctx.now.strftime("%A")
    return [
        Suggestion(
            id=f"day-pattern-{weekday}",
            type="insight",
            title=f"{day_name} pattern detected",
            description=f'You often work on "{top.task_type}" tasks on {day_name}s.',
            confidence=min(top.count / 10, 0.9),
        )
    ]


def _task_suggestions(ctx: _Context) -> list[Suggestion]:
    out = []
    overdue = [t for t in ctx.pending if t.due_date and t.due_date < ctx.today]
    if overdue:
        out.append(
            Suggestion(
                id="overdue-tasks",
                type="task",
                title=_plural(len(overdue), "overdue task"),
                description="Consider rescheduling or completing these today.",
                confidence=0.95,
            )
        )

    important_today = [t for t in ctx.pending if t.due_date == ctx.today and t.is_important]
    if important_today and ctx.today_stats.tasks_completed == 0:
        out.append(
            Suggestion(
                id="high-priority-today",
                type="task",
                title="High priority tasks today",
                description=f"You have {_plural(len(important_today), 'important task')} due today.",
                confidence=0.9,
            )
        )

    unscheduled = [t for t in ctx.pending if t.due_date is None and t.is_important]
    if unscheduled:
        out.append(
            Suggestion(
                id="schedule-high",
                type="time",
                title="High priority tasks need scheduling",
                description=f"{_plural(len(unscheduled), 'important task')} without due dates",
                confidence=0.8,
            )
        )
    return out


def _habit_suggestions(ctx: _Context) -> list[Suggestion]:
    incomplete = [h for h in ctx.habits if h.id not in ctx.completed_habit_ids]
    if not incomplete or ctx.now.hour < 17:
        return []
    return [
        Suggestion(
            id="evening-habits",
            type="habit",
            title="Don't forget your habits",
            description=f"{_plural(len(incomplete), 'habit')} still incomplete today: "
            + ", ".join(h.name for h in incomplete[:3]),
            confidence=0.8,
        )
    ]


def _insight_suggestions(ctx: _Context, stats: CompletionStats) -> list[Suggestion]:
    out = []
    if stats.streak_days >= 3:
        out.append(
            Suggestion(
                id="streak",
                type="insight",
                title=f"{stats.streak_days}-day streak!",
                description="You've been completing tasks consistently. Keep it up!",
                confidence=0.95,
            )
        )

    done_today = ctx.today_stats.tasks_completed
    if stats.avg_tasks_per_day > 0 and done_today >= stats.avg_tasks_per_day:
        out.append(
            Suggestion(
                id="above-average",
                type="insight",
                title="Above average day",
                description=(
                    f"You've completed {done_today} tasks today, "
                    f"above your {stats.avg_tasks_per_day:.1f} daily average."
                ),
                confidence=0.85,
            )
        )

    if ctx.today_stats.focus_minutes == 0 and 10 <= ctx.now.hour <= 16:
        out.append(
            Suggestion(
                id="no-focus-today",
                type="time",
                title="No focus sessions today",
                description=f"Start a {FOCUS_MINUTES}-minute Pomodoro to boost productivity.",
                confidence=0.75,
                action={"type": "start_focus", "payload": {"minutes": FOCUS_MINUTES}},
            )
        )
    return out


def generate_suggestions(
    completed: list[Task],
    pending: list[Task],
    now: datetime,
    habits: list[Habit] | None = None,
    completed_habit_ids: set[str] | None = None,
    today_stats: DailyStats | None = None,
    limit: int = DEFAULT_LIMIT,
) -> list[Suggestion]:
    """
    Build personalized suggestions, most confident first.

    Pure function - no I/O.
    """
    ctx = _Context(
        now=now,
        pending=pending,
        habits=list(habits or []),
        completed_habit_ids=set(completed_habit_ids or ()),
        today_stats=today_stats or DailyStats(),
    )
    stats = calculate_stats(completed, now)
    patterns = analyze_patterns(completed)

    suggestions = (
        _time_suggestions(ctx, stats)
        + _pattern_suggestions(ctx, patterns)
        + _task_suggestions(ctx)
        + _habit_suggestions(ctx)
        + _insight_suggestions(ctx, stats)
    )
    suggestions.sort(key=lambda s: s.confidence, reverse=True)
    return suggestions[:limit]
