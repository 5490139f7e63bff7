"""Tests for smart suggestion heuristics."""

from datetime import date, datetime, timedelta

import pytest

from bruh.core.suggestions import (
    DailyStats,
    Habit,
    analyze_patterns,
    calculate_stats,
    categorize_task,
    generate_suggestions,
)
from bruh.core.tasks import Priority, Status, Task


@pytest.fixture
def now():
    # Wednesday morning
    return datetime(2024, 6, 5, 10, 0)


def done(title, completed_at):
    return Task(id=title, title=title, status=Status.COMPLETED, completed_at=completed_at)


def suggestion_ids(suggestions):
    return [s.id for s in suggestions]


class TestCategorizeTask:
    @pytest.mark.parametrize(
        "title, category",
        [
            ("Call the landlord", "meetings"),
            ("Team sync", "meetings"),
            ("Reply to Sam", "communication"),
            ("Review pull request", "review"),
            ("Draft blog post", "creative"),
            ("Fix login bug", "debugging"),
            ("Plan sprint", "planning"),
            ("Groceries", "general"),
        ],
    )
    def test_keywords(self, title, category):
        assert categorize_task(title) == category


class TestAnalyzePatterns:
    def test_groups_by_weekday_hour_and_type(self, now):
        completed = [
            done("Review PR 1", datetime(2024, 5, 29, 9, 15)),
            done("Review PR 2", datetime(2024, 5, 22, 9, 45)),
            done("Fix bug", datetime(2024, 5, 22, 9, 30)),
        ]
        patterns = {(p.weekday, p.hour, p.task_type): p.count for p in analyze_patterns(completed)}
        assert patterns == {(2, 9, "review"): 2, (2, 9, "debugging"): 1}

    def test_skips_tasks_without_completion_time(self):
        assert analyze_patterns([Task(id="1", title="Review")]) == []


class TestCalculateStats:
    def test_streak_through_today(self, now):
        completed = [done(f"t{i}", now - timedelta(days=i)) for i in range(3)]
        assert calculate_stats(completed, now).streak_days == 3

    def test_empty_today_keeps_streak(self, now):
        completed = [done(f"t{i}", now - timedelta(days=i)) for i in (1, 2)]
        assert calculate_stats(completed, now).streak_days == 2

    def test_gap_breaks_streak(self, now):
        completed = [done(f"t{i}", now - timedelta(days=i)) for i in (0, 1, 3, 4)]
        assert calculate_stats(completed, now).streak_days == 2

    def test_averages(self, now):
        completed = [
            done("a", datetime(2024, 6, 4, 8, 0)),
            done("b", datetime(2024, 6, 4, 10, 0)),
            done("c", datetime(2024, 6, 3, 12, 0)),
            done("d", datetime(2024, 6, 3, 14, 0)),
        ]
        stats = calculate_stats(completed, now)
        assert stats.avg_completion_hour == 11.0
        assert stats.avg_tasks_per_day == 2.0

    def test_most_productive_day(self, now):
        completed = [
            done("a", datetime(2024, 6, 3, 9, 0)),  # Monday
            done("b", datetime(2024, 5, 27, 9, 0)),  # Monday
            done("c", datetime(2024, 6, 4, 9, 0)),  # Tuesday
        ]
        assert calculate_stats(completed, now).most_productive_day == 0

    def test_no_history(self, now):
        stats = calculate_stats([], now)
        assert stats.avg_completion_hour == 12.0
        assert stats.avg_tasks_per_day == 0.0
        assert stats.streak_days == 0


class TestGenerateSuggestions:
    def test_overdue_tasks(self, now):
        pending = [Task(id="1", title="Late", due_date=date(2024, 6, 1))]
        suggestions = generate_suggestions([], pending, now, limit=20)
        overdue = next(s for s in suggestions if s.id == "overdue-tasks")
        assert overdue.title == "1 overdue task"
        assert overdue.confidence == 0.95

    def test_high_priority_due_today_when_nothing_done(self, now):
        pending = [Task(id="1", title="Big one", priority=Priority.HIGH, due_date=now.date())]
        assert "high-priority-today" in suggestion_ids(generate_suggestions([], pending, now, limit=20))

        busy = DailyStats(tasks_completed=2)
        ids = suggestion_ids(generate_suggestions([], pending, now, today_stats=busy, limit=20))
        assert "high-priority-today" not in ids

    def test_unscheduled_important_tasks(self, now):
        pending = [
            Task(id="1", title="Someday", priority=Priority.URGENT),
            Task(id="2", title="Whenever", priority=Priority.LOW),
        ]
        suggestions = generate_suggestions([], pending, now, limit=20)
        schedule = next(s for s in suggestions if s.id == "schedule-high")
        assert schedule.description == "1 important task without due dates"

    def test_no_focus_during_working_hours(self, now):
        suggestions = generate_suggestions([], [], now)
        no_focus = next(s for s in suggestions if s.id == "no-focus-today")
        assert no_focus.action == {"type": "start_focus", "payload": {"minutes": 25}}

        focused = DailyStats(focus_minutes=50)
        assert "no-focus-today" not in suggestion_ids(generate_suggestions([], [], now, today_stats=focused))

    def test_morning_peak(self, now):
        completed = [done("a", datetime(2024, 6, 4, 10, 0))]
        assert "morning-peak" in suggestion_ids(generate_suggestions(completed, [], now, limit=20))

    def test_afternoon_focus(self):
        afternoon = datetime(2024, 6, 5, 14, 30)
        assert "afternoon-focus" in suggestion_ids(generate_suggestions([], [], afternoon, limit=20))

    def test_weekday_pattern(self, now):
        completed = [
            done("Review A", datetime(2024, 5, 29, 9, 0)),
            done("Review B", datetime(2024, 5, 22, 9, 0)),
            done("Review C", datetime(2024, 5, 15, 9, 0)),
        ]
        suggestions = generate_suggestions(completed, [], now, limit=20)
        pattern = next(s for s in suggestions if s.id == "day-pattern-2")
        assert pattern.title == "Wednesday pattern detected"
        assert pattern.confidence == pytest.approx(0.3)

    def test_evening_habits(self):
        evening = datetime(2024, 6, 5, 18, 0)
        habits = [Habit("h1", "Stretch"), Habit("h2", "Journal")]
        suggestions = generate_suggestions([], [], evening, habits=habits, completed_habit_ids={"h1"})
        habit = next(s for s in suggestions if s.id == "evening-habits")
        assert habit.description == "1 habit still incomplete today: Journal"

        all_done = generate_suggestions([], [], evening, habits=habits, completed_habit_ids={"h1", "h2"})
        assert "evening-habits" not in suggestion_ids(all_done)

    def test_streak_and_above_average(self, now):
        completed = [done(f"t{i}", now - timedelta(days=i, hours=1)) for i in range(4)]
        suggestions = generate_suggestions(
            completed, [], now, today_stats=DailyStats(tasks_completed=1, focus_minutes=25), limit=20
        )
        ids = suggestion_ids(suggestions)
        assert "streak" in ids
        assert "above-average" in ids

    def test_sorted_by_confidence_and_limited(self, now):
        pending = [
            Task(id="1", title="Late", due_date=date(2024, 6, 1)),
            Task(id="2", title="Someday", priority=Priority.HIGH),
            Task(id="3", title="Today", priority=Priority.URGENT, due_date=now.date()),
        ]
        suggestions = generate_suggestions([], pending, now, limit=2)
        assert suggestion_ids(suggestions) == ["overdue-tasks", "high-priority-today"]

    def test_quiet_evening_with_no_data(self):
        late = datetime(2024, 6, 5, 22, 0)
        assert generate_suggestions([], [], late) == []
