"""Symbolic date resolution - pure, clock injected by the caller."""

import calendar
from datetime import date, datetime, timedelta

from .errors import InvalidValueError

DATE_TOKENS = (
    "today",
    "tomorrow",
    "yesterday",
    "start_of_week",
    "end_of_week",
    "start_of_month",
    "end_of_month",
)


def as_date(now: date | datetime | None = None) -> date:
    """Normalize an injected 'now' to a calendar date (wall clock if None)."""
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def start_of_week(today: date) -> date:
    """Monday of the week containing today."""
    return today - timedelta(days=today.weekday())


def end_of_week(today: date) -> date:
    """Sunday of the week containing today."""
    return start_of_week(today) + timedelta(days=6)


def end_of_month(today: date) -> date:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=last_day)


def resolve_date_value(value: object, today: date) -> date:
    """
    Resolve a filter value to a concrete date.

    Accepts a symbolic token (see DATE_TOKENS), a date, a datetime or an
    ISO date string. Anything else raises InvalidValueError.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidValueError(f"Expected a date, got {value!r}")

    match value:
        case "today":
            return today
        case "tomorrow":
            return today + timedelta(days=1)
        case "yesterday":
            return today - timedelta(days=1)
        case "start_of_week":
            return start_of_week(today)
        case "end_of_week":
            return end_of_week(today)
        case "start_of_month":
            return today.replace(day=1)
        case "end_of_month":
            return end_of_month(today)

    try:
        return date.fromisoformat(value.split("T")[0])
    except ValueError:
        raise InvalidValueError(f"Unrecognized date value: {value!r}") from None
