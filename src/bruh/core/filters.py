"""Smart filter evaluation - pure, no I/O dependencies.

A SmartFilterConfig is a user-authored list of conditions (field, operator,
value) combined with AND/OR logic, plus an optional sort. Each field has a
declared type, and each type allows a fixed set of operators. Misconfigured
filters raise a FilterError subclass instead of silently matching or
dropping conditions.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from .dates import DATE_TOKENS, as_date, resolve_date_value
from .errors import InvalidFieldError, InvalidOperatorError, InvalidValueError
from .tasks import Priority, Status, Task

logger = logging.getLogger(__name__)


class FieldType(str, Enum):
    SELECT = "select"
    LIST = "list"
    DATE = "date"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TAGS = "tags"


FIELDS: dict[str, FieldType] = {
    "priority": FieldType.SELECT,
    "status": FieldType.SELECT,
    "list_id": FieldType.LIST,
    "due_date": FieldType.DATE,
    "start_date": FieldType.DATE,
    "estimated_minutes": FieldType.NUMBER,
    "has_subtasks": FieldType.BOOLEAN,
    "is_recurring": FieldType.BOOLEAN,
    "tags": FieldType.TAGS,
}

OPERATORS: dict[FieldType, frozenset[str]] = {
    FieldType.SELECT: frozenset({"eq", "neq", "in", "not_in", "is_null", "is_not_null"}),
    FieldType.LIST: frozenset({"eq", "neq", "in", "not_in", "is_null", "is_not_null"}),
    FieldType.DATE: frozenset({"eq", "neq", "lt", "lte", "gt", "gte", "is_null", "is_not_null"}),
    FieldType.NUMBER: frozenset(
        {"eq", "neq", "lt", "lte", "gt", "gte", "in", "not_in", "is_null", "is_not_null"}
    ),
    FieldType.BOOLEAN: frozenset({"eq", "neq"}),
    FieldType.TAGS: frozenset({"contains", "is_null", "is_not_null"}),
}

SELECT_OPTIONS: dict[str, frozenset[str]] = {
    "priority": frozenset(p.value for p in Priority),
    "status": frozenset(s.value for s in Status),
}

SORT_FIELDS = frozenset(f for f, t in FIELDS.items() if t is not FieldType.TAGS) | {
    "created_at",
    "title",
}

LOGIC_MODES = ("and", "or")
SORT_DIRECTIONS = ("asc", "desc")

_NULL_OPERATORS = frozenset({"is_null", "is_not_null"})
_MEMBERSHIP_OPERATORS = frozenset({"in", "not_in"})


@dataclass(frozen=True)
class FilterCondition:
    """A single (field, operator, value) rule."""

    field: str
    operator: str
    value: object = None

    @property
    def field_type(self) -> FieldType:
        try:
            return FIELDS[self.field]
        except KeyError:
            raise InvalidFieldError(self.field) from None

    def validate(self) -> None:
        """Raise a FilterError if this condition can never be evaluated."""
        field_type = self.field_type
        if self.operator not in OPERATORS[field_type]:
            raise InvalidOperatorError(self.field, self.operator, field_type.value)
        if self.operator in _NULL_OPERATORS:
            return

        if self.operator in _MEMBERSHIP_OPERATORS:
            if not isinstance(self.value, (list, tuple)):
                raise InvalidValueError(
                    f"Operator {self.operator!r} on {self.field!r} needs a list of values"
                )
            values = list(self.value)
        elif self.operator == "contains" and isinstance(self.value, (list, tuple)):
            values = list(self.value)
        else:
            values = [self.value]

        for value in values:
            _check_value(self.field, field_type, value)

    def to_dict(self) -> dict:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {"field": self.field, "operator": self.operator, "value": value}

    @classmethod
    def from_dict(cls, data: dict) -> "FilterCondition":
        """Build from the persisted JSON shape, rejecting malformed rows."""
        if not isinstance(data, dict):
            raise InvalidValueError(f"Condition must be an object, got {data!r}")
        if "field" not in data:
            raise InvalidFieldError(None)
        if "operator" not in data:
            raise InvalidValueError(f"Condition on {data['field']!r} has no operator")
        return cls(field=data["field"], operator=data["operator"], value=data.get("value"))


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: str = "asc"

    def validate(self) -> None:
        if self.field not in SORT_FIELDS:
            raise InvalidFieldError(self.field)
        if self.direction not in SORT_DIRECTIONS:
            raise InvalidValueError(f"Unknown sort direction: {self.direction!r}")


DEFAULT_SORT = SortSpec("created_at", "desc")


@dataclass(frozen=True)
class SmartFilterConfig:
    """A declarative filter: conditions, how to combine them, how to sort."""

    conditions: tuple[FilterCondition, ...] = ()
    logic: str = "and"
    sort: SortSpec | None = None

    def validate(self) -> None:
        if self.logic not in LOGIC_MODES:
            raise InvalidValueError(f"Unknown filter logic: {self.logic!r}")
        for condition in self.conditions:
            condition.validate()
        if self.sort is not None:
            self.sort.validate()

    @classmethod
    def from_dict(cls, data: dict) -> "SmartFilterConfig":
        """Build from the persisted JSON shape, rejecting malformed rows."""
        if not isinstance(data, dict):
            raise InvalidValueError(f"Filter config must be an object, got {data!r}")
        conditions = data.get("conditions") or []
        if not isinstance(conditions, (list, tuple)):
            raise InvalidValueError(f"Filter conditions must be a list, got {conditions!r}")

        sort = data.get("sort")
        if sort:
            if not isinstance(sort, dict):
                raise InvalidValueError(f"Filter sort must be an object, got {sort!r}")
            if "field" not in sort:
                raise InvalidFieldError(None)
            sort = SortSpec(sort["field"], sort.get("direction", "asc"))

        return cls(
            conditions=tuple(FilterCondition.from_dict(c) for c in conditions),
            logic=data.get("logic", "and"),
            sort=sort or None,
        )

    def to_dict(self) -> dict:
        """Serialize to the persisted JSON shape."""
        data: dict = {
            "conditions": [c.to_dict() for c in self.conditions],
            "logic": self.logic,
        }
        if self.sort is not None:
            data["sort"] = {"field": self.sort.field, "direction": self.sort.direction}
        return data


def _check_value(field_name: str, field_type: FieldType, value: object) -> None:
    """Validate a condition value against its field type (without resolving dates)."""
    if value is None:
        return
    match field_type:
        case FieldType.DATE:
            if isinstance(value, str) and value in DATE_TOKENS:
                return
            # any fixed date is fine; only its shape matters here
            resolve_date_value(value, date.today())
        case FieldType.NUMBER:
            _to_number(value)
        case FieldType.BOOLEAN:
            _to_bool(value)
        case FieldType.SELECT:
            options = SELECT_OPTIONS[field_name]
            if str(value) not in options:
                raise InvalidValueError(
                    f"{value!r} is not a valid {field_name} (expected one of {sorted(options)})"
                )
        case FieldType.LIST | FieldType.TAGS:
            if not isinstance(value, str):
                raise InvalidValueError(f"Expected a string for {field_name!r}, got {value!r}")


def _to_number(value: object) -> float | int:
    if isinstance(value, bool):
        raise InvalidValueError(f"Expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            pass
    raise InvalidValueError(f"Expected a number, got {value!r}")


def _to_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise InvalidValueError(f"Expected a boolean, got {value!r}")


def _coerce(field_type: FieldType, value: object, today: date) -> object:
    """Turn a validated condition value into something comparable with task values."""
    if value is None:
        return None
    match field_type:
        case FieldType.DATE:
            return resolve_date_value(value, today)
        case FieldType.NUMBER:
            return _to_number(value)
        case FieldType.BOOLEAN:
            return _to_bool(value)
        case _:
            return str(value)


def task_value(task: Task, field_name: str) -> object:
    """Read a field off a task, with enums reduced to their string values."""
    value = getattr(task, field_name)
    if isinstance(value, (Priority, Status)):
        return value.value
    return value


def _is_null(value: object) -> bool:
    return value is None or value == ()


def evaluate_condition(
    task: Task,
    condition: FilterCondition,
    today: date | datetime | None = None,
) -> bool:
    """
    Evaluate one condition against a task.

    Date tokens resolve against today (defaults to the current date). A null
    task value never satisfies eq/in against a non-null target or any
    ordered comparison; neq/not_in are the negations of eq/in.
    """
    today = as_date(today)
    field_type = condition.field_type
    operator = condition.operator
    if operator not in OPERATORS[field_type]:
        raise InvalidOperatorError(condition.field, operator, field_type.value)

    actual = task_value(task, condition.field)

    if operator == "is_null":
        return _is_null(actual)
    if operator == "is_not_null":
        return not _is_null(actual)

    if operator == "contains":
        wanted = condition.value if isinstance(condition.value, (list, tuple)) else [condition.value]
        return all(str(w) in actual for w in wanted)

    if operator in _MEMBERSHIP_OPERATORS:
        if not isinstance(condition.value, (list, tuple)):
            raise InvalidValueError(
                f"Operator {operator!r} on {condition.field!r} needs a list of values"
            )
        targets = [_coerce(field_type, v, today) for v in condition.value]
        member = actual in targets
        return member if operator == "in" else not member

    target = _coerce(field_type, condition.value, today)

    match operator:
        case "eq":
            return actual == target
        case "neq":
            return actual != target

    if actual is None or target is None:
        return False

    match operator:
        case "lt":
            return actual < target
        case "lte":
            return actual <= target
        case "gt":
            return actual > target
        case "gte":
            return actual >= target

    raise InvalidOperatorError(condition.field, operator, field_type.value)


def matches(task: Task, config: SmartFilterConfig, today: date) -> bool:
    """Combine condition results with the config's logic. No conditions matches everything."""
    if not config.conditions:
        return True
    results = (evaluate_condition(task, c, today) for c in config.conditions)
    if config.logic == "or":
        return any(results)
    return all(results)


def _sort_value(task: Task, field_name: str) -> object:
    value = getattr(task, field_name)
    if isinstance(value, (Priority, Status)):
        return value.rank
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str) and field_name == "title":
        return value.casefold()
    return value


def sort_tasks(tasks: list[Task], sort: SortSpec | None = None) -> list[Task]:
    """
    Stable sort by a single field.

    Nulls go last ascending and first descending, so descending is the exact
    reverse of ascending. Defaults to newest created first.
    """
    sort = sort or DEFAULT_SORT
    sort.validate()

    def sort_key(t: Task) -> tuple:
        value = _sort_value(t, sort.field)
        if value is None:
            return (1,)
        return (0, value)

    return sorted(tasks, key=sort_key, reverse=sort.direction == "desc")


def evaluate(
    tasks: list[Task],
    config: SmartFilterConfig,
    now: date | datetime | None = None,
) -> list[Task]:
    """
    Return the tasks matching config, ordered by its sort.

    Pure function - no I/O. Date tokens resolve against now (defaults to
    today), so results for filters like "due today" depend on it.
    """
    config.validate()
    today = as_date(now)
    matched = [t for t in tasks if matches(t, config, today)]
    logger.debug(f"Filter matched {len(matched)} of {len(tasks)} tasks (as of {today})")
    return sort_tasks(matched, config.sort)


PRESET_FILTERS: dict[str, SmartFilterConfig] = {
    "high-priority": SmartFilterConfig.from_dict(
        {
            "conditions": [
                {"field": "priority", "operator": "in", "value": ["high", "urgent"]},
                {"field": "status", "operator": "neq", "value": "completed"},
            ],
            "logic": "and",
            "sort": {"field": "priority", "direction": "desc"},
        }
    ),
    "due-this-week": SmartFilterConfig.from_dict(
        {
            "conditions": [
                {"field": "due_date", "operator": "gte", "value": "today"},
                {"field": "due_date", "operator": "lte", "value": "end_of_week"},
                {"field": "status", "operator": "neq", "value": "completed"},
            ],
            "logic": "and",
            "sort": {"field": "due_date", "direction": "asc"},
        }
    ),
    "overdue": SmartFilterConfig.from_dict(
        {
            "conditions": [
                {"field": "due_date", "operator": "lt", "value": "today"},
                {"field": "status", "operator": "neq", "value": "completed"},
            ],
            "logic": "and",
            "sort": {"field": "due_date", "direction": "asc"},
        }
    ),
    "no-due-date": SmartFilterConfig.from_dict(
        {
            "conditions": [
                {"field": "due_date", "operator": "is_null", "value": None},
                {"field": "status", "operator": "neq", "value": "completed"},
            ],
            "logic": "and",
        }
    ),
    "quick-wins": SmartFilterConfig.from_dict(
        {
            "conditions": [
                {"field": "estimated_minutes", "operator": "lte", "value": 15},
                {"field": "status", "operator": "neq", "value": "completed"},
            ],
            "logic": "and",
            "sort": {"field": "estimated_minutes", "direction": "asc"},
        }
    ),
}
