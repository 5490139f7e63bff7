"""Saved smart filter interface."""

import logging
from dataclasses import dataclass
from typing import Protocol

from bruh.core.errors import FilterError, InvalidValueError
from bruh.core.filters import SmartFilterConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedFilter:
    """A user's named smart filter."""

    id: str
    name: str
    config: SmartFilterConfig
    is_pinned: bool = False
    position: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "SavedFilter":
        """Build from a stored row. Raises a FilterError if the row is corrupt."""
        if not isinstance(data, dict) or not data.get("name"):
            raise InvalidValueError(f"Saved filter has no name: {data!r}")
        try:
            position = int(data.get("position") or 0)
        except (TypeError, ValueError):
            raise InvalidValueError(f"Saved filter {data['name']!r} has a bad position") from None
        return cls(
            id=str(data.get("id") or data["name"]),
            name=data["name"],
            config=SmartFilterConfig.from_dict(data.get("filter_config") or {}),
            is_pinned=bool(data.get("is_pinned", False)),
            position=position,
        )


def parse_filters(rows: list[dict]) -> list[SavedFilter]:
    """Parse stored rows, skipping (and logging) any that are corrupt."""
    filters = []
    for row in rows:
        try:
            filters.append(SavedFilter.from_api(row))
        except FilterError as e:
            logger.warning(f"Skipping invalid saved filter: {e}")
    return filters


def find_filter(rows: list[dict], name: str) -> SavedFilter | None:
    """
    Look up a stored row by name (case-insensitive) and parse it.

    Unlike parse_filters, a corrupt match raises its FilterError so callers
    can report it.
    """
    for row in rows:
        if isinstance(row, dict) and str(row.get("name", "")).lower() == name.lower():
            return SavedFilter.from_api(row)
    return None


class FilterRepository(Protocol):
    """Interface for reading saved filters."""

    def list_filters(self) -> list[SavedFilter]:
        """Saved filters, pinned first, then by position."""
        ...

    def get_filter(self, name: str) -> SavedFilter | None:
        """Look up a saved filter by name (case-insensitive)."""
        ...
