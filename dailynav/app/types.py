from __future__ import annotations

from enum import Enum


class FirstDayOfWeek(str, Enum):
    SUNDAY = "Sunday"
    MONDAY = "Monday"

    @property
    def day_index(self) -> int:
        """Day number with Sunday as 0, the convention used by week tokens."""
        return 0 if self is FirstDayOfWeek.SUNDAY else 1

    @property
    def python_weekday(self) -> int:
        """Same day as ``date.weekday()`` reports it (Monday is 0)."""
        return 6 if self is FirstDayOfWeek.SUNDAY else 0


class OpenType(str, Enum):
    """Where a note is opened. Values match the stored setting strings."""

    ACTIVE_PANE = "Active"
    NEW_TAB = "New tab"
    NEW_SPLIT = "Split right"
    NEW_WINDOW = "New window"
