"""Week-window arithmetic for the daily note navbar.

Every helper works on calendar days (``datetime.date``) and takes the first
day of week explicitly so results never depend on ambient settings.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from dailynav.app.date_format import parse_date
from dailynav.app.types import FirstDayOfWeek

DAYS_IN_WEEK = 7
SUNDAY = 6
MONDAY = 0


def date_key(day: date) -> str:
    """Day-granularity comparison key (``YYYY-MM-DD``)."""
    return day.isoformat()


def same_day(left: Optional[date], right: Optional[date]) -> bool:
    if left is None or right is None:
        return False
    return date_key(left) == date_key(right)


def window_base_date(anchor: date, week_offset: int) -> date:
    return anchor + timedelta(weeks=week_offset)


def week_start(base_date: date, first_day_of_week: FirstDayOfWeek) -> date:
    days_since_start = (base_date.weekday() - first_day_of_week.python_weekday) % DAYS_IN_WEEK
    return base_date - timedelta(days=days_since_start)


def dates_in_week(base_date: date, first_day_of_week: FirstDayOfWeek) -> list[date]:
    """Return the 7 days of the week containing ``base_date``, ascending."""
    start = week_start(base_date, first_day_of_week)
    return [start + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]


def last_sunday(base_date: date, first_day_of_week: FirstDayOfWeek) -> date:
    """Latest Sunday on or before the start of the displayed week.

    Monday-first windows get the Sunday just before them; Sunday-first windows
    already start on that Sunday.
    """
    start = week_start(base_date, first_day_of_week)
    return start - timedelta(days=(start.weekday() - SUNDAY) % DAYS_IN_WEEK)


def next_monday(base_date: date, first_day_of_week: FirstDayOfWeek) -> date:
    """Earliest Monday after the end of the displayed week."""
    end = week_start(base_date, first_day_of_week) + timedelta(days=DAYS_IN_WEEK - 1)
    days_ahead = (MONDAY - end.weekday()) % DAYS_IN_WEEK or DAYS_IN_WEEK
    return end + timedelta(days=days_ahead)


def weekly_anchor(base_date: date, first_day_of_week: FirstDayOfWeek) -> date:
    """Date the weekly note for ``base_date`` is keyed on.

    Starts from the ISO week's Monday. Under Sunday-first display that Monday
    normally sits in the second slot of the window, so the anchor moves back
    to the window's Sunday. When ``base_date`` itself is a Sunday the ISO
    Monday lies in the previous window and is left alone.
    """
    iso_start = base_date - timedelta(days=base_date.weekday())
    if first_day_of_week is FirstDayOfWeek.SUNDAY:
        window_start = week_start(base_date, first_day_of_week)
        if (iso_start - window_start).days == 1:
            return iso_start - timedelta(days=1)
    return iso_start


def parse_date_from_filename(
    filename: Optional[str],
    fmt: str,
    first_day_of_week: FirstDayOfWeek = FirstDayOfWeek.MONDAY,
) -> Optional[date]:
    """Return the date encoded in a note basename, or None if it is not a daily note."""
    if not filename:
        return None
    return parse_date(filename, fmt, first_day_of_week)
