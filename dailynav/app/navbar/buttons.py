"""Derive the labelled, classified buttons for one navbar render."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Optional

from dailynav.app.calendar_math import (
    dates_in_week,
    last_sunday,
    next_monday,
    same_day,
    weekly_anchor,
)
from dailynav.app.date_format import format_date
from dailynav.app.settings import NavbarSettings

logger = logging.getLogger(__name__)

ExistenceLookup = Callable[[date], bool]


class StateTag(str, Enum):
    ACTIVE = "active"
    CURRENT = "current"
    DEFAULT = "default"
    NOT_EXISTS = "not-exists"


@dataclass(frozen=True)
class ButtonSpec:
    date: date
    label: str
    tooltip: str
    state_tag: StateTag
    is_current: bool = False
    is_extra: bool = False

    @property
    def tags(self) -> frozenset[StateTag]:
        """State tag plus the additive CURRENT flag."""
        if self.is_current:
            return frozenset({self.state_tag, StateTag.CURRENT})
        return frozenset({self.state_tag})


@dataclass(frozen=True)
class WeeklyButtonSpec:
    week_start: date
    label: str
    tooltip: str
    state_tag: StateTag


@dataclass(frozen=True)
class NavbarRender:
    base_date: date
    window: tuple[date, ...]
    buttons: tuple[ButtonSpec, ...]
    weekly: Optional[WeeklyButtonSpec] = None

    @property
    def active(self) -> Optional[ButtonSpec]:
        for button in self.buttons:
            if button.state_tag is StateTag.ACTIVE:
                return button
        return None


def _safe_exists(lookup: ExistenceLookup, day: date) -> bool:
    try:
        return bool(lookup(day))
    except Exception as exc:
        logger.warning("Note lookup for %s failed, showing it as missing: %s", day.isoformat(), exc)
        return False


def classify_date(
    day: date,
    *,
    anchor_date: date,
    today: date,
    exists: bool,
    settings: NavbarSettings,
    is_extra: bool = False,
    in_window: bool = False,
) -> ButtonSpec:
    # An extra that repeats a window day leaves the highlights to the window
    duplicate = is_extra and in_window
    is_active = same_day(day, anchor_date) and not duplicate
    if is_active:
        state = StateTag.ACTIVE
    elif exists:
        state = StateTag.DEFAULT
    else:
        state = StateTag.NOT_EXISTS
    fdw = settings.first_day_of_week
    return ButtonSpec(
        date=day,
        label=f"{format_date(day, settings.date_format, fdw)} {day.day}",
        tooltip=format_date(day, settings.tooltip_date_format, fdw),
        state_tag=state,
        is_current=same_day(day, today) and not duplicate,
        is_extra=is_extra,
    )


def build_buttons(
    base_date: date,
    *,
    anchor_date: date,
    today: date,
    settings: NavbarSettings,
    note_exists: ExistenceLookup,
) -> tuple[tuple[date, ...], tuple[ButtonSpec, ...]]:
    """Return the window dates and the ordered buttons (extras wrap the window)."""
    fdw = settings.first_day_of_week
    window = tuple(dates_in_week(base_date, fdw))
    window_keys = {day.isoformat() for day in window}

    def make(day: date, is_extra: bool = False) -> ButtonSpec:
        return classify_date(
            day,
            anchor_date=anchor_date,
            today=today,
            exists=_safe_exists(note_exists, day),
            settings=settings,
            is_extra=is_extra,
            in_window=day.isoformat() in window_keys,
        )

    buttons: list[ButtonSpec] = []
    if settings.show_extra_buttons:
        buttons.append(make(last_sunday(base_date, fdw), is_extra=True))
    buttons.extend(make(day) for day in window)
    if settings.show_extra_buttons:
        buttons.append(make(next_monday(base_date, fdw), is_extra=True))
    return window, tuple(buttons)


def build_weekly_button(
    base_date: date,
    *,
    settings: NavbarSettings,
    weekly_note_exists: ExistenceLookup,
) -> WeeklyButtonSpec:
    fdw = settings.first_day_of_week
    anchor = weekly_anchor(base_date, fdw)
    exists = _safe_exists(weekly_note_exists, anchor)
    return WeeklyButtonSpec(
        week_start=anchor,
        label=format_date(anchor, settings.weekly_note_display_format, fdw),
        tooltip=format_date(anchor, settings.weekly_note_date_format, fdw),
        state_tag=StateTag.DEFAULT if exists else StateTag.NOT_EXISTS,
    )
