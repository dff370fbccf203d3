"""Turn pointer interactions on navbar buttons into navigation actions."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Union

from dailynav.app.calendar_math import same_day
from dailynav.app.types import OpenType


class InteractionKind(str, Enum):
    CLICK = "click"
    AUX_CLICK = "auxclick"
    OTHER = "other"


class PaneHint(str, Enum):
    """Host reading of the modifier keys held during a click."""

    NONE = "none"
    MODIFIER = "modifier"  # a modifier was held, but not one that picks a pane
    TAB = "tab"
    SPLIT = "split"
    WINDOW = "window"

    @property
    def opens_pane(self) -> bool:
        return self in (PaneHint.TAB, PaneHint.SPLIT, PaneHint.WINDOW)


def open_type_for_pane_hint(hint: PaneHint) -> Optional[OpenType]:
    """Map a pane hint onto an open type; non-pane hints map to None."""
    if hint is PaneHint.TAB:
        return OpenType.NEW_TAB
    if hint is PaneHint.SPLIT:
        return OpenType.NEW_SPLIT
    if hint is PaneHint.WINDOW:
        return OpenType.NEW_WINDOW
    if hint is PaneHint.NONE or hint is PaneHint.MODIFIER:
        return None
    raise ValueError(f"Unhandled pane hint: {hint!r}")


@dataclass(frozen=True)
class InteractionEvent:
    kind: InteractionKind
    ctrl_or_cmd_held: bool = False
    pane_hint: PaneHint = PaneHint.NONE


@dataclass(frozen=True)
class Open:
    date: date
    open_type: OpenType
    weekly: bool = False


@dataclass(frozen=True)
class ShowContextMenu:
    date: date
    weekly: bool = False


@dataclass(frozen=True)
class ShiftWeek:
    delta: int


@dataclass(frozen=True)
class CopyLink:
    date: date
    weekly: bool = False


@dataclass(frozen=True)
class NoOp:
    pass


NavAction = Union[Open, ShowContextMenu, ShiftWeek, CopyLink, NoOp]

PREVIOUS_WEEK = -1
NEXT_WEEK = 1


def resolve_interaction(
    event: InteractionEvent,
    day: date,
    *,
    active_date: Optional[date],
    default_open_type: OpenType,
    weekly: bool = False,
) -> NavAction:
    """Resolve a click on the button for ``day``; the first matching rule wins.

    Weekly buttons pass ``active_date=None`` since they are never "active".
    """
    pane_open_type = open_type_for_pane_hint(event.pane_hint)
    if pane_open_type is not None:
        return Open(day, pane_open_type, weekly)

    if event.kind is InteractionKind.CLICK:
        open_type = OpenType.NEW_TAB if event.ctrl_or_cmd_held else default_open_type
        if open_type is OpenType.ACTIVE_PANE and same_day(day, active_date):
            return NoOp()
        return Open(day, open_type, weekly)

    if event.kind is InteractionKind.AUX_CLICK:
        return ShowContextMenu(day, weekly)

    return NoOp()


def week_button_action(direction: int) -> ShiftWeek:
    if direction not in (PREVIOUS_WEEK, NEXT_WEEK):
        raise ValueError(f"Week direction must be -1 or +1, got {direction}")
    return ShiftWeek(direction)


@dataclass(frozen=True)
class MenuEntry:
    title: str = ""
    icon: str = ""
    action: Optional[NavAction] = None

    @property
    def is_separator(self) -> bool:
        return self.action is None

    @classmethod
    def separator(cls) -> "MenuEntry":
        return cls()


OPEN_TYPE_MENU_ITEMS = {
    OpenType.ACTIVE_PANE: ("Open", "file"),
    OpenType.NEW_TAB: ("Open in new tab", "file-plus"),
    OpenType.NEW_SPLIT: ("Open to the right", "separator-vertical"),
    OpenType.NEW_WINDOW: ("Open in new window", "picture-in-picture-2"),
}
COPY_LINK_TITLE = "Copy Obsidian URL"


def context_menu_entries(day: date, weekly: bool = False) -> list[MenuEntry]:
    """Every open type in declaration order, a separator, then link copy."""
    entries = []
    for open_type in OpenType:
        title, icon = OPEN_TYPE_MENU_ITEMS[open_type]
        entries.append(MenuEntry(title, icon, Open(day, open_type, weekly)))
    entries.append(MenuEntry.separator())
    entries.append(MenuEntry(COPY_LINK_TITLE, "copy", CopyLink(day, weekly)))
    return entries
