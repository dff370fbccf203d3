from datetime import date

import pytest

from dailynav.app.navbar.interaction import (
    COPY_LINK_TITLE,
    CopyLink,
    InteractionEvent,
    InteractionKind,
    NoOp,
    Open,
    PaneHint,
    ShiftWeek,
    ShowContextMenu,
    context_menu_entries,
    open_type_for_pane_hint,
    resolve_interaction,
    week_button_action,
)
from dailynav.app.types import OpenType

WEDNESDAY = date(2024, 6, 12)
MONDAY = date(2024, 6, 10)


def _resolve(event, day=MONDAY, default=OpenType.ACTIVE_PANE, active=WEDNESDAY, weekly=False):
    return resolve_interaction(event, day, active_date=active, default_open_type=default, weekly=weekly)


def test_plain_click_uses_default_open_type():
    event = InteractionEvent(InteractionKind.CLICK)
    assert _resolve(event) == Open(MONDAY, OpenType.ACTIVE_PANE)
    assert _resolve(event, default=OpenType.NEW_SPLIT) == Open(MONDAY, OpenType.NEW_SPLIT)


@pytest.mark.parametrize("default", list(OpenType))
def test_ctrl_click_opens_new_tab_regardless_of_default(default):
    event = InteractionEvent(InteractionKind.CLICK, ctrl_or_cmd_held=True)
    assert _resolve(event, default=default) == Open(MONDAY, OpenType.NEW_TAB)


def test_clicking_active_date_in_active_pane_is_a_no_op():
    event = InteractionEvent(InteractionKind.CLICK)
    assert _resolve(event, day=WEDNESDAY) == NoOp()


def test_clicking_active_date_with_other_default_still_opens():
    event = InteractionEvent(InteractionKind.CLICK)
    assert _resolve(event, day=WEDNESDAY, default=OpenType.NEW_TAB) == Open(WEDNESDAY, OpenType.NEW_TAB)
    ctrl = InteractionEvent(InteractionKind.CLICK, ctrl_or_cmd_held=True)
    assert _resolve(ctrl, day=WEDNESDAY) == Open(WEDNESDAY, OpenType.NEW_TAB)


@pytest.mark.parametrize(
    "hint, expected",
    [
        (PaneHint.TAB, OpenType.NEW_TAB),
        (PaneHint.SPLIT, OpenType.NEW_SPLIT),
        (PaneHint.WINDOW, OpenType.NEW_WINDOW),
    ],
)
def test_pane_hint_wins_for_any_kind(hint, expected):
    for kind in InteractionKind:
        event = InteractionEvent(kind, pane_hint=hint)
        assert _resolve(event, day=WEDNESDAY) == Open(WEDNESDAY, expected)


def test_non_pane_modifier_falls_through_to_click_rules():
    event = InteractionEvent(InteractionKind.CLICK, pane_hint=PaneHint.MODIFIER)
    assert _resolve(event) == Open(MONDAY, OpenType.ACTIVE_PANE)
    assert open_type_for_pane_hint(PaneHint.MODIFIER) is None
    assert open_type_for_pane_hint(PaneHint.NONE) is None
    assert not PaneHint.MODIFIER.opens_pane
    assert PaneHint.SPLIT.opens_pane


def test_aux_click_requests_context_menu():
    event = InteractionEvent(InteractionKind.AUX_CLICK)
    assert _resolve(event) == ShowContextMenu(MONDAY)


def test_other_interactions_do_nothing():
    assert _resolve(InteractionEvent(InteractionKind.OTHER)) == NoOp()


def test_weekly_buttons_are_never_active():
    event = InteractionEvent(InteractionKind.CLICK)
    action = _resolve(event, day=MONDAY, active=None, weekly=True)
    assert action == Open(MONDAY, OpenType.ACTIVE_PANE, weekly=True)


def test_week_arrows():
    assert week_button_action(-1) == ShiftWeek(-1)
    assert week_button_action(1) == ShiftWeek(1)
    with pytest.raises(ValueError):
        week_button_action(0)


def test_context_menu_lists_open_types_then_copy_link():
    entries = context_menu_entries(MONDAY)
    assert [e.title for e in entries] == [
        "Open",
        "Open in new tab",
        "Open to the right",
        "Open in new window",
        "",
        COPY_LINK_TITLE,
    ]
    assert entries[4].is_separator
    assert [e.action for e in entries[:4]] == [Open(MONDAY, open_type) for open_type in OpenType]
    assert entries[5].action == CopyLink(MONDAY)
    assert entries[5].icon == "copy"


def test_weekly_context_menu_targets_weekly_note():
    entries = context_menu_entries(MONDAY, weekly=True)
    assert all(e.action.weekly for e in entries if not e.is_separator)
