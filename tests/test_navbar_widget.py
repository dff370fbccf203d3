from datetime import date
from types import SimpleNamespace

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QToolButton

from dailynav.app.settings import NavbarSettings
from dailynav.app.types import OpenType
from dailynav.app.navbar.interaction import PaneHint
from dailynav.app.ui import navbar_widget
from dailynav.app.ui.navbar_widget import NavbarWidget, classify_modifier_click


def _widget(qtbot, controller, statuses=None):
    widget = NavbarWidget(controller, status_callback=(statuses.append if statuses is not None else None))
    qtbot.addWidget(widget)
    widget.refresh()
    widget.show()
    return widget


def test_modifier_classification():
    assert classify_modifier_click(Qt.NoModifier, Qt.LeftButton) is PaneHint.NONE
    assert classify_modifier_click(Qt.ControlModifier, Qt.LeftButton) is PaneHint.TAB
    assert classify_modifier_click(Qt.NoModifier, Qt.MiddleButton) is PaneHint.TAB
    assert classify_modifier_click(Qt.ControlModifier | Qt.AltModifier, Qt.LeftButton) is PaneHint.SPLIT
    assert (
        classify_modifier_click(Qt.ControlModifier | Qt.AltModifier | Qt.ShiftModifier, Qt.LeftButton)
        is PaneHint.WINDOW
    )
    assert classify_modifier_click(Qt.ShiftModifier, Qt.LeftButton) is PaneHint.MODIFIER


def test_buttons_follow_render(qtbot, make_controller):
    widget = _widget(qtbot, make_controller())
    assert [b.text() for b in widget.date_buttons] == [
        "Mon 10", "Tue 11", "Wed 12", "Thu 13", "Fri 14", "Sat 15", "Sun 16",
    ]
    states = [b.property("navbarState") for b in widget.date_buttons]
    assert states.count("active") == 1
    assert widget.date_buttons[2].property("navbarState") == "active"
    assert widget.date_buttons[4].property("navbarCurrent") == "true"
    assert widget.date_buttons[0].toolTip() == "2024-06-10"
    assert widget.weekly_button is None


def test_weekly_and_extra_buttons(qtbot, make_controller):
    settings = NavbarSettings(enable_weekly_note_button=True, show_extra_buttons=True)
    widget = _widget(qtbot, make_controller(settings))
    assert widget.weekly_button.text() == "24"
    assert widget.weekly_button.property("navbarState") == "not-exists"
    assert len(widget.date_buttons) == 9
    assert widget.date_buttons[0].property("navbarExtra") == "true"


def test_left_click_opens_note(qtbot, make_controller, fake_host):
    widget = _widget(qtbot, make_controller())
    qtbot.mouseClick(widget.date_buttons[0], Qt.LeftButton)
    assert fake_host.opened == [("daily", date(2024, 6, 10), OpenType.ACTIVE_PANE)]


def test_ctrl_click_opens_new_tab(qtbot, make_controller, fake_host):
    widget = _widget(qtbot, make_controller())
    qtbot.mouseClick(widget.date_buttons[2], Qt.LeftButton, Qt.ControlModifier)
    assert fake_host.opened == [("daily", date(2024, 6, 12), OpenType.NEW_TAB)]


def test_right_click_shows_context_menu(qtbot, make_controller, fake_host, monkeypatch):
    widget = _widget(qtbot, make_controller())
    shown = []
    monkeypatch.setattr(widget, "show_context_menu", lambda day, pos, weekly=False: shown.append((day, weekly)))
    qtbot.mouseClick(widget.date_buttons[1], Qt.RightButton)
    assert shown == [(date(2024, 6, 11), False)]
    assert fake_host.opened == []


def test_context_menu_actions(qtbot, make_controller, fake_host):
    widget = _widget(qtbot, make_controller())
    menu = widget.build_context_menu(date(2024, 6, 11))
    actions = menu.actions()
    assert [a.text() for a in actions if not a.isSeparator()] == [
        "Open", "Open in new tab", "Open to the right", "Open in new window", "Copy Obsidian URL",
    ]
    assert actions[4].isSeparator()
    actions[2].trigger()
    assert fake_host.opened == [("daily", date(2024, 6, 11), OpenType.NEW_SPLIT)]


def test_copy_link_from_menu(qtbot, make_controller):
    statuses = []
    widget = _widget(qtbot, make_controller(), statuses)
    menu = widget.build_context_menu(date(2024, 6, 11))
    with qtbot.waitSignal(widget.linkCopied, timeout=3000) as blocker:
        menu.actions()[-1].trigger()
    assert blocker.args == ["obsidian://open?vault=Vault&file=Daily%2F2024-06-11"]
    assert statuses == ["URL copied to your clipboard"]


def test_copy_link_for_missing_note_reports_failure(qtbot, make_controller):
    statuses = []
    widget = _widget(qtbot, make_controller(), statuses)
    menu = widget.build_context_menu(date(2024, 6, 13))
    with qtbot.waitSignal(widget.linkFailed, timeout=3000):
        menu.actions()[-1].trigger()
    assert len(statuses) == 1
    assert statuses[0].startswith("Could not copy link")


def test_week_arrows_shift_window(qtbot, make_controller):
    controller = make_controller()
    widget = _widget(qtbot, controller)
    arrows = {b.toolTip(): b for b in widget.findChildren(QToolButton)}
    qtbot.mouseClick(arrows["Next week"], Qt.LeftButton)
    assert controller.state.week_offset == 1
    assert widget.date_buttons[0].text() == "Mon 17"
    assert all(b.property("navbarState") != "active" for b in widget.date_buttons)


def test_today_button_returns_to_current_week(qtbot, make_controller):
    controller = make_controller(anchor=date(2024, 5, 1), today=date(2024, 6, 14))
    widget = _widget(qtbot, controller)
    buttons = {b.text(): b for b in widget.findChildren(QToolButton)}
    qtbot.mouseClick(buttons["Today"], Qt.LeftButton)
    assert controller.state.anchor_date == date(2024, 6, 14)
    assert widget.date_buttons[0].text() == "Mon 10"
    assert widget.date_buttons[4].property("navbarState") == "active"


def test_context_menu_entries_have_icons(qtbot, make_controller):
    widget = _widget(qtbot, make_controller())
    actions = [a for a in widget.build_context_menu(date(2024, 6, 11)).actions() if not a.isSeparator()]
    assert [a.data() for a in actions] == [
        "file", "file-plus", "separator-vertical", "picture-in-picture-2", "copy",
    ]
    assert all(not a.icon().isNull() for a in actions)


def test_copy_link_without_status_bar_still_notifies(qtbot, make_controller, monkeypatch):
    shown = []
    monkeypatch.setattr(
        navbar_widget, "QToolTip", SimpleNamespace(showText=lambda pos, text, widget: shown.append(text))
    )
    widget = _widget(qtbot, make_controller())
    menu = widget.build_context_menu(date(2024, 6, 11))
    with qtbot.waitSignal(widget.linkCopied, timeout=3000):
        menu.actions()[-1].trigger()
    assert shown == ["URL copied to your clipboard"]
