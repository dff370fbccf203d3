from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from PySide6.QtCore import Qt, Signal, QPoint
from PySide6.QtGui import QIcon, QMouseEvent
from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QHBoxLayout,
    QMenu,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QStyle,
    QToolButton,
    QToolTip,
    QWidget,
)

from dailynav.app.navbar.buttons import ButtonSpec, NavbarRender, StateTag, WeeklyButtonSpec
from dailynav.app.navbar.controller import NavbarController
from dailynav.app.navbar.interaction import (
    NEXT_WEEK,
    PREVIOUS_WEEK,
    InteractionEvent,
    InteractionKind,
    MenuEntry,
    NavAction,
    PaneHint,
    ShowContextMenu,
    context_menu_entries,
    week_button_action,
)

logger = logging.getLogger(__name__)

NAVBAR_STYLE = """
QPushButton[navbarDate="true"] {
    padding: 2px 8px;
    border-radius: 4px;
    border: 1px solid transparent;
}
QPushButton[navbarState="active"] {
    background-color: palette(highlight);
    color: palette(highlighted-text);
    font-weight: bold;
}
QPushButton[navbarState="not-exists"] {
    color: palette(mid);
}
QPushButton[navbarCurrent="true"] {
    border: 1px solid palette(highlight);
}
QPushButton[navbarExtra="true"] {
    font-style: italic;
}
"""
# Theme icon names used by the context menu, with style icons for platforms without a theme
MENU_ICON_FALLBACKS = {
    "file": QStyle.SP_FileIcon,
    "file-plus": QStyle.SP_FileDialogNewFolder,
    "separator-vertical": QStyle.SP_ToolBarHorizontalExtensionButton,
    "picture-in-picture-2": QStyle.SP_TitleBarNormalButton,
    "copy": QStyle.SP_DialogSaveButton,
}


def classify_modifier_click(modifiers, button) -> PaneHint:
    """Read the held modifiers the way the editor host picks a pane."""
    mod = bool(modifiers & Qt.ControlModifier)
    alt = bool(modifiers & Qt.AltModifier)
    shift = bool(modifiers & Qt.ShiftModifier)
    if mod and alt and shift:
        return PaneHint.WINDOW
    if mod and alt:
        return PaneHint.SPLIT
    if mod or button == Qt.MiddleButton:
        return PaneHint.TAB
    if alt or shift or bool(modifiers & Qt.MetaModifier):
        return PaneHint.MODIFIER
    return PaneHint.NONE


def interaction_from_mouse(event: QMouseEvent) -> InteractionEvent:
    modifiers = event.modifiers()
    button = event.button()
    if button == Qt.LeftButton:
        kind = InteractionKind.CLICK
    elif button in (Qt.MiddleButton, Qt.RightButton):
        kind = InteractionKind.AUX_CLICK
    else:
        kind = InteractionKind.OTHER
    return InteractionEvent(
        kind=kind,
        # Physical Ctrl reports as Meta on macOS
        ctrl_or_cmd_held=bool(modifiers & (Qt.ControlModifier | Qt.MetaModifier)),
        pane_hint=classify_modifier_click(modifiers, button),
    )


class DateButton(QPushButton):
    """Push button that reports every mouse button, not only left clicks."""

    interacted = Signal(object, object)  # InteractionEvent, global QPoint

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        inside = self.rect().contains(event.position().toPoint())
        if inside:
            self.interacted.emit(interaction_from_mouse(event), event.globalPosition().toPoint())
        super().mouseReleaseEvent(event)


class NavbarWidget(QWidget):
    """Horizontally scrolling strip of date buttons for one editor view."""

    linkCopied = Signal(str)
    linkFailed = Signal(str)
    _linkReady = Signal(str)
    _linkError = Signal(str)

    def __init__(
        self,
        controller: NavbarController,
        parent=None,
        *,
        status_callback: Optional[Callable[[str], None]] = None,
    ) -> None:
        super().__init__(parent)
        self.controller = controller
        self._status_callback = status_callback
        self.date_buttons: list[DateButton] = []
        self.weekly_button: Optional[DateButton] = None

        self._strip = QWidget()
        self._strip_layout = QHBoxLayout(self._strip)
        self._strip_layout.setContentsMargins(4, 2, 4, 2)
        self._strip_layout.setSpacing(4)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.NoFrame)
        self._scroll.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self._scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAsNeeded)
        self._scroll.setWidget(self._strip)
        self._scroll.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._scroll)
        self.setStyleSheet(NAVBAR_STYLE)

        self._linkReady.connect(self._on_link_ready)
        self._linkError.connect(self._on_link_error)
        listener = self.apply_render
        self.controller.add_listener(listener)
        self.destroyed.connect(lambda *_: controller.remove_listener(listener))

    def refresh(self) -> NavbarRender:
        return self.controller.render()

    def apply_render(self, result: NavbarRender) -> None:
        self._clear_strip()
        if result.weekly is not None:
            self.weekly_button = self._add_weekly_button(result.weekly)
        buttons = list(result.buttons)
        leading = buttons[:1] if buttons and buttons[0].is_extra else []
        trailing = buttons[-1:] if buttons and buttons[-1].is_extra else []
        days = buttons[len(leading): len(buttons) - len(trailing)]
        for spec in leading:
            self._add_date_button(spec)
        self._add_week_arrow("◀", "Previous week", PREVIOUS_WEEK)
        for spec in days:
            self._add_date_button(spec)
        self._add_week_arrow("▶", "Next week", NEXT_WEEK)
        for spec in trailing:
            self._add_date_button(spec)
        self._add_today_button()
        self._strip_layout.addStretch(1)

    def _clear_strip(self) -> None:
        self.date_buttons = []
        self.weekly_button = None
        while self._strip_layout.count():
            item = self._strip_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

    def _add_week_arrow(self, text: str, tooltip: str, direction: int) -> None:
        arrow = QToolButton()
        arrow.setText(text)
        arrow.setToolTip(tooltip)
        arrow.setAutoRaise(True)
        arrow.clicked.connect(lambda _checked=False, d=direction: self._dispatch(week_button_action(d)))
        self._strip_layout.addWidget(arrow)

    def _add_today_button(self) -> None:
        today = QToolButton()
        today.setText("Today")
        today.setToolTip("Back to the current week")
        today.setAutoRaise(True)
        today.clicked.connect(lambda _checked=False: self._go_to_today())
        self._strip_layout.addWidget(today)

    def _go_to_today(self) -> None:
        if not self.controller.disposed:
            self.controller.go_to_today()

    def _add_date_button(self, spec: ButtonSpec) -> DateButton:
        button = DateButton(spec.label)
        button.setToolTip(spec.tooltip)
        button.setProperty("navbarDate", "true")
        button.setProperty("navbarState", spec.state_tag.value)
        button.setProperty("navbarCurrent", "true" if StateTag.CURRENT in spec.tags else "false")
        button.setProperty("navbarExtra", "true" if spec.is_extra else "false")
        button.interacted.connect(
            lambda event, pos, day=spec.date: self._on_interaction(event, day, pos, weekly=False)
        )
        self._strip_layout.addWidget(button)
        self.date_buttons.append(button)
        return button

    def _add_weekly_button(self, spec: WeeklyButtonSpec) -> DateButton:
        button = DateButton(spec.label)
        button.setToolTip(spec.tooltip)
        button.setProperty("navbarDate", "true")
        button.setProperty("navbarState", spec.state_tag.value)
        button.setProperty("navbarWeekly", "true")
        button.interacted.connect(
            lambda event, pos, day=spec.week_start: self._on_interaction(event, day, pos, weekly=True)
        )
        self._strip_layout.addWidget(button)
        return button

    def _on_interaction(self, event: InteractionEvent, day: date, global_pos: QPoint, *, weekly: bool) -> None:
        if self.controller.disposed:
            return
        action = self.controller.resolve(event, day, weekly=weekly)
        if isinstance(action, ShowContextMenu):
            self.show_context_menu(action.date, global_pos, weekly=action.weekly)
            return
        self._dispatch(action)

    def _dispatch(self, action: NavAction) -> None:
        if self.controller.disposed:
            return
        self.controller.perform(action, on_link=self._linkReady.emit, on_link_error=self._emit_link_error)

    def _emit_link_error(self, exc: Exception) -> None:
        self._linkError.emit(str(exc))

    def build_context_menu(self, day: date, *, weekly: bool = False) -> QMenu:
        menu = QMenu(self)
        for entry in context_menu_entries(day, weekly):
            self._add_menu_entry(menu, entry)
        return menu

    def _add_menu_entry(self, menu: QMenu, entry: MenuEntry) -> None:
        if entry.is_separator:
            menu.addSeparator()
            return
        action = menu.addAction(self._menu_icon(entry.icon), entry.title)
        action.setData(entry.icon)
        action.triggered.connect(lambda _checked=False, nav=entry.action: self._dispatch(nav))

    def _menu_icon(self, name: str) -> QIcon:
        fallback = MENU_ICON_FALLBACKS.get(name)
        if fallback is None:
            return QIcon.fromTheme(name)
        return QIcon.fromTheme(name, self.style().standardIcon(fallback))

    def show_context_menu(self, day: date, global_pos: QPoint, *, weekly: bool = False) -> None:
        menu = self.build_context_menu(day, weekly=weekly)
        menu.exec(global_pos)

    def _on_link_ready(self, url: str) -> None:
        QApplication.clipboard().setText(url)
        self._notify("URL copied to your clipboard")
        self.linkCopied.emit(url)

    def _on_link_error(self, message: str) -> None:
        logger.warning("Copy link failed: %s", message)
        self.linkFailed.emit(message)
        if self._status_callback:
            self._status_callback(f"Could not copy link: {message}")
        else:
            QMessageBox.warning(self, "Copy link", message)

    def _notify(self, message: str) -> None:
        if self._status_callback:
            self._status_callback(message)
        else:
            QToolTip.showText(self.mapToGlobal(self.rect().center()), message, self)
