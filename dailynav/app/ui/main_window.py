from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow,
    QPlainTextEdit,
    QSplitter,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtCore import Qt

from dailynav.app import config
from dailynav.app.navbar.controller import NavbarManager
from dailynav.app.notes import VaultNotes, strip_page_suffix
from dailynav.app.settings import NavbarSettings
from dailynav.app.types import OpenType
from dailynav.app.ui.navbar_widget import NavbarWidget

logger = logging.getLogger(__name__)


class NoteView(QWidget):
    """Read-only note pane with a navbar on top."""

    def __init__(self, manager: NavbarManager, path: Optional[Path] = None, parent=None) -> None:
        super().__init__(parent)
        self.view_id = uuid.uuid4().hex
        self.path: Optional[Path] = None
        self._manager = manager

        self.editor = QPlainTextEdit()
        self.editor.setReadOnly(True)

        self.controller = manager.attach(self)
        window = parent.window() if parent is not None else None
        status = getattr(window, "show_status", None)
        self.navbar = NavbarWidget(self.controller, self, status_callback=status)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.navbar)
        layout.addWidget(self.editor, 1)

        self.destroyed.connect(lambda *_, view_id=self.view_id: manager.detach(view_id))
        self.load(path)

    def file_basename(self) -> Optional[str]:
        if self.path is None:
            return None
        return strip_page_suffix(self.path.name)

    def title(self) -> str:
        return self.file_basename() or "Untitled"

    def load(self, path: Optional[Path]) -> None:
        self.path = path
        if path is not None and path.is_file():
            try:
                self.editor.setPlainText(path.read_text(encoding="utf-8"))
            except OSError as exc:
                logger.warning("Failed to read %s: %s", path, exc)
                self.editor.setPlainText("")
        else:
            self.editor.setPlainText("")
            if path is not None:
                self.editor.setPlaceholderText(f"{path} does not exist yet")
        self.controller.render()


class MainWindow(QMainWindow):
    """Tabbed note viewer; a second tab pane opens to the right on split."""

    def __init__(self, vault_root: Path, manager: Optional[NavbarManager] = None) -> None:
        super().__init__()
        self.vault_root = Path(vault_root)
        self._child_windows: list[MainWindow] = []
        if manager is None:
            notes = VaultNotes(self.vault_root, lambda: self.manager.settings, self.open_note)
            manager = NavbarManager(notes)
        self.manager = manager
        self.setWindowTitle(f"dailynav - {self.vault_root.name}")

        self.splitter = QSplitter(Qt.Horizontal)
        self.panes: list[QTabWidget] = [self._new_pane()]
        self.setCentralWidget(self.splitter)
        self.statusBar()

        view_menu = self.menuBar().addMenu("&View")
        refresh = view_menu.addAction("Refresh navbars")
        refresh.setShortcut("F5")
        refresh.triggered.connect(lambda _checked=False: self.manager.rerender_all())
        reload_action = view_menu.addAction("Reload navbar settings")
        reload_action.triggered.connect(lambda _checked=False: self.reload_settings())

    def show_status(self, message: str) -> None:
        self.statusBar().showMessage(message, 3000)

    def apply_settings(self, settings: NavbarSettings) -> None:
        """Push new navbar settings to this window and every window it opened."""
        self.manager.update_settings(settings)
        for child in self._child_windows:
            child.apply_settings(settings)

    def reload_settings(self) -> NavbarSettings:
        settings = self.manager.reload_settings()
        for child in self._child_windows:
            child.apply_settings(settings)
        return settings

    def _new_pane(self) -> QTabWidget:
        pane = QTabWidget()
        pane.setTabsClosable(True)
        pane.tabCloseRequested.connect(lambda index, p=pane: self._close_tab(p, index))
        self.splitter.addWidget(pane)
        return pane

    def _close_tab(self, pane: QTabWidget, index: int) -> None:
        widget = pane.widget(index)
        pane.removeTab(index)
        if widget is not None:
            widget.deleteLater()

    def _active_pane(self) -> QTabWidget:
        focus = self.focusWidget()
        for pane in self.panes:
            if focus is not None and pane.isAncestorOf(focus):
                return pane
        return self.panes[0]

    def _add_tab(self, pane: QTabWidget, path: Optional[Path], set_active: bool) -> NoteView:
        view = NoteView(self.manager, path, parent=self)
        index = pane.addTab(view, view.title())
        if set_active or pane.count() == 1:
            pane.setCurrentIndex(index)
            view.editor.setFocus()
        return view

    def open_note(self, path: Path, open_type: OpenType, set_active: bool = True) -> None:
        logger.debug("Opening %s in %s", path, open_type.value)
        if open_type is OpenType.NEW_WINDOW:
            window = MainWindow(self.vault_root)
            window.apply_settings(self.manager.settings)
            window.resize(self.size())
            window._add_tab(window.panes[0], path, True)
            window.show()
            self._child_windows.append(window)
            return
        if open_type is OpenType.NEW_SPLIT:
            if len(self.panes) < 2:
                self.panes.append(self._new_pane())
            self._add_tab(self.panes[-1], path, set_active)
            return
        pane = self._active_pane()
        if open_type is OpenType.NEW_TAB or pane.currentWidget() is None:
            self._add_tab(pane, path, set_active)
            return
        view = pane.currentWidget()
        view.load(path)
        pane.setTabText(pane.currentIndex(), view.title())

    def open_initial(self, path: Optional[Path] = None) -> None:
        self._add_tab(self.panes[0], path, True)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        for pane in self.panes:
            while pane.count():
                self._close_tab(pane, 0)
        super().closeEvent(event)
        config.save_last_vault(str(self.vault_root))
