"""Navbar controllers: one per editor view, plus a registry that owns them all."""
from __future__ import annotations

import logging
import threading
from datetime import date
from pathlib import PurePath
from typing import Callable, Dict, List, Optional, Protocol

from dailynav.app import config
from dailynav.app.calendar_math import parse_date_from_filename, week_start
from dailynav.app.errors import NavbarDisposedError
from dailynav.app.navbar.buttons import NavbarRender, build_buttons, build_weekly_button
from dailynav.app.navbar.interaction import (
    CopyLink,
    InteractionEvent,
    NavAction,
    NoOp,
    Open,
    ShiftWeek,
    ShowContextMenu,
    resolve_interaction,
)
from dailynav.app.navbar.state import NavState
from dailynav.app.notes import build_shareable_url
from dailynav.app.settings import NavbarSettings
from dailynav.app.types import OpenType

logger = logging.getLogger(__name__)

RenderListener = Callable[[NavbarRender], None]
Runner = Callable[[Callable[[], None]], None]


class NavbarView(Protocol):
    view_id: str

    def file_basename(self) -> Optional[str]:
        """Basename (no extension) of the open file, or None."""


class NavbarHost(Protocol):
    def note_exists(self, note_date: date) -> bool: ...

    def weekly_note_exists(self, week_start: date) -> bool: ...

    def resolve_daily_note(self, note_date: date) -> PurePath: ...

    def resolve_weekly_note(self, week_start: date) -> PurePath: ...

    def vault_name(self) -> str: ...

    def open_daily_note(self, note_date: date, open_type: OpenType) -> None: ...

    def open_weekly_note(self, week_start: date, open_type: OpenType) -> None: ...


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def _thread_runner(job: Callable[[], None]) -> None:
    thread = threading.Thread(target=job, daemon=True)
    thread.start()


class NavbarController:
    """Drives the navbar attached to a single editor view."""

    def __init__(
        self,
        view: NavbarView,
        host: NavbarHost,
        settings: NavbarSettings,
        anchor: date,
        *,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self.view = view
        self.host = host
        self.settings = settings
        self.state = NavState(view_id=view.view_id, anchor_date=anchor)
        self.token = CancellationToken()
        self._today_provider = today_provider
        self._listeners: List[RenderListener] = []
        self.last_render: Optional[NavbarRender] = None

    @property
    def view_id(self) -> str:
        return self.view.view_id

    @property
    def disposed(self) -> bool:
        return self.token.cancelled

    def _ensure_alive(self) -> None:
        if self.disposed:
            raise NavbarDisposedError(f"Navbar {self.view_id} was disposed")

    def add_listener(self, listener: RenderListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: RenderListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def file_date(self) -> Optional[date]:
        return parse_date_from_filename(
            self.view.file_basename(),
            self.settings.daily_note_date_format,
            self.settings.first_day_of_week,
        )

    def render(self, today: Optional[date] = None) -> NavbarRender:
        """Recompute the buttons for the current state and notify listeners."""
        self._ensure_alive()
        settings = self.settings
        self.state.sync_file_date(self.file_date())
        today = today or self._today_provider()
        base = self.state.base_date
        window, buttons = build_buttons(
            base,
            anchor_date=self.state.anchor_date,
            today=today,
            settings=settings,
            note_exists=self.host.note_exists,
        )
        weekly = None
        if settings.enable_weekly_note_button:
            weekly = build_weekly_button(
                base, settings=settings, weekly_note_exists=self.host.weekly_note_exists
            )
        result = NavbarRender(base_date=base, window=window, buttons=buttons, weekly=weekly)
        logger.debug(
            "Navbar %s rendered %s..%s (offset %d)",
            self.view_id,
            window[0],
            window[-1],
            self.state.week_offset,
        )
        self.last_render = result
        for listener in list(self._listeners):
            listener(result)
        return result

    def resolve(self, event: InteractionEvent, day: date, *, weekly: bool = False) -> NavAction:
        if weekly:
            return resolve_interaction(
                event,
                day,
                active_date=None,
                default_open_type=self.settings.weekly_note_open_type,
                weekly=True,
            )
        return resolve_interaction(
            event,
            day,
            active_date=self.state.anchor_date,
            default_open_type=self.settings.default_open_type,
        )

    def handle_interaction(self, event: InteractionEvent, day: date, *, weekly: bool = False) -> NavAction:
        """Resolve and perform an interaction; context menus are left to the caller."""
        self._ensure_alive()
        action = self.resolve(event, day, weekly=weekly)
        if not isinstance(action, ShowContextMenu):
            self.perform(action)
        return action

    def shift_week(self, delta: int) -> NavbarRender:
        self._ensure_alive()
        self.state.shift_week(delta)
        return self.render()

    def go_to_today(self) -> NavbarRender:
        """Show the week holding today.

        Without an open daily note the anchor moves to today. With one, the
        anchor stays on the note's date and only the week offset changes.
        """
        self._ensure_alive()
        today = self._today_provider()
        file_date = self.file_date()
        if file_date is None:
            self.state.reset_to(today)
        else:
            fdw = self.settings.first_day_of_week
            weeks = (week_start(today, fdw) - week_start(file_date, fdw)).days // 7
            self.state.reset_to(file_date, weeks)
        return self.render()

    def perform(
        self,
        action: NavAction,
        *,
        on_link: Optional[Callable[[str], None]] = None,
        on_link_error: Optional[Callable[[Exception], None]] = None,
    ) -> None:
        self._ensure_alive()
        if isinstance(action, Open):
            if action.weekly:
                self.host.open_weekly_note(action.date, action.open_type)
            else:
                self.host.open_daily_note(action.date, action.open_type)
        elif isinstance(action, ShiftWeek):
            self.shift_week(action.delta)
        elif isinstance(action, CopyLink):
            self.copy_link(
                action.date,
                weekly=action.weekly,
                on_success=on_link or (lambda url: logger.info("Copied link %s", url)),
                on_failure=on_link_error or (lambda exc: logger.error("Could not copy link: %s", exc)),
            )
        elif isinstance(action, (NoOp, ShowContextMenu)):
            return
        else:
            raise TypeError(f"Unknown navbar action: {action!r}")

    def build_link(self, day: date, *, weekly: bool = False) -> str:
        """Shareable URL for the note behind ``day``; raises NoteNotFoundError."""
        if weekly:
            path = self.host.resolve_weekly_note(day)
        else:
            path = self.host.resolve_daily_note(day)
        return build_shareable_url(self.host.vault_name(), path.as_posix())

    def copy_link(
        self,
        day: date,
        *,
        weekly: bool = False,
        on_success: Callable[[str], None],
        on_failure: Callable[[Exception], None],
        runner: Optional[Runner] = None,
    ) -> None:
        """Build the link off the event loop and report back unless disposed meanwhile."""
        self._ensure_alive()
        token = self.token

        def job() -> None:
            try:
                url = self.build_link(day, weekly=weekly)
            except Exception as exc:
                if token.cancelled:
                    logger.debug("Dropping link failure for disposed navbar %s: %s", self.view_id, exc)
                    return
                self._deliver(on_failure, exc)
                return
            if token.cancelled:
                logger.debug("Dropping link for disposed navbar %s", self.view_id)
                return
            self._deliver(on_success, url)

        (runner or _thread_runner)(job)

    def _deliver(self, callback: Callable, value) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Link callback failed for navbar %s", self.view_id)

    def update_settings(self, settings: NavbarSettings) -> NavbarRender:
        self._ensure_alive()
        self.settings = settings
        return self.render()

    def dispose(self) -> None:
        if self.disposed:
            return
        self.token.cancel()
        self._listeners.clear()
        logger.debug("Navbar %s disposed", self.view_id)


class NavbarManager:
    """Registry of navbars keyed by view id; broadcasts settings changes."""

    def __init__(
        self,
        host: NavbarHost,
        settings: Optional[NavbarSettings] = None,
        *,
        settings_loader: Callable[[], NavbarSettings] = config.load_navbar_settings,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self.host = host
        self._settings_loader = settings_loader
        self.settings = settings if settings is not None else settings_loader()
        self._today_provider = today_provider
        self._navbars: Dict[str, NavbarController] = {}

    def __len__(self) -> int:
        return len(self._navbars)

    def __contains__(self, view_id: str) -> bool:
        return view_id in self._navbars

    def get(self, view_id: str) -> Optional[NavbarController]:
        return self._navbars.get(view_id)

    def attach(self, view: NavbarView, anchor: Optional[date] = None) -> NavbarController:
        existing = self._navbars.get(view.view_id)
        if existing is not None:
            return existing
        controller = NavbarController(
            view,
            self.host,
            self.settings,
            anchor or self._today_provider(),
            today_provider=self._today_provider,
        )
        self._navbars[view.view_id] = controller
        logger.debug("Navbar attached to view %s", view.view_id)
        return controller

    def detach(self, view_id: str) -> None:
        controller = self._navbars.pop(view_id, None)
        if controller is not None:
            controller.dispose()

    def update_settings(self, settings: NavbarSettings) -> None:
        self.settings = settings
        for controller in list(self._navbars.values()):
            controller.update_settings(settings)

    def reload_settings(self) -> NavbarSettings:
        self.update_settings(self._settings_loader())
        return self.settings

    def rerender_all(self) -> None:
        for controller in list(self._navbars.values()):
            controller.render()

    def dispose_all(self) -> None:
        for view_id in list(self._navbars):
            self.detach(view_id)
