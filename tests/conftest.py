from __future__ import annotations

import os
from datetime import date
from pathlib import PurePosixPath
from typing import Optional

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from dailynav.app.errors import NoteNotFoundError
from dailynav.app.navbar.controller import NavbarController
from dailynav.app.settings import NavbarSettings
from dailynav.app.types import OpenType

WEDNESDAY = date(2024, 6, 12)


class FakeView:
    def __init__(self, view_id: str = "view-1", basename: Optional[str] = None) -> None:
        self.view_id = view_id
        self.basename = basename

    def file_basename(self) -> Optional[str]:
        return self.basename


class FakeHost:
    """In-memory vault: daily notes keyed by date, weekly notes by week start."""

    def __init__(self, daily=(), weekly=(), vault: str = "Vault") -> None:
        self.daily = set(daily)
        self.weekly = set(weekly)
        self.vault = vault
        self.opened: list[tuple[str, date, OpenType]] = []

    def note_exists(self, note_date: date) -> bool:
        return note_date in self.daily

    def weekly_note_exists(self, week_start: date) -> bool:
        return week_start in self.weekly

    def resolve_daily_note(self, note_date: date) -> PurePosixPath:
        if note_date not in self.daily:
            raise NoteNotFoundError(note_date)
        return PurePosixPath("Daily") / f"{note_date.isoformat()}.md"

    def resolve_weekly_note(self, week_start: date) -> PurePosixPath:
        if week_start not in self.weekly:
            raise NoteNotFoundError(week_start, weekly=True)
        return PurePosixPath("Weekly") / f"{week_start.isoformat()}.md"

    def vault_name(self) -> str:
        return self.vault

    def open_daily_note(self, note_date: date, open_type: OpenType) -> None:
        self.opened.append(("daily", note_date, open_type))

    def open_weekly_note(self, week_start: date, open_type: OpenType) -> None:
        self.opened.append(("weekly", week_start, open_type))


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost(daily={date(2024, 6, 10), date(2024, 6, 11)})


@pytest.fixture
def make_controller(fake_host):
    def factory(
        settings: Optional[NavbarSettings] = None,
        *,
        anchor: date = WEDNESDAY,
        basename: Optional[str] = None,
        today: date = date(2024, 6, 14),
        host=None,
    ) -> NavbarController:
        return NavbarController(
            FakeView(basename=basename),
            host or fake_host,
            settings or NavbarSettings(),
            anchor,
            today_provider=lambda: today,
        )

    return factory
