"""Filesystem-backed daily/weekly note lookups for a vault folder."""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path, PurePosixPath
from typing import Callable, Optional, Union
from urllib.parse import quote

from dailynav.app.date_format import format_date
from dailynav.app.errors import NoteNotFoundError
from dailynav.app.settings import NavbarSettings
from dailynav.app.types import OpenType

logger = logging.getLogger(__name__)

PAGE_SUFFIX = ".md"
URL_SCHEME = "obsidian"

NoteOpener = Callable[[Path, OpenType, bool], None]


def strip_page_suffix(name: str) -> str:
    if name.lower().endswith(PAGE_SUFFIX):
        return name[: -len(PAGE_SUFFIX)]
    return name


def build_shareable_url(vault_name: str, file_path: Union[str, PurePosixPath]) -> str:
    """Build an ``obsidian://open`` link for a vault-relative note path.

    The extension is dropped and both query values are percent-encoded.
    """
    path = PurePosixPath(str(file_path).replace("\\", "/").lstrip("/"))
    target = str(path.with_suffix("")) if path.suffix else str(path)
    return f"{URL_SCHEME}://open?vault={quote(vault_name, safe='')}&file={quote(target, safe='')}"


class VaultNotes:
    """Resolve notes inside ``root`` using the current navbar settings."""

    def __init__(
        self,
        root: Union[str, Path],
        settings_provider: Callable[[], NavbarSettings],
        opener: Optional[NoteOpener] = None,
    ) -> None:
        self.root = Path(root)
        self._settings_provider = settings_provider
        self._opener = opener

    @property
    def settings(self) -> NavbarSettings:
        return self._settings_provider()

    def vault_name(self) -> str:
        return self.root.name

    def daily_note_path(self, note_date: date) -> Path:
        settings = self.settings
        name = format_date(note_date, settings.daily_note_date_format, settings.first_day_of_week)
        return self._folder(settings.daily_note_folder) / f"{name}{PAGE_SUFFIX}"

    def weekly_note_path(self, week_start: date) -> Path:
        settings = self.settings
        name = format_date(week_start, settings.weekly_note_date_format, settings.first_day_of_week)
        return self._folder(settings.weekly_note_folder) / f"{name}{PAGE_SUFFIX}"

    def _folder(self, folder: str) -> Path:
        cleaned = folder.strip().strip("/")
        return self.root / cleaned if cleaned else self.root

    def note_exists(self, note_date: date) -> bool:
        return self.daily_note_path(note_date).is_file()

    def weekly_note_exists(self, week_start: date) -> bool:
        return self.weekly_note_path(week_start).is_file()

    def resolve_daily_note(self, note_date: date) -> Path:
        """Return the note path relative to the vault root."""
        path = self.daily_note_path(note_date)
        if not path.is_file():
            raise NoteNotFoundError(note_date, path)
        return path.relative_to(self.root)

    def resolve_weekly_note(self, week_start: date) -> Path:
        path = self.weekly_note_path(week_start)
        if not path.is_file():
            raise NoteNotFoundError(week_start, path, weekly=True)
        return path.relative_to(self.root)

    def open_daily_note(self, note_date: date, open_type: OpenType) -> None:
        self._open(self.daily_note_path(note_date), open_type)

    def open_weekly_note(self, week_start: date, open_type: OpenType) -> None:
        self._open(self.weekly_note_path(week_start), open_type)

    def _open(self, path: Path, open_type: OpenType) -> None:
        if self._opener is None:
            logger.debug("No opener attached; ignoring open of %s (%s)", path, open_type.value)
            return
        self._opener(path, open_type, self.settings.set_active)
