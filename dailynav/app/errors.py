from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional


class NavbarError(RuntimeError):
    pass


class NoteNotFoundError(NavbarError):
    """Raised when a daily or weekly note has no file in the vault."""

    def __init__(self, note_date: date, expected_path: Optional[Path] = None, *, weekly: bool = False) -> None:
        kind = "Weekly note" if weekly else "Daily note"
        where = f" at {expected_path}" if expected_path is not None else ""
        super().__init__(f"{kind} for {note_date.isoformat()} not found{where}")
        self.note_date = note_date
        self.expected_path = expected_path
        self.weekly = weekly


class NavbarDisposedError(NavbarError):
    """Raised when a navbar controller is used after its view was closed."""
