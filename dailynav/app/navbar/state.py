"""Per-view navigation state: anchor date plus a signed week offset."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from dailynav.app.calendar_math import same_day, window_base_date

logger = logging.getLogger(__name__)


@dataclass
class NavState:
    view_id: str
    anchor_date: date
    week_offset: int = 0

    @property
    def base_date(self) -> date:
        """Anchor moved by ``week_offset`` whole weeks; feeds the window math."""
        return window_base_date(self.anchor_date, self.week_offset)

    def sync_file_date(self, file_date: Optional[date]) -> bool:
        """Follow the view's file to a new day, resetting any week navigation.

        Returns True when the anchor changed. None or the same day is a no-op.
        """
        if file_date is None or same_day(file_date, self.anchor_date):
            return False
        logger.debug(
            "Navbar %s: file date %s replaces anchor %s (offset %d reset)",
            self.view_id,
            file_date,
            self.anchor_date,
            self.week_offset,
        )
        self.anchor_date = file_date
        self.week_offset = 0
        return True

    def shift_week(self, delta: int) -> int:
        if delta not in (-1, 1):
            raise ValueError(f"Week shift must be -1 or +1, got {delta}")
        self.week_offset += delta
        return self.week_offset

    def reset_to(self, anchor: date, week_offset: int = 0) -> None:
        self.anchor_date = anchor
        self.week_offset = week_offset
