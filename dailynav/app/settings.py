from __future__ import annotations

from dataclasses import dataclass, fields, replace

from dailynav.app.types import FirstDayOfWeek, OpenType


@dataclass(frozen=True)
class NavbarSettings:
    """Read-only navbar configuration threaded through every render."""

    # Daily notes
    date_format: str = "ddd"
    tooltip_date_format: str = "YYYY-MM-DD"
    daily_note_date_format: str = "YYYY-MM-DD"
    default_open_type: OpenType = OpenType.ACTIVE_PANE
    daily_note_folder: str = ""

    # Weekly notes
    enable_weekly_note_button: bool = False
    weekly_note_date_format: str = "gggg-[W]ww"
    weekly_note_display_format: str = "ww"
    weekly_note_open_type: OpenType = OpenType.ACTIVE_PANE
    weekly_note_folder: str = ""

    # General
    first_day_of_week: FirstDayOfWeek = FirstDayOfWeek.MONDAY
    set_active: bool = True
    show_extra_buttons: bool = False

    def with_changes(self, **changes) -> "NavbarSettings":
        return replace(self, **changes)


DEFAULT_SETTINGS = NavbarSettings()

FORMAT_FIELDS = (
    "date_format",
    "tooltip_date_format",
    "daily_note_date_format",
    "weekly_note_date_format",
    "weekly_note_display_format",
)
BOOL_FIELDS = ("enable_weekly_note_button", "set_active", "show_extra_buttons")
FOLDER_FIELDS = ("daily_note_folder", "weekly_note_folder")
ENUM_FIELDS = {
    "default_open_type": OpenType,
    "weekly_note_open_type": OpenType,
    "first_day_of_week": FirstDayOfWeek,
}


def settings_to_dict(settings: NavbarSettings) -> dict:
    payload = {}
    for field in fields(settings):
        value = getattr(settings, field.name)
        payload[field.name] = value.value if field.name in ENUM_FIELDS else value
    return payload
