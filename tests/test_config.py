import json
import logging

import pytest

from dailynav.app import config
from dailynav.app.settings import DEFAULT_SETTINGS, NavbarSettings
from dailynav.app.types import FirstDayOfWeek, OpenType


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "dailynav_config.json"
    monkeypatch.setattr(config, "GLOBAL_CONFIG", path)
    return path


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_missing_file_gives_defaults(config_file):
    assert config.load_navbar_settings() == DEFAULT_SETTINGS
    assert config.load_last_vault() is None


def test_corrupt_file_gives_defaults(config_file):
    config_file.write_text("{not json", encoding="utf-8")
    assert config.load_navbar_settings() == DEFAULT_SETTINGS


def test_settings_round_trip_through_json(config_file):
    settings = NavbarSettings(
        date_format="dd",
        default_open_type=OpenType.NEW_SPLIT,
        enable_weekly_note_button=True,
        first_day_of_week=FirstDayOfWeek.SUNDAY,
        daily_note_folder="Journal/Daily",
    )
    config.save_navbar_settings(settings)
    stored = json.loads(config_file.read_text(encoding="utf-8"))["navbar"]
    assert stored["default_open_type"] == "Split right"
    assert stored["first_day_of_week"] == "Sunday"
    assert config.load_navbar_settings() == settings


def test_blank_formats_fall_back_to_defaults(config_file):
    _write(config_file, {"navbar": {"date_format": "  ", "tooltip_date_format": "", "weekly_note_display_format": "W"}})
    loaded = config.load_navbar_settings()
    assert loaded.date_format == "ddd"
    assert loaded.tooltip_date_format == "YYYY-MM-DD"
    assert loaded.weekly_note_display_format == "W"


def test_folders_lose_surrounding_slashes(config_file):
    _write(config_file, {"navbar": {"daily_note_folder": "/Journal/", "weekly_note_folder": " Weekly "}})
    loaded = config.load_navbar_settings()
    assert loaded.daily_note_folder == "Journal"
    assert loaded.weekly_note_folder == "Weekly"


def test_unknown_enum_value_keeps_default(config_file, caplog):
    _write(config_file, {"navbar": {"default_open_type": "Sideways", "first_day_of_week": "Sunday"}})
    with caplog.at_level(logging.WARNING):
        loaded = config.load_navbar_settings()
    assert loaded.default_open_type is OpenType.ACTIVE_PANE
    assert loaded.first_day_of_week is FirstDayOfWeek.SUNDAY
    assert "Sideways" in caplog.text


def test_saving_settings_keeps_other_keys(config_file):
    config.save_last_vault("/tmp/vault")
    config.save_navbar_settings(NavbarSettings(show_extra_buttons=True))
    assert config.load_last_vault() == "/tmp/vault"
    assert config.load_navbar_settings().show_extra_buttons is True
