from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from dailynav.app.settings import (
    BOOL_FIELDS,
    DEFAULT_SETTINGS,
    ENUM_FIELDS,
    FOLDER_FIELDS,
    FORMAT_FIELDS,
    NavbarSettings,
    settings_to_dict,
)

logger = logging.getLogger(__name__)

GLOBAL_CONFIG = Path(os.getenv("DAILYNAV_CONFIG") or Path.home() / ".dailynav_config.json")
NAVBAR_KEY = "navbar"


def init_settings() -> None:
    GLOBAL_CONFIG.parent.mkdir(parents=True, exist_ok=True)


def _read_global_config() -> dict:
    """Return the parsed global config, or an empty dict on error/missing."""
    if not GLOBAL_CONFIG.exists():
        return {}
    try:
        payload = json.loads(GLOBAL_CONFIG.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _update_global_config(updates: dict) -> None:
    """Merge updates into global config file."""
    existing = _read_global_config()
    existing.update(updates)
    GLOBAL_CONFIG.write_text(json.dumps(existing, indent=2), encoding="utf-8")


def load_last_vault() -> Optional[str]:
    payload = _read_global_config()
    last = payload.get("last_vault")
    return last if isinstance(last, str) else None


def save_last_vault(path: str) -> None:
    _update_global_config({"last_vault": str(Path(path))})


def load_navbar_settings() -> NavbarSettings:
    """Load navbar settings, falling back to defaults for blank or unknown values."""
    raw = _read_global_config().get(NAVBAR_KEY)
    if not isinstance(raw, dict):
        return DEFAULT_SETTINGS
    values: dict = {}
    for name in FORMAT_FIELDS:
        value = raw.get(name)
        if isinstance(value, str) and value.strip():
            values[name] = value
    for name in FOLDER_FIELDS:
        value = raw.get(name)
        if isinstance(value, str):
            values[name] = value.strip().strip("/")
    for name in BOOL_FIELDS:
        if name in raw:
            values[name] = bool(raw[name])
    for name, enum_type in ENUM_FIELDS.items():
        if name not in raw:
            continue
        try:
            values[name] = enum_type(raw[name])
        except ValueError:
            logger.warning("Ignoring unknown %s value %r in %s", name, raw[name], GLOBAL_CONFIG)
    return DEFAULT_SETTINGS.with_changes(**values)


def save_navbar_settings(settings: NavbarSettings) -> None:
    _update_global_config({NAVBAR_KEY: settings_to_dict(settings)})
