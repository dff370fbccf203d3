from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from datetime import date
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QApplication, QFileDialog

from dailynav.app import config
from dailynav.app.ui.main_window import MainWindow


# ============================================================================
# DEBUG CONFIGURATION - Environment Variables
# ============================================================================
# DAILYNAV_DEBUG   - DEBUG-level logging for navbar renders and navigation
# DAILYNAV_CONFIG  - Alternate path for the global JSON config file
# ============================================================================

def _debug_enabled(var_name: str) -> bool:
    """Check if a debug flag is enabled."""
    return os.getenv(var_name, "0") not in ("0", "false", "False", "", None)


def _diag(msg: str) -> None:
    """Lightweight diagnostic logger for startup/teardown events."""
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
    print(f"[DailyNavDiag {timestamp}] {msg}", file=sys.stderr)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse daily notes with a week navbar.")
    parser.add_argument("--vault", help="Vault folder to open (defaults to the last one used)")
    parser.add_argument("--date", help="Open the daily note for this ISO date instead of today")
    return parser.parse_args(argv)


def _resolve_vault(hint: Optional[str]) -> Optional[Path]:
    candidate = hint or config.load_last_vault()
    if candidate and Path(candidate).is_dir():
        return Path(candidate)
    chosen = QFileDialog.getExistingDirectory(None, "Select vault folder")
    return Path(chosen) if chosen else None


def main() -> None:
    args = _parse_args(sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if _debug_enabled("DAILYNAV_DEBUG") else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config.init_settings()
    qt_app = QApplication(sys.argv)
    vault = _resolve_vault(args.vault)
    if vault is None:
        _diag("No vault selected; quitting.")
        return
    start_date = date.fromisoformat(args.date) if args.date else date.today()
    window = MainWindow(vault)
    window.resize(1000, 700)
    window.open_initial(window.manager.host.daily_note_path(start_date))
    config.save_last_vault(str(vault))
    window.show()
    _diag(f"Opened vault {vault}; entering Qt event loop.")
    sys.exit(qt_app.exec())


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
