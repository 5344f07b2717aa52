from __future__ import annotations

"""Application entry point.

Configures logging, opens the storage, builds the timer session and starts
the main window.
"""

import logging
import os
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from pomotimer.core.session import TimerSession
from pomotimer.data.storage import Storage
from pomotimer.ui.main_window import MainWindow
from pomotimer.ui.styles import apply_theme


def default_db_path() -> Path:
    """Path from POMOTIMER_DB, or an SQLite file in the current directory."""
    override = os.environ.get("POMOTIMER_DB")
    if override:
        return Path(override)
    return Path.cwd() / "pomodoro.db"


def configure_logging() -> None:
    level = os.environ.get("POMOTIMER_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """Builds the application's dependencies and runs the Qt event loop."""
    configure_logging()
    app = QApplication(sys.argv)
    apply_theme(app)

    storage = Storage(default_db_path())
    storage.init_db()

    session = TimerSession(storage)

    window = MainWindow(session)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
