from __future__ import annotations

"""Short audible cue played when a phase finishes."""

import logging

from PyQt6.QtWidgets import QApplication


logger = logging.getLogger(__name__)


def play_notification_sound() -> None:
    try:
        QApplication.beep()
    except Exception:
        logger.exception("Failed to play notification sound")
