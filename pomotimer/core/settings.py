from __future__ import annotations

"""Phase durations chosen by the user, stored in minutes."""

import logging
import sqlite3
from dataclasses import dataclass, replace

from pomotimer.data.storage import Storage


logger = logging.getLogger(__name__)

SETTINGS_KEY = "durations"
DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
MAX_MINUTES = 240


@dataclass(frozen=True)
class TimerSettings:
    work_minutes: int = DEFAULT_WORK_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES

    def validate(self) -> None:
        for name in ("work_minutes", "break_minutes", "long_break_minutes"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")
            if not 0 < value <= MAX_MINUTES:
                raise ValueError(f"{name} must be between 1 and {MAX_MINUTES}")

    def with_minutes(self, **minutes: int) -> TimerSettings:
        updated = replace(self, **minutes)
        updated.validate()
        return updated

    def to_payload(self) -> dict[str, int]:
        return {
            "work": self.work_minutes,
            "break": self.break_minutes,
            "long_break": self.long_break_minutes,
        }


def load_settings(storage: Storage) -> TimerSettings:
    """Returns saved durations, falling back to defaults on anything unusable."""
    try:
        raw = storage.get_setting(SETTINGS_KEY, {})
    except sqlite3.Error:
        logger.exception("Could not read duration settings")
        return TimerSettings()
    if not isinstance(raw, dict):
        return TimerSettings()
    try:
        return TimerSettings().with_minutes(
            work_minutes=raw.get("work", DEFAULT_WORK_MINUTES),
            break_minutes=raw.get("break", DEFAULT_BREAK_MINUTES),
            long_break_minutes=raw.get("long_break", DEFAULT_LONG_BREAK_MINUTES),
        )
    except ValueError:
        logger.warning("Ignoring invalid duration settings: %r", raw)
        return TimerSettings()


def save_settings(storage: Storage, settings: TimerSettings) -> None:
    try:
        storage.set_setting(SETTINGS_KEY, settings.to_payload())
    except sqlite3.Error:
        logger.exception("Could not save duration settings")
