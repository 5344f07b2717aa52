from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable

from pomotimer.data.storage import Storage


logger = logging.getLogger(__name__)

STATS_KEY = "pomodoroStats"


def date_key(day: date) -> str:
    """Single stringification used for both storing and comparing days."""
    return day.isoformat()


@dataclass(frozen=True)
class StatsRecord:
    completed_pomodoros: int
    today_work_seconds: int
    last_updated: str

    @classmethod
    def empty(cls, day: date) -> StatsRecord:
        return cls(completed_pomodoros=0, today_work_seconds=0, last_updated=date_key(day))

    def to_payload(self) -> dict[str, Any]:
        return {
            "completedPomodoros": self.completed_pomodoros,
            "todayWorkTime": self.today_work_seconds,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_payload(cls, payload: Any) -> StatsRecord | None:
        if not isinstance(payload, dict):
            return None
        completed = payload.get("completedPomodoros")
        work_seconds = payload.get("todayWorkTime")
        last_updated = payload.get("lastUpdated")
        for value in (completed, work_seconds):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                return None
        if not isinstance(last_updated, str):
            return None
        return cls(completed_pomodoros=completed, today_work_seconds=work_seconds, last_updated=last_updated)


class StatsStore:
    """Today's pomodoro counters, persisted as one record that is overwritten on every write."""

    def __init__(self, storage: Storage, today: Callable[[], date] = date.today) -> None:
        self._storage = storage
        self._today = today
        self._record = StatsRecord.empty(today())

    @property
    def record(self) -> StatsRecord:
        return self._record

    def load(self) -> StatsRecord:
        today = self._today()
        try:
            payload = self._storage.get_setting(STATS_KEY)
        except (sqlite3.Error, OSError):
            logger.exception("Could not read stats record, starting from zero")
            payload = None

        record = StatsRecord.from_payload(payload)
        if record is None:
            if payload is not None:
                logger.warning("Ignoring malformed stats record: %r", payload)
            record = StatsRecord.empty(today)
        elif record.last_updated != date_key(today):
            logger.info("Stats record is from %s, resetting for a new day", record.last_updated)
            record = StatsRecord.empty(today)

        self._record = record
        return record

    def record_work_completion(self, work_duration_seconds: int) -> StatsRecord:
        self._record = replace(
            self._record,
            completed_pomodoros=self._record.completed_pomodoros + 1,
            today_work_seconds=self._record.today_work_seconds + work_duration_seconds,
            last_updated=date_key(self._today()),
        )
        try:
            self._storage.set_setting(STATS_KEY, self._record.to_payload())
        except (sqlite3.Error, OSError, TypeError, ValueError):
            logger.exception("Could not persist stats record")
        return self._record
