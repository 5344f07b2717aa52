from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from pomotimer.core.phase_clock import PHASE_LABELS, ClockSnapshot, Durations, Phase, PhaseClock
from pomotimer.core.settings import TimerSettings, load_settings, save_settings
from pomotimer.core.stats_store import StatsRecord, StatsStore
from pomotimer.core.ticker import QtTicker, TickSource
from pomotimer.data.storage import Storage


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayUpdate:
    formatted_time: str
    phase_label: str
    progress_percent: float
    completed_count: int
    today_minutes_label: str


def format_remaining(seconds: int) -> str:
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def build_display_update(snapshot: ClockSnapshot, record: StatsRecord) -> DisplayUpdate:
    return DisplayUpdate(
        formatted_time=format_remaining(snapshot.remaining_seconds),
        phase_label=PHASE_LABELS[snapshot.phase],
        progress_percent=snapshot.progress * 100,
        completed_count=snapshot.completed_count,
        today_minutes_label=f"{record.today_work_seconds // 60} min",
    )


def durations_from(settings: TimerSettings) -> Durations:
    return Durations(
        work_seconds=settings.work_minutes * 60,
        break_seconds=settings.break_minutes * 60,
        long_break_seconds=settings.long_break_minutes * 60,
    )


class TimerSession(QObject):
    """Owns one clock and its stats, and reports every change as a signal."""

    display_updated = pyqtSignal(object)
    notified = pyqtSignal(str)
    sound_requested = pyqtSignal()
    active_state_changed = pyqtSignal(bool)
    running_changed = pyqtSignal(bool)

    def __init__(
        self,
        storage: Storage,
        ticker: TickSource | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__()
        self._storage = storage
        self.settings = load_settings(storage)
        self.stats = StatsStore(storage, today=today)
        record = self.stats.load()
        if ticker is None:
            ticker = QtTicker(self.tick, parent=self)
        self._ticker = ticker
        self.clock = PhaseClock(
            durations_from(self.settings),
            stats=self.stats,
            ticker=ticker,
            completed_count=record.completed_pomodoros,
        )

    @property
    def running(self) -> bool:
        return self.clock.running

    def current_display(self) -> DisplayUpdate:
        return build_display_update(self.clock.snapshot(), self.stats.record)

    def refresh(self) -> None:
        self.display_updated.emit(self.current_display())

    def start(self) -> None:
        if not self.clock.start():
            return
        if self.clock.phase == Phase.WORK:
            self.active_state_changed.emit(True)
        self.running_changed.emit(True)

    def pause(self) -> None:
        if not self.clock.pause():
            return
        self.active_state_changed.emit(False)
        self.running_changed.emit(False)

    def toggle(self) -> None:
        if self.clock.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self.pause()
        self.clock.reset()
        self.refresh()

    def tick(self) -> None:
        if not self.clock.running:
            return
        transition = self.clock.tick()
        if transition is not None:
            self.active_state_changed.emit(False)
            self.running_changed.emit(False)
            self.sound_requested.emit()
            self.notified.emit(transition.message)
        self.refresh()

    def set_work_duration(self, minutes: int) -> None:
        self._apply_settings(work_minutes=minutes)

    def set_break_duration(self, minutes: int) -> None:
        self._apply_settings(break_minutes=minutes)

    def set_long_break_duration(self, minutes: int) -> None:
        self._apply_settings(long_break_minutes=minutes)

    def _apply_settings(self, **minutes: int) -> None:
        try:
            settings = self.settings.with_minutes(**minutes)
        except ValueError:
            logger.warning("Ignoring invalid duration change: %r", minutes)
            return
        if settings == self.settings:
            return
        self.settings = settings
        save_settings(self._storage, settings)
        if self.clock.on_config_changed(durations_from(settings)):
            self.refresh()
