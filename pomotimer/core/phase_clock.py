from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pomotimer.core.stats_store import StatsStore
from pomotimer.core.ticker import TickSource


logger = logging.getLogger(__name__)

LONG_BREAK_EVERY = 4

WORK_FINISHED_MESSAGE = "Work time is over! Take a break."
BREAK_FINISHED_MESSAGE = "Break is over! Let's start the next work session."


class Phase(str, Enum):
    WORK = "work"
    BREAK = "break"
    LONG_BREAK = "long_break"


PHASE_LABELS = {
    Phase.WORK: "Work time",
    Phase.BREAK: "Break time",
    Phase.LONG_BREAK: "Long break time",
}


@dataclass(frozen=True)
class Durations:
    work_seconds: int
    break_seconds: int
    long_break_seconds: int

    def is_valid(self) -> bool:
        return all(value > 0 for value in (self.work_seconds, self.break_seconds, self.long_break_seconds))


@dataclass(frozen=True)
class ClockSnapshot:
    phase: Phase
    remaining_seconds: int
    total_seconds: int
    running: bool
    completed_count: int
    progress: float


@dataclass(frozen=True)
class PhaseTransition:
    previous: Phase
    current: Phase
    message: str


class PhaseClock:
    """Work/break countdown driven by an external one-second tick."""

    def __init__(
        self,
        durations: Durations,
        stats: StatsStore | None = None,
        ticker: TickSource | None = None,
        completed_count: int = 0,
    ) -> None:
        if not durations.is_valid():
            raise ValueError("Durations must be positive")
        self._durations = durations
        self._stats = stats
        self._ticker = ticker
        self._phase = Phase.WORK
        self._running = False
        self._completed_count = max(0, completed_count)
        self._total_sec = durations.work_seconds
        self._remaining_sec = durations.work_seconds

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_sec

    @property
    def running(self) -> bool:
        return self._running

    @property
    def completed_count(self) -> int:
        return self._completed_count

    @property
    def durations(self) -> Durations:
        return self._durations

    def start(self) -> bool:
        """Starts ticking. Returns False when the clock was already running."""
        if self._running:
            return False
        self._running = True
        if self._ticker is not None:
            self._ticker.arm()
        return True

    def pause(self) -> bool:
        """Stops ticking. Returns False when the clock was already paused."""
        if not self._running:
            return False
        self._running = False
        if self._ticker is not None:
            self._ticker.disarm()
        return True

    def reset(self) -> None:
        self.pause()
        self._enter(self._phase)

    def tick(self) -> PhaseTransition | None:
        if not self._running:
            return None
        self._remaining_sec = max(0, self._remaining_sec - 1)
        if self._remaining_sec == 0:
            return self._complete_phase()
        return None

    def on_config_changed(self, durations: Durations) -> bool:
        """Applies new durations. Returns True if the visible countdown changed.

        Only the work duration is applied to an idle clock immediately; break
        durations are picked up the next time a break starts.
        """
        if not durations.is_valid():
            logger.warning("Ignoring non-positive durations: %r", durations)
            return False
        work_changed = durations.work_seconds != self._durations.work_seconds
        self._durations = durations
        if work_changed and not self._running and self._phase == Phase.WORK:
            self._enter(Phase.WORK)
            return True
        return False

    def snapshot(self) -> ClockSnapshot:
        total = self._total_sec
        progress = (total - self._remaining_sec) / total if total > 0 else 0.0
        return ClockSnapshot(
            phase=self._phase,
            remaining_seconds=self._remaining_sec,
            total_seconds=total,
            running=self._running,
            completed_count=self._completed_count,
            progress=max(0.0, min(1.0, progress)),
        )

    def _complete_phase(self) -> PhaseTransition:
        previous = self._phase
        self.pause()
        if previous == Phase.WORK:
            self._completed_count += 1
            if self._stats is not None:
                self._stats.record_work_completion(self._durations.work_seconds)
            next_phase = self._break_phase_for(self._completed_count)
            message = WORK_FINISHED_MESSAGE
        else:
            next_phase = Phase.WORK
            message = BREAK_FINISHED_MESSAGE
        self._enter(next_phase)
        logger.info("Phase %s finished, entering %s (completed: %d)", previous.value, next_phase.value, self._completed_count)
        return PhaseTransition(previous=previous, current=next_phase, message=message)

    def _enter(self, phase: Phase) -> None:
        self._phase = phase
        self._total_sec = self._duration_of(phase)
        self._remaining_sec = self._total_sec

    def _duration_of(self, phase: Phase) -> int:
        if phase == Phase.WORK:
            return self._durations.work_seconds
        if phase == Phase.LONG_BREAK:
            return self._durations.long_break_seconds
        return self._durations.break_seconds

    @staticmethod
    def _break_phase_for(completed_count: int) -> Phase:
        if completed_count % LONG_BREAK_EVERY == 0:
            return Phase.LONG_BREAK
        return Phase.BREAK
