from datetime import date

import pytest

from pomotimer.core.phase_clock import (
    BREAK_FINISHED_MESSAGE,
    WORK_FINISHED_MESSAGE,
    Durations,
    Phase,
    PhaseClock,
)
from pomotimer.core.stats_store import StatsStore
from pomotimer.data.storage import Storage


class FakeTicker:
    def __init__(self) -> None:
        self.armed = False
        self.arm_calls = 0
        self.disarm_calls = 0

    def arm(self) -> None:
        self.arm_calls += 1
        self.armed = True

    def disarm(self) -> None:
        self.disarm_calls += 1
        self.armed = False


def make_clock(work: int = 3, short: int = 2, long: int = 5, **kwargs) -> PhaseClock:
    return PhaseClock(Durations(work, short, long), **kwargs)


def run_phase(clock: PhaseClock):
    clock.start()
    transition = None
    while transition is None:
        transition = clock.tick()
    return transition


def test_initial_state() -> None:
    clock = make_clock(work=1500, completed_count=2)
    assert clock.phase == Phase.WORK
    assert clock.remaining_seconds == 1500
    assert clock.running is False
    assert clock.completed_count == 2


def test_rejects_non_positive_durations() -> None:
    with pytest.raises(ValueError):
        make_clock(work=0)


def test_tick_decrements_by_one_while_running() -> None:
    clock = make_clock(work=10)
    clock.start()

    for expected in range(9, 0, -1):
        assert clock.tick() is None
        assert clock.remaining_seconds == expected


def test_tick_ignored_while_paused() -> None:
    clock = make_clock(work=10)
    assert clock.tick() is None
    assert clock.remaining_seconds == 10


def test_reaching_zero_transitions_on_same_tick() -> None:
    clock = make_clock(work=2, short=4)
    clock.start()
    clock.tick()

    transition = clock.tick()

    assert transition is not None
    assert transition.previous == Phase.WORK
    assert transition.current == Phase.BREAK
    assert transition.message == WORK_FINISHED_MESSAGE
    assert clock.phase == Phase.BREAK
    assert clock.remaining_seconds == 4
    assert clock.running is False
    assert clock.completed_count == 1


def test_break_returns_to_work() -> None:
    clock = make_clock(work=3, short=2)
    run_phase(clock)

    transition = run_phase(clock)

    assert transition.previous == Phase.BREAK
    assert transition.current == Phase.WORK
    assert transition.message == BREAK_FINISHED_MESSAGE
    assert clock.remaining_seconds == 3
    assert clock.completed_count == 1


def test_every_fourth_work_phase_gets_long_break() -> None:
    clock = make_clock()
    breaks = []
    for _ in range(8):
        breaks.append(run_phase(clock).current)
        run_phase(clock)

    assert breaks == [
        Phase.BREAK,
        Phase.BREAK,
        Phase.BREAK,
        Phase.LONG_BREAK,
        Phase.BREAK,
        Phase.BREAK,
        Phase.BREAK,
        Phase.LONG_BREAK,
    ]


def test_seeded_count_drives_long_break_cadence() -> None:
    clock = make_clock(long=7, completed_count=3)

    transition = run_phase(clock)

    assert transition.current == Phase.LONG_BREAK
    assert clock.remaining_seconds == 7
    assert clock.snapshot().total_seconds == 7


def test_start_twice_arms_ticker_once() -> None:
    ticker = FakeTicker()
    clock = make_clock(ticker=ticker)

    assert clock.start() is True
    assert clock.start() is False

    assert ticker.arm_calls == 1
    assert ticker.armed is True


def test_pause_disarms_and_is_noop_when_paused() -> None:
    ticker = FakeTicker()
    clock = make_clock(ticker=ticker)
    clock.start()

    assert clock.pause() is True
    assert clock.pause() is False
    assert ticker.disarm_calls == 1
    assert ticker.armed is False


def test_phase_completion_disarms_ticker() -> None:
    ticker = FakeTicker()
    clock = make_clock(work=1, ticker=ticker)
    clock.start()

    clock.tick()

    assert ticker.armed is False
    assert clock.running is False


def test_reset_is_idempotent_and_keeps_phase() -> None:
    clock = make_clock(work=3, short=10)
    run_phase(clock)
    clock.start()
    clock.tick()
    clock.tick()

    clock.reset()
    first = clock.snapshot()
    clock.reset()

    assert clock.snapshot() == first
    assert first.phase == Phase.BREAK
    assert first.remaining_seconds == 10
    assert first.running is False
    assert first.completed_count == 1


def test_progress_fraction() -> None:
    clock = make_clock(work=4)
    assert clock.snapshot().progress == 0.0
    clock.start()
    clock.tick()
    assert clock.snapshot().progress == pytest.approx(0.25)


def test_work_duration_change_while_idle_resets_remaining() -> None:
    clock = make_clock(work=1500)

    changed = clock.on_config_changed(Durations(1800, 2, 5))

    assert changed is True
    assert clock.remaining_seconds == 1800


def test_work_duration_change_while_running_keeps_remaining() -> None:
    clock = make_clock(work=1500)
    clock.start()
    clock.tick()

    changed = clock.on_config_changed(Durations(1800, 2, 5))

    assert changed is False
    assert clock.remaining_seconds == 1499


def test_break_duration_change_applies_on_next_break() -> None:
    clock = make_clock(work=2, short=4)
    run_phase(clock)

    clock.on_config_changed(Durations(2, 9, 5))
    assert clock.remaining_seconds == 4

    run_phase(clock)
    run_phase(clock)
    assert clock.phase == Phase.BREAK
    assert clock.remaining_seconds == 9


def test_non_positive_config_is_ignored() -> None:
    clock = make_clock(work=3)

    assert clock.on_config_changed(Durations(0, 2, 5)) is False
    assert clock.durations == Durations(3, 2, 5)
    assert clock.remaining_seconds == 3


def test_work_completion_is_recorded_in_stats(tmp_path) -> None:
    storage = Storage(tmp_path / "app.db")
    storage.init_db()
    stats = StatsStore(storage, today=lambda: date(2026, 3, 2))
    stats.load()
    clock = make_clock(work=1500, stats=stats)

    clock.start()
    for _ in range(1500):
        clock.tick()

    assert stats.record.completed_pomodoros == 1
    assert stats.record.today_work_seconds == 1500


def test_reset_during_long_break_restores_long_break_duration() -> None:
    clock = make_clock(work=2, short=3, long=8, completed_count=3)
    run_phase(clock)
    assert clock.phase == Phase.LONG_BREAK
    clock.start()
    clock.tick()

    clock.reset()

    assert clock.phase == Phase.LONG_BREAK
    assert clock.remaining_seconds == 8
    assert clock.snapshot().total_seconds == 8
