from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class TickSource(Protocol):
    def arm(self) -> None: ...

    def disarm(self) -> None: ...


class QtTicker(QObject):
    """One-second repeating QTimer. Arming an active ticker does nothing."""

    def __init__(self, on_tick: Callable[[], None], interval_ms: int = TICK_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(on_tick)

    def arm(self) -> None:
        if self._timer.isActive():
            return
        self._timer.start()

    def disarm(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
