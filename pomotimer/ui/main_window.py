from __future__ import annotations

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from pomotimer.core.session import DisplayUpdate, TimerSession
from pomotimer.core.settings import MAX_MINUTES
from pomotimer.core.sound import play_notification_sound


NOTIFICATION_TIMEOUT_MS = 5000


class NotificationBanner(QFrame):
    """Message strip that hides itself after a few seconds or on close."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("NotificationBanner")
        self._message = QLabel()
        self._message.setWordWrap(True)
        close_btn = QPushButton("×")
        close_btn.setObjectName("CloseButton")
        close_btn.clicked.connect(self.hide)

        layout = QHBoxLayout(self)
        layout.addWidget(self._message, 1)
        layout.addWidget(close_btn)

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.setInterval(NOTIFICATION_TIMEOUT_MS)
        self._hide_timer.timeout.connect(self.hide)
        self.hide()

    def show_message(self, message: str) -> None:
        self._message.setText(message)
        self.show()
        # restart so a newer message gets its full display time
        self._hide_timer.start()


class MainWindow(QMainWindow):
    def __init__(self, session: TimerSession) -> None:
        super().__init__()
        self.setWindowTitle("Pomodoro Timer")
        self.resize(460, 560)

        self.session = session

        self._build_ui()
        self._connect_signals()

        self.session.refresh()
        self._update_buttons(self.session.running)

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)

        self.notification = NotificationBanner()
        root_layout.addWidget(self.notification)

        self.timer_card = QFrame()
        self.timer_card.setObjectName("TimerCard")
        self.timer_card.setProperty("working", False)
        card_layout = QVBoxLayout(self.timer_card)
        self.phase_label = QLabel()
        self.phase_label.setObjectName("PhaseLabel")
        self.phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.time_label = QLabel("00:00")
        self.time_label.setObjectName("TimerLabel")
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setTextVisible(False)
        card_layout.addWidget(self.phase_label)
        card_layout.addWidget(self.time_label)
        card_layout.addWidget(self.progress_bar)
        root_layout.addWidget(self.timer_card, 1)

        controls = QHBoxLayout()
        self.start_btn = QPushButton("Start")
        self.start_btn.setObjectName("PrimaryButton")
        self.pause_btn = QPushButton("Pause")
        self.reset_btn = QPushButton("Reset")
        controls.addStretch()
        controls.addWidget(self.start_btn)
        controls.addWidget(self.pause_btn)
        controls.addWidget(self.reset_btn)
        controls.addStretch()
        root_layout.addLayout(controls)

        durations_form = QFormLayout()
        settings = self.session.settings
        self.work_minutes = self._minutes_box(settings.work_minutes)
        self.break_minutes = self._minutes_box(settings.break_minutes)
        self.long_break_minutes = self._minutes_box(settings.long_break_minutes)
        durations_form.addRow("Work (min):", self.work_minutes)
        durations_form.addRow("Break (min):", self.break_minutes)
        durations_form.addRow("Long break (min):", self.long_break_minutes)
        root_layout.addLayout(durations_form)

        stats_card = QFrame()
        stats_card.setObjectName("StatsCard")
        stats_form = QFormLayout(stats_card)
        self.completed_label = QLabel("0")
        self.completed_label.setObjectName("StatValue")
        self.today_work_label = QLabel("0 min")
        self.today_work_label.setObjectName("StatValue")
        stats_form.addRow("Completed pomodoros:", self.completed_label)
        stats_form.addRow("Work time today:", self.today_work_label)
        root_layout.addWidget(stats_card)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self.session.toggle)
        self.addAction(space_action)

    def _minutes_box(self, value: int) -> QSpinBox:
        box = QSpinBox()
        box.setRange(1, MAX_MINUTES)
        box.setKeyboardTracking(False)
        box.setValue(value)
        return box

    def _connect_signals(self) -> None:
        self.start_btn.clicked.connect(self.session.start)
        self.pause_btn.clicked.connect(self.session.pause)
        self.reset_btn.clicked.connect(self.session.reset)
        self.work_minutes.valueChanged.connect(self.session.set_work_duration)
        self.break_minutes.valueChanged.connect(self.session.set_break_duration)
        self.long_break_minutes.valueChanged.connect(self.session.set_long_break_duration)

        self.session.display_updated.connect(self._render)
        self.session.notified.connect(self.notification.show_message)
        self.session.sound_requested.connect(play_notification_sound)
        self.session.active_state_changed.connect(self._set_working)
        self.session.running_changed.connect(self._update_buttons)

    def _render(self, update: DisplayUpdate) -> None:
        self.time_label.setText(update.formatted_time)
        self.phase_label.setText(update.phase_label)
        self.progress_bar.setValue(int(update.progress_percent * 10))
        self.completed_label.setText(str(update.completed_count))
        self.today_work_label.setText(update.today_minutes_label)

    def _set_working(self, active: bool) -> None:
        self.timer_card.setProperty("working", active)
        # dynamic properties are only picked up by QSS after a re-polish
        style = self.timer_card.style()
        style.unpolish(self.timer_card)
        style.polish(self.timer_card)
        for child in (self.time_label, self.phase_label):
            style.unpolish(child)
            style.polish(child)

    def _update_buttons(self, running: bool) -> None:
        self.start_btn.setEnabled(not running)
        self.pause_btn.setEnabled(running)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.session.pause()
        event.accept()
