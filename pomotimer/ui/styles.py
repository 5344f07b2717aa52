from __future__ import annotations

from PyQt6.QtWidgets import QApplication


THEME_QSS = """
QWidget {
    background: #f4f1ee;
    color: #2f2a26;
    font-size: 13px;
}

QLabel {
    background: transparent;
}

QFrame#TimerCard, QFrame#StatsCard {
    background: #f6e4d6;
    border: none;
    border-radius: 16px;
}

QFrame#TimerCard[working="true"] {
    background: #f3d2bd;
}

QLabel#PhaseLabel {
    font-size: 18px;
    font-weight: 600;
    color: #6f645b;
}

QLabel#TimerLabel {
    font-size: 64px;
    font-weight: 700;
    color: #2d2824;
}

QFrame#TimerCard[working="true"] QLabel#TimerLabel {
    color: #cb6f40;
}

QLabel#StatValue {
    font-size: 24px;
    font-weight: 700;
    color: #2d2824;
}

QFrame#NotificationBanner {
    background: #2f2a26;
    border-radius: 12px;
}

QFrame#NotificationBanner QLabel {
    color: #fff7f2;
}

QPushButton {
    border: none;
    background: #f7eee6;
    border-radius: 16px;
    padding: 8px 14px;
    font-weight: 600;
}

QPushButton:hover {
    background: #f2e6dc;
}

QPushButton:disabled {
    color: #b3a79b;
    background: #f5efea;
}

QPushButton#PrimaryButton {
    background: #eb8f60;
    color: #ffffff;
    border-radius: 22px;
    padding: 10px 24px;
    font-size: 14px;
}

QPushButton#PrimaryButton:disabled {
    background: #efc2aa;
    color: #fff7f2;
}

QPushButton#CloseButton {
    background: transparent;
    color: #fff7f2;
    padding: 2px 8px;
}

QSpinBox {
    background: #fff7f1;
    border: none;
    border-radius: 16px;
    padding: 7px 10px;
    min-height: 22px;
}

QProgressBar {
    border: 0;
    border-radius: 4px;
    background: #eee4db;
    max-height: 8px;
    text-align: center;
}

QProgressBar::chunk {
    border-radius: 4px;
    background: #eb8f60;
}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
