"""
Date picker that starts empty.

QDateEdit always holds a date, but the week-ending field has no default,
so this widget shows a button with a calendar popup and reports ``None``
until the user picks a day.
"""

import datetime
from typing import Optional
from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QPushButton, QDialog, QVBoxLayout, QCalendarWidget
)
from PySide6.QtCore import Signal, QDate

from timesheet_exporter.i18n import tr


class CalendarPopup(QDialog):
    """Modal calendar; closes as soon as a day is clicked."""

    def __init__(self, initial: Optional[datetime.date] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("date.title"))
        self.setModal(True)
        self.selected: Optional[datetime.date] = None

        layout = QVBoxLayout(self)
        self.calendar = QCalendarWidget()
        self.calendar.setGridVisible(True)
        if initial:
            self.calendar.setSelectedDate(QDate(initial.year, initial.month, initial.day))
        self.calendar.clicked.connect(self._on_clicked)
        layout.addWidget(self.calendar)

    def _on_clicked(self, qdate: QDate):
        self.selected = qdate.toPython()
        self.accept()


class DatePicker(QWidget):
    """Button showing the picked date, or a placeholder when empty."""

    date_changed = Signal(object)  # datetime.date or None

    def __init__(self, parent=None):
        super().__init__(parent)
        self._value: Optional[datetime.date] = None

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.button = QPushButton(tr("date.pick"))
        self.button.clicked.connect(self._open_calendar)
        layout.addWidget(self.button)

    def value(self) -> Optional[datetime.date]:
        return self._value

    def set_value(self, value: Optional[datetime.date]):
        self._value = value
        self.button.setText(value.strftime("%d %b %Y") if value else tr("date.pick"))
        self.date_changed.emit(value)

    def _open_calendar(self):
        popup = CalendarPopup(self._value, self)
        if popup.exec() == QDialog.Accepted and popup.selected:
            self.set_value(popup.selected)
