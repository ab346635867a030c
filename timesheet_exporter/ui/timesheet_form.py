"""
Timesheet Form - The single window of the application.

Architecture Decision: Presentation Layer
The form only binds widgets to values and shows validation errors.
Validation lives in the domain layer, the export workflow in
TimesheetService.
"""

import asyncio
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLineEdit, QLabel, QCheckBox, QPushButton, QApplication
)

from timesheet_exporter.domain.validation import FieldError, ValidationResult, validate_form
from timesheet_exporter.services import TimesheetService, ExcelExportService
from timesheet_exporter.i18n import tr
from .date_picker import DatePicker
from .help_dialog import HelpDialog
from .connection_dialog import ConnectionDialog


FIELDS = ("resource", "call_no", "date")


class TimesheetForm(QMainWindow):
    """
    Form with Resource, Call No, Week Ending and Include project name.

    Defaults are read from the session once, when the window is built.
    """

    def __init__(self, service: TimesheetService, exporter: ExcelExportService, parent=None):
        super().__init__(parent)
        self.service = service
        self.exporter = exporter
        self.loop = asyncio.get_event_loop()

        self.setWindowTitle(tr("app.name"))
        self.setMinimumWidth(380)

        self._setup_ui()
        self._load_defaults()

        self.service.on_state_changed = self._on_exporting_changed
        self._update_connection_status()

    def _setup_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)

        title = QLabel(tr("form.title"))
        title.setStyleSheet("font-size: 16px; font-weight: bold;")
        layout.addWidget(title)

        form = QFormLayout()
        self.error_labels = {}

        self.resource_edit = QLineEdit()
        form.addRow(tr("form.resource"), self._with_error(self.resource_edit, "resource"))

        self.call_no_edit = QLineEdit()
        form.addRow(tr("form.call_no"), self._with_error(self.call_no_edit, "call_no"))

        self.date_picker = DatePicker()
        form.addRow(tr("form.week_ending"), self._with_error(self.date_picker, "date"))

        self.check_include_project = QCheckBox(tr("form.include_project"))
        form.addRow(self.check_include_project)

        layout.addLayout(form)

        self.export_btn = QPushButton(tr("form.export"))
        self.export_btn.setDefault(True)
        self.export_btn.setStyleSheet("""
            QPushButton {
                background-color: #4CAF50;
                color: white;
                font-weight: bold;
                padding: 8px 16px;
                border: none;
                border-radius: 6px;
            }
            QPushButton:hover {
                background-color: #45a049;
            }
            QPushButton:disabled {
                background-color: #9E9E9E;
            }
        """)
        self.export_btn.clicked.connect(self._on_submit)
        layout.addWidget(self.export_btn)

        footer = QHBoxLayout()
        btn_help = QPushButton(tr("form.help"))
        btn_help.clicked.connect(self._show_help)
        btn_connection = QPushButton(tr("form.connection"))
        btn_connection.clicked.connect(self._show_connection)
        footer.addWidget(btn_help)
        footer.addStretch()
        footer.addWidget(btn_connection)
        layout.addLayout(footer)

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        self.setCentralWidget(central)

    def _with_error(self, widget: QWidget, name: str) -> QWidget:
        """Stack an (initially hidden) error label under the input"""
        container = QWidget()
        box = QVBoxLayout(container)
        box.setContentsMargins(0, 0, 0, 0)
        box.setSpacing(2)
        box.addWidget(widget)

        error_label = QLabel("")
        error_label.setStyleSheet("color: #c62828; font-size: 11px;")
        error_label.hide()
        box.addWidget(error_label)
        self.error_labels[name] = error_label
        return container

    def _load_defaults(self):
        prefs = self.service.session.preferences
        self.resource_edit.setText(prefs.resource)
        self.call_no_edit.setText(prefs.call_no)
        self.check_include_project.setChecked(prefs.prefers_project_name or False)

    def _update_connection_status(self, name: str = ""):
        if not self.service.session.preferences.is_connected:
            self.status_label.setText(tr("status.not_connected"))
        elif name:
            self.status_label.setText(tr("status.connected", name=name))
        else:
            self.status_label.setText("")

    @staticmethod
    def _error_text(error: FieldError) -> str:
        if error.code == "required":
            return tr("validation.required")
        if error.code == "max_length":
            return tr("validation.max_length", max=error.limit)
        return error.message

    def _show_errors(self, result: ValidationResult):
        for name in FIELDS:
            label = self.error_labels[name]
            errors = result.errors_for(name)
            if errors:
                label.setText(self._error_text(errors[0]))
                label.show()
            else:
                label.hide()

    def _on_exporting_changed(self, exporting: bool):
        self.export_btn.setText(tr("form.exporting") if exporting else tr("form.export"))
        self.export_btn.setEnabled(not exporting)
        # Repaint before the event loop blocks on the requests
        QApplication.processEvents()

    def _on_submit(self):
        result = validate_form(
            self.resource_edit.text(),
            self.call_no_edit.text(),
            self.date_picker.value(),
            self.check_include_project.isChecked(),
        )
        self._show_errors(result)
        if not result.is_valid:
            return

        form = result.value
        if not self.service.session.preferences.is_connected:
            self._update_connection_status()
            return

        ok = self.loop.run_until_complete(self.service.submit(form))
        if ok:
            path = self.exporter.output_path(form.resource, form.date)
            self.status_label.setText(tr("status.exported", path=path))
        elif self.service.last_error is not None:
            self.status_label.setText(tr("status.failed", error=self.service.last_error))

    def _show_help(self):
        HelpDialog(self).exec()

    def _show_connection(self):
        dialog = ConnectionDialog(self.service, self)
        dialog.connected.connect(lambda name: self._update_connection_status(name))
        dialog.disconnected.connect(self._update_connection_status)
        dialog.exec()
