"""
Clockify connection dialog.

Takes an API key, resolves the user and active workspace through the API
and stores them in the session.
"""

import asyncio
import logging
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QLabel,
    QDialogButtonBox, QPushButton, QMessageBox
)
from PySide6.QtCore import Signal

from timesheet_exporter.services import TimesheetService
from timesheet_exporter.i18n import tr

logger = logging.getLogger(__name__)


class ConnectionDialog(QDialog):
    """
    Shows the stored identity and lets the user (re)connect or disconnect.
    """

    # Emitted with the user's display name after a successful connect
    connected = Signal(str)
    disconnected = Signal()

    def __init__(self, service: TimesheetService, parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("connection.title"))
        self.setModal(True)
        self.setMinimumWidth(420)

        self.loop = asyncio.get_event_loop()
        self.service = service

        self._setup_ui()
        self._load_data()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.api_key_edit = QLineEdit()
        self.api_key_edit.setEchoMode(QLineEdit.Password)
        self.api_key_edit.setPlaceholderText(tr("connection.api_key_hint"))
        form.addRow(tr("connection.api_key"), self.api_key_edit)

        self.user_label = QLabel("-")
        form.addRow(tr("connection.user"), self.user_label)

        self.workspace_label = QLabel("-")
        form.addRow(tr("connection.workspace"), self.workspace_label)

        layout.addLayout(form)

        btns = QDialogButtonBox(QDialogButtonBox.Close)
        self.btn_connect = QPushButton(tr("connection.connect"))
        self.btn_connect.setDefault(True)
        self.btn_connect.clicked.connect(self._connect)
        self.btn_disconnect = QPushButton(tr("connection.disconnect"))
        self.btn_disconnect.clicked.connect(self._disconnect)
        btns.addButton(self.btn_connect, QDialogButtonBox.ActionRole)
        btns.addButton(self.btn_disconnect, QDialogButtonBox.ActionRole)
        btns.rejected.connect(self.reject)
        layout.addWidget(btns)

    def _load_data(self):
        """Fill the fields from the session"""
        prefs = self.service.session.preferences
        self.api_key_edit.setText(prefs.api_key or "")
        self.user_label.setText(prefs.user_id or "-")
        self.workspace_label.setText(prefs.workspace_id or "-")
        self.btn_disconnect.setEnabled(prefs.is_connected)

    def _connect(self):
        api_key = self.api_key_edit.text().strip()
        if not api_key:
            QMessageBox.warning(self, tr("error"), tr("connection.failed", error=tr("validation.required")))
            return

        self.btn_connect.setEnabled(False)
        try:
            user = self.loop.run_until_complete(self.service.connect(api_key))
        except Exception as e:
            logger.warning(f"Clockify connection failed: {e}")
            QMessageBox.critical(self, tr("error"), tr("connection.failed", error=e))
            return
        finally:
            self.btn_connect.setEnabled(True)

        self._load_data()
        name = user.name or user.email or user.id
        QMessageBox.information(self, tr("connection.title"), tr("connection.success", name=name))
        self.connected.emit(name)

    def _disconnect(self):
        self.service.session.disconnect()
        self._load_data()
        self.disconnected.emit()
