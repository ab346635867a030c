"""
Help dialog explaining the export steps.
"""

from PySide6.QtWidgets import QDialog, QVBoxLayout, QLabel, QDialogButtonBox

from timesheet_exporter.i18n import tr


class HelpDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("help.title"))
        self.setModal(True)
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)

        title = QLabel(tr("help.title"))
        title.setStyleSheet("font-size: 14px; font-weight: bold;")
        layout.addWidget(title)

        body = QLabel(tr("help.body"))
        body.setWordWrap(True)
        layout.addWidget(body)

        btns = QDialogButtonBox(QDialogButtonBox.Close)
        btns.rejected.connect(self.reject)
        layout.addWidget(btns)
