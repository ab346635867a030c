"""
Application bootstrap - Wires settings, session, services and the form.

Architecture Decision: Presentation Layer
This layer only handles UI logic. Business logic is delegated to Services.
"""

import sys
import asyncio
import logging
from functools import partial
from PySide6.QtWidgets import QApplication
import qdarktheme

from timesheet_exporter.infra.config import get_settings
from timesheet_exporter.infra.session import SessionStore
from timesheet_exporter.infra.clockify import ClockifyClient
from timesheet_exporter.services import TimesheetService, ExcelExportService
from timesheet_exporter.i18n import set_language, tr
from .timesheet_form import TimesheetForm

logger = logging.getLogger(__name__)


class TimesheetApp:
    """
    Main application class: one QApplication, one event loop, one window.
    """

    def __init__(self):
        self.app = QApplication(sys.argv)

        # Settings
        self.settings = get_settings()
        set_language(self.settings.language)
        self.app.setApplicationName(tr("app.name"))

        # Event loop for async operations (driven with run_until_complete)
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

        self._apply_theme(self.settings.theme)

        # Session + services
        self.session = SessionStore(self.settings.session_file)
        self.exporter = ExcelExportService(self.session, self.settings.export_dir)
        client_factory = partial(
            ClockifyClient,
            base_url=self.settings.api_base_url,
            timeout=self.settings.request_timeout,
        )
        self.service = TimesheetService(self.session, client_factory, self.exporter)

        self.window = TimesheetForm(self.service, self.exporter)
        logger.info(f"Exports go to {self.settings.export_dir}")

    def _apply_theme(self, theme: str):
        """Apply the specified theme using qdarktheme.

        Args:
            theme: 'light', 'dark', or 'auto' (follows system)
        """
        if theme == "auto":
            qdarktheme.setup_theme("auto")
        elif theme == "dark":
            qdarktheme.setup_theme("dark")
        else:
            qdarktheme.setup_theme("light")

    def run(self):
        """Run the application"""
        self.window.show()
        try:
            return self.app.exec()
        finally:
            self.loop.close()
