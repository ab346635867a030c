"""UI layer - PySide6 GUI components

The application bootstrap lives in ``timesheet_exporter.ui.app`` so the
widgets can be imported without the theme package.
"""

from .timesheet_form import TimesheetForm

__all__ = ["TimesheetForm"]
