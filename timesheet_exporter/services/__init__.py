"""Services layer - Business logic"""

from .timesheet_service import TimesheetService, week_before_filter
from .excel_export_service import ExcelExportService

__all__ = ["TimesheetService", "week_before_filter", "ExcelExportService"]
