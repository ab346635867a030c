"""
Script to export a timesheet without opening the window.

Uses the stored Clockify connection and form defaults from the session.
"""

import sys
import asyncio
import datetime
import logging
from functools import partial
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from timesheet_exporter.domain.validation import validate_form
from timesheet_exporter.infra.config import get_settings
from timesheet_exporter.infra.session import SessionStore
from timesheet_exporter.infra.clockify import ClockifyClient
from timesheet_exporter.services import TimesheetService, ExcelExportService


async def main():
    if len(sys.argv) < 2:
        print("Usage: python export_week.py <week-ending YYYY-MM-DD> [resource] [call-no]")
        sys.exit(1)

    try:
        week_ending = datetime.date.fromisoformat(sys.argv[1])
    except ValueError:
        print(f"Error: '{sys.argv[1]}' is not a date (YYYY-MM-DD).")
        sys.exit(1)

    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    session = SessionStore(settings.session_file)
    prefs = session.preferences
    if not prefs.is_connected:
        print("Error: not connected to Clockify. Connect once from the application window.")
        sys.exit(1)

    resource = sys.argv[2] if len(sys.argv) > 2 else prefs.resource
    call_no = sys.argv[3] if len(sys.argv) > 3 else prefs.call_no

    result = validate_form(resource, call_no, week_ending, prefs.prefers_project_name)
    if not result.is_valid:
        for error in result.errors:
            print(f"Error: {error.field}: {error.message}")
        sys.exit(1)

    exporter = ExcelExportService(session, settings.export_dir)
    client_factory = partial(ClockifyClient, base_url=settings.api_base_url, timeout=settings.request_timeout)
    service = TimesheetService(session, client_factory, exporter)

    print(f"Exporting week ending {week_ending}...")
    if not await service.submit(result.value):
        print(f"Export failed: {service.last_error}")
        sys.exit(1)

    print(f"Timesheet saved to: {exporter.output_path(resource, week_ending)}")


if __name__ == "__main__":
    asyncio.run(main())
