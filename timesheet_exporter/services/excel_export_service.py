"""
Excel Export Service using XlsxWriter.

Writes one week of Clockify time entries into a timesheet workbook:
a header block (resource, call number, week ending), one row per entry
and a per-day summary.
"""

import datetime
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional
import xlsxwriter
from pydantic import BaseModel

from timesheet_exporter.domain.models import TimeEntry
from timesheet_exporter.infra.session import SessionStore
from timesheet_exporter.i18n import tr

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


class TimesheetRow(BaseModel):
    """One finished time entry, converted to local wall-clock time."""
    date: datetime.date
    start: datetime.datetime
    end: datetime.datetime
    hours: float
    description: str = ""
    project: str = ""


class ExcelExportService:
    """
    Generates the weekly .xlsx timesheet.

    Project names are looked up in the session's project list, which the
    submission workflow refreshes right before exporting.
    """

    def __init__(self, session: SessionStore, export_dir: Path,
                 tz: Optional[datetime.tzinfo] = None):
        self.session = session
        self.export_dir = Path(export_dir)
        self.tz = tz  # None means the machine's local timezone

    def __call__(self, resource: str, call_no: str, time_entries: List[TimeEntry],
                 week_ending: datetime.date, include_project: bool) -> Path:
        return self.export(resource, call_no, time_entries, week_ending, include_project)

    @staticmethod
    def week_dates(week_ending: datetime.date) -> List[datetime.date]:
        """The seven days ending on (and including) ``week_ending``"""
        first = week_ending - datetime.timedelta(days=DAYS_PER_WEEK - 1)
        return [first + datetime.timedelta(days=i) for i in range(DAYS_PER_WEEK)]

    def _to_local(self, value: datetime.datetime) -> datetime.datetime:
        # xlsxwriter only accepts naive datetimes
        return value.astimezone(self.tz).replace(tzinfo=None)

    def build_rows(self, time_entries: List[TimeEntry], week_ending: datetime.date) -> List[TimesheetRow]:
        """Convert entries to rows, keeping finished entries of the week only"""
        dates = self.week_dates(week_ending)
        project_names = {p.id: p.name for p in self.session.preferences.projects}

        rows = []
        for entry in time_entries:
            if entry.is_running:
                continue

            start = self._to_local(entry.timeInterval.start)
            end = self._to_local(entry.timeInterval.end)
            if not dates[0] <= start.date() <= dates[-1]:
                continue

            rows.append(TimesheetRow(
                date=start.date(),
                start=start,
                end=end,
                hours=round(entry.duration_seconds / 3600.0, 2),
                description=entry.description or "",
                project=project_names.get(entry.projectId, "") if entry.projectId else "",
            ))

        rows.sort(key=lambda r: r.start)
        return rows

    def daily_totals(self, rows: List[TimesheetRow], week_ending: datetime.date) -> Dict[datetime.date, float]:
        totals = {d: 0.0 for d in self.week_dates(week_ending)}
        for row in rows:
            totals[row.date] = round(totals[row.date] + row.hours, 2)
        return totals

    def output_path(self, resource: str, week_ending: datetime.date) -> Path:
        parts = ["timesheet"]
        safe_resource = re.sub(r"[^\w-]", "_", resource.strip())
        if safe_resource:
            parts.append(safe_resource)
        parts.append(week_ending.isoformat())
        return self.export_dir / ("_".join(parts) + ".xlsx")

    def export(self, resource: str, call_no: str, time_entries: List[TimeEntry],
               week_ending: datetime.date, include_project: bool) -> Path:
        """
        Write the timesheet workbook.

        Args:
            resource: Resource code shown in the header
            call_no: Call number shown in the header
            time_entries: Entries as returned by Clockify
            week_ending: Last day of the exported week
            include_project: Add a Project column

        Returns:
            Path of the written file
        """
        rows = self.build_rows(time_entries, week_ending)
        path = self.output_path(resource, week_ending)
        path.parent.mkdir(parents=True, exist_ok=True)

        workbook = xlsxwriter.Workbook(str(path))

        formats = {
            'label': workbook.add_format({'bold': True}),
            'header': workbook.add_format({
                'bold': True, 'bg_color': '#4472C4', 'font_color': 'white', 'border': 1
            }),
            'date': workbook.add_format({'num_format': 'yyyy-mm-dd', 'border': 1}),
            'date_plain': workbook.add_format({'num_format': 'yyyy-mm-dd'}),
            'time': workbook.add_format({'num_format': 'hh:mm', 'border': 1}),
            'text': workbook.add_format({'border': 1}),
            'hours': workbook.add_format({'num_format': '0.00', 'border': 1}),
            'total_label': workbook.add_format({'bold': True, 'bg_color': '#FFF2CC', 'border': 1}),
            'total': workbook.add_format({
                'bold': True, 'bg_color': '#FFF2CC', 'border': 1, 'num_format': '0.00'
            }),
        }

        worksheet = workbook.add_worksheet(tr("export.sheet_name"))
        self._write_sheet(worksheet, formats, resource, call_no, rows, week_ending, include_project)
        workbook.close()

        logger.info(f"Exported {len(rows)} entries for week ending {week_ending} to {path}")
        return path

    def _write_sheet(self, worksheet, formats, resource, call_no, rows, week_ending, include_project):
        # Header block
        worksheet.write(0, 0, tr("form.resource"), formats['label'])
        worksheet.write(0, 1, resource)
        worksheet.write(1, 0, tr("form.call_no"), formats['label'])
        worksheet.write(1, 1, call_no)
        worksheet.write(2, 0, tr("form.week_ending"), formats['label'])
        worksheet.write_datetime(
            2, 1, datetime.datetime.combine(week_ending, datetime.time()), formats['date_plain']
        )

        # Entry table
        headers = [tr("export.col_date"), tr("export.col_day")]
        if include_project:
            headers.append(tr("export.col_project"))
        headers += [tr("export.col_description"), tr("export.col_start"),
                    tr("export.col_end"), tr("export.col_hours")]

        row_idx = 4
        for col, header in enumerate(headers):
            worksheet.write(row_idx, col, header, formats['header'])

        for row in rows:
            row_idx += 1
            col = 0
            worksheet.write_datetime(
                row_idx, col, datetime.datetime.combine(row.date, datetime.time()), formats['date']
            )
            col += 1
            worksheet.write(row_idx, col, row.date.strftime("%a"), formats['text'])
            col += 1
            if include_project:
                worksheet.write(row_idx, col, row.project, formats['text'])
                col += 1
            worksheet.write(row_idx, col, row.description, formats['text'])
            col += 1
            worksheet.write_datetime(row_idx, col, row.start, formats['time'])
            col += 1
            worksheet.write_datetime(row_idx, col, row.end, formats['time'])
            col += 1
            worksheet.write_number(row_idx, col, row.hours, formats['hours'])

        hours_col = len(headers) - 1
        total_hours = round(sum(r.hours for r in rows), 2)
        row_idx += 1
        worksheet.write(row_idx, hours_col - 1, tr("export.total"), formats['total_label'])
        worksheet.write_number(row_idx, hours_col, total_hours, formats['total'])

        # Daily summary
        row_idx += 2
        totals = self.daily_totals(rows, week_ending)
        for col, day in enumerate(totals):
            worksheet.write(row_idx, col, day.strftime("%a, %d. %b"), formats['header'])
            worksheet.write_number(row_idx + 1, col, totals[day], formats['hours'])

        worksheet.set_column(0, 1, 12)
        worksheet.set_column(2, hours_col - 3, 30)
        worksheet.set_column(hours_col - 2, hours_col, 10)
