"""
Timesheet Service - Handles the export workflow behind the form.

Architecture Decision: UI-independent workflow
The window only collects values and reflects ``is_exporting``. Fetching from
Clockify, updating the session and calling the exporter happen here, so the
whole flow can be tested with a fake client and a fake exporter.
"""

import asyncio
import datetime
import logging
from typing import Any, Callable, Dict, List, Optional

from timesheet_exporter.domain.models import FormInput, PreferencesPatch, TimeEntry, ClockifyUser
from timesheet_exporter.infra.clockify import ClockifyClient
from timesheet_exporter.infra.session import SessionStore

logger = logging.getLogger(__name__)

# Clockify reads this as "entries up to the end of the given day". The
# suffix is a fixed UTC literal, not the user's local end of day.
WEEK_BEFORE_PARAM = "get-week-before"
END_OF_DAY_SUFFIX = "T23:59:59.999Z"

Exporter = Callable[[str, str, List[TimeEntry], datetime.date, bool], Any]
ClientFactory = Callable[[str], ClockifyClient]


def week_before_filter(week_ending: datetime.date) -> Dict[str, str]:
    """Query filter selecting the week that ends on ``week_ending``"""
    return {WEEK_BEFORE_PARAM: f"{week_ending.strftime('%Y-%m-%d')}{END_OF_DAY_SUFFIX}"}


class TimesheetService:
    """
    Runs one export per submit.

    Attributes:
        is_exporting: True while a submission is in flight
        on_state_changed: Optional callback receiving the new flag value
    """

    def __init__(self, session: SessionStore, client_factory: ClientFactory, exporter: Exporter):
        self.session = session
        self.client_factory = client_factory
        self.exporter = exporter
        self.is_exporting = False
        self.on_state_changed: Optional[Callable[[bool], None]] = None
        self.last_error: Optional[Exception] = None

    def _set_exporting(self, value: bool):
        self.is_exporting = value
        if self.on_state_changed:
            self.on_state_changed(value)

    async def submit(self, form: FormInput) -> bool:
        """
        Fetch the week's entries and the project list, then export.

        Returns:
            True if the export ran, False when the session has no Clockify
            identity or something failed along the way.
        """
        prefs = self.session.preferences
        if not (prefs.user_id and prefs.workspace_id):
            logger.debug("Submit ignored: no Clockify user/workspace in session")
            return False

        self.last_error = None
        self._set_exporting(True)
        try:
            async with self.client_factory(prefs.api_key or "") as client:
                reads = [
                    asyncio.ensure_future(client.get_time_entries(
                        prefs.workspace_id,
                        prefs.user_id,
                        params=week_before_filter(form.date),
                    )),
                    asyncio.ensure_future(client.get_projects(prefs.workspace_id)),
                ]
                try:
                    time_entries, projects = await asyncio.gather(*reads)
                except BaseException:
                    # Stop the other read before the client is closed
                    for task in reads:
                        task.cancel()
                    await asyncio.gather(*reads, return_exceptions=True)
                    raise

            self.session.update(PreferencesPatch(
                resource=form.resource,
                call_no=form.call_no,
                prefers_project_name=form.include_project,
                projects=projects,
            ))

            self.exporter(
                form.resource,
                form.call_no,
                time_entries,
                form.date,
                form.include_project,
            )
            return True
        except Exception as e:
            logger.exception("Error exporting time entries")
            self.last_error = e
            return False
        finally:
            self._set_exporting(False)

    async def connect(self, api_key: str) -> ClockifyUser:
        """
        Resolve the user and active workspace for an API key and store them.

        Raises:
            ClockifyError: If the key is rejected
            ValueError: If the user has no workspace
        """
        async with self.client_factory(api_key) as client:
            user = await client.get_current_user()

        workspace_id = user.activeWorkspace or user.defaultWorkspace
        if not workspace_id:
            raise ValueError(f"Clockify user {user.id} has no workspace")

        self.session.connect(api_key=api_key, user_id=user.id, workspace_id=workspace_id)
        return user
