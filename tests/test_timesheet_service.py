"""
Tests for the export workflow (TimesheetService).
"""

import asyncio
import datetime
from unittest.mock import MagicMock
import httpx
import pytest

from timesheet_exporter.domain.models import FormInput, ClockifyUser
from timesheet_exporter.infra.clockify import ClockifyError
from timesheet_exporter.infra.session import SessionStore
from timesheet_exporter.services.timesheet_service import TimesheetService, week_before_filter
from conftest import FakeClockifyClient


@pytest.fixture
def form(week_ending):
    return FormInput(resource="123", call_no="ABC12345", date=week_ending, include_project=True)


def test_week_before_filter_uses_fixed_end_of_day_suffix():
    assert week_before_filter(datetime.date(2024, 1, 7)) == {
        "get-week-before": "2024-01-07T23:59:59.999Z"
    }
    assert week_before_filter(datetime.date(2023, 12, 31)) == {
        "get-week-before": "2023-12-31T23:59:59.999Z"
    }


@pytest.mark.asyncio
async def test_successful_submit_updates_session_and_exports(session, form, entries, projects, week_ending):
    client = FakeClockifyClient(time_entries=entries, projects=projects)
    exporter = MagicMock()
    service = TimesheetService(session, client, exporter)

    ok = await service.submit(form)

    assert ok is True
    assert client.api_keys == ["key-123"]
    client.get_time_entries.assert_awaited_once_with(
        "ws-1", "user-1", params={"get-week-before": "2024-01-07T23:59:59.999Z"}
    )
    client.get_projects.assert_awaited_once_with("ws-1")
    assert client.closed

    prefs = session.preferences
    assert prefs.resource == "123"
    assert prefs.call_no == "ABC12345"
    assert prefs.prefers_project_name is True
    assert prefs.projects == projects

    exporter.assert_called_once_with("123", "ABC12345", entries, week_ending, True)
    assert service.is_exporting is False


@pytest.mark.asyncio
async def test_exporting_flag_is_set_during_submit(session, form):
    states = []
    exporter = MagicMock()
    service = TimesheetService(session, FakeClockifyClient(), exporter)
    service.on_state_changed = states.append
    exporter.side_effect = lambda *args: states.append(("export", service.is_exporting))

    await service.submit(form)

    assert states == [True, ("export", True), False]


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id, workspace_id", [(None, "ws-1"), ("user-1", None), (None, None), ("", "ws-1")])
async def test_missing_identity_is_a_noop(tmp_path, form, user_id, workspace_id):
    session = SessionStore(tmp_path / "session.yaml")
    session.connect(api_key="key", user_id=user_id, workspace_id=workspace_id)
    before = session.preferences
    client = FakeClockifyClient()
    exporter = MagicMock()
    states = []
    service = TimesheetService(session, client, exporter)
    service.on_state_changed = states.append

    ok = await service.submit(form)

    assert ok is False
    assert client.api_keys == []
    client.get_time_entries.assert_not_awaited()
    client.get_projects.assert_not_awaited()
    exporter.assert_not_called()
    assert session.preferences == before
    assert states == []
    assert service.is_exporting is False


@pytest.mark.asyncio
async def test_failed_read_is_swallowed_and_resets_flag(session, form, projects):
    client = FakeClockifyClient(projects=projects)
    client.get_time_entries.side_effect = httpx.ConnectError("network down")
    exporter = MagicMock()
    service = TimesheetService(session, client, exporter)
    before = session.preferences

    ok = await service.submit(form)

    assert ok is False
    assert service.is_exporting is False
    assert isinstance(service.last_error, httpx.ConnectError)
    exporter.assert_not_called()
    assert session.preferences == before


@pytest.mark.asyncio
async def test_failed_projects_read_is_swallowed(session, form):
    client = FakeClockifyClient()
    client.get_projects.side_effect = ClockifyError(401, "Full authentication is required")
    exporter = MagicMock()
    service = TimesheetService(session, client, exporter)

    ok = await service.submit(form)

    assert ok is False
    assert service.last_error.status_code == 401
    exporter.assert_not_called()


@pytest.mark.asyncio
async def test_exporter_failure_is_swallowed_after_session_update(session, form, projects):
    exporter = MagicMock(side_effect=OSError("disk full"))
    service = TimesheetService(session, FakeClockifyClient(projects=projects), exporter)

    ok = await service.submit(form)

    assert ok is False
    assert service.is_exporting is False
    # Preferences were already written before the exporter ran
    assert session.preferences.projects == projects


@pytest.mark.asyncio
async def test_scenario_from_form_values(session, week_ending, projects):
    e1, e2 = object(), object()
    client = FakeClockifyClient(time_entries=[e1, e2], projects=projects)
    exporter = MagicMock()
    service = TimesheetService(session, client, exporter)
    form = FormInput(resource="123", call_no="ABC12345", date=week_ending, include_project=True)

    await service.submit(form)

    assert session.preferences.projects == projects
    assert session.preferences.prefers_project_name is True
    exporter.assert_called_once_with("123", "ABC12345", [e1, e2], datetime.date(2024, 1, 7), True)


@pytest.mark.asyncio
async def test_connect_stores_identity(tmp_path):
    session = SessionStore(tmp_path / "session.yaml")
    client = FakeClockifyClient()
    client.get_current_user.return_value = ClockifyUser(id="user-9", name="Sam", activeWorkspace="ws-9")
    service = TimesheetService(session, client, MagicMock())

    user = await service.connect("secret")

    assert user.id == "user-9"
    assert client.api_keys == ["secret"]
    prefs = session.preferences
    assert (prefs.api_key, prefs.user_id, prefs.workspace_id) == ("secret", "user-9", "ws-9")


@pytest.mark.asyncio
async def test_connect_without_workspace_fails(tmp_path):
    session = SessionStore(tmp_path / "session.yaml")
    client = FakeClockifyClient()
    client.get_current_user.return_value = ClockifyUser(id="user-9")
    service = TimesheetService(session, client, MagicMock())

    with pytest.raises(ValueError):
        await service.connect("secret")
    assert session.preferences.is_connected is False


@pytest.mark.asyncio
async def test_failed_read_cancels_the_other_before_closing_client(session, form):
    client = FakeClockifyClient()
    client.get_time_entries.side_effect = httpx.ConnectError("network down")
    started = asyncio.Event()
    cancelled = []

    async def slow_projects(workspace_id):
        started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            cancelled.append(client.closed)
            raise

    client.get_projects.side_effect = slow_projects
    service = TimesheetService(session, client, MagicMock())

    ok = await service.submit(form)

    assert ok is False
    assert started.is_set()
    # Cancelled while the client was still open
    assert cancelled == [False]
    assert client.closed
