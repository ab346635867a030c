"""
Pytest configuration and fixtures.
"""

import sys
import datetime
from pathlib import Path
from unittest.mock import AsyncMock
import pytest

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from timesheet_exporter.domain.models import TimeEntry, Project
from timesheet_exporter.infra.session import SessionStore


def make_entry(entry_id: str, start: str, end=None, description: str = "", project_id=None) -> TimeEntry:
    """Build a time entry the way Clockify returns it"""
    return TimeEntry.model_validate({
        "id": entry_id,
        "description": description,
        "userId": "user-1",
        "workspaceId": "ws-1",
        "projectId": project_id,
        "timeInterval": {"start": start, "end": end, "duration": None},
        "billable": True,
    })


class FakeClockifyClient:
    """Stands in for ClockifyClient; records calls through AsyncMocks."""

    def __init__(self, time_entries=None, projects=None):
        self.get_time_entries = AsyncMock(return_value=time_entries or [])
        self.get_projects = AsyncMock(return_value=projects or [])
        self.get_current_user = AsyncMock()
        self.api_keys = []
        self.closed = False

    def __call__(self, api_key: str):
        self.api_keys.append(api_key)
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True


@pytest.fixture
def session_file(tmp_path) -> Path:
    return tmp_path / "session.yaml"


@pytest.fixture
def session(session_file) -> SessionStore:
    """Session with a Clockify identity"""
    store = SessionStore(session_file)
    store.connect(api_key="key-123", user_id="user-1", workspace_id="ws-1")
    return store


@pytest.fixture
def entries():
    return [
        make_entry("E1", "2024-01-03T09:00:00Z", "2024-01-03T12:30:00Z", "Site survey", "P1"),
        make_entry("E2", "2024-01-05T13:00:00Z", "2024-01-05T15:00:00Z", "Report", None),
    ]


@pytest.fixture
def projects():
    return [Project(id="P1", name="Harbour Upgrade", clientName="Port Authority")]


@pytest.fixture
def week_ending() -> datetime.date:
    return datetime.date(2024, 1, 7)
