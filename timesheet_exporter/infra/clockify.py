"""
Async client for the Clockify REST API.

Only the read endpoints the exporter needs are wrapped. Every call is scoped
by the API key given at construction; workspace and user ids are passed per
call. HTTP errors are raised as ``ClockifyError`` so callers decide how to
report them.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from timesheet_exporter.domain.models import TimeEntry, Project, ClockifyUser

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.clockify.me/api/v1"


class ClockifyError(Exception):
    """Raised when Clockify answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Clockify API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ClockifyClient:
    """
    Thin wrapper around ``httpx.AsyncClient``.

    Use as an async context manager so the connection pool is closed:

        async with ClockifyClient(api_key) as client:
            projects = await client.get_projects(workspace_id)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "X-Api-Key": api_key,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self._http.aclose()

    async def __aenter__(self) -> "ClockifyClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def _get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Any:
        response = await self._http.get(endpoint, params=params)

        if response.status_code >= 400:
            try:
                body = response.json()
                message = body.get("message") if isinstance(body, dict) else None
            except ValueError:
                message = None
            message = message or response.text[:200] or response.reason_phrase
            logger.warning(f"GET {endpoint} returned status={response.status_code}")
            raise ClockifyError(response.status_code, message)

        return response.json()

    async def get_current_user(self) -> ClockifyUser:
        """Return the user owning the API key"""
        data = await self._get("/user")
        return ClockifyUser.model_validate(data)

    async def get_time_entries(
        self,
        workspace_id: str,
        user_id: str,
        params: Optional[Dict[str, str]] = None,
    ) -> List[TimeEntry]:
        """
        Get time entries of a user in a workspace.

        Args:
            workspace_id: Clockify workspace id
            user_id: Clockify user id
            params: Query filters passed through unchanged
                (e.g. ``{"get-week-before": "2024-01-07T23:59:59.999Z"}``)
        """
        data = await self._get(
            f"/workspaces/{workspace_id}/user/{user_id}/time-entries",
            params=params,
        )
        entries = [TimeEntry.model_validate(item) for item in data]
        logger.debug(f"Fetched {len(entries)} time entries for user {user_id}")
        return entries

    async def get_projects(self, workspace_id: str) -> List[Project]:
        """Get all projects of a workspace"""
        data = await self._get(f"/workspaces/{workspace_id}/projects")
        projects = [Project.model_validate(item) for item in data]
        logger.debug(f"Fetched {len(projects)} projects for workspace {workspace_id}")
        return projects
