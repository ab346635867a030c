"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Clockify returns loosely-typed JSON. Pydantic validates the handful of fields
the exporter reads and keeps everything else around untouched, and the same
models serialize cleanly into the YAML session file.
"""

import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

FIELD_MAX_LENGTHS = {"resource": 3, "call_no": 8}


def utf16_length(value: str) -> int:
    """Length in UTF-16 code units"""
    return len(value.encode("utf-16-le")) // 2


class TimeInterval(BaseModel):
    """Time interval of a Clockify time entry (ISO 8601 strings)."""
    model_config = ConfigDict(extra="allow")

    start: datetime.datetime
    end: Optional[datetime.datetime] = None  # None while the timer is running
    duration: Optional[str] = None


class TimeEntry(BaseModel):
    """
    A record of logged work time returned by Clockify.

    Unknown fields are kept, so the record can be passed around without
    the submission workflow caring about its shape.
    """
    model_config = ConfigDict(extra="allow")

    id: str
    description: Optional[str] = None
    userId: Optional[str] = None
    workspaceId: Optional[str] = None
    projectId: Optional[str] = None
    timeInterval: TimeInterval

    @property
    def is_running(self) -> bool:
        return self.timeInterval.end is None

    @property
    def duration_seconds(self) -> int:
        if self.timeInterval.end is None:
            return 0
        return int((self.timeInterval.end - self.timeInterval.start).total_seconds())


class Project(BaseModel):
    """A workspace-level Clockify project."""
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    clientName: Optional[str] = None
    archived: bool = False


class ClockifyUser(BaseModel):
    """The user owning an API key (GET /user)."""
    model_config = ConfigDict(extra="allow")

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    activeWorkspace: Optional[str] = None
    defaultWorkspace: Optional[str] = None


class FormInput(BaseModel):
    """
    Values of the timesheet form.

    Constraints mirror the form rules: short billing codes and a mandatory
    week-ending date. Lengths count UTF-16 code units, so a character
    outside the BMP (e.g. an emoji) counts as two.
    """

    resource: str = ""
    call_no: str = ""
    date: datetime.date
    include_project: bool = False

    @field_validator("resource", "call_no")
    @classmethod
    def check_length(cls, value: str, info: ValidationInfo) -> str:
        limit = FIELD_MAX_LENGTHS[info.field_name]
        if utf16_length(value) > limit:
            raise PydanticCustomError(
                "string_too_long",
                "String should have at most {max_length} characters",
                {"max_length": limit},
            )
        return value


class UserPreferences(BaseModel):
    """
    Session record: Clockify identity plus the last used form values.

    Read once when the form is built (defaults) and updated after every
    successful export.
    """
    model_config = ConfigDict(from_attributes=True)

    # Clockify identity
    user_id: Optional[str] = None
    workspace_id: Optional[str] = None
    api_key: Optional[str] = None

    # Last submitted form values
    resource: str = ""
    call_no: str = ""
    prefers_project_name: bool = False

    # Project list fetched with the last export
    projects: List[Project] = Field(default_factory=list)

    @property
    def is_connected(self) -> bool:
        """True when both identifiers needed to query Clockify are set"""
        return bool(self.user_id) and bool(self.workspace_id)


class PreferencesPatch(BaseModel):
    """The exact fields a successful export writes back to the session."""

    resource: str
    call_no: str
    prefers_project_name: bool
    projects: List[Project]


def apply_patch(prefs: UserPreferences, patch: PreferencesPatch) -> UserPreferences:
    """
    Return a copy of ``prefs`` with the patch fields replaced.

    ``projects`` is replaced as a whole, never merged with the old list.
    Identity fields are left alone.
    """
    return prefs.model_copy(update={
        "resource": patch.resource,
        "call_no": patch.call_no,
        "prefers_project_name": patch.prefers_project_name,
        "projects": list(patch.projects),
    })
