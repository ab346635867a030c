"""
Form validation.

The form rules live on ``FormInput``; this module turns a pydantic
``ValidationError`` into plain field-level errors the UI can show next to
each input.
"""

import datetime
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError

from .models import FormInput


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    code: str = ""
    limit: Optional[int] = None


@dataclass
class ValidationResult:
    """Outcome of validating the form: either a ``FormInput`` or errors."""
    value: Optional[FormInput] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.value is not None and not self.errors

    def errors_for(self, name: str) -> List[FieldError]:
        return [e for e in self.errors if e.field == name]


def _field_error(error: dict) -> FieldError:
    name = str(error["loc"][0])
    if error["type"] == "string_too_long":
        limit = error["ctx"]["max_length"]
        return FieldError(name, f"Must be at most {limit} characters", "max_length", limit)
    if error["type"] == "missing":
        return FieldError(name, "Required", "required")
    return FieldError(name, error["msg"], error["type"])


def validate_form(
    resource: Optional[str],
    call_no: Optional[str],
    date: Optional[datetime.date],
    include_project: bool = False,
) -> ValidationResult:
    """
    Validate raw form values.

    Args:
        resource: Resource code (max 3 characters)
        call_no: Call number (max 8 characters)
        date: Week ending date, ``None`` when nothing was picked
        include_project: Whether to add a project column

    Returns:
        ValidationResult with the parsed ``FormInput`` or one error per
        failing field.
    """
    data = {
        "resource": resource or "",
        "call_no": call_no or "",
        "include_project": bool(include_project),
    }
    # Leave the key out so a missing date reports as "Required"
    if date is not None:
        data["date"] = date

    try:
        return ValidationResult(value=FormInput(**data))
    except ValidationError as e:
        return ValidationResult(errors=[_field_error(err) for err in e.errors()])
