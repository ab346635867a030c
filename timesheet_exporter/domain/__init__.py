"""Domain layer - Pure business entities and logic"""

from .models import (
    TimeEntry, Project, ClockifyUser, FormInput,
    UserPreferences, PreferencesPatch, apply_patch,
)
from .validation import FieldError, ValidationResult, validate_form

__all__ = [
    "TimeEntry", "Project", "ClockifyUser", "FormInput",
    "UserPreferences", "PreferencesPatch", "apply_patch",
    "FieldError", "ValidationResult", "validate_form",
]
