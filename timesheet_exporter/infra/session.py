"""
Session store for the Clockify identity and the last used form values.

The store owns one ``UserPreferences`` record. It is handed to the form and
to the export service explicitly instead of living in a global, so tests
can build one against a temporary file.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from timesheet_exporter.domain.models import UserPreferences, PreferencesPatch, apply_patch

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Handles session persistence (YAML file based).
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self._preferences = self._load()

    @property
    def preferences(self) -> UserPreferences:
        return self._preferences

    def _load(self) -> UserPreferences:
        """Read the session file, falling back to defaults"""
        if self.path is None or not self.path.exists():
            return UserPreferences()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            return UserPreferences(**data)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            logger.warning(f"Could not read session file {self.path}: {e}")
            return UserPreferences()

    def save(self) -> None:
        """Write the current record to disk"""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self._preferences.model_dump(mode='json'), f, sort_keys=False)

    def update(self, patch: PreferencesPatch) -> UserPreferences:
        """Apply an export patch and persist the result"""
        self._preferences = apply_patch(self._preferences, patch)
        self.save()
        logger.debug(
            f"Session updated: resource={patch.resource!r} call_no={patch.call_no!r} "
            f"projects={len(patch.projects)}"
        )
        return self._preferences

    def connect(self, api_key: str, user_id: str, workspace_id: str) -> UserPreferences:
        """Store the Clockify identity resolved for an API key"""
        self._preferences = self._preferences.model_copy(update={
            "api_key": api_key,
            "user_id": user_id,
            "workspace_id": workspace_id,
        })
        self.save()
        logger.info(f"Connected to workspace {workspace_id} as user {user_id}")
        return self._preferences

    def disconnect(self) -> UserPreferences:
        """Forget the Clockify identity, keep the form defaults"""
        self._preferences = self._preferences.model_copy(update={
            "api_key": None,
            "user_id": None,
            "workspace_id": None,
            "projects": [],
        })
        self.save()
        return self._preferences
