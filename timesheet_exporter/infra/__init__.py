"""Infrastructure layer - Configuration, session persistence and the Clockify API"""

from .config import Settings, get_settings, reload_settings
from .session import SessionStore
from .clockify import ClockifyClient, ClockifyError

__all__ = [
    "Settings", "get_settings", "reload_settings",
    "SessionStore", "ClockifyClient", "ClockifyError",
]
