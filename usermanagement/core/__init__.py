"""Core app configuration and database."""

from usermanagement.core.config import get_settings, settings
from usermanagement.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
