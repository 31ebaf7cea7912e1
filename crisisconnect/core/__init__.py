"""Core app configuration and database."""

from crisisconnect.core.config import get_settings, settings
from crisisconnect.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
