"""Core app configuration, security and database."""

from inventory.core.config import get_settings, settings
from inventory.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
