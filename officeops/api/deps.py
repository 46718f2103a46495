"""Shared API dependencies."""
from zoneinfo import ZoneInfo

from officeops.core.config import settings
from officeops.core.security import get_current_user, verify_approver
from officeops.db import get_db, get_db_context

# Meeting times are rendered back to clients in the office's local zone
TIMEZONE = ZoneInfo(settings.TIMEZONE)

__all__ = ["get_db", "get_db_context", "get_current_user", "verify_approver", "TIMEZONE"]
