"""Helpers shared by the test suite."""
from datetime import datetime, timezone

from officeops.core.security import create_access_token

REGULAR_USER_ID = 42
APPROVER_USER_ID = 7


def auth_headers(user_id: int, role: int = 2) -> dict:
    token = create_access_token({"sub": user_id, "role": role})
    return {"Authorization": f"Bearer {token}"}


def at(hour: int, minute: int = 0, day: int = 3) -> datetime:
    """A UTC time on a fixed test day (2025-11-03 by default)."""
    return datetime(2025, 11, day, hour, minute, tzinfo=timezone.utc)
