"""
Service-layer exception hierarchy.

Services raise these; the HTTP layer registers one handler per type in
``officeops.main`` and turns them into the standard error body:

    {"success": false, "error": {"code": ..., "message": ...}, ...}

Usage:
    from officeops.core.exceptions import NotFoundError, BookingConflictError

    raise NotFoundError("Meeting", meeting_id)
    raise BookingConflictError(conflicting_bookings)
"""
from typing import Any, Dict, List, Optional


class PortalError(Exception):
    """Base class for errors the API translates into HTTP responses."""

    status_code = 400
    code = "bad_request"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(PortalError):
    """Input was well-formed but violated a business rule.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown (field name -> message).
    """

    status_code = 422
    code = "validation_error"

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None) -> None:
        self.details = details or {}
        super().__init__(message)


class NotFoundError(PortalError):
    """A referenced record does not exist."""

    status_code = 404
    code = "not_found"

    def __init__(self, resource: str, resource_id: Any = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        message = f"{resource} not found"
        super().__init__(message)


class ConflictError(PortalError):
    """The operation clashes with existing state."""

    status_code = 409
    code = "conflict"


class BookingConflictError(ConflictError):
    """A room booking intersects one or more existing bookings.

    The conflicting bookings are attached so the caller can show what clashed.
    """

    code = "booking_conflict"

    def __init__(self, conflicts: List[Dict[str, Any]], message: str = "Room is already booked for that time range") -> None:
        self.conflicts = conflicts
        super().__init__(message)


class PersistenceError(PortalError):
    """A database write failed. The underlying error is logged, never returned."""

    status_code = 500
    code = "persistence_error"
