"""Meeting attendee set management."""
from datetime import datetime
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from officeops.core.exceptions import PersistenceError
from officeops.core.logging_config import get_logger
from officeops.core.sanitization import parse_id_list
from officeops.core.utils import utcnow
from officeops.db.models import MeetingAttendee

logger = get_logger(__name__)


def _upsert_attendee(db: Session, meeting_id: int, user_id: int, now: datetime) -> MeetingAttendee:
    """Insert the pair, or refresh updated_at if it already exists."""
    row = db.get(MeetingAttendee, (meeting_id, user_id))
    if row:
        row.updated_at = now
    else:
        row = MeetingAttendee(
            meeting_id=meeting_id,
            attendant_id=user_id,
            created_at=now,
            updated_at=now,
        )
        db.add(row)
    # Flush so a repeated id in the same transaction finds this row
    db.flush()
    return row


def add_attendee(db: Session, meeting_id: int, user_id: int, commit: bool = True) -> MeetingAttendee:
    """Add a user to a meeting (idempotent: a second call only touches updated_at)."""
    row = _upsert_attendee(db, meeting_id, user_id, utcnow())
    if commit:
        db.commit()
    return row


def remove_attendee(db: Session, meeting_id: int, user_id: int) -> bool:
    """
    Remove a user from a meeting.

    Returns:
        True if a row was deleted, False if the user was not attending
    """
    deleted = db.query(MeetingAttendee).filter(
        MeetingAttendee.meeting_id == meeting_id,
        MeetingAttendee.attendant_id == user_id,
    ).delete()
    db.commit()
    return deleted > 0


def replace_attendees(
    db: Session,
    meeting_id: int,
    user_ids: Any,
    commit: bool = True,
) -> List[int]:
    """
    Replace a meeting's whole attendee set.

    Existing rows are deleted and every id is re-added through the idempotent
    add, so duplicates in the input collapse to one row. Either the whole
    replacement is committed or, on failure, none of it.

    Returns:
        The attendee ids now on the meeting, in input order
    """
    ids = parse_id_list(user_ids) or []
    now = utcnow()

    try:
        db.query(MeetingAttendee).filter(MeetingAttendee.meeting_id == meeting_id).delete(
            synchronize_session="fetch"
        )
        for user_id in ids:
            _upsert_attendee(db, meeting_id, user_id, now)
        if commit:
            db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("attendee_replace_failed", meeting_id=meeting_id, error=str(exc))
        raise PersistenceError("Failed to update meeting attendees") from exc

    logger.info("attendees_replaced", meeting_id=meeting_id, count=len(ids))
    return ids


def list_attendees(db: Session, meeting_id: int) -> List[int]:
    """Attendee user ids for a meeting, oldest first.

    Rows written by one replace_attendees() call share a timestamp and come
    back in ascending user id.
    """
    rows = (
        db.query(MeetingAttendee.attendant_id)
        .filter(MeetingAttendee.meeting_id == meeting_id)
        .order_by(MeetingAttendee.created_at.asc(), MeetingAttendee.attendant_id.asc())
        .all()
    )
    return [attendant_id for (attendant_id,) in rows]


def attendees_for_meetings(db: Session, meeting_ids: List[int]) -> Dict[int, List[int]]:
    """Attendee ids for several meetings in one query, ordered as in list_attendees().

    Every requested meeting id is present in the result.
    """
    result: Dict[int, List[int]] = {meeting_id: [] for meeting_id in meeting_ids}
    if not meeting_ids:
        return result

    rows = (
        db.query(MeetingAttendee.meeting_id, MeetingAttendee.attendant_id)
        .filter(MeetingAttendee.meeting_id.in_(set(meeting_ids)))
        .order_by(MeetingAttendee.created_at.asc(), MeetingAttendee.attendant_id.asc())
        .all()
    )
    for meeting_id, attendant_id in rows:
        result[meeting_id].append(attendant_id)
    return result
