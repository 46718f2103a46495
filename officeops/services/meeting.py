"""Meeting booking business logic."""
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Session
from sqlalchemy import and_, not_
from sqlalchemy.exc import SQLAlchemyError

from officeops.core.constants import MEETING_STATUS_DECLINED, MEETING_STATUS_PENDING
from officeops.core.exceptions import (
    BookingConflictError,
    NotFoundError,
    PersistenceError,
    PortalError,
    ValidationError,
)
from officeops.core.logging_config import get_logger
from officeops.core.utils import isoformat_utc, to_timezone, to_utc, utcnow
from officeops.db.models import Meeting, Room
from officeops.services.attendee import attendees_for_meetings, replace_attendees
from officeops.services.meeting_status import current_statuses, record_status

logger = get_logger(__name__)

# Columns a caller may change through update_meeting()
UPDATABLE_FIELDS = ("title", "room_id", "start_time", "end_time", "wing_id", "subw_id")


def find_overlapping(
    db: Session,
    room_id: int,
    start: datetime,
    end: datetime,
    exclude_meeting_id: Optional[int] = None,
    include_declined: bool = False,
) -> List[Meeting]:
    """
    Bookings in a room that intersect the half-open window [start, end).

    Two windows overlap unless one ends at or before the other starts, so
    back-to-back bookings (10:00-11:00 and 11:00-12:00) never clash.

    Args:
        db: Database session
        room_id: Room to check
        start: Window start
        end: Window end
        exclude_meeting_id: Meeting to ignore (the one being edited)
        include_declined: Also return meetings whose current status is declined

    Returns:
        Overlapping meetings ordered by start time (empty when the slot is free)
    """
    start_utc = to_utc(start)
    end_utc = to_utc(end)

    query = db.query(Meeting).filter(
        Meeting.room_id == room_id,
        not_(Meeting.end_time <= start_utc),
        not_(Meeting.start_time >= end_utc),
    )
    if exclude_meeting_id is not None:
        query = query.filter(Meeting.id != exclude_meeting_id)

    meetings = query.order_by(Meeting.start_time.asc(), Meeting.id.asc()).all()

    if include_declined or not meetings:
        return meetings

    # A declined meeting no longer holds the room
    statuses = current_statuses(db, [m.id for m in meetings])
    return [m for m in meetings if statuses.get(m.id) != MEETING_STATUS_DECLINED]


def _validate_window(start_time: datetime, end_time: datetime):
    start_utc = to_utc(start_time)
    end_utc = to_utc(end_time)
    if end_utc <= start_utc:
        raise ValidationError(
            "End time must be after start time",
            details={"end_time": "must be after start_time"},
        )
    return start_utc, end_utc


def _lock_room(db: Session, room_id: int) -> Room:
    """
    Load the room row with FOR UPDATE so concurrent bookings of the same room
    run their overlap check one after another. SQLite ignores the lock.
    """
    room = db.query(Room).filter(Room.id == room_id).with_for_update().first()
    if not room:
        raise ValidationError("Room does not exist", details={"room_id": "Room not found"})
    return room


def _raise_if_conflicting(
    db: Session,
    room_id: int,
    start_utc: datetime,
    end_utc: datetime,
    exclude_meeting_id: Optional[int] = None,
) -> None:
    conflicts = find_overlapping(db, room_id, start_utc, end_utc, exclude_meeting_id)
    if conflicts:
        logger.info(
            "booking_conflict",
            room_id=room_id,
            start_time=start_utc.isoformat(),
            end_time=end_utc.isoformat(),
            conflicting_ids=[m.id for m in conflicts],
        )
        raise BookingConflictError([serialize_booking(m) for m in conflicts])


def create_meeting(
    db: Session,
    creator_id: int,
    title: str,
    room_id: int,
    start_time: datetime,
    end_time: datetime,
    wing_id: Optional[int] = None,
    subw_id: Optional[int] = None,
    attendees: Optional[Iterable[int]] = None,
    tz: Optional[ZoneInfo] = None,
) -> Dict:
    """
    Book a room.

    The meeting, its initial ``pending`` status and its attendees are written
    in one transaction, after the overlap check ran under the room lock.

    Raises:
        ValidationError: Bad window, empty title or unknown room
        BookingConflictError: The room is taken for part of the window
        PersistenceError: The database write failed
    """
    if not title or not title.strip():
        raise ValidationError("Title is required", details={"title": "Title cannot be empty"})
    start_utc, end_utc = _validate_window(start_time, end_time)

    try:
        _lock_room(db, room_id)
        _raise_if_conflicting(db, room_id, start_utc, end_utc)

        now = utcnow()
        meeting = Meeting(
            title=title.strip(),
            room_id=room_id,
            user_id=creator_id,
            start_time=start_utc,
            end_time=end_utc,
            wing_id=wing_id,
            subw_id=subw_id,
            created_at=now,
            updated_at=now,
        )
        db.add(meeting)
        db.flush()

        record_status(db, meeting.id, MEETING_STATUS_PENDING, commit=False)
        if attendees is not None:
            replace_attendees(db, meeting.id, attendees, commit=False)

        db.commit()
    except PortalError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("meeting_create_failed", room_id=room_id, error=str(exc))
        raise PersistenceError("Failed to create meeting") from exc

    logger.info(
        "meeting_created",
        meeting_id=meeting.id,
        room_id=room_id,
        user_id=creator_id,
        start_time=start_utc.isoformat(),
        end_time=end_utc.isoformat(),
    )
    return get_meeting(db, meeting.id, tz)


def update_meeting(
    db: Session,
    meeting_id: int,
    changes: Dict[str, Any],
    attendees: Optional[Iterable[int]] = None,
    tz: Optional[ZoneInfo] = None,
) -> Dict:
    """
    Edit a meeting.

    Only keys present in ``changes`` are applied. When the room or window
    moves, the merged booking is re-checked for overlaps, ignoring the
    meeting itself. ``attendees=None`` leaves the attendee set alone while
    an empty list clears it.
    """
    meeting = db.get(Meeting, meeting_id)
    if not meeting:
        raise NotFoundError("Meeting", meeting_id)

    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    if "title" in changes and (not changes["title"] or not changes["title"].strip()):
        raise ValidationError("Title is required", details={"title": "Title cannot be empty"})

    room_id = changes.get("room_id", meeting.room_id)
    start_utc, end_utc = _validate_window(
        changes.get("start_time", meeting.start_time),
        changes.get("end_time", meeting.end_time),
    )
    moved = any(field in changes for field in ("room_id", "start_time", "end_time"))

    try:
        if moved:
            _lock_room(db, room_id)
            _raise_if_conflicting(db, room_id, start_utc, end_utc, exclude_meeting_id=meeting_id)

        for field, value in changes.items():
            if field == "title":
                value = value.strip()
            setattr(meeting, field, value)
        meeting.start_time = start_utc
        meeting.end_time = end_utc
        meeting.updated_at = utcnow()

        if attendees is not None:
            replace_attendees(db, meeting_id, attendees, commit=False)

        db.commit()
    except PortalError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("meeting_update_failed", meeting_id=meeting_id, error=str(exc))
        raise PersistenceError("Failed to update meeting") from exc

    logger.info("meeting_updated", meeting_id=meeting_id, fields=sorted(changes))
    return get_meeting(db, meeting_id, tz)


def delete_meeting(db: Session, meeting_id: int) -> bool:
    """Delete a meeting together with its status history and attendees."""
    meeting = db.get(Meeting, meeting_id)
    if not meeting:
        return False

    db.delete(meeting)
    db.commit()
    logger.info("meeting_deleted", meeting_id=meeting_id)
    return True


def get_meeting(db: Session, meeting_id: int, tz: Optional[ZoneInfo] = None) -> Optional[Dict]:
    """A meeting with its current status and attendees, or None."""
    meeting = db.get(Meeting, meeting_id)
    if not meeting:
        return None

    statuses = current_statuses(db, [meeting.id])
    attendees = attendees_for_meetings(db, [meeting.id])
    return serialize_meeting(meeting, statuses.get(meeting.id), attendees[meeting.id], tz)


def list_meetings(
    db: Session,
    tz: Optional[ZoneInfo] = None,
    user_id: Optional[int] = None,
    room_id: Optional[int] = None,
    day: Optional[date] = None,
) -> List[Dict]:
    """
    Meetings newest first, optionally narrowed to one organizer, one room
    and/or one calendar day.

    ``day`` is interpreted in ``tz`` (UTC when no zone is given) and matches
    every meeting that touches that day.
    """
    query = db.query(Meeting)
    if user_id is not None:
        query = query.filter(Meeting.user_id == user_id)
    if room_id is not None:
        query = query.filter(Meeting.room_id == room_id)
    if day is not None:
        day_start = datetime.combine(day, time.min, tzinfo=tz) if tz else to_utc(datetime.combine(day, time.min))
        day_end = day_start + timedelta(days=1)
        query = query.filter(and_(
            Meeting.start_time < to_utc(day_end),
            Meeting.end_time > to_utc(day_start),
        ))

    meetings = query.order_by(Meeting.start_time.desc(), Meeting.id.desc()).all()

    ids = [m.id for m in meetings]
    statuses = current_statuses(db, ids)
    attendees = attendees_for_meetings(db, ids)

    return [
        serialize_meeting(m, statuses.get(m.id), attendees[m.id], tz)
        for m in meetings
    ]


def _render_time(value: datetime, tz: Optional[ZoneInfo]) -> str:
    if tz is None:
        return isoformat_utc(value)
    return to_timezone(value, tz).isoformat()


def serialize_booking(meeting: Meeting) -> Dict:
    """The short form of a meeting returned alongside booking conflicts."""
    return {
        "id": meeting.id,
        "title": meeting.title,
        "room_id": meeting.room_id,
        "user_id": meeting.user_id,
        "start_time": isoformat_utc(meeting.start_time),
        "end_time": isoformat_utc(meeting.end_time),
    }


def serialize_meeting(
    meeting: Meeting,
    status: Optional[str],
    attendees: List[int],
    tz: Optional[ZoneInfo] = None,
) -> Dict:
    return {
        "id": meeting.id,
        "title": meeting.title,
        "room_id": meeting.room_id,
        "user_id": meeting.user_id,
        "start_time": _render_time(meeting.start_time, tz),
        "end_time": _render_time(meeting.end_time, tz),
        "wing_id": meeting.wing_id,
        "subw_id": meeting.subw_id,
        "status": status,
        "attendees": attendees,
        "created_at": isoformat_utc(meeting.created_at),
        "updated_at": isoformat_utc(meeting.updated_at),
    }
