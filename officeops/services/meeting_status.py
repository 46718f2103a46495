"""Meeting approval workflow.

Status changes are never updates: every call appends a ``meeting_statuses``
row and the meeting's current status is simply its newest row
(``changed_at`` desc, ties broken by ``id`` desc). Nothing stops an approved
meeting from being approved again or declined later; the full history is kept.
"""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from officeops.core.constants import (
    MEETING_STATUSES,
    MEETING_STATUS_APPROVED,
    MEETING_STATUS_DECLINED,
)
from officeops.core.exceptions import NotFoundError, PersistenceError, PortalError, ValidationError
from officeops.core.logging_config import get_logger
from officeops.core.utils import isoformat_utc, to_utc, utcnow
from officeops.db.models import Meeting, MeetingStatus

logger = get_logger(__name__)


def record_status(
    db: Session,
    meeting_id: int,
    status: str,
    actor_id: Optional[int] = None,
    decline_reason: Optional[str] = None,
    commit: bool = True,
) -> MeetingStatus:
    """
    Append a status row for a meeting.

    The acting user is stamped into ``approved_by`` for approvals and into
    ``declined_by`` for declines; the other column is always null. The decline
    reason is only kept on declines.

    Meeting existence is not checked here; use change_status() from request
    handlers.

    Args:
        db: Database session
        meeting_id: Meeting the status belongs to
        status: One of pending, approved, declined
        actor_id: User making the change
        decline_reason: Reason shown to the organizer on decline
        commit: Commit immediately, or only flush so the caller can commit
                as part of a larger transaction

    Returns:
        The new MeetingStatus row
    """
    if status not in MEETING_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'",
            details={"status": f"must be one of: {', '.join(MEETING_STATUSES)}"},
        )

    row = MeetingStatus(
        meeting_id=meeting_id,
        status=status,
        approved_by=actor_id if status == MEETING_STATUS_APPROVED else None,
        declined_by=actor_id if status == MEETING_STATUS_DECLINED else None,
        decline_reason=decline_reason if status == MEETING_STATUS_DECLINED else None,
        changed_at=utcnow(),
    )
    db.add(row)

    if commit:
        db.commit()
        db.refresh(row)
    else:
        db.flush()

    return row


def change_status(
    db: Session,
    meeting_id: int,
    status: str,
    actor_id: int,
    decline_reason: Optional[str] = None,
) -> Dict:
    """
    Record a status change for an existing meeting and return the new entry.

    A declined meeting does not hold its room, so another booking may have
    taken the slot since. Reviving it (declined to pending or approved)
    re-checks the room and raises BookingConflictError on a clash.
    """
    # Deferred: the booking module imports this one
    from officeops.services.meeting import _lock_room, _raise_if_conflicting

    meeting = db.get(Meeting, meeting_id)
    if not meeting:
        raise NotFoundError("Meeting", meeting_id)

    try:
        previous = current_status(db, meeting_id)
        if (
            status != MEETING_STATUS_DECLINED
            and previous is not None
            and previous.status == MEETING_STATUS_DECLINED
        ):
            _lock_room(db, meeting.room_id)
            _raise_if_conflicting(
                db,
                meeting.room_id,
                to_utc(meeting.start_time),
                to_utc(meeting.end_time),
                exclude_meeting_id=meeting_id,
            )
        row = record_status(db, meeting_id, status, actor_id, decline_reason)
    except PortalError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("meeting_status_failed", meeting_id=meeting_id, status=status, error=str(exc))
        raise PersistenceError("Failed to record meeting status") from exc

    logger.info("meeting_status_changed", meeting_id=meeting_id, status=status, actor_id=actor_id)
    return serialize_status(row)


def status_history(db: Session, meeting_id: int) -> List[MeetingStatus]:
    """All status rows for a meeting, newest first."""
    return (
        db.query(MeetingStatus)
        .filter(MeetingStatus.meeting_id == meeting_id)
        .order_by(MeetingStatus.changed_at.desc(), MeetingStatus.id.desc())
        .all()
    )


def current_status(db: Session, meeting_id: int) -> Optional[MeetingStatus]:
    """The newest status row for a meeting, or None if it has no history."""
    return (
        db.query(MeetingStatus)
        .filter(MeetingStatus.meeting_id == meeting_id)
        .order_by(MeetingStatus.changed_at.desc(), MeetingStatus.id.desc())
        .first()
    )


def current_statuses(db: Session, meeting_ids: List[int]) -> Dict[int, str]:
    """
    Current status name for several meetings in one query.

    Meetings without any history are absent from the result.
    """
    if not meeting_ids:
        return {}

    rows = (
        db.query(MeetingStatus.meeting_id, MeetingStatus.status)
        .filter(MeetingStatus.meeting_id.in_(set(meeting_ids)))
        .order_by(MeetingStatus.changed_at.asc(), MeetingStatus.id.asc())
        .all()
    )

    # Rows arrive oldest first, so the last one seen per meeting wins
    result: Dict[int, str] = {}
    for meeting_id, status in rows:
        result[meeting_id] = status
    return result


def serialize_status(row: MeetingStatus) -> Dict:
    return {
        "id": row.id,
        "meeting_id": row.meeting_id,
        "status": row.status,
        "approved_by": row.approved_by,
        "declined_by": row.declined_by,
        "decline_reason": row.decline_reason,
        "changed_at": isoformat_utc(row.changed_at),
    }
