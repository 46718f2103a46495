"""Meeting endpoints: booking, approval workflow and attendees."""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from officeops.api.deps import get_db, get_current_user, verify_approver, TIMEZONE
from officeops.schemas import (
    MeetingCreate,
    MeetingUpdate,
    MeetingDetail,
    StatusChange,
    StatusEntry,
    AttendeesReplace,
    AttendeeList,
    SuccessResponse,
    ErrorResponse,
)
from officeops.services.meeting import (
    create_meeting,
    delete_meeting,
    get_meeting,
    list_meetings,
    update_meeting,
)
from officeops.services.meeting_status import change_status, serialize_status, status_history
from officeops.services.attendee import add_attendee, list_attendees, remove_attendee, replace_attendees
from officeops.core.rate_limit import limiter, RATE_LIMITS
from officeops.core.exceptions import NotFoundError

router = APIRouter()


def _require_meeting(db: Session, meeting_id: int) -> dict:
    meeting = get_meeting(db, meeting_id, TIMEZONE)
    if not meeting:
        raise NotFoundError("Meeting", meeting_id)
    return meeting


@router.get("", response_model=List[MeetingDetail])
async def list_meetings_endpoint(
    user_id: Optional[int] = None,
    room_id: Optional[int] = None,
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """
    List meetings, newest first.

    Query parameters:
        user_id: Only meetings organized by this user
        room_id: Only meetings in this room
        date: Only meetings touching this day (YYYY-MM-DD, office time zone)
    """
    return list_meetings(db, TIMEZONE, user_id=user_id, room_id=room_id, day=day)


@router.post("", response_model=MeetingDetail, status_code=201, responses={409: {"model": ErrorResponse}})
@limiter.limit(RATE_LIMITS["booking"])
async def create_meeting_endpoint(
    request: Request,
    meeting: MeetingCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """
    Book a room.

    The booking starts out pending. Overlapping a non-declined booking in the
    same room is rejected with 409; back-to-back bookings are fine.

    Example:
        Request:
            POST /api/v1/meetings
            Authorization: Bearer eyJhbGc...
            {
                "title": "Quarterly review",
                "room_id": 3,
                "start_time": "2025-11-03T10:00:00Z",
                "end_time": "2025-11-03T11:00:00Z",
                "attendees": "5,7"
            }

        Response (409):
            {
                "success": false,
                "error": {"code": "booking_conflict", "message": "Room is already booked for that time range"},
                "data": [{"id": 12, "title": "Standup", "room_id": 3, ...}]
            }
    """
    return create_meeting(
        db,
        creator_id=user["id"],
        title=meeting.title,
        room_id=meeting.room_id,
        start_time=meeting.start_time,
        end_time=meeting.end_time,
        wing_id=meeting.wing_id,
        subw_id=meeting.subw_id,
        attendees=meeting.attendees,
        tz=TIMEZONE,
    )


@router.get("/{meeting_id}", response_model=MeetingDetail)
async def get_meeting_endpoint(
    meeting_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    return _require_meeting(db, meeting_id)


@router.put("/{meeting_id}", response_model=MeetingDetail, responses={409: {"model": ErrorResponse}})
@limiter.limit(RATE_LIMITS["booking"])
async def update_meeting_endpoint(
    request: Request,
    meeting_id: int,
    payload: MeetingUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Edit a booking. Omitted fields are left alone; "attendees": [] clears the list."""
    changes = payload.model_dump(exclude_unset=True, exclude={"attendees"})
    return update_meeting(db, meeting_id, changes, attendees=payload.attendees, tz=TIMEZONE)


@router.delete("/{meeting_id}", response_model=SuccessResponse)
async def delete_meeting_endpoint(
    meeting_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    if not delete_meeting(db, meeting_id):
        raise HTTPException(status_code=404, detail="Meeting not found")
    return {"success": True}


@router.get("/{meeting_id}/status", response_model=List[StatusEntry])
async def status_history_endpoint(
    meeting_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Full approval history, newest first. The first entry is the current status."""
    _require_meeting(db, meeting_id)
    return [serialize_status(row) for row in status_history(db, meeting_id)]


@router.post("/{meeting_id}/status", response_model=StatusEntry, status_code=201, responses={409: {"model": ErrorResponse}})
@limiter.limit(RATE_LIMITS["write"])
async def change_status_endpoint(
    request: Request,
    meeting_id: int,
    payload: StatusChange,
    db: Session = Depends(get_db),
    approver: dict = Depends(verify_approver),
):
    """
    Approve, decline or reset a booking to pending (approvers only).

    Declining requires a decline_reason. Every call appends to the history;
    a declined booking stops blocking its room.
    """
    return change_status(
        db,
        meeting_id,
        payload.status,
        actor_id=approver["id"],
        decline_reason=payload.decline_reason,
    )


@router.get("/{meeting_id}/attendees", response_model=AttendeeList)
async def list_attendees_endpoint(
    meeting_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    _require_meeting(db, meeting_id)
    return {"meeting_id": meeting_id, "attendees": list_attendees(db, meeting_id)}


@router.put("/{meeting_id}/attendees", response_model=AttendeeList)
@limiter.limit(RATE_LIMITS["write"])
async def replace_attendees_endpoint(
    request: Request,
    meeting_id: int,
    payload: AttendeesReplace,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Replace the whole attendee list. Duplicates are collapsed."""
    _require_meeting(db, meeting_id)
    replace_attendees(db, meeting_id, payload.attendees)
    return {"meeting_id": meeting_id, "attendees": list_attendees(db, meeting_id)}


@router.post("/{meeting_id}/attendees/{user_id}", response_model=AttendeeList)
@limiter.limit(RATE_LIMITS["write"])
async def add_attendee_endpoint(
    request: Request,
    meeting_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Add one attendee. Adding someone twice is harmless."""
    _require_meeting(db, meeting_id)
    if user_id <= 0:
        raise HTTPException(status_code=422, detail="user_id must be positive")
    add_attendee(db, meeting_id, user_id)
    return {"meeting_id": meeting_id, "attendees": list_attendees(db, meeting_id)}


@router.delete("/{meeting_id}/attendees/{user_id}", response_model=AttendeeList)
async def remove_attendee_endpoint(
    meeting_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    _require_meeting(db, meeting_id)
    remove_attendee(db, meeting_id, user_id)
    return {"meeting_id": meeting_id, "attendees": list_attendees(db, meeting_id)}
