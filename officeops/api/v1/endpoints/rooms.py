"""Room endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from officeops.api.deps import get_db, get_current_user, verify_approver
from officeops.schemas import RoomCreate, RoomUpdate, RoomDetail, SuccessResponse
from officeops.services.room import create_room, delete_room, get_room, list_rooms, update_room
from officeops.core.rate_limit import limiter, RATE_LIMITS

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[RoomDetail])
async def list_rooms_endpoint(db: Session = Depends(get_db)):
    """All rooms, alphabetically."""
    return list_rooms(db)


@router.post("", response_model=RoomDetail, status_code=201, dependencies=[Depends(verify_approver)])
@limiter.limit(RATE_LIMITS["write"])
async def create_room_endpoint(request: Request, room: RoomCreate, db: Session = Depends(get_db)):
    """Register a bookable room (approvers only)."""
    return create_room(db, **room.model_dump())


@router.get("/{room_id}", response_model=RoomDetail)
async def get_room_endpoint(room_id: int, db: Session = Depends(get_db)):
    room = get_room(db, room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.put("/{room_id}", response_model=RoomDetail, dependencies=[Depends(verify_approver)])
@limiter.limit(RATE_LIMITS["write"])
async def update_room_endpoint(
    request: Request,
    room_id: int,
    changes: RoomUpdate,
    db: Session = Depends(get_db)
):
    return update_room(db, room_id, changes.model_dump(exclude_unset=True))


@router.delete("/{room_id}", response_model=SuccessResponse, dependencies=[Depends(verify_approver)])
async def delete_room_endpoint(room_id: int, db: Session = Depends(get_db)):
    """
    Delete a room (approvers only).

    Returns 409 while the room still has meetings.
    """
    if not delete_room(db, room_id):
        raise HTTPException(status_code=404, detail="Room not found")
    return {"success": True}
