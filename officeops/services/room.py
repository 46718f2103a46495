"""Room registry."""
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from officeops.core.exceptions import ConflictError, NotFoundError
from officeops.core.logging_config import get_logger
from officeops.core.utils import isoformat_utc, utcnow
from officeops.db.models import Meeting, Room

logger = get_logger(__name__)

ROOM_FIELDS = ("name", "capacity", "seating", "presentation", "image")


def create_room(
    db: Session,
    name: str,
    capacity: Optional[int] = None,
    seating: Optional[str] = None,
    presentation: bool = False,
    image: Optional[str] = None,
) -> Dict:
    now = utcnow()
    room = Room(
        name=name,
        capacity=capacity,
        seating=seating,
        presentation=presentation,
        image=image,
        created_at=now,
        updated_at=now,
    )
    db.add(room)
    db.commit()
    db.refresh(room)
    logger.info("room_created", room_id=room.id, name=name)
    return serialize_room(room)


def get_room(db: Session, room_id: int) -> Optional[Dict]:
    room = db.get(Room, room_id)
    return serialize_room(room) if room else None


def list_rooms(db: Session) -> List[Dict]:
    rooms = db.query(Room).order_by(Room.name.asc(), Room.id.asc()).all()
    return [serialize_room(room) for room in rooms]


def update_room(db: Session, room_id: int, changes: Dict[str, Any]) -> Dict:
    room = db.get(Room, room_id)
    if not room:
        raise NotFoundError("Room", room_id)

    for field, value in changes.items():
        if field in ROOM_FIELDS:
            setattr(room, field, value)
    room.updated_at = utcnow()

    db.commit()
    db.refresh(room)
    return serialize_room(room)


def delete_room(db: Session, room_id: int) -> bool:
    """
    Delete a room.

    Rooms that still have bookings are kept; delete or move the meetings first.

    Raises:
        ConflictError: The room still has meetings
    """
    room = db.get(Room, room_id)
    if not room:
        return False

    booked = db.query(Meeting.id).filter(Meeting.room_id == room_id).first()
    if booked:
        raise ConflictError("Room still has meetings booked")

    db.delete(room)
    db.commit()
    logger.info("room_deleted", room_id=room_id)
    return True


def serialize_room(room: Room) -> Dict:
    return {
        "id": room.id,
        "name": room.name,
        "capacity": room.capacity,
        "seating": room.seating,
        "presentation": bool(room.presentation),
        "image": room.image,
        "created_at": isoformat_utc(room.created_at),
        "updated_at": isoformat_utc(room.updated_at),
    }
