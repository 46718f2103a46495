"""Meeting model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from officeops.db.base import Base


class Meeting(Base):
    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    user_id = Column(Integer, nullable=False, index=True)  # creator
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    wing_id = Column(Integer, nullable=True)
    subw_id = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    room = relationship("Room", back_populates="meetings")
    statuses = relationship(
        "MeetingStatus",
        back_populates="meeting",
        cascade="all, delete-orphan",
        order_by="MeetingStatus.id",
    )
    attendees = relationship("MeetingAttendee", back_populates="meeting", cascade="all, delete-orphan")

    __table_args__ = (
        # Overlap lookups filter by room then compare both interval ends
        Index("idx_meetings_room_window", "room_id", "start_time", "end_time"),
    )
