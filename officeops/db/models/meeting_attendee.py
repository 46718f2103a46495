"""MeetingAttendee model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from officeops.db.base import Base


class MeetingAttendee(Base):
    __tablename__ = "meeting_attendees"

    # Composite key: one row per (meeting, attendee) pair
    meeting_id = Column(Integer, ForeignKey("meetings.id", ondelete="CASCADE"), primary_key=True)
    attendant_id = Column(Integer, primary_key=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    meeting = relationship("Meeting", back_populates="attendees")
